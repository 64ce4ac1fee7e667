"""
Refresh schedulers for the frame loop.

A scheduler runs one callback per display refresh. The Tk scheduler uses
``widget.after``; the manual scheduler queues callbacks until stepped, so
the loop can be driven deterministically.
"""

from collections import deque


class TkScheduler:
    """Schedule callbacks on a Tk widget's event loop."""

    def __init__(self, widget, delay_ms=15):
        self.widget = widget
        self.delay_ms = delay_ms
        self._after_id = None

    def schedule(self, callback):
        self._after_id = self.widget.after(self.delay_ms, self._run, callback)

    def _run(self, callback):
        self._after_id = None
        callback()

    def cancel(self):
        if self._after_id is not None:
            self.widget.after_cancel(self._after_id)
            self._after_id = None


class ManualScheduler:
    """Queue callbacks and run them only when stepped."""

    def __init__(self):
        self._queue = deque()

    @property
    def pending(self):
        return len(self._queue)

    def schedule(self, callback):
        self._queue.append(callback)

    def cancel(self):
        self._queue.clear()

    def step(self):
        """Run the oldest pending callback. Returns False if none was pending."""
        if not self._queue:
            return False
        self._queue.popleft()()
        return True

    def run(self, max_steps):
        """Step until the queue is empty or max_steps callbacks ran; return the count."""
        steps = 0
        while steps < max_steps and self.step():
            steps += 1
        return steps
