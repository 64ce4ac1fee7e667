"""
Live resistor reader GUI.
Shows the camera feed with the located resistor and its decoded value.
"""

import logging
import time
import tkinter as tk
from tkinter import ttk, messagebox
from typing import Optional

from ..capture import CaptureError, create_capture
from ..config import load_config, save_config, get_section, update_config, DEFAULT_CONFIG_PATH
from ..logging_config import setup_logging
from ..pipeline import FramePipeline, FrameResult, STATUS_STOPPED
from ..schedulers import TkScheduler
from .base import cv_bgr_to_tk

logger = logging.getLogger(__name__)


class ResistorReaderApp:
    """
    GUI application for reading resistor values from a live camera feed.
    Start/Stop gate the capture lifecycle; the slider sets the digital zoom.
    """

    def __init__(self, root: tk.Tk, config_path: str = DEFAULT_CONFIG_PATH):
        """Initialize the reader application."""
        self.root = root
        self.root.title("Resistor Reader")
        self.root.geometry("1100x700")

        # Load config
        self.config_path = config_path
        self.config = load_config(config_path)
        self.display_cfg = get_section(self.config, "display")
        self.zoom_cfg = get_section(self.config, "zoom")

        # Runtime FPS measurement
        self._last_frame_time: Optional[float] = None
        self.fps_var = tk.StringVar(value="FPS: 0.0")

        self.zoom_var = tk.DoubleVar(value=float(self.zoom_cfg["default"]))
        self.zoom_label_var = tk.StringVar()
        self.value_var = tk.StringVar(value="--")
        self.status_var = tk.StringVar(value="Ready - press Start")

        self.tk_img = None

        self.pipeline = FramePipeline(
            capture_factory=lambda: create_capture(self.config),
            scheduler=TkScheduler(root, delay_ms=int(self.display_cfg["refresh_ms"])),
            on_result=self._on_result,
            config=self.config,
        )
        self.pipeline.set_zoom(self.zoom_var.get())

        self._setup_ui()
        self._update_zoom_label()

        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

    def _setup_ui(self):
        """Set up the user interface."""
        main_frame = ttk.Frame(self.root, padding=10)
        main_frame.pack(fill=tk.BOTH, expand=True)

        controls_frame = ttk.Frame(main_frame)
        controls_frame.pack(fill=tk.X, pady=(0, 10))

        self.start_btn = ttk.Button(
            controls_frame, text="▶ Start",
            command=self._start
        )
        self.start_btn.pack(side=tk.LEFT, padx=2)

        self.stop_btn = ttk.Button(
            controls_frame, text="⏹ Stop",
            command=self._stop, state="disabled"
        )
        self.stop_btn.pack(side=tk.LEFT, padx=2)

        ttk.Separator(controls_frame, orient=tk.VERTICAL).pack(
            side=tk.LEFT, fill=tk.Y, padx=10
        )

        ttk.Label(controls_frame, text="Zoom").pack(side=tk.LEFT)
        ttk.Scale(
            controls_frame,
            from_=float(self.zoom_cfg["min"]),
            to=float(self.zoom_cfg["max"]),
            orient=tk.HORIZONTAL,
            length=200,
            variable=self.zoom_var,
            command=self._on_zoom,
        ).pack(side=tk.LEFT, padx=5)
        ttk.Label(controls_frame, textvariable=self.zoom_label_var, width=5).pack(side=tk.LEFT)

        ttk.Button(
            controls_frame, text="💾 Save settings",
            command=self._save_settings
        ).pack(side=tk.LEFT, padx=10)

        ttk.Label(
            controls_frame, textvariable=self.status_var
        ).pack(side=tk.RIGHT, padx=10)

        ttk.Label(
            controls_frame, textvariable=self.fps_var
        ).pack(side=tk.RIGHT, padx=10)

        content_frame = ttk.Frame(main_frame)
        content_frame.pack(fill=tk.BOTH, expand=True)

        video_frame = ttk.LabelFrame(content_frame, text="Camera", padding=5)
        video_frame.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

        self.video_label = ttk.Label(video_frame)
        self.video_label.pack(fill=tk.BOTH, expand=True)

        results_frame = ttk.Frame(content_frame, width=260)
        results_frame.pack(side=tk.RIGHT, fill=tk.Y, padx=(10, 0))
        results_frame.pack_propagate(False)

        value_frame = ttk.LabelFrame(results_frame, text="Resistance", padding=10)
        value_frame.pack(fill=tk.X, pady=(0, 10))

        ttk.Label(
            value_frame, textvariable=self.value_var,
            font=("Helvetica", 32, "bold"),
            foreground="#2ecc71"
        ).pack()

        bands_frame = ttk.LabelFrame(results_frame, text="Bands", padding=5)
        bands_frame.pack(fill=tk.X)

        self.bands_var = tk.StringVar(value="")
        ttk.Label(
            bands_frame, textvariable=self.bands_var,
            wraplength=230, font=("Consolas", 10)
        ).pack(fill=tk.X)

    def _start(self):
        """Acquire the camera and start the frame loop."""
        try:
            self.pipeline.start()
        except CaptureError as e:
            messagebox.showerror(
                "Camera Error",
                f"Could not access the camera:\n{e}\n\n"
                "Make sure it is connected and not used by another program."
            )
            self.status_var.set("Camera unavailable")
            return

        self.start_btn.config(state="disabled")
        self.stop_btn.config(state="normal")
        self.status_var.set("Running")
        self._last_frame_time = time.perf_counter()

    def _stop(self):
        """Stop the frame loop and release the camera."""
        self.pipeline.stop()
        self._set_idle("Stopped")

    def _set_idle(self, status):
        self.start_btn.config(state="normal")
        self.stop_btn.config(state="disabled")
        self.status_var.set(status)
        self._last_frame_time = None
        self.fps_var.set("FPS: 0.0")

    def _on_zoom(self, _value=None):
        self.pipeline.set_zoom(self.zoom_var.get())
        self._update_zoom_label()

    def _update_zoom_label(self):
        self.zoom_label_var.set(f"{self.zoom_var.get():.1f}x")

    def _save_settings(self):
        """Persist the current zoom as the default."""
        update_config(self.config, "zoom", {"default": round(self.zoom_var.get(), 2)})
        save_config(self.config, self.config_path)
        self.status_var.set("Settings saved")

    def _on_result(self, result: FrameResult):
        """Publish one frame result to the window."""
        if result.status == STATUS_STOPPED:
            self._set_idle("Camera stopped")
            return

        now = time.perf_counter()
        if self._last_frame_time is not None:
            dt = now - self._last_frame_time
            if dt > 0:
                self.fps_var.set(f"FPS: {1.0 / dt:.1f}")
        self._last_frame_time = now

        self.value_var.set(result.status)
        self.bands_var.set(" ".join(result.bands or []))

        if result.frame is not None:
            self.tk_img = cv_bgr_to_tk(result.frame, int(self.display_cfg["width"]))
            self.video_label.config(image=self.tk_img)
            self.video_label.image = self.tk_img

    def _on_close(self):
        """Release the camera before the window goes away."""
        self.pipeline.stop()
        self.root.destroy()

    def run(self):
        """Start the application main loop."""
        try:
            self.root.mainloop()
        finally:
            self.pipeline.stop()


def run_resistor_reader(config_path: str = DEFAULT_CONFIG_PATH, log_level: str = "INFO"):
    """Launch the resistor reader GUI."""
    setup_logging(log_level)
    root = tk.Tk()
    app = ResistorReaderApp(root, config_path=config_path)
    app.run()


if __name__ == "__main__":
    run_resistor_reader()
