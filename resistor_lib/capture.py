"""
Capture Module - Frame Sources
==============================

Camera and video sources with an explicit open/read/release lifecycle.
"""

import logging
import os
from typing import Optional

import cv2
import numpy as np

logger = logging.getLogger(__name__)

VIDEO_EXTENSIONS = [".mp4", ".avi", ".mov", ".mkv", ".wmv"]

DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 720


class CaptureError(RuntimeError):
    """Capture device could not be acquired (permission, missing device, bad file)."""


class CaptureSource:
    """
    Base class for frame sources.

    Subclasses implement _open, _read and _release. release() is safe to
    call any number of times; the device is released once per open().
    """

    def __init__(self):
        self._opened = False

    @property
    def is_open(self) -> bool:
        return self._opened

    def open(self):
        if self._opened:
            return self
        self._open()
        self._opened = True
        return self

    def read(self) -> Optional[np.ndarray]:
        """Return the next frame, or None when no frame is available."""
        if not self._opened:
            return None
        return self._read()

    def release(self):
        if not self._opened:
            return
        self._opened = False
        try:
            self._release()
        finally:
            logger.info("Released %s", type(self).__name__)

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False

    def _open(self):
        raise NotImplementedError

    def _read(self):
        raise NotImplementedError

    def _release(self):
        raise NotImplementedError


class OpenCVCapture(CaptureSource):
    """
    Frames from cv2.VideoCapture.

    Parameters
    ----------
    source : int or str
        - int: camera index (0, 1, ...)
        - str: path to a video file
    width, height : int or None
        Requested camera resolution (ignored for files).

    Raises
    ------
    TypeError
        If source is not an int or str.
    """

    def __init__(self, source=0, width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT):
        super().__init__()
        if not isinstance(source, (int, str)):
            raise TypeError("Parameter 'source' must be int or str.")
        self.source = source
        self.width = width
        self.height = height
        self._cap = None

    def _open(self):
        if isinstance(self.source, str):
            if not os.path.exists(self.source):
                raise CaptureError(f"File does not exist: {self.source}")
            extension = os.path.splitext(self.source)[1].lower()
            if extension not in VIDEO_EXTENSIONS:
                raise CaptureError(f"Unknown video extension: {extension}")

        cap = cv2.VideoCapture(self.source)
        if not cap.isOpened():
            cap.release()
            raise CaptureError(f"Could not open capture source {self.source!r}.")

        if isinstance(self.source, int):
            if self.width:
                cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
            if self.height:
                cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)

        self._cap = cap
        logger.info("Opened capture source %r", self.source)

    def _read(self):
        ret, frame = self._cap.read()
        if not ret:
            return None
        return frame

    def _release(self):
        if self._cap is not None:
            self._cap.release()
            self._cap = None


def create_capture(config=None):
    """
    Build a capture source from the 'camera' config section.

    Parameters
    ----------
    config : dict or None
        Configuration dictionary.

    Returns
    -------
    CaptureSource
        Unopened capture source.

    Raises
    ------
    ValueError
        If the backend is unknown.
    """
    cam = (config or {}).get("camera", {})
    backend = cam.get("backend", "opencv").lower()

    if backend == "opencv":
        return OpenCVCapture(
            source=cam.get("source", 0),
            width=cam.get("width", DEFAULT_WIDTH),
            height=cam.get("height", DEFAULT_HEIGHT),
        )
    if backend == "basler":
        from .basler import BaslerCapture
        return BaslerCapture()

    raise ValueError(f"Unknown camera backend: {backend}")
