"""
Basler camera source using pypylon.
"""

import logging

from pypylon import pylon

from .capture import CaptureError, CaptureSource

logger = logging.getLogger(__name__)

GRAB_TIMEOUT_MS = 5000


class BaslerCapture(CaptureSource):
    """Grab BGR frames from the first Basler camera found."""

    def __init__(self):
        super().__init__()
        self.camera = None
        self.converter = None

    def _open(self):
        try:
            camera = pylon.InstantCamera(
                pylon.TlFactory.GetInstance().CreateFirstDevice()
            )
            camera.StartGrabbing(pylon.GrabStrategy_LatestImageOnly)
        except Exception as e:
            raise CaptureError(f"Could not open Basler camera: {e}") from e

        converter = pylon.ImageFormatConverter()
        converter.OutputPixelFormat = pylon.PixelType_BGR8packed
        converter.OutputBitAlignment = pylon.OutputBitAlignment_MsbAligned

        self.camera = camera
        self.converter = converter
        logger.info("Opened Basler camera")

    def _read(self):
        if self.camera is None or not self.camera.IsGrabbing():
            return None

        try:
            grab_result = self.camera.RetrieveResult(
                GRAB_TIMEOUT_MS, pylon.TimeoutHandling_ThrowException
            )
        except Exception as e:
            logger.warning("Basler grab failed: %s", e)
            return None

        frame = None
        if grab_result.GrabSucceeded():
            frame = self.converter.Convert(grab_result).GetArray()
        grab_result.Release()
        return frame

    def _release(self):
        if self.camera is not None:
            try:
                if self.camera.IsGrabbing():
                    self.camera.StopGrabbing()
                self.camera.Close()
            finally:
                self.camera = None
                self.converter = None
