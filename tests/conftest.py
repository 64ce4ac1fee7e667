"""Pytest configuration and shared fixtures for the resistor reader tests."""
import logging

import cv2
import numpy as np
import pytest

from resistor_lib.capture import CaptureSource
from resistor_lib.color import HUE_SCALE
from resistor_lib.schedulers import ManualScheduler


logging.getLogger('matplotlib').setLevel(logging.WARNING)

# Hue (degrees) in the middle of each classifier bucket
BAND_HUES = {
    "red": 10,
    "orange": 45,
    "yellow": 75,
    "green": 120,
    "blue": 180,
    "violet": 240,
}

BODY_ORIGIN = (100, 100)
BODY_HEIGHT = 40
STRIPE_WIDTH = 60
# Uniform beige frame around the stripes. Stripes touching the background
# directly give an outline whose luminance jumps at every stripe, and Canny
# can break it there into several external contours.
BODY_BORDER = 10
BODY_COLOR = (140, 180, 210)


def hsv_swatch(hue, saturation, value, size=10):
    """Build a small BGR image filled with one HSV colour (hue in degrees)."""
    hsv = np.zeros((size, size, 3), dtype=np.uint8)
    hsv[:, :] = (int(round(hue / HUE_SCALE)) % 180, int(saturation), int(value))
    return cv2.cvtColor(hsv, cv2.COLOR_HSV2BGR)


def paint_band(img, x, y, w, h, band):
    """Fill a rectangle of a BGR image with a saturated colour for band."""
    img[y:y + h, x:x + w] = hsv_swatch(BAND_HUES[band], 200, 200, size=1)[0, 0]


def make_resistor_frame(bands, size=(480, 640), channels=3, border=BODY_BORDER):
    """
    Black frame with a resistor body made of one stripe per band.

    Each stripe is STRIPE_WIDTH pixels wide so that num_samples=len(bands)
    hits the middle of every stripe. The stripes sit inside a BODY_COLOR
    frame `border` pixels wide; border=0 paints bare stripes.
    """
    h, w = size
    frame = np.zeros((h, w, 3), dtype=np.uint8)
    x0, y0 = BODY_ORIGIN
    if border:
        body_w = len(bands) * STRIPE_WIDTH + 2 * border
        frame[y0:y0 + BODY_HEIGHT + 2 * border, x0:x0 + body_w] = BODY_COLOR
    for i, band in enumerate(bands):
        paint_band(frame, x0 + border + i * STRIPE_WIDTH, y0 + border, STRIPE_WIDTH, BODY_HEIGHT, band)
    if channels == 4:
        alpha = np.full((h, w, 1), 255, dtype=np.uint8)
        frame = np.concatenate([frame, alpha], axis=2)
    return frame


class FakeCapture(CaptureSource):
    """Capture source that replays a list of frames."""

    def __init__(self, frames, fail_open=None):
        super().__init__()
        self.frames = list(frames)
        self.fail_open = fail_open
        self.open_calls = 0
        self.release_calls = 0

    def _open(self):
        self.open_calls += 1
        if self.fail_open is not None:
            raise self.fail_open

    def _read(self):
        if not self.frames:
            return None
        return self.frames.pop(0)

    def _release(self):
        self.release_calls += 1


@pytest.fixture
def scheduler():
    """Provide a manual scheduler."""
    return ManualScheduler()


@pytest.fixture
def blank_frame():
    """Provide an all-black BGR frame."""
    return np.zeros((480, 640, 3), dtype=np.uint8)


@pytest.fixture
def resistor_frame():
    """Provide a frame with a yellow-violet-green resistor body."""
    return make_resistor_frame(["yellow", "violet", "green"])


@pytest.fixture
def three_band_config():
    """Processing config sampling three bands."""
    return {"sampler": {"num_samples": 3, "patch_size": 10, "on_unclassified": "skip"}}


@pytest.fixture
def make_frame():
    """Provide the resistor frame builder."""
    return make_resistor_frame


@pytest.fixture
def fake_capture():
    """Provide the FakeCapture class."""
    return FakeCapture


@pytest.fixture
def swatch():
    """Provide the HSV swatch builder."""
    return hsv_swatch
