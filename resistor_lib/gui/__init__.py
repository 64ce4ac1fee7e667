"""
GUI Module - Interactive Tkinter Application
============================================

Classes:
    - ResistorReaderApp: live camera reader with zoom and value readout

Functions:
    - run_resistor_reader: Quick launcher for the reader
    - cv_bgr_to_tk, cv_bgr_to_pil, resize_for_view: Frame display helpers
"""

from .base import cv_bgr_to_tk, cv_bgr_to_pil, resize_for_view
from .reader_app import ResistorReaderApp, run_resistor_reader

__all__ = [
    # Base utilities
    "cv_bgr_to_tk",
    "cv_bgr_to_pil",
    "resize_for_view",
    # Reader app
    "ResistorReaderApp",
    "run_resistor_reader",
]
