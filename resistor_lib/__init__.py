"""
Resistor Reader Library
=======================

A library for locating a resistor in live camera frames, sampling its colour
bands and decoding its resistance value.

Modules:
    - color: colour band table, HSV conversion and band classification
    - roi: band sampling across a region of interest
    - decoding: resistance value decoding and formatting
    - contours: contour filtering and candidate selection
    - detection: edge-based resistor locator
    - transforms: digital zoom
    - display: visualization and annotation functions
    - capture: camera/video frame sources
    - schedulers: refresh schedulers for the frame loop
    - pipeline: per-frame orchestration and the frame loop state machine
    - config: JSON configuration management
    - logging_config: logging setup
"""

# Color functions
from .color import (
    BAND_NAMES,
    BAND_VALUES,
    BAND_DISPLAY_COLORS,
    HUE_SCALE,
    to_bgr,
    to_hsv,
    classify_hsv,
    classifier_options,
)

# ROI / band sampling functions
from .roi import (
    BandSample,
    sample_positions,
    patch_bounds,
    mean_hsv,
    sample_band_colors,
    bands_from_samples,
    extract_bands,
)

# Decoding functions
from .decoding import (
    NOT_A_RESISTOR,
    ResistanceReading,
    bands_to_digits,
    band_multiplier,
    compute_resistance,
    format_resistance,
    decode_bands,
    describe_bands,
)

# Contour functions
from .contours import (
    CandidateRegion,
    find_external_contours,
    filter_contours_by_area,
    select_candidate,
)

# Detection functions
from .detection import (
    preprocess_frame,
    locate_resistor,
    get_locator_params,
)

# Transform functions
from .transforms import zoom_matrix, apply_zoom, ZoomTransform

# Display functions
from .display import (
    show_image,
    draw_candidate_box,
    draw_band_samples,
    annotate_reading,
)

# Capture sources
from .capture import CaptureError, CaptureSource, OpenCVCapture, create_capture

# Schedulers
from .schedulers import TkScheduler, ManualScheduler

# Pipeline
from .pipeline import (
    FramePipeline,
    FrameResult,
    PipelineState,
    ReaderSession,
    process_frame,
    STATUS_NO_RESISTOR,
    STATUS_ERROR,
    STATUS_STOPPED,
)

# Config
from .config import load_config, save_config, get_section, update_config, DEFAULT_CONFIG

from .logging_config import setup_logging

__version__ = "1.0.0"
__all__ = [
    # Color
    "BAND_NAMES",
    "BAND_VALUES",
    "BAND_DISPLAY_COLORS",
    "HUE_SCALE",
    "to_bgr",
    "to_hsv",
    "classify_hsv",
    "classifier_options",
    # ROI
    "BandSample",
    "sample_positions",
    "patch_bounds",
    "mean_hsv",
    "sample_band_colors",
    "bands_from_samples",
    "extract_bands",
    # Decoding
    "NOT_A_RESISTOR",
    "ResistanceReading",
    "bands_to_digits",
    "band_multiplier",
    "compute_resistance",
    "format_resistance",
    "decode_bands",
    "describe_bands",
    # Contours
    "CandidateRegion",
    "find_external_contours",
    "filter_contours_by_area",
    "select_candidate",
    # Detection
    "preprocess_frame",
    "locate_resistor",
    "get_locator_params",
    # Transforms
    "zoom_matrix",
    "apply_zoom",
    "ZoomTransform",
    # Display
    "show_image",
    "draw_candidate_box",
    "draw_band_samples",
    "annotate_reading",
    # Capture
    "CaptureError",
    "CaptureSource",
    "OpenCVCapture",
    "create_capture",
    # Schedulers
    "TkScheduler",
    "ManualScheduler",
    # Pipeline
    "FramePipeline",
    "FrameResult",
    "PipelineState",
    "ReaderSession",
    "process_frame",
    "STATUS_NO_RESISTOR",
    "STATUS_ERROR",
    "STATUS_STOPPED",
    # Config
    "load_config",
    "save_config",
    "get_section",
    "update_config",
    "DEFAULT_CONFIG",
    # Logging
    "setup_logging",
]
