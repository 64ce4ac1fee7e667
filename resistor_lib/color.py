"""
Color Module - HSV Conversion and Band Classification
=====================================================

Colour band table, frame colour-space helpers and the HSV classifier that
maps a sampled hue/saturation/value triple to a resistor band name.
"""

from types import MappingProxyType

import cv2


# Resistor colour code: band name -> digit value
BAND_NAMES = (
    "black", "brown", "red", "orange", "yellow",
    "green", "blue", "violet", "grey", "white",
)
BAND_VALUES = MappingProxyType({name: digit for digit, name in enumerate(BAND_NAMES)})

# BGR swatches used when drawing the decoded bands
BAND_DISPLAY_COLORS = MappingProxyType({
    "black": (0, 0, 0),
    "brown": (19, 69, 139),
    "red": (0, 0, 255),
    "orange": (0, 140, 255),
    "yellow": (0, 255, 255),
    "green": (0, 200, 0),
    "blue": (255, 0, 0),
    "violet": (211, 0, 148),
    "grey": (128, 128, 128),
    "white": (255, 255, 255),
})

# OpenCV stores 8-bit hue as degrees / 2
HUE_SCALE = 2.0

BLACK_VALUE_MAX = 50
WHITE_VALUE_MIN = 200
WHITE_SATURATION_MAX = 50
GREY_SATURATION_MAX = 50
BROWN_HUE_MAX = 60
BROWN_VALUE_MAX = 100

# Half-open hue ranges in degrees, checked in order
HUE_BUCKETS = (
    (0, 30, "red"),
    (30, 60, "orange"),
    (60, 90, "yellow"),
    (90, 150, "green"),
    (150, 210, "blue"),
    (210, 270, "violet"),
    (270, 360, "red"),
)


def to_bgr(frame):
    """
    Return a 3-channel BGR view of a camera frame.

    Parameters
    ----------
    frame : np.ndarray
        BGR (H, W, 3) or BGRA (H, W, 4) image.

    Returns
    -------
    np.ndarray
        BGR image. 3-channel input is returned as-is.

    Raises
    ------
    ValueError
        If frame is None or does not have 3 or 4 channels.
    """
    if frame is None:
        raise ValueError("Input frame is None.")

    if frame.ndim != 3 or frame.shape[2] not in (3, 4):
        raise ValueError(f"Frame must have 3 or 4 channels, got shape {frame.shape}.")

    if frame.shape[2] == 4:
        return cv2.cvtColor(frame, cv2.COLOR_BGRA2BGR)
    return frame


def to_hsv(frame):
    """Convert a BGR/BGRA frame to OpenCV 8-bit HSV (hue in [0, 180))."""
    return cv2.cvtColor(to_bgr(frame), cv2.COLOR_BGR2HSV)


def classify_hsv(
    hue,
    saturation,
    value,
    black_value_max=BLACK_VALUE_MAX,
    white_value_min=WHITE_VALUE_MIN,
    white_saturation_max=WHITE_SATURATION_MAX,
    detect_brown_grey=False,
):
    """
    Classify an HSV triple into a resistor band name.

    Rules (first match wins):
        1. value < black_value_max                          -> "black"
        2. value > white_value_min and sat < white_sat_max  -> "white"
        3. (detect_brown_grey only) low saturation          -> "grey"
           warm hue with low value                          -> "brown"
        4. hue bucket (see HUE_BUCKETS), red on both ends of the circle

    Without detect_brown_grey the classifier never returns "brown" or
    "grey": in a plain hue split they fall into the red/orange buckets.

    Parameters
    ----------
    hue : float
        Hue in degrees, [0, 360).
    saturation : float
        Saturation in [0, 255].
    value : float
        Brightness in [0, 255].
    black_value_max, white_value_min, white_saturation_max : float
        Thresholds for the achromatic rules.
    detect_brown_grey : bool
        Enable the brown/grey rules.

    Returns
    -------
    str or None
        Band name, or None if the hue is outside [0, 360).
    """
    if value < black_value_max:
        return "black"

    if value > white_value_min and saturation < white_saturation_max:
        return "white"

    if detect_brown_grey:
        if saturation < GREY_SATURATION_MAX:
            return "grey"
        if 0 <= hue < BROWN_HUE_MAX and value < BROWN_VALUE_MAX:
            return "brown"

    for low, high, name in HUE_BUCKETS:
        if low <= hue < high:
            return name

    return None


def classifier_options(config):
    """
    Extract classify_hsv keyword arguments from a configuration dict.

    Parameters
    ----------
    config : dict or None
        Configuration with an optional 'classifier' section.

    Returns
    -------
    dict
        Keyword arguments for classify_hsv.
    """
    section = (config or {}).get("classifier", {})
    return {
        "black_value_max": section.get("black_value_max", BLACK_VALUE_MAX),
        "white_value_min": section.get("white_value_min", WHITE_VALUE_MIN),
        "white_saturation_max": section.get("white_saturation_max", WHITE_SATURATION_MAX),
        "detect_brown_grey": bool(section.get("detect_brown_grey", False)),
    }
