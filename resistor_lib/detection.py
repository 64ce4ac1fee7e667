"""
Detection Module - Resistor Locator
===================================

Edge-based localisation of the resistor body: grayscale, blur, Canny edges,
external contours and area-based candidate selection.
"""

import logging
from typing import Optional, Tuple

import cv2
import numpy as np

from .color import to_bgr
from .contours import CandidateRegion, MAX_AREA, MIN_AREA, find_external_contours, select_candidate
from .display import draw_candidate_box, show_image

logger = logging.getLogger(__name__)

BLUR_KERNEL = 5
CANNY_LOW = 30
CANNY_HIGH = 100


def preprocess_frame(
    img: np.ndarray,
    blur_kernel: int = BLUR_KERNEL,
    canny_low: int = CANNY_LOW,
    canny_high: int = CANNY_HIGH,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Apply the edge-detection preprocessing to a frame.

    Steps:
    1. Convert to grayscale
    2. Gaussian blur (blur_kernel x blur_kernel, sigma from kernel)
    3. Canny edge detection

    Parameters
    ----------
    img : np.ndarray
        Input BGR or BGRA frame.
    blur_kernel : int
        Odd Gaussian kernel size.
    canny_low : int
        Lower Canny hysteresis threshold.
    canny_high : int
        Upper Canny hysteresis threshold.

    Returns
    -------
    gray : np.ndarray
        Grayscale frame.
    blurred : np.ndarray
        Blurred grayscale frame.
    edges : np.ndarray
        Binary edge map.

    Raises
    ------
    ValueError
        If blur_kernel is not a positive odd integer.
    """
    if blur_kernel <= 0 or blur_kernel % 2 == 0:
        raise ValueError("blur_kernel must be a positive odd integer.")

    gray = cv2.cvtColor(to_bgr(img), cv2.COLOR_BGR2GRAY)
    blurred = cv2.GaussianBlur(gray, (blur_kernel, blur_kernel), 0)
    edges = cv2.Canny(blurred, canny_low, canny_high)

    return gray, blurred, edges


def locate_resistor(
    img: np.ndarray,
    output: Optional[np.ndarray] = None,
    blur_kernel: int = BLUR_KERNEL,
    canny_low: int = CANNY_LOW,
    canny_high: int = CANNY_HIGH,
    min_area: float = MIN_AREA,
    max_area: float = MAX_AREA,
    debug: bool = False,
) -> Optional[CandidateRegion]:
    """
    Find the most likely resistor body in a frame.

    This is the main entry point of the locator: preprocessing, external
    contour extraction and selection of the largest contour whose area lies
    strictly inside (min_area, max_area).

    Parameters
    ----------
    img : np.ndarray
        Input BGR or BGRA frame.
    output : np.ndarray, optional
        Frame to draw the candidate rectangle on.
    blur_kernel, canny_low, canny_high : int
        Preprocessing parameters.
    min_area, max_area : float
        Exclusive contour area band.
    debug : bool
        If True, display the edge map.

    Returns
    -------
    CandidateRegion or None
        None when no contour qualifies. This is a normal outcome.
    """
    _, _, edges = preprocess_frame(img, blur_kernel, canny_low, canny_high)
    if debug:
        show_image(edges, "Edges")

    contours = find_external_contours(edges)
    candidate = select_candidate(contours, min_area=min_area, max_area=max_area)

    if candidate is None:
        logger.debug("No resistor candidate among %d contours", len(contours))
        return None

    if output is not None:
        draw_candidate_box(output, candidate)

    return candidate


def get_locator_params(config: Optional[dict]) -> dict:
    """
    Extract locate_resistor keyword arguments from config dictionary.

    Parameters
    ----------
    config : dict or None
        Configuration dictionary with an optional 'locator' section.

    Returns
    -------
    dict
        blur_kernel, canny_low, canny_high, min_area, max_area.
    """
    lc = (config or {}).get("locator", {})
    return {
        "blur_kernel": int(lc.get("blur_kernel", BLUR_KERNEL)),
        "canny_low": int(lc.get("canny_low", CANNY_LOW)),
        "canny_high": int(lc.get("canny_high", CANNY_HIGH)),
        "min_area": lc.get("min_area", MIN_AREA),
        "max_area": lc.get("max_area", MAX_AREA),
    }
