"""
Contours Module - Contour Filtering and Candidate Selection
===========================================================

Functions for finding external contours, filtering them by area and picking
the most likely resistor body.
"""

import logging
from dataclasses import dataclass, field

import cv2
import numpy as np

logger = logging.getLogger(__name__)

MIN_AREA = 1000
MAX_AREA = 50000


@dataclass(frozen=True)
class CandidateRegion:
    """Bounding box and area of the selected resistor contour."""
    x: int
    y: int
    width: int
    height: int
    area: float
    contour: np.ndarray = field(default=None, repr=False, compare=False)

    @property
    def bounding_box(self):
        return self.x, self.y, self.width, self.height

    def crop(self, frame):
        """Return the ROI view of frame covered by this region."""
        return frame[self.y:self.y + self.height, self.x:self.x + self.width]


def find_external_contours(binary_img):
    """
    Find the outermost contours of a binary/edge image.

    Parameters
    ----------
    binary_img : np.ndarray
        Single-channel image.

    Returns
    -------
    list of np.ndarray
        Contours in OpenCV discovery order.

    Raises
    ------
    ValueError
        If binary_img is None or not single-channel.
    """
    if binary_img is None:
        raise ValueError("binary_img is None.")
    if len(binary_img.shape) != 2:
        raise ValueError("binary_img must be single-channel (binary).")

    contours, _ = cv2.findContours(
        binary_img,
        cv2.RETR_EXTERNAL,
        cv2.CHAIN_APPROX_SIMPLE,
    )
    return list(contours)


def filter_contours_by_area(contours, min_area=MIN_AREA, max_area=MAX_AREA):
    """
    Keep contours whose area lies strictly between min_area and max_area.

    Parameters
    ----------
    contours : list of np.ndarray
        Contours from cv2.findContours.
    min_area : float
        Exclusive lower bound.
    max_area : float
        Exclusive upper bound.

    Returns
    -------
    list of tuple
        (contour, area) pairs in input order.
    """
    kept = []
    for c in contours:
        area = cv2.contourArea(c)
        if min_area < area < max_area:
            kept.append((c, area))
    return kept


def select_candidate(contours, min_area=MIN_AREA, max_area=MAX_AREA):
    """
    Select the largest qualifying contour as the resistor candidate.

    Ties keep the contour that came first.

    Parameters
    ----------
    contours : list of np.ndarray
        Contours in discovery order.
    min_area, max_area : float
        Exclusive area band.

    Returns
    -------
    CandidateRegion or None
        None when no contour qualifies.
    """
    best = None
    best_area = -1.0

    for c, area in filter_contours_by_area(contours, min_area, max_area):
        if area > best_area:
            best, best_area = c, area

    logger.debug(
        "Contours: %d total, best area %s in (%s, %s)",
        len(contours), best_area if best is not None else None, min_area, max_area,
    )

    if best is None:
        return None

    x, y, w, h = cv2.boundingRect(best)
    return CandidateRegion(x=x, y=y, width=w, height=h, area=best_area, contour=best)
