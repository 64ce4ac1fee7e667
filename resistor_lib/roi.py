"""
ROI Module - Band Sampling Inside a Region of Interest
======================================================

Functions for taking evenly spaced colour samples along the horizontal axis
of a resistor ROI and classifying each one into a band.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .color import HUE_SCALE, classify_hsv

logger = logging.getLogger(__name__)

NUM_SAMPLES = 10
PATCH_SIZE = 10

UNCLASSIFIED_POLICIES = ("skip", "abort")


@dataclass(frozen=True)
class BandSample:
    """Outcome of one colour sample: a band name or unclassified."""
    index: int
    x: int
    y: int
    hsv: Optional[Tuple[float, float, float]]
    band: Optional[str]

    @property
    def classified(self) -> bool:
        return self.band is not None


def sample_positions(width, height, num_samples=NUM_SAMPLES):
    """
    Compute evenly spaced sample points along the vertical centre line.

    Each x is the centre of one of num_samples equal-width segments.

    Parameters
    ----------
    width : int
        ROI width.
    height : int
        ROI height.
    num_samples : int
        Number of samples.

    Returns
    -------
    list of tuple
        (x, y) pixel coordinates, left to right.

    Raises
    ------
    ValueError
        If num_samples is not positive.
    """
    if num_samples <= 0:
        raise ValueError("num_samples must be positive.")

    cy = height // 2
    step = width / float(num_samples)
    return [(int((i + 0.5) * step), cy) for i in range(num_samples)]


def patch_bounds(cx, cy, width, height, patch_size=PATCH_SIZE):
    """
    Clamp a patch_size x patch_size neighbourhood centred on (cx, cy).

    Returns
    -------
    tuple or None
        (x0, y0, x1, y1) half-open bounds inside the ROI, or None if the
        clamped patch is empty.
    """
    half = patch_size // 2
    x0 = max(0, cx - half)
    y0 = max(0, cy - half)
    x1 = min(width, cx - half + patch_size)
    y1 = min(height, cy - half + patch_size)

    if x1 <= x0 or y1 <= y0:
        return None
    return x0, y0, x1, y1


def mean_hsv(roi_hsv, bounds):
    """
    Mean HSV of a patch, hue converted to degrees.

    Parameters
    ----------
    roi_hsv : np.ndarray
        OpenCV 8-bit HSV image.
    bounds : tuple
        (x0, y0, x1, y1) from patch_bounds.

    Returns
    -------
    tuple of float
        (hue_degrees, saturation, value). Hue is a circular mean, so a
        red patch straddling 0/360 stays red; hue is in [0, 360).
    """
    x0, y0, x1, y1 = bounds
    patch = roi_hsv[y0:y1, x0:x1].reshape(-1, 3).astype(np.float64)
    s, v = patch[:, 1:].mean(axis=0)

    angles = np.deg2rad(patch[:, 0] * HUE_SCALE)
    h = np.degrees(np.arctan2(np.sin(angles).mean(), np.cos(angles).mean())) % 360.0
    if h >= 360.0:
        h = 0.0
    return float(h), float(s), float(v)


def sample_band_colors(roi_hsv, num_samples=NUM_SAMPLES, patch_size=PATCH_SIZE, **classifier_options):
    """
    Sample and classify colours across the width of an HSV ROI.

    Parameters
    ----------
    roi_hsv : np.ndarray
        ROI in OpenCV 8-bit HSV.
    num_samples : int
        Number of evenly spaced samples.
    patch_size : int
        Side of the square neighbourhood averaged per sample.
    **classifier_options
        Forwarded to classify_hsv.

    Returns
    -------
    list of BandSample
        One entry per sample position, left to right. Samples whose
        neighbourhood is empty or whose colour is not classified have
        band=None.

    Raises
    ------
    ValueError
        If roi_hsv is None or not a 3-channel image.
    """
    if roi_hsv is None:
        raise ValueError("roi_hsv is None.")
    if roi_hsv.ndim != 3 or roi_hsv.shape[2] != 3:
        raise ValueError("roi_hsv must be a 3-channel HSV image.")

    h, w = roi_hsv.shape[:2]
    samples = []

    for idx, (cx, cy) in enumerate(sample_positions(w, h, num_samples)):
        bounds = patch_bounds(cx, cy, w, h, patch_size)
        if bounds is None:
            samples.append(BandSample(idx, cx, cy, None, None))
            continue

        hsv = mean_hsv(roi_hsv, bounds)
        band = classify_hsv(*hsv, **classifier_options)
        samples.append(BandSample(idx, cx, cy, hsv, band))

    logger.debug(
        "Sampled %d positions in %dx%d ROI: %s",
        len(samples), w, h, [s.band for s in samples],
    )
    return samples


def bands_from_samples(samples, on_unclassified="skip"):
    """
    Turn tagged samples into an ordered band sequence.

    Policies:
        - "skip":  drop unclassified samples (the sequence compacts)
        - "abort": any unclassified sample invalidates the whole sequence

    Parameters
    ----------
    samples : list of BandSample
        Output of sample_band_colors.
    on_unclassified : str
        "skip" or "abort".

    Returns
    -------
    list of str or None
        Band names in sample order, or None when aborted.

    Raises
    ------
    ValueError
        If the policy is unknown.
    """
    if on_unclassified not in UNCLASSIFIED_POLICIES:
        raise ValueError(f"on_unclassified must be one of {UNCLASSIFIED_POLICIES}.")

    if on_unclassified == "abort" and any(not s.classified for s in samples):
        return None

    return [s.band for s in samples if s.classified]


def extract_bands(roi_hsv, num_samples=NUM_SAMPLES, patch_size=PATCH_SIZE, **classifier_options) -> List[str]:
    """Sample an HSV ROI and return the compacted band sequence."""
    samples = sample_band_colors(roi_hsv, num_samples, patch_size, **classifier_options)
    return bands_from_samples(samples, "skip")


def sampler_options(config):
    """Extract sampler settings (num_samples, patch_size, on_unclassified) from config."""
    section = (config or {}).get("sampler", {})
    return {
        "num_samples": int(section.get("num_samples", NUM_SAMPLES)),
        "patch_size": int(section.get("patch_size", PATCH_SIZE)),
        "on_unclassified": section.get("on_unclassified", "skip"),
    }
