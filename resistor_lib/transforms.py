"""
Transforms Module - Digital Zoom
================================

Affine scaling of frames about their centre, with a small cache so the
matrix is only rebuilt when the zoom factor or frame size changes.
"""

import logging

import cv2

logger = logging.getLogger(__name__)


def _check_factor(factor):
    if factor is None or factor <= 0:
        raise ValueError(f"Zoom factor must be positive, got {factor}.")


def zoom_matrix(width, height, factor):
    """
    Build the 2x3 affine matrix that scales an image about its centre.

    Parameters
    ----------
    width : int
        Frame width.
    height : int
        Frame height.
    factor : float
        Scale factor (> 0). Values above 1 zoom in.

    Returns
    -------
    np.ndarray
        2x3 float64 affine matrix.

    Raises
    ------
    ValueError
        If factor is not positive.
    """
    _check_factor(factor)
    center = (width / 2.0, height / 2.0)
    return cv2.getRotationMatrix2D(center, 0, factor)


def apply_zoom(img, factor, matrix=None):
    """
    Apply a digital zoom to an image, keeping its size.

    Parameters
    ----------
    img : np.ndarray
        Input image.
    factor : float
        Scale factor. 1.0 returns an unchanged copy.
    matrix : np.ndarray, optional
        Precomputed zoom_matrix for this image size and factor.

    Returns
    -------
    np.ndarray
        Zoomed image with the same shape as img.

    Raises
    ------
    ValueError
        If input image is None or factor is not positive.
    """
    if img is None:
        raise ValueError("img is None.")
    _check_factor(factor)

    if factor == 1.0:
        return img.copy()

    h, w = img.shape[:2]
    if matrix is None:
        matrix = zoom_matrix(w, h, factor)
    return cv2.warpAffine(img, matrix, (w, h))


class ZoomTransform:
    """
    Zoom with a cached affine matrix.

    Remembers the last applied factor and frame size; the matrix is only
    recomputed when either changes.
    """

    def __init__(self):
        self.last_factor = None
        self.last_size = None
        self.matrix = None
        self.recomputations = 0

    def __call__(self, img, factor):
        if img is None:
            raise ValueError("img is None.")
        _check_factor(factor)

        h, w = img.shape[:2]
        if factor != self.last_factor or (w, h) != self.last_size:
            self.matrix = zoom_matrix(w, h, factor)
            self.last_factor = factor
            self.last_size = (w, h)
            self.recomputations += 1
            logger.debug("Zoom matrix rebuilt: factor=%.2f size=%dx%d", factor, w, h)

        return apply_zoom(img, factor, self.matrix)
