"""
GUI Base Module - Image Utilities
=================================

Conversion helpers between OpenCV frames and Tkinter images.
"""

import cv2
from PIL import Image, ImageTk

from ..color import to_bgr


# Display size limit
MAX_WIDTH = 800


def resize_for_view(img, width=MAX_WIDTH):
    """
    Resize an image to a fixed display width, keeping aspect ratio.

    Parameters
    ----------
    img : np.ndarray
        Input image.
    width : int
        Target display width.

    Returns
    -------
    np.ndarray
        Resized image (or original if already that width).
    """
    h, w = img.shape[:2]
    if w == width:
        return img
    scale = width / float(w)
    new_h = max(1, int(h * scale))
    interpolation = cv2.INTER_AREA if scale < 1 else cv2.INTER_LINEAR
    return cv2.resize(img, (width, new_h), interpolation=interpolation)


def cv_bgr_to_pil(img_bgr, width=MAX_WIDTH):
    """
    Convert an OpenCV BGR/BGRA frame to a PIL RGB image at display width.

    Parameters
    ----------
    img_bgr : np.ndarray
        BGR or BGRA image from OpenCV.
    width : int
        Display width.

    Returns
    -------
    PIL.Image.Image
        RGB image.
    """
    img_bgr = resize_for_view(to_bgr(img_bgr), width)
    img_rgb = cv2.cvtColor(img_bgr, cv2.COLOR_BGR2RGB)
    return Image.fromarray(img_rgb)


def cv_bgr_to_tk(img_bgr, width=MAX_WIDTH):
    """
    Convert OpenCV BGR image to Tkinter-compatible PhotoImage.

    Parameters
    ----------
    img_bgr : np.ndarray
        BGR image from OpenCV.
    width : int
        Display width.

    Returns
    -------
    ImageTk.PhotoImage
        Tkinter-compatible image.
    """
    return ImageTk.PhotoImage(cv_bgr_to_pil(img_bgr, width))
