"""
Display Module - Visualization and Annotation
=============================================

Functions for displaying images and annotating frames with the located
resistor, its sampled bands and the decoded value.
"""

import cv2
import matplotlib.pyplot as plt

from .color import BAND_DISPLAY_COLORS


CANDIDATE_COLOR = (0, 255, 0)
UNCLASSIFIED_COLOR = (0, 0, 255)
TEXT_COLOR = (255, 255, 255)


def show_image(img, title="Image", cmap_type=None):
    """
    Display an image with matplotlib (debug helper).
    Automatically handles BGR to RGB conversion for color images.

    Parameters
    ----------
    img : np.ndarray
        Image to display (BGR or grayscale).
    title : str
        Title for the plot.
    cmap_type : str or None
        Colormap type for matplotlib (only used for grayscale).
    """
    plt.figure(figsize=(6, 6))

    if len(img.shape) == 3:
        img_rgb = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
        plt.imshow(img_rgb)
    else:
        plt.imshow(img, cmap=cmap_type or 'gray')

    plt.title(title)
    plt.axis('off')
    plt.show()


def draw_candidate_box(frame, candidate, color=CANDIDATE_COLOR, thickness=2):
    """
    Draw the candidate bounding rectangle on a frame, in place.

    Parameters
    ----------
    frame : np.ndarray
        BGR or BGRA frame.
    candidate : CandidateRegion
        Located resistor region.
    color : tuple
        BGR rectangle colour.
    thickness : int
        Line thickness.
    """
    x, y, w, h = candidate.bounding_box
    if frame.ndim == 3 and frame.shape[2] == 4:
        color = (*color[:3], 255)
    cv2.rectangle(frame, (x, y), (x + w, y + h), color, thickness)


def draw_band_samples(frame, candidate, samples, radius=3):
    """
    Mark sample points inside the candidate, coloured by their band.

    Unclassified samples are drawn as red crosses.
    """
    for s in samples:
        center = (candidate.x + s.x, candidate.y + s.y)
        if s.band is None:
            cv2.drawMarker(frame, center, UNCLASSIFIED_COLOR, cv2.MARKER_CROSS, radius * 3, 1)
            continue
        cv2.circle(frame, center, radius + 1, (0, 0, 0), -1)
        cv2.circle(frame, center, radius, BAND_DISPLAY_COLORS[s.band], -1)


def annotate_reading(frame, text, candidate=None, font_scale=0.8, thickness=2):
    """
    Write the reading text in a filled box, in place.

    The box sits just above the candidate when given, otherwise in the
    top-left corner.

    Parameters
    ----------
    frame : np.ndarray
        BGR frame.
    text : str
        Text to display (value or status).
    candidate : CandidateRegion or None
        Region used to position the label.
    font_scale : float
        OpenCV font scale.
    thickness : int
        Text stroke thickness.
    """
    font = cv2.FONT_HERSHEY_SIMPLEX
    (tw, th), baseline = cv2.getTextSize(text, font, font_scale, thickness)
    pad = 6
    box_h = th + baseline + 2 * pad
    box_w = tw + 2 * pad

    if candidate is not None:
        x1 = max(0, candidate.x)
        y1 = max(0, candidate.y - box_h)
    else:
        x1, y1 = 10, 10

    h, w = frame.shape[:2]
    x2 = min(x1 + box_w, w - 1)
    y2 = min(y1 + box_h, h - 1)

    cv2.rectangle(frame, (x1, y1), (x2, y2), (0, 0, 0), -1)
    cv2.rectangle(frame, (x1, y1), (x2, y2), CANDIDATE_COLOR, 1)
    cv2.putText(
        frame,
        text,
        (x1 + pad, y1 + pad + th),
        font,
        font_scale,
        TEXT_COLOR,
        thickness,
        cv2.LINE_AA
    )
