"""
Pipeline Module - Per-Frame Orchestration
=========================================

High-level functions that combine zoom, localisation, band sampling and
decoding into one frame step, and the FramePipeline state machine that
drives it from a capture source one refresh at a time.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

import numpy as np

from .capture import CaptureError, CaptureSource, create_capture
from .color import classifier_options, to_bgr, to_hsv
from .contours import CandidateRegion
from .decoding import ResistanceReading, decode_bands
from .detection import get_locator_params, locate_resistor
from .display import annotate_reading, draw_band_samples
from .roi import BandSample, bands_from_samples, sample_band_colors, sampler_options
from .transforms import ZoomTransform

logger = logging.getLogger(__name__)

STATUS_NO_RESISTOR = "no resistor detected"
STATUS_ERROR = "error processing image"
STATUS_STOPPED = "camera stopped"


class PipelineState(Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass
class FrameResult:
    """Everything one tick publishes to the display."""
    frame: Optional[np.ndarray]
    status: str
    candidate: Optional[CandidateRegion] = None
    samples: List[BandSample] = field(default_factory=list)
    bands: Optional[List[str]] = None
    reading: Optional[ResistanceReading] = None
    error: Optional[Exception] = None

    @property
    def detected(self) -> bool:
        return self.reading is not None


@dataclass
class ReaderSession:
    """
    State shared across ticks of one pipeline.

    Holds the capture handle, the Idle/Running flag and the requested zoom;
    the ZoomTransform remembers the last applied factor.
    """
    state: PipelineState = PipelineState.IDLE
    capture: Optional[CaptureSource] = None
    zoom: float = 1.0
    zoom_transform: ZoomTransform = field(default_factory=ZoomTransform)
    frames: int = 0
    errors: int = 0
    starts: int = 0
    releases: int = 0


def process_frame(
    frame: np.ndarray,
    zoom: Optional[ZoomTransform] = None,
    zoom_factor: float = 1.0,
    config: Optional[dict] = None,
    debug: bool = False,
) -> FrameResult:
    """
    Process one frame through the complete reading pipeline.

    This function performs:
    1. Digital zoom about the frame centre
    2. Resistor localisation (edges, contours, area selection)
    3. Band sampling across the located ROI
    4. Value decoding
    5. Annotation of a copy of the zoomed frame

    Parameters
    ----------
    frame : np.ndarray
        BGR or BGRA frame.
    zoom : ZoomTransform, optional
        Zoom with matrix cache; a fresh one is used if omitted.
    zoom_factor : float
        Zoom factor (1.0 = none).
    config : dict, optional
        Configuration with 'locator', 'sampler' and 'classifier' sections.
    debug : bool
        If True, display intermediate images.

    Returns
    -------
    FrameResult
        Annotated frame, status text and intermediate results.
    """
    if zoom is None:
        zoom = ZoomTransform()

    zoomed = zoom(to_bgr(frame), zoom_factor)
    annotated = zoomed.copy()

    candidate = locate_resistor(zoomed, output=annotated, debug=debug, **get_locator_params(config))
    if candidate is None:
        annotate_reading(annotated, STATUS_NO_RESISTOR)
        return FrameResult(frame=annotated, status=STATUS_NO_RESISTOR)

    # Sample from the un-annotated pixels
    roi_hsv = to_hsv(candidate.crop(zoomed))
    opts = sampler_options(config)
    samples = sample_band_colors(
        roi_hsv,
        num_samples=opts["num_samples"],
        patch_size=opts["patch_size"],
        **classifier_options(config),
    )
    bands = bands_from_samples(samples, opts["on_unclassified"])
    reading = decode_bands(bands) if bands is not None else None
    status = reading.text if reading is not None else STATUS_NO_RESISTOR

    if debug:
        logger.debug("Candidate %s bands=%s status=%s", candidate.bounding_box, bands, status)

    draw_band_samples(annotated, candidate, samples)
    annotate_reading(annotated, status, candidate)

    return FrameResult(
        frame=annotated,
        status=status,
        candidate=candidate,
        samples=samples,
        bands=bands,
        reading=reading,
    )


class FramePipeline:
    """
    Idle/Running state machine around a capture source.

    One tick reads one frame, processes it and publishes a FrameResult,
    then asks the scheduler for the next tick. Ticks never overlap, and
    processing errors are reported through the result instead of raised.

    Parameters
    ----------
    capture_factory : callable, optional
        Returns an unopened CaptureSource. Defaults to create_capture(config).
    scheduler : object
        Has schedule(callback) and cancel().
    on_result : callable, optional
        Receives each FrameResult.
    config : dict, optional
        Processing configuration.
    session : ReaderSession, optional
        Session state; a new one is created if omitted.
    debug : bool
        Forwarded to process_frame.
    """

    def __init__(
        self,
        capture_factory: Optional[Callable[[], CaptureSource]] = None,
        scheduler=None,
        on_result: Optional[Callable[[FrameResult], None]] = None,
        config: Optional[dict] = None,
        session: Optional[ReaderSession] = None,
        debug: bool = False,
    ):
        if scheduler is None:
            raise ValueError("A scheduler is required.")
        self.config = config or {}
        self.capture_factory = capture_factory or (lambda: create_capture(self.config))
        self.scheduler = scheduler
        self.on_result = on_result
        self.session = session or ReaderSession()
        self.debug = debug
        self._in_tick = False

    @property
    def state(self) -> PipelineState:
        return self.session.state

    @property
    def is_running(self) -> bool:
        return self.session.state is PipelineState.RUNNING

    def start(self):
        """
        Acquire the capture device and schedule the first tick.

        Raises
        ------
        CaptureError
            If the device cannot be acquired. The pipeline stays Idle.
        """
        if self.is_running:
            return

        capture = None
        try:
            capture = self.capture_factory()
            capture.open()
        except Exception as e:
            if capture is not None:
                capture.release()
            logger.warning("Could not start capture: %s", e)
            if isinstance(e, CaptureError):
                raise
            raise CaptureError(str(e)) from e

        self.session.capture = capture
        self.session.state = PipelineState.RUNNING
        self.session.starts += 1
        logger.info("Pipeline running")
        self.scheduler.schedule(self.tick)

    def stop(self):
        """
        Cancel pending ticks and release the capture device.

        The capture is released and the state set to Idle even if the
        scheduler fails to cancel; that error is re-raised afterwards.
        """
        try:
            self.scheduler.cancel()
        finally:
            capture, self.session.capture = self.session.capture, None
            was_running = self.is_running
            self.session.state = PipelineState.IDLE

            if capture is not None:
                try:
                    capture.release()
                finally:
                    self.session.releases += 1
            if was_running:
                logger.info("Pipeline stopped after %d frames", self.session.frames)

    def set_zoom(self, factor):
        """Set the zoom factor applied from the next tick on."""
        factor = float(factor)
        if factor <= 0:
            raise ValueError(f"Zoom factor must be positive, got {factor}.")
        self.session.zoom = factor

    def tick(self) -> Optional[FrameResult]:
        """
        Run one iteration of the frame loop.

        Returns
        -------
        FrameResult or None
            None if the pipeline is Idle or a tick is already in progress.
        """
        if self._in_tick or not self.is_running:
            return None

        self._in_tick = True
        try:
            result = self._run_tick()
            self._publish(result)
        finally:
            self._in_tick = False
            if self.is_running:
                self.scheduler.schedule(self.tick)

        return result

    def _publish(self, result):
        if self.on_result is None:
            return
        try:
            self.on_result(result)
        except Exception:
            logger.exception("Error publishing result %r", result.status)

    def _run_tick(self) -> FrameResult:
        try:
            frame = self.session.capture.read()
        except Exception:
            logger.exception("Capture read failed")
            frame = None

        if frame is None:
            logger.warning("No frame from capture, stopping")
            self.stop()
            return FrameResult(frame=None, status=STATUS_STOPPED)

        self.session.frames += 1
        try:
            return process_frame(
                frame,
                zoom=self.session.zoom_transform,
                zoom_factor=self.session.zoom,
                config=self.config,
                debug=self.debug,
            )
        except Exception as e:
            self.session.errors += 1
            logger.exception("Error processing frame %d", self.session.frames)
            return FrameResult(frame=frame, status=STATUS_ERROR, error=e)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
