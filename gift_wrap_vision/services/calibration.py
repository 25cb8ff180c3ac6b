"""Derive a pixels-per-inch scale from a reference object in the frame."""

from __future__ import annotations

from typing import Sequence

from ..crosscutting.logging_setup import get_logger
from ..domain.entities import CalibrationSource, DetectedObject, ReferenceCalibration
from ..shared.errors import InvalidInput
from ..shared.validation import parse_float

CREDIT_CARD_WIDTH_INCHES = 3.375
FALLBACK_FRAME_FRACTION = 0.25
DEFAULT_REFERENCE_TOKENS = ("card",)


class ScaleCalibrator:
    """Find the reference card or fall back to an assumed share of the image width.

    Without a reference the card is assumed to span ``frame_fraction`` of the
    image width, i.e. a typical photo frames the gift at roughly four card
    widths.
    """

    def __init__(
        self,
        *,
        reference_tokens: Sequence[str] = DEFAULT_REFERENCE_TOKENS,
        reference_width_inches: float = CREDIT_CARD_WIDTH_INCHES,
        frame_fraction: float = FALLBACK_FRAME_FRACTION,
        logger=None,
    ) -> None:
        if reference_width_inches <= 0:
            raise ValueError("Reference width must be positive")
        if not 0 < frame_fraction <= 1:
            raise ValueError("Frame fraction must be within (0, 1]")
        self._tokens = tuple(token.lower() for token in reference_tokens if token)
        self._reference_width = reference_width_inches
        self._frame_fraction = frame_fraction
        self._logger = logger or get_logger(__name__)

    def find_reference(self, detections: Sequence[DetectedObject]) -> DetectedObject | None:
        """Return the first detection whose label contains a reference token."""

        for detection in detections:
            label = detection.label.lower()
            if any(token in label for token in self._tokens):
                return detection
        return None

    def calibrate(self, detections: Sequence[DetectedObject], image_width: float) -> ReferenceCalibration:
        width = parse_float(image_width, "Image width")
        if width <= 0:
            raise InvalidInput("Image width must be positive")

        reference = self.find_reference(detections)
        if reference is not None and reference.bounding_box.width > 0:
            ppi = reference.bounding_box.width / self._reference_width
            self._logger.info(
                "calibration.reference_found",
                label=reference.label,
                box_width=reference.bounding_box.width,
                pixels_per_inch=ppi,
            )
            return ReferenceCalibration(
                pixels_per_inch=ppi,
                source=CalibrationSource.REFERENCE,
                reference=reference,
            )

        ppi = (width * self._frame_fraction) / self._reference_width
        self._logger.info(
            "calibration.fallback",
            image_width=width,
            pixels_per_inch=ppi,
            degenerate_reference=reference is not None,
        )
        return ReferenceCalibration(
            pixels_per_inch=ppi,
            source=CalibrationSource.FALLBACK,
            reference=reference,
        )


__all__ = [
    "CREDIT_CARD_WIDTH_INCHES",
    "FALLBACK_FRAME_FRACTION",
    "ScaleCalibrator",
]
