"""Turn the main detected object into length, width and height in inches."""

from __future__ import annotations

import math
from typing import Sequence

from ..crosscutting.logging_setup import get_logger
from ..domain.entities import (
    DetectedObject,
    DimensionEstimate,
    ImageSize,
    ReferenceCalibration,
    ShapeClass,
)

FLAT_LABELS = ("book", "laptop", "cell phone")
CYLINDRICAL_LABELS = ("bottle", "cup", "wine glass")
FLAT_HEIGHT_INCHES = 0.2
BOX_HEIGHT_RATIO = 0.3


def round_to_half(value: float) -> float:
    """Round to the nearest 0.5, halves rounding up."""

    return math.floor(value * 2 + 0.5) / 2


def classify_shape(label: str) -> ShapeClass:
    name = label.lower()
    if any(token in name for token in FLAT_LABELS):
        return ShapeClass.FLAT
    if any(token in name for token in CYLINDRICAL_LABELS):
        return ShapeClass.CYLINDRICAL
    return ShapeClass.BOXLIKE


def select_main_object(
    detections: Sequence[DetectedObject],
    reference: DetectedObject | None = None,
) -> DetectedObject | None:
    """Pick the most confident detection that is not the reference object.

    Ties keep the first one in detector order.
    """

    best: DetectedObject | None = None
    for detection in detections:
        if reference is not None and detection is reference:
            continue
        if best is None or detection.confidence > best.confidence:
            best = detection
    return best


class DimensionEstimator:
    def __init__(self, logger=None) -> None:
        self._logger = logger or get_logger(__name__)

    def estimate(
        self,
        detections: Sequence[DetectedObject],
        calibration: ReferenceCalibration,
        image_size: ImageSize | None = None,
    ) -> DimensionEstimate | None:
        """Return the estimate for the main object, or ``None`` when there is nothing to measure."""

        main = select_main_object(detections, calibration.reference)
        if main is None:
            self._logger.info("estimate.no_candidate", detections=len(detections))
            return None

        box = main.bounding_box
        if image_size is not None:
            box = box.clipped(image_size)

        width_in = box.width / calibration.pixels_per_inch
        height_in = box.height / calibration.pixels_per_inch
        planar_min = min(width_in, height_in)
        planar_max = max(width_in, height_in)

        shape = classify_shape(main.label)
        if shape is ShapeClass.FLAT:
            height = FLAT_HEIGHT_INCHES
        elif shape is ShapeClass.CYLINDRICAL:
            height = planar_min
        else:
            height = planar_min * BOX_HEIGHT_RATIO

        estimate = DimensionEstimate(
            length=round_to_half(planar_max),
            width=round_to_half(planar_min),
            height=round_to_half(height),
            shape_class=shape,
            label=main.label,
            confidence=main.confidence,
        )
        self._logger.info(
            "estimate.completed",
            label=main.label,
            confidence=main.confidence,
            shape=shape.value,
            length=estimate.length,
            width=estimate.width,
            height=estimate.height,
        )
        return estimate


__all__ = [
    "DimensionEstimator",
    "classify_shape",
    "round_to_half",
    "select_main_object",
]
