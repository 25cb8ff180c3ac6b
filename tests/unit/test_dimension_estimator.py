from __future__ import annotations

import pytest

from gift_wrap_vision.domain.entities import (
    BoundingBox,
    CalibrationSource,
    DetectedObject,
    ImageSize,
    ReferenceCalibration,
    ShapeClass,
)
from gift_wrap_vision.services.dimensions import (
    DimensionEstimator,
    classify_shape,
    round_to_half,
    select_main_object,
)

SCALE = ReferenceCalibration(pixels_per_inch=100.0, source=CalibrationSource.FALLBACK)


def _detection(label: str, width: float, height: float, confidence: float = 0.9, x: float = 0, y: float = 0):
    return DetectedObject(label=label, confidence=confidence, bounding_box=BoundingBox(x, y, width, height))


def test_boxlike_height_is_thirty_percent_of_short_side() -> None:
    estimate = DimensionEstimator().estimate([_detection("suitcase", 1000, 500)], SCALE)

    assert estimate.shape_class is ShapeClass.BOXLIKE
    assert (estimate.length, estimate.width, estimate.height) == (10.0, 5.0, 1.5)
    assert estimate.label == "suitcase"
    assert estimate.confidence == pytest.approx(0.9)


def test_cylindrical_height_equals_diameter() -> None:
    estimate = DimensionEstimator().estimate([_detection("wine bottle", 300, 900)], SCALE)

    assert estimate.shape_class is ShapeClass.CYLINDRICAL
    assert (estimate.length, estimate.width, estimate.height) == (9.0, 3.0, 3.0)


def test_flat_objects_use_fixed_height_before_rounding() -> None:
    estimate = DimensionEstimator().estimate([_detection("book", 800, 650)], SCALE)

    assert estimate.shape_class is ShapeClass.FLAT
    assert (estimate.length, estimate.width) == (8.0, 6.5)
    # 0.2" rounds to the nearest half inch
    assert estimate.height == 0.0


def test_reference_object_is_never_the_main_object() -> None:
    card = _detection("credit card", 337.5, 212.5, confidence=0.99)
    gift = _detection("teddy bear", 1200, 700, confidence=0.7)
    calibration = ReferenceCalibration(
        pixels_per_inch=100.0,
        source=CalibrationSource.REFERENCE,
        reference=card,
    )

    estimate = DimensionEstimator().estimate([card, gift], calibration)

    assert estimate.label == "teddy bear"
    assert (estimate.length, estimate.width) == (12.0, 7.0)


def test_only_the_identified_reference_is_excluded() -> None:
    card = _detection("card", 200, 100, confidence=0.95)
    twin = _detection("card", 200, 100, confidence=0.95)

    main = select_main_object([card, twin], reference=card)

    assert main is twin


def test_ties_keep_detector_order() -> None:
    first = _detection("vase", 100, 100, confidence=0.8)
    second = _detection("cup", 100, 100, confidence=0.8)

    assert select_main_object([first, second]) is first
    assert select_main_object([second, first]) is second


def test_no_candidates_returns_none() -> None:
    card = _detection("card", 337.5, 212.5)
    calibration = ReferenceCalibration(100.0, CalibrationSource.REFERENCE, reference=card)

    assert DimensionEstimator().estimate([], SCALE) is None
    assert DimensionEstimator().estimate([card], calibration) is None


@pytest.mark.parametrize(("width", "height"), [(120, 980), (980, 120), (333, 333), (1, 2500)])
def test_length_is_never_shorter_than_width(width: float, height: float) -> None:
    estimate = DimensionEstimator().estimate([_detection("box", width, height)], SCALE)

    assert estimate.length >= estimate.width


def test_box_is_clipped_to_the_frame() -> None:
    detection = _detection("box", 600, 300, x=-100, y=50)

    estimate = DimensionEstimator().estimate([detection], SCALE, ImageSize(width=400, height=300))

    assert (estimate.length, estimate.width) == (4.0, 2.5)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.0, 0.0), (0.2, 0.0), (0.25, 0.5), (1.24, 1.0), (1.25, 1.5), (2.74, 2.5), (2.75, 3.0), (9.99, 10.0)],
)
def test_round_to_half(value: float, expected: float) -> None:
    assert round_to_half(value) == expected


@pytest.mark.parametrize(
    ("label", "shape"),
    [
        ("Laptop", ShapeClass.FLAT),
        ("cell phone", ShapeClass.FLAT),
        ("notebook", ShapeClass.FLAT),
        ("cup", ShapeClass.CYLINDRICAL),
        ("wine glass", ShapeClass.CYLINDRICAL),
        ("teddy bear", ShapeClass.BOXLIKE),
    ],
)
def test_classify_shape(label: str, shape: ShapeClass) -> None:
    assert classify_shape(label) is shape
