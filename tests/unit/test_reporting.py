from __future__ import annotations

import pytest

from gift_wrap_vision.domain.entities import ConfidenceTier, PaperSize, ShapeClass
from gift_wrap_vision.services.reporting import (
    RETAKE_ADVISORY,
    advisory_for,
    build_report,
    confidence_tier,
    folding_instructions,
)
from gift_wrap_vision.shared.errors import InvalidInput


@pytest.mark.parametrize(
    ("percent", "tier"),
    [
        (0, ConfidenceTier.LOW),
        (49.9, ConfidenceTier.LOW),
        (50, ConfidenceTier.MODERATE),
        (60, ConfidenceTier.MODERATE),
        (74.99, ConfidenceTier.MODERATE),
        (75, ConfidenceTier.HIGH),
        (89.9, ConfidenceTier.HIGH),
        (90, ConfidenceTier.VERY_HIGH),
        (95, ConfidenceTier.VERY_HIGH),
        (100, ConfidenceTier.VERY_HIGH),
    ],
)
def test_confidence_tiers(percent: float, tier: ConfidenceTier) -> None:
    assert confidence_tier(percent) is tier


def test_advisory_only_below_high_tier() -> None:
    assert advisory_for(60) == RETAKE_ADVISORY
    assert advisory_for(74.9) == RETAKE_ADVISORY
    assert advisory_for(75) is None
    assert advisory_for(95) is None


@pytest.mark.parametrize("percent", [-1, 100.5, "high"])
def test_out_of_range_confidence(percent) -> None:
    with pytest.raises(InvalidInput):
        confidence_tier(percent)


def test_folding_steps_substitute_paper_size_in_first_step() -> None:
    steps = list(folding_instructions(PaperSize(paper_length=40, paper_width=20, surface_area=800)))

    assert len(steps) == 6
    assert steps[0] == 'Cut paper to 40" × 20"'
    assert steps[1:] == list(folding_instructions(PaperSize(6, 6, 36)))[1:]


def test_build_report_for_confident_detection() -> None:
    result = build_report(
        length=10,
        width=8,
        height=4,
        paper_size=PaperSize(40, 20, 800),
        confidence_percent=95,
        shape_class=ShapeClass.BOXLIKE,
        detected_label="box",
    )

    assert result.confidence_tier is ConfidenceTier.VERY_HIGH
    assert result.advisory is None
    assert result.dimensions.length == 10
    assert result.paper_size.surface_area == 800
    assert len(result.folding_steps) == 6
    assert result.fallback_reason is None


def test_build_report_for_moderate_detection_adds_advisory() -> None:
    result = build_report(
        length=10,
        width=8,
        height=4,
        paper_size=PaperSize(40, 20, 800),
        confidence_percent=60,
    )

    assert result.confidence_tier is ConfidenceTier.MODERATE
    assert result.advisory == RETAKE_ADVISORY
