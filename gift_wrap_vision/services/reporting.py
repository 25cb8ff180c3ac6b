"""Confidence tiers, advisories and folding instructions."""

from __future__ import annotations

from ..domain.entities import ConfidenceTier, FoldingInstructionSet, PaperSize, ShapeClass
from ..domain.results import DimensionsModel, PaperSizeModel, WrapResult
from ..shared.errors import InvalidInput
from ..shared.validation import parse_float

RETAKE_THRESHOLD = 75.0
RETAKE_ADVISORY = (
    "For a more accurate estimate, retake the photo in better lighting "
    "with a credit card placed flat next to the gift."
)

_TIERS = (
    (90.0, ConfidenceTier.VERY_HIGH),
    (75.0, ConfidenceTier.HIGH),
    (50.0, ConfidenceTier.MODERATE),
)


def _percent(value: object) -> float:
    number = parse_float(value, "Confidence")
    if not 0.0 <= number <= 100.0:
        raise InvalidInput("Confidence must be within [0, 100]")
    return number


def confidence_tier(confidence_percent: object) -> ConfidenceTier:
    percent = _percent(confidence_percent)
    for threshold, tier in _TIERS:
        if percent >= threshold:
            return tier
    return ConfidenceTier.LOW


def advisory_for(confidence_percent: object) -> str | None:
    """Retake advice for estimates below the High tier. Advisory only."""

    if _percent(confidence_percent) < RETAKE_THRESHOLD:
        return RETAKE_ADVISORY
    return None


def folding_instructions(paper_size: PaperSize) -> FoldingInstructionSet:
    return FoldingInstructionSet(
        steps=(
            f'Cut paper to {paper_size.paper_length}" × {paper_size.paper_width}"',
            "Place gift face down in the center of paper",
            'Bring long sides together and overlap by 2", tape',
            "At each end, fold sides in at 45° angle",
            "Fold up bottom flap and tape",
            "Fold down top flap and tape",
        )
    )


def build_report(
    *,
    length: float,
    width: float,
    height: float,
    paper_size: PaperSize,
    confidence_percent: float,
    shape_class: ShapeClass | None = None,
    detected_label: str | None = None,
    fallback_reason: str | None = None,
) -> WrapResult:
    percent = _percent(confidence_percent)
    return WrapResult(
        dimensions=DimensionsModel(length=length, width=width, height=height),
        paper_size=PaperSizeModel(
            paper_length=paper_size.paper_length,
            paper_width=paper_size.paper_width,
            surface_area=paper_size.surface_area,
        ),
        confidence_tier=confidence_tier(percent),
        confidence_percent=percent,
        advisory=advisory_for(percent),
        folding_steps=list(folding_instructions(paper_size)),
        shape_class=shape_class,
        detected_label=detected_label,
        fallback_reason=fallback_reason,
    )


__all__ = [
    "RETAKE_ADVISORY",
    "advisory_for",
    "build_report",
    "confidence_tier",
    "folding_instructions",
]
