"""Wrapping paper geometry."""

from __future__ import annotations

import math

from ..domain.entities import DimensionEstimate, PaperSize
from ..shared.validation import parse_float

OVERLAP_ALLOWANCE_INCHES = 4
FOLD_ALLOWANCE_INCHES = 4


def calculate_paper_size(length: object, width: object, height: object) -> PaperSize:
    """Return the sheet needed to wrap a ``length`` x ``width`` x ``height`` gift.

    The sheet runs around the length+width perimeter twice over plus an overlap
    allowance; across, it covers both end flaps (``2 * height``) and the width
    plus a folding allowance. Both sides are rounded up to whole inches and the
    surface area is taken from the rounded sides.

    Raises :class:`~gift_wrap_vision.shared.errors.InvalidInput` when a value is
    missing, non-numeric or negative.
    """

    l = parse_float(length, "Length", minimum=0.0)
    w = parse_float(width, "Width", minimum=0.0)
    h = parse_float(height, "Height", minimum=0.0)

    paper_length = math.ceil(l + w + l + w + OVERLAP_ALLOWANCE_INCHES)
    paper_width = math.ceil(2 * h + w + FOLD_ALLOWANCE_INCHES)
    return PaperSize(
        paper_length=paper_length,
        paper_width=paper_width,
        surface_area=paper_length * paper_width,
    )


def paper_size_for(estimate: DimensionEstimate) -> PaperSize:
    return calculate_paper_size(estimate.length, estimate.width, estimate.height)


__all__ = ["calculate_paper_size", "paper_size_for"]
