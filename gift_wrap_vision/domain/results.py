from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .entities import ConfidenceTier, ShapeClass


class DimensionsModel(BaseModel):
    """Gift dimensions handed to the presentation layer."""

    model_config = ConfigDict(frozen=True)

    length: float = Field(..., ge=0.0, description="Longest planar extent of the gift, in inches.")
    width: float = Field(..., ge=0.0, description="Shorter planar extent of the gift, in inches.")
    height: float = Field(..., ge=0.0, description="Height of the gift, in inches.")


class PaperSizeModel(BaseModel):
    """Wrapping paper required for the gift."""

    model_config = ConfigDict(frozen=True)

    paper_length: int = Field(..., ge=0, description="Sheet length in whole inches.")
    paper_width: int = Field(..., ge=0, description="Sheet width in whole inches.")
    surface_area: int = Field(..., ge=0, description="paper_length * paper_width, in square inches.")


class WrapResult(BaseModel):
    """Result bundle produced by one estimate-then-calculate round trip."""

    model_config = ConfigDict(frozen=True)

    dimensions: DimensionsModel
    paper_size: PaperSizeModel
    confidence_tier: ConfidenceTier
    confidence_percent: float = Field(..., ge=0.0, le=100.0)
    advisory: Optional[str] = Field(default=None, description="Retake advice for low confidence estimates.")
    folding_steps: list[str] = Field(default_factory=list)
    shape_class: Optional[ShapeClass] = None
    detected_label: Optional[str] = None
    fallback_reason: Optional[str] = Field(
        default=None,
        description="Why default dimensions were used instead of a detection, if they were.",
    )
