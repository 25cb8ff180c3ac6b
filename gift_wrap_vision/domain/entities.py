"""Domain entities and value objects for the measurement pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box in pixel coordinates, top-left origin."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Bounding box dimensions must be non-negative")

    @classmethod
    def from_xyxy(cls, x1: float, y1: float, x2: float, y2: float) -> "BoundingBox":
        left, right = sorted((x1, x2))
        top, bottom = sorted((y1, y2))
        return cls(x=left, y=top, width=right - left, height=bottom - top)

    def clipped(self, size: "ImageSize") -> "BoundingBox":
        """Return the part of the box that lies inside an image of ``size``."""

        x1 = min(max(self.x, 0.0), size.width)
        y1 = min(max(self.y, 0.0), size.height)
        x2 = min(max(self.x + self.width, 0.0), size.width)
        y2 = min(max(self.y + self.height, 0.0), size.height)
        return BoundingBox(x=x1, y=y1, width=x2 - x1, height=y2 - y1)


@dataclass(frozen=True)
class DetectedObject:
    """Represents a single object reported by the detector."""

    label: str
    confidence: float
    bounding_box: BoundingBox

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError("Confidence must be within [0, 1]")


@dataclass(frozen=True)
class ImageSize:
    width: int
    height: int


@dataclass(frozen=True)
class DecodedImage:
    """A raster image (HxWxC array) with its known pixel size."""

    data: Any
    size: ImageSize

    @classmethod
    def from_array(cls, array: Any) -> "DecodedImage":
        height, width = array.shape[:2]
        return cls(data=array, size=ImageSize(width=int(width), height=int(height)))


class CalibrationSource(str, Enum):
    REFERENCE = "reference"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ReferenceCalibration:
    """Pixels-per-inch scale derived for a single pipeline invocation."""

    pixels_per_inch: float
    source: CalibrationSource
    reference: DetectedObject | None = None

    def __post_init__(self) -> None:
        if not self.pixels_per_inch > 0:
            raise ValueError("pixels_per_inch must be positive")


class ShapeClass(str, Enum):
    FLAT = "flat"
    CYLINDRICAL = "cylindrical"
    BOXLIKE = "boxlike"


@dataclass(frozen=True)
class DimensionEstimate:
    """Gift dimensions in inches; ``length`` is always the larger planar extent."""

    length: float
    width: float
    height: float
    shape_class: ShapeClass = ShapeClass.BOXLIKE
    label: str | None = None
    confidence: float = 0.0

    def __post_init__(self) -> None:
        if self.length < self.width:
            raise ValueError("length must be greater than or equal to width")

    @property
    def confidence_percent(self) -> float:
        return self.confidence * 100.0


@dataclass(frozen=True)
class PaperSize:
    paper_length: int
    paper_width: int
    surface_area: int


@dataclass(frozen=True)
class FoldingInstructionSet:
    steps: Sequence[str]

    def __iter__(self):
        return iter(self.steps)


class ConfidenceTier(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    VERY_HIGH = "VeryHigh"


__all__ = [
    "BoundingBox",
    "CalibrationSource",
    "ConfidenceTier",
    "DecodedImage",
    "DetectedObject",
    "DimensionEstimate",
    "FoldingInstructionSet",
    "ImageSize",
    "PaperSize",
    "ReferenceCalibration",
    "ShapeClass",
]
