"""Application service layer orchestrating the measurement pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from ..crosscutting.logging_setup import get_logger
from ..data.providers import DetectionProvider
from ..data.repositories import LatestResultRepository
from ..domain.entities import DecodedImage, DimensionEstimate, ReferenceCalibration, ShapeClass
from ..domain.results import WrapResult
from ..shared.errors import DetectionError, NoObjectDetected
from .calibration import ScaleCalibrator
from .dimensions import DimensionEstimator
from .paper import calculate_paper_size
from .reporting import build_report

DEFAULT_ESTIMATE = DimensionEstimate(length=10.0, width=8.0, height=4.0, shape_class=ShapeClass.BOXLIKE)


@dataclass(frozen=True)
class Measurement:
    """Outcome of the estimation stage."""

    estimate: DimensionEstimate
    calibration: ReferenceCalibration | None = None
    fallback_reason: str | None = None

    @property
    def used_fallback(self) -> bool:
        return self.fallback_reason is not None


class MeasureGiftUseCase:
    """Detect, calibrate and estimate; degrade to default dimensions on any detection failure."""

    def __init__(
        self,
        detection_provider: DetectionProvider,
        calibrator: ScaleCalibrator,
        estimator: DimensionEstimator,
        default_estimate: DimensionEstimate = DEFAULT_ESTIMATE,
        logger=None,
    ) -> None:
        self._detection_provider = detection_provider
        self._calibrator = calibrator
        self._estimator = estimator
        self._default_estimate = default_estimate
        self._logger = logger or get_logger(__name__)

    async def execute(self, image: DecodedImage) -> Measurement:
        try:
            detections = await self._detection_provider.detect(image)
            if not detections:
                raise NoObjectDetected("No objects detected in the image")
            calibration = self._calibrator.calibrate(detections, image.size.width)
            estimate = self._estimator.estimate(detections, calibration, image.size)
            if estimate is None:
                raise NoObjectDetected("Only the reference object was detected")
        except DetectionError as exc:
            self._logger.warning(
                "estimate.fallback",
                reason=type(exc).__name__,
                detail=str(exc),
            )
            return Measurement(estimate=self._default_estimate, fallback_reason=str(exc))
        return Measurement(estimate=estimate, calibration=calibration)


class PlanWrappingUseCase:
    """Compute paper size and instructions for given dimensions.

    Dimensions may come straight from form fields, so strings are accepted;
    malformed values raise :class:`~gift_wrap_vision.shared.errors.InvalidInput`.
    """

    def __init__(self, logger=None) -> None:
        self._logger = logger or get_logger(__name__)

    def execute(
        self,
        length: object,
        width: object,
        height: object,
        confidence_percent: float = 100.0,
        *,
        shape_class: ShapeClass | None = None,
        detected_label: str | None = None,
        fallback_reason: str | None = None,
    ) -> WrapResult:
        paper_size = calculate_paper_size(length, width, height)
        result = build_report(
            length=float(length),
            width=float(width),
            height=float(height),
            paper_size=paper_size,
            confidence_percent=confidence_percent,
            shape_class=shape_class,
            detected_label=detected_label,
            fallback_reason=fallback_reason,
        )
        self._logger.info(
            "paper.calculated",
            paper_length=paper_size.paper_length,
            paper_width=paper_size.paper_width,
            surface_area=paper_size.surface_area,
            tier=result.confidence_tier.value,
        )
        return result

    def from_measurement(self, measurement: Measurement) -> WrapResult:
        estimate = measurement.estimate
        return self.execute(
            estimate.length,
            estimate.width,
            estimate.height,
            estimate.confidence_percent,
            shape_class=estimate.shape_class,
            detected_label=estimate.label,
            fallback_reason=measurement.fallback_reason,
        )


class WrapSession:
    """One user's upload flow: every upload yields an independent result.

    Only the newest upload may publish; an earlier upload finishing late gets
    ``None`` back and its result is dropped.
    """

    def __init__(
        self,
        measure: MeasureGiftUseCase,
        plan: PlanWrappingUseCase,
        repository: LatestResultRepository[WrapResult] | None = None,
        logger=None,
    ) -> None:
        self._measure = measure
        self._plan = plan
        self._repository = repository if repository is not None else LatestResultRepository()
        self._logger = logger or get_logger(__name__)

    @property
    def latest(self) -> WrapResult | None:
        return self._repository.latest()

    async def upload(self, image: DecodedImage) -> WrapResult | None:
        token = self._repository.next_token()
        measurement = await self._measure.execute(image)
        result = self._plan.from_measurement(measurement)
        if not self._repository.publish(token, result):
            self._logger.info("session.superseded", token=token)
            return None
        return result

    def recalculate(self, length: object, width: object, height: object) -> WrapResult:
        """Recompute from user-corrected dimensions, superseding any in-flight upload."""

        token = self._repository.next_token()
        result = self._plan.execute(length, width, height)
        self._repository.publish(token, result)
        return result


__all__ = [
    "DEFAULT_ESTIMATE",
    "Measurement",
    "MeasureGiftUseCase",
    "PlanWrappingUseCase",
    "WrapSession",
]
