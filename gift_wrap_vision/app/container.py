"""Composition root wiring settings, logging, detector and use cases."""

from __future__ import annotations

from dependency_injector import containers, providers

from ..crosscutting.config import load_settings
from ..crosscutting.logging_setup import get_logger, setup_logging
from ..data.providers import YoloDetectionProvider
from ..data.repositories import LatestResultRepository
from ..domain.entities import DimensionEstimate, ShapeClass
from ..services.calibration import ScaleCalibrator
from ..services.dimensions import DimensionEstimator
from ..services.use_cases import MeasureGiftUseCase, PlanWrappingUseCase, WrapSession


class ApplicationContainer(containers.DeclarativeContainer):
    settings = providers.Singleton(load_settings)
    logging = providers.Resource(setup_logging, level=settings.provided.log_level)
    logger = providers.Singleton(get_logger, "gift_wrap_vision")

    #region Detection
    detection_provider = providers.Singleton(
        YoloDetectionProvider,
        model_path=settings.provided.model_path,
        device=settings.provided.device,
        confidence_threshold=settings.provided.confidence_threshold,
        iou_threshold=settings.provided.iou_threshold,
        max_detections=settings.provided.max_detections,
        logger=providers.Factory(get_logger, "gift_wrap_vision.detector"),
    )
    #endregion

    #region Services
    calibrator = providers.Factory(
        ScaleCalibrator,
        reference_tokens=settings.provided.reference_tokens,
        reference_width_inches=settings.provided.reference_width_inches,
        frame_fraction=settings.provided.fallback_frame_fraction,
        logger=providers.Factory(get_logger, "gift_wrap_vision.calibration"),
    )
    estimator = providers.Factory(
        DimensionEstimator,
        logger=providers.Factory(get_logger, "gift_wrap_vision.estimator"),
    )
    default_estimate = providers.Singleton(
        DimensionEstimate,
        length=settings.provided.default_length,
        width=settings.provided.default_width,
        height=settings.provided.default_height,
        shape_class=ShapeClass.BOXLIKE,
    )
    measure_gift = providers.Factory(
        MeasureGiftUseCase,
        detection_provider=detection_provider,
        calibrator=calibrator,
        estimator=estimator,
        default_estimate=default_estimate,
        logger=logger,
    )
    plan_wrapping = providers.Factory(PlanWrappingUseCase, logger=logger)
    result_repository = providers.Singleton(LatestResultRepository)
    session = providers.Singleton(
        WrapSession,
        measure=measure_gift,
        plan=plan_wrapping,
        repository=result_repository,
        logger=logger,
    )
    #endregion


__all__ = ["ApplicationContainer"]
