"""Smoke tests for container wiring."""

from __future__ import annotations

import asyncio

import numpy as np
from dependency_injector import providers

from gift_wrap_vision.app.container import ApplicationContainer
from gift_wrap_vision.crosscutting.config import AppSettings
from gift_wrap_vision.data.providers import InMemoryDetectionProvider, YoloDetectionProvider
from gift_wrap_vision.domain.entities import BoundingBox, DecodedImage, DetectedObject


def _container(settings: AppSettings, detections=()) -> ApplicationContainer:
    container = ApplicationContainer()
    container.settings.override(providers.Object(settings))
    container.detection_provider.override(providers.Object(InMemoryDetectionProvider(list(detections))))
    return container


def test_default_detection_provider_is_yolo_and_lazy() -> None:
    container = ApplicationContainer()
    container.settings.override(providers.Object(AppSettings(model_path="custom.pt", device="cpu")))

    provider = container.detection_provider()

    assert isinstance(provider, YoloDetectionProvider)
    assert provider.model_path == "custom.pt"
    assert not provider.is_ready
    assert container.detection_provider() is provider


def test_session_resolves_and_estimates() -> None:
    gift = DetectedObject("box", 0.92, BoundingBox(0, 0, 1000, 500))
    container = _container(AppSettings(), [gift])
    container.init_resources()

    session = container.session()
    image = DecodedImage.from_array(np.zeros((600, 1350, 3), dtype=np.uint8))
    result = asyncio.run(session.upload(image))
    container.shutdown_resources()

    assert container.session() is session
    assert (result.dimensions.length, result.dimensions.width) == (10.0, 5.0)
    assert result.paper_size.paper_length == 34


def test_default_dimensions_come_from_settings() -> None:
    container = _container(AppSettings(default_length=12, default_width=6, default_height=2))

    image = DecodedImage.from_array(np.zeros((10, 10, 3), dtype=np.uint8))
    measurement = asyncio.run(container.measure_gift().execute(image))

    assert measurement.used_fallback
    assert (measurement.estimate.length, measurement.estimate.width, measurement.estimate.height) == (12, 6, 2)


def test_reference_tokens_come_from_settings() -> None:
    container = _container(AppSettings(reference_tokens=("coaster",), reference_width_inches=4.0))

    calibrator = container.calibrator()
    coaster = DetectedObject("coaster", 0.9, BoundingBox(0, 0, 200, 200))

    assert calibrator.calibrate([coaster], image_width=1000).pixels_per_inch == 50.0
