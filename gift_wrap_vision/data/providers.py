"""Detection providers normalising detector output into ``DetectedObject`` records."""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, List, Protocol, Sequence

from ..crosscutting.logging_setup import get_logger
from ..domain.entities import BoundingBox, DecodedImage, DetectedObject
from ..shared.errors import DetectionFailed, DetectionUnavailable, InfrastructureError


class DetectionProvider(Protocol):
    """Wraps an object detector behind ``detect(image) -> list[DetectedObject]``."""

    @property
    def is_ready(self) -> bool:
        """Whether the underlying model finished loading."""

    async def load(self) -> None:
        """Initialise the model; calling it again is a no-op."""

    async def detect(self, image: DecodedImage) -> List[DetectedObject]:
        """Run detection and return objects in detector output order."""


@dataclass
class InMemoryDetectionProvider(DetectionProvider):
    """Deterministic provider returning preconfigured detections."""

    detections: Sequence[DetectedObject] = field(default_factory=list)
    ready: bool = True
    error: Exception | None = None
    calls: int = 0

    @property
    def is_ready(self) -> bool:
        return self.ready

    async def load(self) -> None:
        self.ready = True

    async def detect(self, image: DecodedImage) -> List[DetectedObject]:
        self.calls += 1
        if not self.ready:
            raise DetectionUnavailable("Detection model is still loading")
        if self.error is not None:
            raise DetectionFailed("Detection failed") from self.error
        return list(self.detections)


def _default_model_factory(model_path: str) -> Any:
    from ultralytics import YOLO  # type: ignore[import-not-found]

    return YOLO(model_path)


class YoloDetectionProvider(DetectionProvider):
    """Ultralytics YOLO-backed provider.

    The model is owned by the provider and loaded lazily through :meth:`load`.
    Loading happens at most once per instance; concurrent callers await the
    same initialisation. Inference is executed in the default executor so the
    event loop stays responsive while the model runs.
    """

    def __init__(
        self,
        *,
        model_path: str,
        device: str | None = None,
        confidence_threshold: float = 0.25,
        iou_threshold: float = 0.45,
        max_detections: int = 100,
        model_factory: Callable[[str], Any] | None = None,
        logger=None,
    ) -> None:
        self.model_path = model_path
        self.device_override = device
        self.confidence_threshold = confidence_threshold
        self.iou_threshold = iou_threshold
        self.max_detections = max(1, max_detections)
        self._model_factory = model_factory or _default_model_factory
        self._logger = logger or get_logger(__name__)
        self._model = None
        self._names: List[str] = []
        self._device: str | None = None
        self._load_lock = threading.Lock()
        self._load_task: asyncio.Future | None = None

    @property
    def is_ready(self) -> bool:
        return self._model is not None

    @property
    def labels(self) -> Sequence[str]:
        return tuple(self._names)

    async def load(self) -> None:
        if self._model is not None:
            return
        if self._load_task is None:
            loop = asyncio.get_running_loop()
            self._load_task = loop.run_in_executor(None, self._load_model)
        task = self._load_task
        try:
            await asyncio.shield(task)
        except Exception:
            self._load_task = None
            raise

    async def detect(self, image: DecodedImage) -> List[DetectedObject]:
        if self._model is None:
            raise DetectionUnavailable("Detection model is still loading")
        loop = asyncio.get_running_loop()
        try:
            results = await loop.run_in_executor(None, self._predict, image.data)
            detections = self._map_detections(results)
        except Exception as exc:
            self._logger.warning("detector.failed", model_path=self.model_path, error=str(exc))
            raise DetectionFailed(f"Detection failed: {exc}") from exc
        self._logger.info(
            "detector.completed",
            total=len(detections),
            labels=[d.label for d in detections],
        )
        return detections

    # ------------------------------------------------------------------
    # Internal helpers
    def _resolve_device(self) -> str:
        if self.device_override and self.device_override != "cuda":
            return self.device_override

        import torch  # type: ignore[import-not-found]

        if self.device_override == "cuda":
            if not torch.cuda.is_available():
                msg = "CUDA was requested but is not available on this machine."
                raise InfrastructureError(msg)
            return "cuda"
        return "cuda" if torch.cuda.is_available() else "cpu"

    def _load_model(self) -> None:
        with self._load_lock:
            if self._model is not None:
                return
            try:
                device = self._resolve_device()
                model = self._model_factory(self.model_path)
                model.to(device)
            except InfrastructureError:
                raise
            except Exception as exc:
                raise InfrastructureError(f"Unable to load model {self.model_path}: {exc}") from exc
            self._names = self._normalise_label_names(getattr(model, "names", {}))
            self._device = device
            self._model = model
            self._logger.info(
                "detector.loaded",
                model_path=self.model_path,
                device=device,
                labels=len(self._names),
            )

    def _predict(self, frame) -> Any:
        return self._model.predict(
            frame,
            device=self._device,
            verbose=False,
            conf=self.confidence_threshold,
            iou=self.iou_threshold,
            max_det=self.max_detections,
        )

    @staticmethod
    def _normalise_label_names(names) -> List[str]:
        if isinstance(names, dict):
            return [names[index] for index in sorted(names)]
        if isinstance(names, (list, tuple)):
            return list(names)
        try:
            return [value for _, value in sorted(names.items())]
        except AttributeError:
            return [str(names)]

    def _map_detections(self, results) -> List[DetectedObject]:
        detections: List[DetectedObject] = []
        for result in results:
            boxes = getattr(result, "boxes", None)
            if boxes is None:
                continue
            for box in boxes:
                conf = min(max(float(box.conf[0]), 0.0), 1.0)
                x1, y1, x2, y2 = map(float, box.xyxy[0])
                cls = int(box.cls[0])
                label = self._names[cls] if 0 <= cls < len(self._names) else str(cls)
                detections.append(
                    DetectedObject(
                        label=label,
                        confidence=conf,
                        bounding_box=BoundingBox.from_xyxy(x1, y1, x2, y2),
                    )
                )
        return detections


__all__ = [
    "DetectionProvider",
    "InMemoryDetectionProvider",
    "YoloDetectionProvider",
]
