"""Application configuration loading helpers."""

from __future__ import annotations

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Container for runtime configuration values.

    Values are read from environment variables with the ``GWV_`` prefix (or a
    local ``.env`` file). List values such as ``GWV_REFERENCE_TOKENS`` are
    given as JSON, e.g. ``'["card", "credit card"]'``.
    """

    model_config = SettingsConfigDict(
        env_prefix="GWV_",
        env_file=".env",
        extra="ignore",
        protected_namespaces=(),
    )

    model_path: str = "yolov8n.pt"
    device: str | None = None
    confidence_threshold: float = Field(default=0.25, gt=0.0, le=1.0)
    iou_threshold: float = Field(default=0.45, gt=0.0, le=1.0)
    max_detections: int = Field(default=100, ge=1)

    reference_tokens: tuple[str, ...] = ("card",)
    reference_width_inches: float = Field(default=3.375, gt=0.0)
    fallback_frame_fraction: float = Field(default=0.25, gt=0.0, le=1.0)

    default_length: float = Field(default=10.0, ge=0.0)
    default_width: float = Field(default=8.0, ge=0.0)
    default_height: float = Field(default=4.0, ge=0.0)

    log_level: str = "INFO"

    @field_validator("reference_tokens")
    @classmethod
    def _normalise_tokens(cls, tokens: tuple[str, ...]) -> tuple[str, ...]:
        cleaned = tuple(token.strip().lower() for token in tokens if token.strip())
        if not cleaned:
            raise ValueError("At least one reference token is required")
        return cleaned

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, level: str) -> str:
        return level.upper()

    @model_validator(mode="after")
    def _check_default_dimensions(self) -> "AppSettings":
        if self.default_length < self.default_width:
            raise ValueError("default_length must be at least default_width")
        return self


def load_settings(**overrides) -> AppSettings:
    """Load configuration values from the current environment."""

    return AppSettings(**overrides)


__all__ = ["AppSettings", "load_settings"]
