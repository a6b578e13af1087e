"""Hasher configuration and environment-driven settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils import cpu_threads

DEFAULT_WIDTH = 8
DEFAULT_HEIGHT = 8
DEFAULT_FACTOR = 4

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _require_positive(value: int, info: ValidationInfo) -> int:
    if value <= 0:
        msg = f"{info.field_name} must be greater than 0"
        raise ValueError(msg)
    return value


class HasherConfig(BaseModel):
    """Dimensions of a perceptual hash.

    ``width`` x ``height`` is the shape of the resulting bit matrix. The image
    is sampled at ``(width * factor) x (height * factor)`` before the DCT so
    that the low-frequency block is a genuine subset of the spectrum.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    factor: int = DEFAULT_FACTOR

    @field_validator("width", "height", "factor")
    @classmethod
    def validate_positive(cls, value: int, info: ValidationInfo) -> int:
        return _require_positive(value, info)

    @property
    def sample_width(self) -> int:
        return self.width * self.factor

    @property
    def sample_height(self) -> int:
        return self.height * self.factor

    @property
    def bits(self) -> int:
        return self.width * self.height


class Settings(BaseSettings):
    """Defaults read from ``IMAGE_HASHER_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="IMAGE_HASHER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    factor: int = DEFAULT_FACTOR
    threads: int = Field(default_factory=cpu_threads)
    log_level: str = "WARNING"

    @field_validator("width", "height", "factor", "threads")
    @classmethod
    def validate_positive(cls, value: int, info: ValidationInfo) -> int:
        return _require_positive(value, info)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Log level must be a valid Python logging level."""
        upper_value = value.upper()
        if upper_value not in LOG_LEVELS:
            msg = f"log_level must be one of {', '.join(sorted(LOG_LEVELS))}"
            raise ValueError(msg)
        return upper_value

    def hasher_config(self) -> HasherConfig:
        return HasherConfig(width=self.width, height=self.height, factor=self.factor)
