"""
Pipeline Settings

Validated configuration for the mosaic pipeline. The core services receive a
PipelineSettings instance; only the command line reads the environment.
"""
import os
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..constants import EnvKeys, FFmpegDefaults, OverlayDefaults
from ..domain.value_objects import Camera
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class PipelineSettings(BaseModel):
    """Backend, naming and overlay settings"""

    ffmpeg_path: Optional[str] = None
    ffmpeg_loglevel: str = FFmpegDefaults.LOGLEVEL
    container: str = FFmpegDefaults.CONTAINER
    video_codec: str = FFmpegDefaults.VIDEO_CODEC
    timeout_seconds: Optional[float] = Field(default=FFmpegDefaults.TIMEOUT_SECONDS)
    playlist_dir: Optional[Path] = None
    segment_extensions: List[str] = Field(default_factory=lambda: [".mp4"])

    overlay_x: int = Field(default=OverlayDefaults.X, ge=0)
    overlay_y: int = Field(default=OverlayDefaults.Y, ge=0)
    overlay_font_size: int = Field(default=OverlayDefaults.FONT_SIZE, gt=0)
    overlay_font_color: str = OverlayDefaults.FONT_COLOR

    camera_order: Tuple[Camera, ...] = Field(default_factory=Camera.default_layout)

    @field_validator('container')
    @classmethod
    def normalize_container(cls, v: str) -> str:
        v = v.strip().lstrip('.').lower()
        if not v:
            raise ValueError("container cannot be empty")
        return v

    @field_validator('segment_extensions')
    @classmethod
    def normalize_extensions(cls, v: List[str]) -> List[str]:
        normalized = [ext if ext.startswith('.') else f".{ext}" for ext in (e.strip().lower() for e in v) if ext]
        if not normalized:
            raise ValueError("segment_extensions cannot be empty")
        return normalized

    @field_validator('timeout_seconds')
    @classmethod
    def positive_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("timeout_seconds must be positive")
        return v

    @field_validator('camera_order')
    @classmethod
    def mosaic_sized_order(cls, v: Tuple[Camera, ...]) -> Tuple[Camera, ...]:
        if not v or len(v) > 4:
            raise ValueError("camera_order must list between 1 and 4 cameras")
        if len(set(v)) != len(v):
            raise ValueError("camera_order cannot repeat a camera")
        return v

    @classmethod
    def from_env(cls, **overrides) -> "PipelineSettings":
        """
        Build settings from DASHCAM_MOSAIC_* environment variables.

        Args:
            **overrides: Values that take precedence over the environment
                (None values are ignored)

        Returns:
            PipelineSettings instance

        Raises:
            ConfigurationError: If a value fails validation
        """
        env_map = {
            'ffmpeg_path': EnvKeys.FFMPEG_PATH,
            'timeout_seconds': EnvKeys.TIMEOUT,
            'video_codec': EnvKeys.CODEC,
            'container': EnvKeys.CONTAINER,
            'playlist_dir': EnvKeys.PLAYLIST_DIR,
            'ffmpeg_loglevel': EnvKeys.LOGLEVEL,
        }
        values = {key: os.environ[name] for key, name in env_map.items() if os.environ.get(name)}
        values.update({key: value for key, value in overrides.items() if value is not None})

        try:
            settings = cls(**values)
        except ValidationError as e:
            invalid = [".".join(str(part) for part in err['loc']) for err in e.errors()]
            raise ConfigurationError(f"Invalid pipeline settings: {e}", missing_keys=invalid) from e

        logger.debug(f"Loaded pipeline settings: {settings.model_dump()}")
        return settings
