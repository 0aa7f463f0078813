"""
FFmpeg Binary Helper

Resolves the ffmpeg binary used as transcoding backend.
Handles explicit configuration, the FFMPEG_BINARY environment variable,
bundled binaries (development and PyInstaller) and the system PATH.
"""
import os
import sys
import shutil
import logging
from pathlib import Path
from typing import Optional

from ..constants import FFmpegDefaults
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def get_bundled_binary_path(binary_name: str) -> Optional[str]:
    """
    Get path to a bundled ffmpeg binary.

    Args:
        binary_name: 'ffmpeg' or 'ffprobe'

    Returns:
        Absolute path to the binary, or None if no bundled copy exists
    """
    if getattr(sys, 'frozen', False):
        # Running as PyInstaller bundle
        base_path = Path(sys._MEIPASS)
        logger.debug(f"Looking for bundled {binary_name} in PyInstaller bundle: {base_path}")
    else:
        # Running in development
        base_path = Path(__file__).parent.parent.parent
        logger.debug(f"Looking for {binary_name} in development: {base_path}")

    binary_path = base_path / 'ffmpeg_bins' / binary_name
    return str(binary_path) if binary_path.exists() else None


def get_ffmpeg_path(configured: Optional[str] = None) -> str:
    """
    Resolve the ffmpeg binary.

    Lookup order: explicit setting, FFMPEG_BINARY environment variable,
    bundled ffmpeg_bins/ffmpeg, then ffmpeg on PATH.

    Args:
        configured: Explicit path or command name from settings

    Returns:
        Path or command name to execute

    Raises:
        ConfigurationError: If no ffmpeg binary can be found
    """
    if configured:
        logger.debug(f"Using configured ffmpeg: {configured}")
        return configured

    from_env = os.environ.get(FFmpegDefaults.BINARY_ENV)
    if from_env:
        logger.debug(f"Using ffmpeg from {FFmpegDefaults.BINARY_ENV}: {from_env}")
        return from_env

    bundled = get_bundled_binary_path(FFmpegDefaults.BINARY)
    if bundled:
        logger.info(f"Using bundled ffmpeg: {bundled}")
        return bundled

    on_path = shutil.which(FFmpegDefaults.BINARY)
    if on_path:
        logger.debug(f"Using ffmpeg from PATH: {on_path}")
        return on_path

    raise ConfigurationError(
        "ffmpeg not found. Install ffmpeg, put it on PATH, "
        f"or set {FFmpegDefaults.BINARY_ENV}"
    )
