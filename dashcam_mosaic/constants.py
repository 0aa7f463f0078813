"""
Pipeline-wide constants.

This module centralizes the naming formats, mosaic geometry and ffmpeg defaults
used throughout the pipeline so that artifact names stay consistent between the
concatenation and composition stages.
"""
from enum import Enum


class TimestampFormats:
    """strftime/strptime formats used for folders, artifacts and playlists"""

    # Event folder names and artifact prefixes, e.g. 2019-09-20_12-34-56
    EVENT_FOLDER = "%Y-%m-%d_%H-%M-%S"

    # Playlist names need millisecond resolution; %f is trimmed to 3 digits
    PLAYLIST = "%Y%m%d_%H%M%S%f"

    # Overlay text rendered by drawtext's gmtime expansion
    OVERLAY = "%d-%m-%Y %T"


class ArtifactRole(str, Enum):
    """Role suffix embedded in temporary and final artifact names"""

    TMP = "tmp"
    MOSAIC = "mosaic"
    PLAYLIST = "playlist"


class MosaicGeometry:
    """Fixed 2x2 mosaic layout dimensions"""

    CANVAS_WIDTH = 1280
    CANVAS_HEIGHT = 960
    TILE_WIDTH = 640
    TILE_HEIGHT = 480
    SLOTS = 4

    @classmethod
    def canvas_size(cls) -> str:
        """Canvas size in ffmpeg WxH notation"""
        return f"{cls.CANVAS_WIDTH}x{cls.CANVAS_HEIGHT}"

    @classmethod
    def tile_size(cls) -> str:
        """Tile size in ffmpeg WxH notation"""
        return f"{cls.TILE_WIDTH}x{cls.TILE_HEIGHT}"


class FFmpegDefaults:
    """Defaults for the transcoding backend"""

    BINARY = "ffmpeg"
    BINARY_ENV = "FFMPEG_BINARY"
    LOGLEVEL = "error"
    VIDEO_CODEC = "libx264"
    CONTAINER = "mp4"
    TIMEOUT_SECONDS = 3600.0
    # Keep only the tail of stderr in errors and logs
    STDERR_TAIL_CHARS = 2000


class OverlayDefaults:
    """Timestamp overlay placement and style"""

    X = 100
    Y = 800
    FONT_SIZE = 32
    FONT_COLOR = "GoldenRod"


class EnvKeys:
    """Environment variables read by PipelineSettings.from_env()"""

    PREFIX = "DASHCAM_MOSAIC_"
    FFMPEG_PATH = "DASHCAM_MOSAIC_FFMPEG_PATH"
    TIMEOUT = "DASHCAM_MOSAIC_TIMEOUT"
    CODEC = "DASHCAM_MOSAIC_CODEC"
    CONTAINER = "DASHCAM_MOSAIC_CONTAINER"
    PLAYLIST_DIR = "DASHCAM_MOSAIC_PLAYLIST_DIR"
    LOGLEVEL = "DASHCAM_MOSAIC_FFMPEG_LOGLEVEL"
