"""
Playlist Builder

Writes concat-demuxer playlists:

    file '/abs/path/to/seg1.mp4'
    file '/abs/path/to/seg2.mp4'

A playlist is flushed and fsync'ed before write_playlist returns, so any
ffmpeg process started afterwards sees the complete file.
"""

import os
import re
import uuid
import logging
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..constants import ArtifactRole, TimestampFormats
from ..domain.value_objects import Camera, Segment

logger = logging.getLogger(__name__)

PLAYLIST_LINE = re.compile(r"^file '(?P<path>.*)'$")


def _format_ms(value: datetime) -> str:
    # %f is microseconds; playlists use milliseconds
    return value.strftime(TimestampFormats.PLAYLIST)[:-3]


def escape_path(path: Union[str, Path]) -> str:
    """Escape single quotes for ffmpeg's concat parser."""
    return str(path).replace("'", r"'\''")


def unescape_path(text: str) -> str:
    """Reverse escape_path."""
    return text.replace(r"'\''", "'")


def playlist_path(
    when: datetime,
    camera: Camera,
    directory: Optional[Path] = None,
    now: Optional[datetime] = None
) -> Path:
    """
    Build a unique playlist path for one concatenation run.

    The name combines the invocation instant, the event timestamp, the camera
    and a random run token, so concurrent runs never share a playlist.

    Args:
        when: Event timestamp
        camera: Camera being concatenated
        directory: Directory for playlists (default: system temp dir)
        now: Invocation instant (default: current UTC time)

    Returns:
        Path of the playlist file to create
    """
    now = now or datetime.now(timezone.utc)
    directory = Path(directory) if directory else Path(tempfile.gettempdir())
    token = uuid.uuid4().hex[:8]
    filename = (
        f"dashcam_{ArtifactRole.PLAYLIST.value}_{_format_ms(now)}_{_format_ms(when)}"
        f"_{camera.file_name}_{token}.txt"
    )
    return directory / filename


def write_playlist(entries: Iterable[Union[Segment, Path, str]], destination: Path) -> Path:
    """
    Write a concat playlist and flush it to stable storage.

    Args:
        entries: Segments or paths in playback order
        destination: Playlist file to create (overwritten if present)

    Returns:
        The destination path

    Raises:
        OSError: If the file cannot be created, written or synced
    """
    destination = Path(destination)
    count = 0

    with open(destination, "w", encoding="utf-8") as f:
        for entry in entries:
            path = entry.path if isinstance(entry, Segment) else Path(entry)
            f.write(f"file '{escape_path(path.absolute())}'\n")
            count += 1
        f.flush()
        os.fsync(f.fileno())

    logger.debug(f"Wrote playlist {destination} with {count} entr{'y' if count == 1 else 'ies'}")
    return destination


def read_playlist(source: Path) -> List[Path]:
    """
    Parse a playlist written by write_playlist.

    Args:
        source: Playlist file

    Returns:
        Listed paths in file order

    Raises:
        ValueError: If a non-empty line is not a 'file' directive
    """
    paths: List[Path] = []
    for number, line in enumerate(Path(source).read_text(encoding="utf-8").splitlines(), start=1):
        if not line.strip():
            continue
        m = PLAYLIST_LINE.match(line)
        if not m:
            raise ValueError(f"Invalid playlist line {number} in {source}: {line!r}")
        paths.append(Path(unescape_path(m.group("path"))))
    return paths
