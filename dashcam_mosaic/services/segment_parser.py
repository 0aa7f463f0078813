"""
Segment Parser

Default per-file metadata extraction based on file names, plus event folder
timestamp parsing.

Segment files are named like ``2019-09-20_12-34-56-front.mp4`` and event
folders like ``2019-09-20_12-34-56``.
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from ..constants import TimestampFormats
from ..domain.value_objects import Camera, Segment
from ..exceptions import EventTimestampError, SegmentParseError
from .interfaces import ISegmentParser


def parse_event_timestamp(name: str) -> datetime:
    """
    Parse an event folder name into the event timestamp.

    Args:
        name: Folder base name, e.g. '2019-09-20_12-34-56'

    Returns:
        Naive datetime of the event

    Raises:
        EventTimestampError: If the name does not match the folder format
    """
    try:
        return datetime.strptime(name, TimestampFormats.EVENT_FOLDER)
    except ValueError as e:
        raise EventTimestampError(name) from e


def is_event_folder_name(name: str) -> bool:
    """Check if a folder name parses as an event timestamp."""
    try:
        parse_event_timestamp(name)
    except EventTimestampError:
        return False
    return True


class FilenameSegmentParser(ISegmentParser):
    """Resolves segments from '<timestamp>-<camera>.<ext>' file names."""

    # Pattern: "2019-09-20_12-34-56-left_repeater.mp4"
    FILENAME_PATTERN = re.compile(
        r"^(?P<ts>\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2})-(?P<cam>[A-Za-z_]+)$"
    )

    def __init__(self, extensions: Optional[Iterable[str]] = None):
        """
        Initialize parser.

        Args:
            extensions: Accepted file extensions including the dot (default ['.mp4'])
        """
        self.extensions = {ext.lower() for ext in (extensions or [".mp4"])}

    def parse(self, path: Path) -> Segment:
        path = Path(path)
        if path.suffix.lower() not in self.extensions:
            raise SegmentParseError(str(path), f"Unsupported extension '{path.suffix}' for {path}")

        m = self.FILENAME_PATTERN.match(path.stem)
        if not m:
            raise SegmentParseError(str(path), f"File name {path.name} does not match segment pattern")

        try:
            camera = Camera.from_string(m.group("cam"))
            start_time = datetime.strptime(m.group("ts"), TimestampFormats.EVENT_FOLDER)
        except ValueError as e:
            raise SegmentParseError(str(path), f"Cannot parse segment {path.name}: {e}") from e

        return Segment(camera=camera, start_time=start_time, path=path)
