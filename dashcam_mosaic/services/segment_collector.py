"""
Segment Collector

Lists an event folder, resolves every regular file to a Segment and returns the
segments in capture order. Bad entries and unparseable files are logged and
dropped; partial failure never aborts the event.
"""

import os
import logging
from pathlib import Path
from typing import List

from ..domain.value_objects import Segment
from ..exceptions import EnumerationError, SegmentParseError
from .interfaces import ISegmentParser

logger = logging.getLogger(__name__)


def list_segment_files(folder: Path) -> List[Path]:
    """
    List regular files directly inside ``folder`` in discovery order.

    Args:
        folder: Event folder

    Returns:
        Paths of regular files; directories and other entries are excluded
    """
    logger.debug(f"Finding files in folder {folder}")
    files: List[Path] = []

    try:
        with os.scandir(folder) as it:
            entries = list(it)
    except OSError as e:
        error = EnumerationError(str(folder), f"Cannot list folder {folder}: {e}")
        logger.error(error.message)
        return files

    for entry in entries:
        try:
            if entry.is_file():
                files.append(Path(entry.path))
        except OSError as e:
            error = EnumerationError(entry.path, f"Cannot stat {entry.path}: {e}")
            logger.error(error.message)

    logger.info(f"Found {len(files)} clip file(s) in folder {folder}")
    return files


def collect_segments(folder: Path, parser: ISegmentParser) -> List[Segment]:
    """
    Resolve the files of an event folder into time-ordered segments.

    Args:
        folder: Event folder
        parser: Per-file metadata parser

    Returns:
        Segments sorted by start time; equal start times keep discovery order
    """
    segments: List[Segment] = []

    for path in list_segment_files(Path(folder)):
        try:
            segments.append(parser.parse(path))
        except SegmentParseError as e:
            logger.warning(f"Dropping clip {path}: {e.message}")

    # list.sort is stable
    segments.sort(key=lambda segment: segment.start_time)
    logger.debug(f"Processed {len(segments)} clip(s) in {folder}")
    return segments
