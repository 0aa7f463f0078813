"""
EventClip Aggregate

One recorded event: the folder it lives in, the event timestamp parsed from the
folder name and every parseable segment of every camera in capture order.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from ..value_objects import Camera, Segment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventClip:
    """
    Immutable event aggregate.

    ``segments`` is one flat sequence shared by all cameras, sorted by capture
    start time with ties kept in discovery order. Camera views filter it and
    never re-sort it.
    """

    folder: Path
    when: datetime
    segments: Tuple[Segment, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Normalize folder and freeze the segments in capture order."""
        if not isinstance(self.folder, Path):
            object.__setattr__(self, "folder", Path(self.folder))
        # sorted is stable, ties keep discovery order
        object.__setattr__(
            self, "segments", tuple(sorted(self.segments, key=lambda s: s.start_time))
        )

    @classmethod
    def from_folder(cls, folder: Path, parser=None) -> "EventClip":
        """
        Build the aggregate for one event folder.

        Segment files that fail to parse are dropped by the collector. The
        folder name itself must parse, there is no event without a timestamp.

        Args:
            folder: Event folder, named like 2019-09-20_12-34-56
            parser: ISegmentParser used for each file (default filename parser)

        Returns:
            EventClip instance

        Raises:
            EventTimestampError: If the folder name is not a valid timestamp
        """
        # Imported here, the services layer depends on this module
        from ...services.segment_collector import collect_segments
        from ...services.segment_parser import FilenameSegmentParser, parse_event_timestamp

        folder = Path(folder)
        segments = collect_segments(folder, parser or FilenameSegmentParser())
        when = parse_event_timestamp(folder.name)
        logger.debug(f"Built event {folder.name} with {len(segments)} segment(s)")
        return cls(folder=folder, when=when, segments=tuple(segments))

    def is_empty(self) -> bool:
        """Check if the event has no segments at all."""
        return not self.segments

    def segments_for(self, camera: Camera) -> List[Segment]:
        """
        Order-preserving sub-sequence of segments recorded by ``camera``.

        Args:
            camera: Camera identity, compared by equality

        Returns:
            Segments of that camera in capture order
        """
        return [segment for segment in self.segments if segment.camera == camera]

    def cameras(self) -> List[Camera]:
        """Distinct cameras in order of first appearance."""
        seen: List[Camera] = []
        for segment in self.segments:
            if segment.camera not in seen:
                seen.append(segment.camera)
        return seen

    @property
    def earliest_start(self) -> Optional[datetime]:
        """Capture start of the first segment of the whole event."""
        return self.segments[0].start_time if self.segments else None

    @property
    def name(self) -> str:
        return self.folder.name
