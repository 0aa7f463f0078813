"""
Segment Value Object

Immutable reference to one recorded file of one camera.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .camera import Camera


@dataclass(frozen=True)
class Segment:
    """
    One recorded segment file.

    Segments are only read, never moved or copied, by the pipeline.
    """

    camera: Camera
    start_time: datetime
    path: Path

    def __post_init__(self):
        """Normalize path to a Path instance."""
        if not isinstance(self.path, Path):
            object.__setattr__(self, "path", Path(self.path))

    def __str__(self) -> str:
        return f"{self.camera.file_name}@{self.start_time.isoformat()} ({self.path.name})"
