"""
Concatenation Service

Joins one camera's segments into a single file with ffmpeg's concat demuxer
and stream copy, so nothing is re-encoded and segment order is preserved.

The backend writes to a run-scoped file which is atomically renamed onto the
deterministic ``<event-folder>/<when>-<camera>-tmp.<ext>`` name on success.
Callers must still run at most one concatenation per event folder at a time.
"""

import os
import uuid
from pathlib import Path
from typing import List, Optional

from ..config.settings import PipelineSettings
from ..constants import ArtifactRole, TimestampFormats
from ..domain.aggregates import EventClip
from ..domain.value_objects import Camera
from ..exceptions import EmptySelectionError
from ..utils.logging_utils import StructuredLogger
from .file_cleanup_service import FileCleanupService
from .interfaces import ITranscoder
from .playlist_builder import playlist_path, write_playlist

logger = StructuredLogger(__name__)


def concat_output_path(event: EventClip, camera: Camera, container: str = "mp4") -> Path:
    """
    Deterministic per-camera output path.

    Args:
        event: Event aggregate
        camera: Camera being concatenated
        container: Output container extension

    Returns:
        <event-folder>/<when>-<camera>-tmp.<container>
    """
    stamp = event.when.strftime(TimestampFormats.EVENT_FOLDER)
    return event.folder / f"{stamp}-{camera.file_name}-{ArtifactRole.TMP.value}.{container}"


def concat_args(playlist: Path, output_path: Path) -> List[str]:
    """Backend arguments for a lossless concat of ``playlist`` into ``output_path``."""
    return ["-f", "concat", "-safe", "0", "-i", str(playlist), "-c", "copy", str(output_path)]


class ConcatenationService:
    """Drives the backend to join one camera's segments."""

    def __init__(self, transcoder: ITranscoder, settings: Optional[PipelineSettings] = None):
        self.transcoder = transcoder
        self.settings = settings or PipelineSettings()

    def concatenate(self, event: EventClip, camera: Camera) -> Path:
        """
        Join ``camera``'s segments of ``event`` in capture order.

        Args:
            event: Event aggregate
            camera: Camera identity

        Returns:
            Path of the joined file

        Raises:
            EmptySelectionError: If the event has no segments for ``camera``
            OSError: If the playlist cannot be written
            BackendError: If the backend fails to start, exits non-zero or times out
        """
        segments = event.segments_for(camera)
        if not segments:
            raise EmptySelectionError(
                f"Event {event.name} has no segments for camera {camera.file_name}",
                camera=camera.file_name
            )

        output_path = concat_output_path(event, camera, self.settings.container)
        run_path = output_path.with_name(
            f"{output_path.stem}.part-{uuid.uuid4().hex[:8]}{output_path.suffix}"
        )
        playlist = playlist_path(event.when, camera, self.settings.playlist_dir)

        logger.info(
            f"Attaching {len(segments)} file(s) into {output_path}",
            extra={"camera": camera.file_name, "files": [str(s.path) for s in segments]}
        )

        try:
            write_playlist(segments, playlist)
            result = self.transcoder.run(concat_args(playlist, run_path), run_path)
            if not result.ok:
                FileCleanupService.discard(run_path)
                result.raise_for_status()
            os.replace(run_path, output_path)
        finally:
            FileCleanupService.discard(playlist)

        logger.info(f"Concatenated {camera.file_name} into {output_path.name}")
        return output_path
