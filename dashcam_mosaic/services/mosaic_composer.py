"""
Mosaic Composer

Combines up to four per-camera files into one 1280x960 video laid out as a
2x2 grid of 640x480 tiles with the event timestamp burned in, then retires
the per-camera inputs.

The backend writes to a run-scoped file which is renamed onto the mosaic
name only when it succeeds, so a failed run never leaves a partial mosaic.

Tiles are placed by slot position only:

    slot 0 | slot 1
    -------+-------
    slot 2 | slot 3

Empty slots stay blank.
"""

import calendar
import logging
import os
import uuid
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from ..config.settings import PipelineSettings
from ..constants import ArtifactRole, MosaicGeometry, TimestampFormats
from ..domain.aggregates import EventClip
from ..domain.value_objects import Camera, MosaicInputs
from ..exceptions import EmptySelectionError, PathError
from ..utils.logging_utils import log_operation
from .file_cleanup_service import FileCleanupService
from .interfaces import ITranscoder

logger = logging.getLogger(__name__)


def mosaic_path(event: EventClip, container: str = "mp4") -> Path:
    """
    Deterministic mosaic output path next to the event folder.

    Args:
        event: Event aggregate
        container: Output container extension

    Returns:
        <parent-of-event-folder>/<when>-mosaic.<container>

    Raises:
        PathError: If the event folder has no parent directory
    """
    parent = event.folder.parent
    if parent == event.folder:
        raise PathError(str(event.folder), f"Cannot find parent folder of {event.folder}")
    stamp = event.when.strftime(TimestampFormats.EVENT_FOLDER)
    return parent / f"{stamp}-{ArtifactRole.MOSAIC.value}.{container}"


def overlay_epoch(start_time: datetime) -> int:
    """Epoch seconds of ``start_time``; naive times are read as UTC."""
    if start_time.tzinfo is None:
        return calendar.timegm(start_time.timetuple())
    return int(start_time.timestamp())


def build_filter_graph(inputs: MosaicInputs, epoch: int, settings: PipelineSettings) -> str:
    """
    Build the filter_complex graph for the mosaic.

    Input n of the ffmpeg command is the n-th filled slot.

    Args:
        inputs: Slotted per-camera files
        epoch: Overlay start instant in epoch seconds
        settings: Overlay placement and style

    Returns:
        filter_complex string
    """
    filled = list(inputs.filled())
    parts = [f"nullsrc=size={MosaicGeometry.canvas_size()} [base]"]

    for index, (quadrant, _) in enumerate(filled):
        parts.append(
            f"[{index}:v] setpts=PTS-STARTPTS, scale={MosaicGeometry.tile_size()} [{quadrant.label}]"
        )

    drawtext = (
        f"drawtext=text='%{{pts\\:gmtime\\:{epoch}\\:{TimestampFormats.OVERLAY}}}': "
        f"x={settings.overlay_x} : y={settings.overlay_y} : box=0: "
        f"fontsize={settings.overlay_font_size}: fontcolor={settings.overlay_font_color}"
    )

    previous = "base"
    for index, (quadrant, _) in enumerate(filled):
        overlay = f"[{previous}][{quadrant.label}] overlay=shortest=1"
        if quadrant.x:
            overlay += f":x={quadrant.x}"
        if quadrant.y:
            overlay += f":y={quadrant.y}"
        if index == len(filled) - 1:
            overlay += f", {drawtext}"
        else:
            previous = f"tmp{index + 1}"
            overlay += f" [{previous}]"
        parts.append(overlay)

    return "; ".join(parts)


class MosaicComposer:
    """Drives the backend to compose the 2x2 mosaic of one event."""

    def __init__(self, transcoder: ITranscoder, settings: Optional[PipelineSettings] = None):
        self.transcoder = transcoder
        self.settings = settings or PipelineSettings()

    def build_args(self, event: EventClip, inputs: MosaicInputs, output_path: Path) -> List[str]:
        args: List[str] = []
        for path in inputs.paths():
            args += ["-i", str(path)]
        epoch = overlay_epoch(event.earliest_start)
        args += [
            "-filter_complex", build_filter_graph(inputs, epoch, self.settings),
            "-c:v", self.settings.video_codec,
            str(output_path),
        ]
        return args

    @log_operation("compose_mosaic")
    def compose(
        self,
        event: EventClip,
        inputs: Union[MosaicInputs, Iterable[Tuple[Path, Camera]]]
    ) -> Path:
        """
        Compose the mosaic and delete the per-camera inputs.

        Args:
            event: Event aggregate; its earliest segment drives the overlay clock
            inputs: MosaicInputs, or up to four (path, camera) pairs in slot order

        Returns:
            Path of the mosaic file

        Raises:
            LayoutError: If more than four or zero inputs are supplied
            EmptySelectionError: If the event has no segments
            PathError: If the event folder has no parent
            BackendError: If the backend fails; inputs are left in place and
                no mosaic file is written
            CleanupError: If any input could not be deleted after success
        """
        if not isinstance(inputs, MosaicInputs):
            inputs = MosaicInputs.from_pairs(inputs)
        if event.is_empty():
            raise EmptySelectionError(f"Event {event.name} has no segments to compose")

        output_path = mosaic_path(event, self.settings.container)
        run_path = output_path.with_name(
            f"{output_path.stem}.part-{uuid.uuid4().hex[:8]}{output_path.suffix}"
        )
        logger.info(f"Composing mosaic clip '{output_path}' from {len(inputs)} input(s)")

        result = self.transcoder.run(self.build_args(event, inputs, run_path), run_path)
        if not result.ok:
            FileCleanupService.discard(run_path)
            result.raise_for_status()
        os.replace(run_path, output_path)

        FileCleanupService.delete_files(inputs.paths()).raise_for_failures()
        logger.info(f"✅ Mosaic written to {output_path}")
        return output_path
