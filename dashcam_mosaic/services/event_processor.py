"""
Event Processor

Runs the whole pipeline for event folders: build the EventClip, join each
camera's segments, compose the mosaic. Events are processed one at a time;
at most one run per event folder may be active at once.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..config.settings import PipelineSettings
from ..domain.aggregates import EventClip
from ..constants import MosaicGeometry
from ..domain.value_objects import Camera, MosaicInput, MosaicInputs
from ..exceptions import ApplicationError, EventTimestampError
from ..utils.logging_utils import StructuredLogger, clear_logging_context, set_logging_context
from .concatenation_service import ConcatenationService
from .file_cleanup_service import FileCleanupService
from .interfaces import ISegmentParser, ITranscoder
from .mosaic_composer import MosaicComposer
from .segment_parser import FilenameSegmentParser, parse_event_timestamp

logger = StructuredLogger(__name__)


@dataclass
class EventResult:
    """Outcome of processing one event folder."""

    folder: Path
    mosaic_path: Optional[Path] = None
    cameras: List[Camera] = field(default_factory=list)
    skipped: bool = False
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def find_event_folders(root: Path) -> List[Path]:
    """
    Find event folders directly inside ``root``.

    Args:
        root: Directory holding event folders

    Returns:
        Folders whose name parses as an event timestamp, oldest first
    """
    found = []
    for entry in Path(root).iterdir():
        if not entry.is_dir():
            continue
        try:
            found.append((parse_event_timestamp(entry.name), entry))
        except EventTimestampError:
            logger.debug(f"Ignoring non-event folder {entry}")
    found.sort(key=lambda item: item[0])
    return [path for _, path in found]


class EventProcessor:
    """Processes event folders into mosaic videos."""

    def __init__(
        self,
        transcoder: ITranscoder,
        settings: Optional[PipelineSettings] = None,
        parser: Optional[ISegmentParser] = None
    ):
        self.settings = settings or PipelineSettings()
        self.parser = parser or FilenameSegmentParser(self.settings.segment_extensions)
        self.concatenation = ConcatenationService(transcoder, self.settings)
        self.composer = MosaicComposer(transcoder, self.settings)

    def process(self, folder: Path) -> EventResult:
        """
        Produce the mosaic for one event folder.

        Args:
            folder: Event folder

        Returns:
            EventResult; ``skipped`` is set when the folder holds no segments

        Raises:
            EventTimestampError: If the folder name is not a timestamp
            BackendError, CleanupError, OSError: If a pipeline stage fails
        """
        folder = Path(folder)
        set_logging_context(event=folder.name)
        try:
            event = EventClip.from_folder(folder, self.parser)
            if event.is_empty():
                logger.info(f"Skipping {folder}: no segments")
                return EventResult(folder=folder, skipped=True)

            ignored = [c.file_name for c in event.cameras() if c not in self.settings.camera_order]
            if ignored:
                logger.warning(f"Cameras not in mosaic layout are ignored: {', '.join(ignored)}")

            # Slot n belongs to camera_order[n] whether or not that camera recorded
            slots: List[Optional[MosaicInput]] = [None] * MosaicGeometry.SLOTS
            try:
                for index, camera in enumerate(self.settings.camera_order):
                    if not event.segments_for(camera):
                        logger.info(f"No segments for camera {camera.file_name}, leaving slot blank")
                        continue
                    set_logging_context(camera=camera.file_name)
                    slots[index] = MosaicInput(self.concatenation.concatenate(event, camera), camera)
            except Exception:
                # Retire what was already joined before propagating
                FileCleanupService.delete_files([slot.path for slot in slots if slot is not None])
                raise
            finally:
                set_logging_context(camera=None)

            inputs = MosaicInputs(tuple(slots))
            mosaic = self.composer.compose(event, inputs)
            cameras = [item.camera for _, item in inputs.filled()]
            return EventResult(folder=folder, mosaic_path=mosaic, cameras=cameras)
        finally:
            clear_logging_context()

    def process_root(self, root: Path) -> List[EventResult]:
        """
        Process every event folder under ``root`` sequentially.

        A failing event is logged and recorded; the remaining events still run.

        Args:
            root: Directory holding event folders

        Returns:
            One EventResult per event folder, oldest first
        """
        results: List[EventResult] = []
        folders = find_event_folders(root)
        logger.info(f"Found {len(folders)} event folder(s) in {root}")

        for folder in folders:
            try:
                results.append(self.process(folder))
            except (ApplicationError, OSError) as e:
                logger.error(f"Failed to process event {folder}: {e}")
                results.append(EventResult(folder=folder, error=e))

        return results
