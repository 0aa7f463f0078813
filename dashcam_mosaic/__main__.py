"""
Command line entry point.

    python -m dashcam_mosaic /media/TeslaCam/SentryClips
    python -m dashcam_mosaic --verbose /media/TeslaCam/SentryClips/2019-09-20_12-34-56
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config.settings import PipelineSettings
from .exceptions import ApplicationError
from .services.event_processor import EventProcessor, EventResult
from .services.ffmpeg_runner import FFmpegRunner
from .services.segment_parser import is_event_folder_name
from .utils.logging_utils import configure_logging

logger = logging.getLogger("dashcam_mosaic")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="dashcam_mosaic",
        description="Compose one 2x2 mosaic video per recorded event folder"
    )
    ap.add_argument("paths", nargs="+", type=Path,
                    help="Event folders, or folders that contain event folders")
    ap.add_argument("--ffmpeg", help="ffmpeg binary (default: FFMPEG_BINARY, bundled, or PATH)")
    ap.add_argument("--timeout", type=float, help="Seconds before a backend run is killed")
    ap.add_argument("--codec", help="Video codec for the mosaic (default: libx264)")
    ap.add_argument("--container", help="Output container extension (default: mp4)")
    ap.add_argument("--verbose", "-v", action="store_true", help="Log debug output")
    return ap


def run(paths: List[Path], processor: EventProcessor) -> List[EventResult]:
    results: List[EventResult] = []
    for path in paths:
        if not path.is_dir():
            logger.error(f"Not a directory: {path}")
            results.append(EventResult(folder=path, error=NotADirectoryError(str(path))))
        elif is_event_folder_name(path.name):
            try:
                results.append(processor.process(path))
            except (ApplicationError, OSError) as e:
                logger.error(f"Failed to process event {path}: {e}")
                results.append(EventResult(folder=path, error=e))
        else:
            try:
                results.extend(processor.process_root(path))
            except OSError as e:
                logger.error(f"Cannot read folder {path}: {e}")
                results.append(EventResult(folder=path, error=e))
    return results


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = PipelineSettings.from_env(
            ffmpeg_path=args.ffmpeg,
            timeout_seconds=args.timeout,
            video_codec=args.codec,
            container=args.container,
        )
        runner = FFmpegRunner.from_settings(settings)
    except ApplicationError as e:
        logger.error(e.message)
        return 2

    results = run(args.paths, EventProcessor(runner, settings))

    done = [r for r in results if r.ok and not r.skipped]
    skipped = [r for r in results if r.skipped]
    failed = [r for r in results if not r.ok]
    for r in done:
        logger.info(f"{r.folder.name}: {r.mosaic_path}")
    logger.info(f"Events: {len(done)} composed, {len(skipped)} skipped, {len(failed)} failed")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
