"""
FFmpeg Runner

Blocking invocation of the transcoding backend. Every call returns a tagged
BackendResult instead of assuming success once the process has exited:

- SUCCESS: process exited with status 0
- FAILED: process exited with a non-zero status
- SPAWN_FAILED: process could not be started
- TIMED_OUT: process exceeded the timeout and was killed
"""

import shlex
import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

from ..config.settings import PipelineSettings
from ..constants import FFmpegDefaults
from ..exceptions import BackendExitError, BackendSpawnError, BackendTimeoutError
from ..utils.ffmpeg_helper import get_ffmpeg_path
from .interfaces import ITranscoder

logger = logging.getLogger(__name__)


class BackendStatus(str, Enum):
    """Outcome of one backend invocation."""

    SUCCESS = "success"
    FAILED = "failed"
    SPAWN_FAILED = "spawn_failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class BackendResult:
    """Tagged result of one backend invocation."""

    status: BackendStatus
    output_path: Path
    returncode: Optional[int] = None
    stderr: str = ""
    error: Optional[Exception] = None
    timeout: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.status == BackendStatus.SUCCESS

    @classmethod
    def success(cls, output_path: Path, stderr: str = "") -> "BackendResult":
        return cls(BackendStatus.SUCCESS, Path(output_path), returncode=0, stderr=stderr)

    @classmethod
    def failed(cls, output_path: Path, returncode: int, stderr: str = "") -> "BackendResult":
        return cls(BackendStatus.FAILED, Path(output_path), returncode=returncode, stderr=stderr)

    @classmethod
    def spawn_failed(cls, output_path: Path, error: Exception) -> "BackendResult":
        return cls(BackendStatus.SPAWN_FAILED, Path(output_path), error=error)

    @classmethod
    def timed_out(cls, output_path: Path, timeout: Optional[float]) -> "BackendResult":
        return cls(BackendStatus.TIMED_OUT, Path(output_path), timeout=timeout)

    def raise_for_status(self) -> Path:
        """
        Convert a non-success result into the matching exception.

        Returns:
            The output path on success

        Raises:
            BackendExitError: Process exited with a failure status
            BackendSpawnError: Process could not be started
            BackendTimeoutError: Process was killed after the timeout
        """
        if self.status == BackendStatus.SUCCESS:
            return self.output_path
        if self.status == BackendStatus.FAILED:
            raise BackendExitError(str(self.output_path), self.returncode, self.stderr)
        if self.status == BackendStatus.SPAWN_FAILED:
            raise BackendSpawnError(str(self.output_path), self.error)
        raise BackendTimeoutError(str(self.output_path), self.timeout)


def _tail(text: Optional[str]) -> str:
    if not text:
        return ""
    return text[-FFmpegDefaults.STDERR_TAIL_CHARS:]


class FFmpegRunner(ITranscoder):
    """Runs ffmpeg as a blocking child process."""

    def __init__(
        self,
        binary: str,
        timeout: Optional[float] = FFmpegDefaults.TIMEOUT_SECONDS,
        global_args: Optional[Sequence[str]] = None,
        loglevel: str = FFmpegDefaults.LOGLEVEL
    ):
        """
        Initialize runner.

        Args:
            binary: ffmpeg executable
            timeout: Seconds before the process is killed (None waits forever)
            global_args: Arguments placed before every request
                (default: -hide_banner -nostdin -y -loglevel <loglevel>)
            loglevel: ffmpeg log level used by the default global arguments
        """
        self.binary = binary
        self.timeout = timeout
        if global_args is None:
            global_args = ["-hide_banner", "-nostdin", "-y", "-loglevel", loglevel]
        self.global_args: List[str] = list(global_args)

    @classmethod
    def from_settings(cls, settings: PipelineSettings) -> "FFmpegRunner":
        """Build a runner from pipeline settings."""
        return cls(
            binary=get_ffmpeg_path(settings.ffmpeg_path),
            timeout=settings.timeout_seconds,
            loglevel=settings.ffmpeg_loglevel,
        )

    def build_command(self, args: Sequence[str]) -> List[str]:
        return [self.binary, *self.global_args, *[str(a) for a in args]]

    def run(self, args: Sequence[str], output_path: Path) -> BackendResult:
        cmd = self.build_command(args)
        output_path = Path(output_path)
        logger.info(f"Running backend for {output_path.name}")
        logger.debug(f"CMD: {shlex.join(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except subprocess.TimeoutExpired:
            # subprocess.run kills the child before re-raising
            logger.error(f"Backend timed out after {self.timeout}s writing {output_path}")
            return BackendResult.timed_out(output_path, self.timeout)
        except OSError as e:
            logger.error(f"Failed to start backend {self.binary}: {e}")
            return BackendResult.spawn_failed(output_path, e)

        stderr = _tail(result.stderr)
        if result.returncode != 0:
            logger.error(f"Backend exited with status {result.returncode} writing {output_path}: {stderr}")
            return BackendResult.failed(output_path, result.returncode, stderr)

        logger.debug(f"Backend finished {output_path.name}")
        return BackendResult.success(output_path, stderr)
