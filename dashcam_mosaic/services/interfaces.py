"""
Service Interfaces

Abstract base classes for the external collaborators of the pipeline.
This allows for dependency injection and easier testing/mocking.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from ..domain.value_objects import Segment


class ISegmentParser(ABC):
    """
    Interface for per-file metadata extraction.

    Maps one raw segment file to its camera identity and capture start time.
    """

    @abstractmethod
    def parse(self, path: Path) -> Segment:
        """
        Resolve a segment file.

        Args:
            path: Regular file inside an event folder

        Returns:
            Segment for the file

        Raises:
            SegmentParseError: If the file is not a recognizable segment
        """
        pass


class ITranscoder(ABC):
    """
    Interface for the external transcoding backend.

    One blocking call per request; the backend consumes an argument list and
    either produces ``output_path`` or fails.
    """

    @abstractmethod
    def run(self, args: Sequence[str], output_path: Path):
        """
        Run the backend until it terminates.

        Args:
            args: Backend arguments (without the binary itself)
            output_path: File the request is expected to produce

        Returns:
            BackendResult describing success, exit failure, spawn failure or timeout
        """
        pass
