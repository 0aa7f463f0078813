"""
Custom exception classes for the mosaic pipeline.

This module defines domain-specific exceptions that provide better error handling
and clearer error messages throughout the pipeline. Plain ``OSError`` raised while
creating, writing or flushing files is never wrapped and propagates unchanged.
"""


class ApplicationError(Exception):
    """Base exception for all pipeline errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    def __init__(self, message: str, missing_keys: list[str] | None = None):
        details = {"missing_keys": missing_keys} if missing_keys else {}
        super().__init__(message, details)


class EnumerationError(ApplicationError):
    """Raised when an event folder or one of its entries cannot be listed"""

    def __init__(self, path: str, message: str):
        details = {"path": path}
        super().__init__(message, details)


class SegmentParseError(ApplicationError):
    """Raised when a segment file cannot be resolved to (camera, start time)"""

    def __init__(self, path: str, message: str | None = None):
        details = {"path": path}
        msg = message or f"Cannot parse segment file {path}"
        super().__init__(msg, details)


class EventTimestampError(ApplicationError):
    """Raised when an event folder name is not a valid event timestamp"""

    def __init__(self, name: str, message: str | None = None):
        details = {"name": name}
        msg = message or f"Event folder name '{name}' is not a valid timestamp"
        super().__init__(msg, details)


class PathError(ApplicationError):
    """Raised when a required artifact path cannot be derived"""

    def __init__(self, path: str, message: str):
        details = {"path": path}
        super().__init__(message, details)


class EmptySelectionError(ApplicationError):
    """Raised when an operation is invoked on an empty segment selection"""

    def __init__(self, message: str, camera: str | None = None):
        details = {"camera": camera} if camera else {}
        super().__init__(message, details)


class LayoutError(ApplicationError):
    """Raised when mosaic inputs do not fit the fixed 2x2 layout"""

    def __init__(self, message: str, count: int | None = None):
        details = {"count": count} if count is not None else {}
        super().__init__(message, details)


class BackendError(ApplicationError):
    """Base class for transcoding backend failures"""

    def __init__(self, message: str, output_path: str | None = None, details: dict | None = None):
        merged = {"output_path": output_path}
        merged.update(details or {})
        super().__init__(message, merged)


class BackendSpawnError(BackendError):
    """Raised when the backend process cannot be started"""

    def __init__(self, output_path: str | None, cause: Exception):
        self.cause = cause
        super().__init__(
            f"Failed to start transcoding backend: {cause}",
            output_path,
            {"cause": str(cause)}
        )


class BackendExitError(BackendError):
    """Raised when the backend process terminates with a failure status"""

    def __init__(self, output_path: str | None, returncode: int, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"Transcoding backend exited with status {returncode} while writing {output_path}",
            output_path,
            {"returncode": returncode, "stderr": stderr}
        )


class BackendTimeoutError(BackendError):
    """Raised when the backend process exceeds its timeout and is killed"""

    def __init__(self, output_path: str | None, timeout: float | None):
        self.timeout = timeout
        super().__init__(
            f"Transcoding backend timed out after {timeout}s while writing {output_path}",
            output_path,
            {"timeout": timeout}
        )


class CleanupError(ApplicationError):
    """Raised when one or more temporary artifacts could not be deleted"""

    def __init__(self, report):
        self.report = report
        super().__init__(
            f"Failed to delete {len(report.failed)} of {report.attempted} file(s)",
            {"failed": {str(path): str(error) for path, error in report.failed.items()}}
        )
