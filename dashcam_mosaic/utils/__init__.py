"""
Utility functions and decorators.
"""

from .logging_utils import StructuredLogger, log_operation, set_logging_context, clear_logging_context

__all__ = ["StructuredLogger", "log_operation", "set_logging_context", "clear_logging_context"]
