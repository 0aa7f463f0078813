"""
Domain Aggregates

Aggregate roots group related value objects behind one consistency boundary.

Examples:
- EventClip: One event folder, its timestamp and its time-ordered segments
"""

from .event_clip import EventClip

__all__ = ["EventClip"]
