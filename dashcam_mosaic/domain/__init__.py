"""
Domain Layer

This package contains the event model, separated from the ffmpeg backend and
filesystem side effects.

Structure:
- value_objects/: Immutable value types without identity (Camera, Segment, MosaicInputs)
- aggregates/: Aggregate roots that group related value objects (EventClip)
"""
