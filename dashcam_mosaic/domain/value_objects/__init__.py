"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values.

Examples:
- Camera: Logical source of a recording (front, back, repeaters)
- Segment: One recorded file of one camera with its capture start time
- MosaicInputs: Four ordered slots of per-camera files for the 2x2 grid
"""

from .camera import Camera
from .segment import Segment
from .mosaic_inputs import MosaicInputs, MosaicInput, Quadrant

__all__ = ["Camera", "Segment", "MosaicInputs", "MosaicInput", "Quadrant"]
