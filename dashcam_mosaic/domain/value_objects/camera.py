"""
Camera Value Object

Immutable identity of the logical source a segment was recorded by.
"""

from enum import Enum
from typing import Tuple


class Camera(str, Enum):
    """
    Camera identity enum.

    Cameras are compared by equality only; the enum order carries no meaning
    for sorting segments or placing mosaic tiles.
    """

    FRONT = "front"
    BACK = "back"
    LEFT_REPEATER = "left_repeater"
    RIGHT_REPEATER = "right_repeater"

    @property
    def file_name(self) -> str:
        """Token used for this camera in segment and artifact file names."""
        return self.value

    @classmethod
    def default_layout(cls) -> Tuple["Camera", ...]:
        """
        Default mosaic order: front | back on top, left | right below.

        Returns:
            Cameras in upper-left, upper-right, lower-left, lower-right order
        """
        return (cls.FRONT, cls.BACK, cls.LEFT_REPEATER, cls.RIGHT_REPEATER)

    @classmethod
    def from_string(cls, value: str) -> "Camera":
        """
        Create Camera from its file name token.

        Args:
            value: String representation (case-insensitive)

        Returns:
            Camera instance

        Raises:
            ValueError: If value is not a known camera
        """
        try:
            return cls(value.lower())
        except ValueError:
            raise ValueError(f"Invalid camera: {value}")
