"""
MosaicInputs Value Object

Fixed four-slot container of per-camera files for the 2x2 mosaic.
Placement is positional: slot n always lands in quadrant n.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from ...constants import MosaicGeometry
from ...exceptions import LayoutError
from .camera import Camera


class Quadrant(int, Enum):
    """Mosaic quadrants in slot order."""

    UPPER_LEFT = 0
    UPPER_RIGHT = 1
    LOWER_LEFT = 2
    LOWER_RIGHT = 3

    @property
    def x(self) -> int:
        """Horizontal offset of the tile on the canvas."""
        return MosaicGeometry.TILE_WIDTH if self in (Quadrant.UPPER_RIGHT, Quadrant.LOWER_RIGHT) else 0

    @property
    def y(self) -> int:
        """Vertical offset of the tile on the canvas."""
        return MosaicGeometry.TILE_HEIGHT if self in (Quadrant.LOWER_LEFT, Quadrant.LOWER_RIGHT) else 0

    @property
    def label(self) -> str:
        """Filter graph label for the scaled tile."""
        return self.name.lower().replace("_", "")


@dataclass(frozen=True)
class MosaicInput:
    """One per-camera file placed into a mosaic slot."""

    path: Path
    camera: Camera

    def __post_init__(self):
        if not isinstance(self.path, Path):
            object.__setattr__(self, "path", Path(self.path))


@dataclass(frozen=True)
class MosaicInputs:
    """
    Exactly four ordered slots, any of which may be empty.

    Empty slots stay blank in the composed video. The container never looks
    at camera identity to decide where a file goes.
    """

    slots: Tuple[Optional[MosaicInput], Optional[MosaicInput], Optional[MosaicInput], Optional[MosaicInput]]

    def __post_init__(self):
        """Validate slot count and that at least one slot is filled."""
        if len(self.slots) != MosaicGeometry.SLOTS:
            raise LayoutError(
                f"Mosaic requires exactly {MosaicGeometry.SLOTS} slots, got {len(self.slots)}",
                count=len(self.slots)
            )
        if all(slot is None for slot in self.slots):
            raise LayoutError("Mosaic requires at least one input", count=0)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[Path, Camera]]) -> "MosaicInputs":
        """
        Fill slots by positional index from (path, camera) pairs.

        Args:
            pairs: Up to four (path, camera) pairs in upper-left, upper-right,
                lower-left, lower-right order

        Returns:
            MosaicInputs with unused trailing slots left empty

        Raises:
            LayoutError: If more than four or zero pairs are supplied
        """
        items = [MosaicInput(Path(path), camera) for path, camera in pairs]
        if len(items) > MosaicGeometry.SLOTS:
            raise LayoutError(
                f"Mosaic accepts at most {MosaicGeometry.SLOTS} inputs, got {len(items)}",
                count=len(items)
            )
        padded: List[Optional[MosaicInput]] = items + [None] * (MosaicGeometry.SLOTS - len(items))
        return cls(tuple(padded))

    def filled(self) -> Iterator[Tuple[Quadrant, MosaicInput]]:
        """Yield (quadrant, input) for every non-empty slot in slot order."""
        for index, slot in enumerate(self.slots):
            if slot is not None:
                yield Quadrant(index), slot

    def paths(self) -> List[Path]:
        """Paths of all filled slots in slot order."""
        return [item.path for _, item in self.filled()]

    def __len__(self) -> int:
        return sum(1 for slot in self.slots if slot is not None)
