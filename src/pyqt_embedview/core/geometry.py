"""Rectangle value type used for instance and control geometry."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle (left, top, width, height).

    Coordinates are relative to the card (or background layer) the node
    lives on, not to its immediate parent group.
    """

    left: int
    top: int
    width: int
    height: int

    @property
    def top_left(self) -> Tuple[int, int]:
        return (self.left, self.top)

    @property
    def center(self) -> Tuple[int, int]:
        return (self.left + self.width // 2, self.top + self.height // 2)

    def translated(self, dx: int, dy: int) -> "Rect":
        """Return a copy moved by (dx, dy)."""
        return Rect(self.left + dx, self.top + dy, self.width, self.height)

    @classmethod
    def centered_square(cls, center: Tuple[int, int], size: int) -> "Rect":
        """Square of side ``size`` centered on ``center``."""
        cx, cy = center
        half = size // 2
        return cls(cx - half, cy - half, size, size)
