"""
Axis-aligned integer rectangle used for packer nodes and placements.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """A rectangle in atlas pixel space. Origin is the top-left corner."""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def intersects(self, other: "Rect") -> bool:
        """True if the two rectangles share any area (touching edges do not count)."""
        return not (
            self.right <= other.x or
            self.bottom <= other.y or
            self.x >= other.right or
            self.y >= other.bottom
        )

    def contains(self, other: "Rect") -> bool:
        """True if `other` lies entirely inside this rectangle."""
        return (
            other.x >= self.x and
            other.y >= self.y and
            other.right <= self.right and
            other.bottom <= self.bottom
        )

    def __str__(self):
        return f"{self.width}x{self.height} at ({self.x},{self.y})"
