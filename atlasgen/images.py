"""
Source image records handed from ingestion to the packer.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from PIL import Image


@dataclass(frozen=True)
class ImageRecord:
    """
    A decoded source image waiting to be placed.

    Attributes:
        name: Logical name, unique within a run (e.g. "ui/buttons/ok")
        width: Width in pixels
        height: Height in pixels
        pixels: RGBA pixel buffer
        source: File the image was decoded from, if any
    """
    name: str
    width: int
    height: int
    pixels: Image.Image = field(repr=False, compare=False)
    source: Optional[Path] = None

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image '{self.name}' has invalid size {self.width}x{self.height}")

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def size(self):
        return self.width, self.height

    @classmethod
    def from_image(cls, name: str, image: Image.Image, source: Optional[Path] = None) -> "ImageRecord":
        """Build a record from a PIL image, converting it to RGBA."""
        if image.mode != 'RGBA':
            image = image.convert('RGBA')
        width, height = image.size
        return cls(name=name, width=width, height=height, pixels=image, source=source)
