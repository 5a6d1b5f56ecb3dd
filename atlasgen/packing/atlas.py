"""
A single fixed-size atlas: packer tree, RGBA canvas and placement manifest.
"""

import logging
from typing import Dict, List, Optional, Tuple

from PIL import Image

from atlasgen.exceptions import DuplicateNameError
from atlasgen.images import ImageRecord
from .packer import RectanglePacker
from .rect import Rect

logger = logging.getLogger(__name__)


class Atlas:
    """
    One output texture that source images are composited onto.

    Placements are kept in a plain dict; manifest order (by name) is only
    applied when entries are read back out, since packing order (by area)
    is different.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.packer = RectanglePacker(width, height)
        self.canvas = Image.new('RGBA', (width, height), (0, 0, 0, 0))
        self.placements: Dict[str, Rect] = {}

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def image_count(self) -> int:
        return len(self.placements)

    @property
    def used_area(self) -> int:
        return sum(rect.area for rect in self.placements.values())

    @property
    def occupancy(self) -> float:
        """Fraction of the canvas covered by placed images (0.0 to 1.0)."""
        return self.used_area / (self.width * self.height)

    def add_image(self, image: ImageRecord, name: Optional[str] = None) -> bool:
        """
        Try to place an image on this atlas.

        Args:
            image: Decoded source image
            name: Manifest name (defaults to image.name)

        Returns:
            True if the image was placed. False means there is no room; the
            atlas is unchanged and the same image should not be retried here.
        """
        name = name if name is not None else image.name
        if name in self.placements:
            raise DuplicateNameError(name)

        rect = self.packer.insert(image.width, image.height, name)
        if rect is None:
            return False

        self.placements[name] = rect
        pixels = image.pixels
        if pixels.mode != 'RGBA':
            pixels = pixels.convert('RGBA')
        self.canvas.paste(pixels, (rect.x, rect.y))
        return True

    def manifest_entries(self) -> List[Tuple[str, Rect]]:
        """All placements as (name, rect) pairs sorted by name."""
        return sorted(self.placements.items(), key=lambda item: item[0])

    def write(self, base_name: str):
        """Write `<base_name>.png` and `<base_name>.txt`. Returns both paths."""
        from atlasgen.emit import write_atlas
        return write_atlas(self, base_name)

    def __repr__(self):
        return f"Atlas({self.width}x{self.height}, {self.image_count} images, {self.occupancy:.1%} used)"
