"""
Placement driver: orders images and spreads them over as many atlases as needed.
"""

import logging
from typing import Iterable, List, Sequence, Tuple

from atlasgen.exceptions import DuplicateNameError, OversizedImageError
from atlasgen.images import ImageRecord
from .atlas import Atlas
from .rect import Rect

logger = logging.getLogger(__name__)


def sort_images(images: Iterable[ImageRecord]) -> List[ImageRecord]:
    """
    Order images for packing: largest area first, ties by ascending name.

    Big images go in first so smaller ones can fill the space their splits
    leave behind.
    """
    return sorted(images, key=lambda image: (-image.area, image.name))


class AtlasSet:
    """
    Ordered, append-only collection of same-sized atlases.

    Atlas numbers are 1-based and follow creation order, which is also the
    output file numbering.

    Example:
        >>> atlases = AtlasSet(1024, 1024)
        >>> atlases.place(images)
        >>> len(atlases)
        2
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.atlases: List[Atlas] = [Atlas(width, height)]

    def __len__(self):
        return len(self.atlases)

    def __iter__(self):
        return iter(self.atlases)

    def __getitem__(self, index: int) -> Atlas:
        return self.atlases[index]

    def fits(self, image: ImageRecord) -> bool:
        """True if the image is no larger than the canvas in either dimension."""
        return image.width <= self.width and image.height <= self.height

    def validate(self, images: Sequence[ImageRecord]) -> None:
        """
        Reject inputs that can never be packed.

        Raises:
            OversizedImageError: An image is wider or taller than the canvas
            DuplicateNameError: Two images share a name
        """
        seen = {}
        for image in images:
            if not self.fits(image):
                raise OversizedImageError(image.name, image.size, (self.width, self.height), image.source)
            if image.name in seen:
                raise DuplicateNameError(image.name, [p for p in (seen[image.name], image.source) if p is not None])
            seen[image.name] = image.source
        for atlas in self.atlases:
            for name in atlas.placements:
                if name in seen:
                    raise DuplicateNameError(name)

    def add(self, image: ImageRecord) -> Tuple[int, Rect]:
        """
        Place one image on the first atlas that accepts it, opening a new atlas if none does.

        Returns:
            Tuple of (1-based atlas number, placed rectangle)
        """
        if not self.fits(image):
            raise OversizedImageError(image.name, image.size, (self.width, self.height), image.source)

        for number, atlas in enumerate(self.atlases, start=1):
            if atlas.add_image(image):
                return number, atlas.placements[image.name]

        atlas = Atlas(self.width, self.height)
        if not atlas.add_image(image):
            # Unreachable for an image that fits an empty canvas
            raise RuntimeError(f"Could not place '{image.name}' on an empty atlas")
        self.atlases.append(atlas)
        logger.info(f"Opened atlas {len(self.atlases)} for {image.name}")
        return len(self.atlases), atlas.placements[image.name]

    def place(self, images: Iterable[ImageRecord]) -> List[Tuple[ImageRecord, int, Rect]]:
        """
        Validate, sort and place every image.

        Nothing is placed if any image is oversized or any name is duplicated.

        Returns:
            List of (image, atlas number, rect) in placement order
        """
        images = list(images)
        self.validate(images)

        ordered = sort_images(images)
        total = len(ordered)
        placements = []
        for count, image in enumerate(ordered, start=1):
            number, rect = self.add(image)
            logger.info(f"Adding {image.name} to atlas {number} ({count}/{total})")
            placements.append((image, number, rect))
        return placements


def pack_images(images: Iterable[ImageRecord], width: int, height: int) -> AtlasSet:
    """
    Pack images into width x height atlases.

    Args:
        images: Source images (any order)
        width: Atlas width in pixels
        height: Atlas height in pixels

    Returns:
        AtlasSet holding at least one atlas

    Raises:
        OversizedImageError: An image is larger than the atlas
        DuplicateNameError: Two images share a name
    """
    atlas_set = AtlasSet(width, height)
    atlas_set.place(images)
    return atlas_set
