"""
Core atlasgen client API

Provides the AtlasGenerator class for packing a directory (or a list of
already decoded images) into atlases, and the BuildResult class for
inspecting and saving the result.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from atlasgen.emit import EmissionReport, write_atlases
from atlasgen.images import ImageRecord
from atlasgen.ingest import DEFAULT_EXTENSIONS, SkippedFile, load_images
from atlasgen.packing import Atlas, AtlasSet
from atlasgen.schema import AtlasConfig

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """
    Packed atlases plus ingestion bookkeeping.

    Attributes:
        atlases: Atlases in creation order (atlas n is atlases[n - 1])
        skipped: Files that could not be decoded
        image_count: Number of images placed
    """
    atlases: List[Atlas]
    skipped: List[SkippedFile] = field(default_factory=list)
    image_count: int = 0

    def save(self, base_name: str) -> EmissionReport:
        """
        Write every atlas as <base_name><n>.png and <base_name><n>.txt.

        Examples:
            >>> result = AtlasGenerator(1024, 1024).build("sprites")
            >>> result.save("out/sprites")   # out/sprites1.png, out/sprites1.txt, ...
        """
        return write_atlases(self.atlases, base_name)

    def get_stats(self) -> dict:
        """
        Summary numbers for the build.

        Example:
            >>> result.get_stats()
            {'atlas_count': 2, 'image_count': 40, 'skipped_count': 0, 'atlases': [...]}
        """
        return {
            'atlas_count': len(self.atlases),
            'image_count': self.image_count,
            'skipped_count': len(self.skipped),
            'atlases': [
                {
                    'index': index,
                    'images': atlas.image_count,
                    'used_area': atlas.used_area,
                    'occupancy': atlas.occupancy,
                }
                for index, atlas in enumerate(self.atlases, start=1)
            ],
        }


class AtlasGenerator:
    """
    Packs images into as few fixed-size atlases as the packer can manage.

    Examples:
        From a directory:
        >>> gen = AtlasGenerator(2048, 2048)
        >>> gen.build("images").save("atlas")

        From images already in memory:
        >>> result = gen.pack([ImageRecord.from_image("logo", logo)])
        >>> result.atlases[0].placements["logo"]
        Rect(x=0, y=0, width=128, height=64)
    """

    def __init__(self, width: int, height: int, extensions: Iterable[str] = DEFAULT_EXTENSIONS):
        """
        Initialize the generator.

        Args:
            width: Atlas width in pixels
            height: Atlas height in pixels
            extensions: File suffixes picked up by build()
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Atlas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.extensions = tuple(extensions)

    @classmethod
    def from_config(cls, config: AtlasConfig) -> "AtlasGenerator":
        return cls(config.width, config.height, config.extensions)

    def build(self, directory) -> BuildResult:
        """
        Ingest every image under a directory and pack it.

        Raises:
            InputDirectoryError: directory is missing or not a directory
            OversizedImageError: an image is larger than the atlas
            DuplicateNameError: two files map to the same logical name
        """
        ingested = load_images(directory, self.width, self.height, self.extensions)
        result = self.pack(ingested.images)
        result.skipped = ingested.skipped
        return result

    def pack(self, images: Iterable[ImageRecord]) -> BuildResult:
        """Sort and place pre-loaded images."""
        images = list(images)
        atlas_set = AtlasSet(self.width, self.height)
        atlas_set.place(images)

        logger.info(f"Packed {len(images)} images into {len(atlas_set)} atlas(es) of {self.width}x{self.height}")
        return BuildResult(atlases=list(atlas_set), image_count=len(images))


def generate_atlases(config: AtlasConfig) -> Tuple[BuildResult, EmissionReport]:
    """
    Run a whole build: ingest, sort, place, then write every atlas.

    Configuration errors are raised before any file is written. Write
    failures are collected in the returned EmissionReport.
    """
    result = AtlasGenerator.from_config(config).build(config.directory)
    report = result.save(config.name)
    return result, report
