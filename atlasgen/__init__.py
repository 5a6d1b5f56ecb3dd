"""
atlasgen - Pack directories of images into fixed-size texture atlases

Places each image with a binary space-partitioning packer, opens new atlases
as needed, and writes every atlas as a PNG plus a plain-text manifest.
"""

from atlasgen.client import AtlasGenerator, BuildResult, generate_atlases
from atlasgen.images import ImageRecord
from atlasgen.schema import AtlasConfig

__version__ = "0.1.0"
__all__ = ["AtlasGenerator", "BuildResult", "generate_atlases", "ImageRecord", "AtlasConfig"]
