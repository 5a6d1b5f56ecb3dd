"""
Rectangle packing for fixed-size texture atlases.

Includes the space-partitioning packer tree, the atlas canvas and the
multi-atlas placement driver.
"""
from .rect import Rect
from .packer import RectanglePacker, PackerNode, NO_CHILD
from .atlas import Atlas
from .driver import AtlasSet, sort_images, pack_images

__all__ = [
    'Rect',
    'RectanglePacker',
    'PackerNode',
    'NO_CHILD',
    'Atlas',
    'AtlasSet',
    'sort_images',
    'pack_images',
]
