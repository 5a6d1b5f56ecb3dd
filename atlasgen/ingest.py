"""
Image ingestion

Collects image files from a directory tree, decodes them with Pillow and
derives each image's logical name from its path.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from PIL import Image

from atlasgen.exceptions import DuplicateNameError, InputDirectoryError, OversizedImageError
from atlasgen.images import ImageRecord

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ('.png', '.gif', '.bmp', '.tga', '.tif', '.tiff', '.webp', '.jpg', '.jpeg')


@dataclass
class SkippedFile:
    """A file that could not be decoded"""
    path: Path
    reason: str


@dataclass
class IngestionResult:
    """Decoded images plus the files that were skipped along the way"""
    images: List[ImageRecord] = field(default_factory=list)
    skipped: List[SkippedFile] = field(default_factory=list)


def collect_image_files(root, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> List[Path]:
    """
    Find every image file under root, recursing into subdirectories.

    Args:
        root: Directory to search
        extensions: Accepted suffixes, compared case-insensitively (e.g. ".png")

    Returns:
        Sorted list of matching file paths
    """
    root = Path(root)
    if not root.is_dir():
        raise InputDirectoryError(root)

    wanted = {ext.lower() for ext in extensions}
    return sorted(
        path for path in root.rglob('*')
        if path.is_file() and path.suffix.lower() in wanted
    )


def logical_name(path, root) -> str:
    """
    Name an image by its path relative to root, without extension.

    Example:
        >>> logical_name(Path("images/ui/ok.png"), Path("images"))
        'ui/ok'
    """
    relative = Path(path).relative_to(Path(root))
    return relative.with_suffix('').as_posix()


def decode_image(path: Path) -> Image.Image:
    """Fully decode an image file into an RGBA buffer."""
    with Image.open(path) as img:
        img.load()
        return img.convert('RGBA')


def load_images(
    root,
    width: Optional[int] = None,
    height: Optional[int] = None,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS
) -> IngestionResult:
    """
    Decode every image under root.

    Unreadable files are skipped and reported. When an atlas size is given,
    the first image that cannot fit on an empty atlas aborts ingestion.

    Args:
        root: Directory to search
        width: Atlas width to check images against (optional)
        height: Atlas height to check images against (optional)
        extensions: Accepted file suffixes

    Returns:
        IngestionResult with decoded images and skipped files

    Raises:
        InputDirectoryError: root is missing or not a directory
        OversizedImageError: An image is larger than the atlas
        DuplicateNameError: Two files produce the same logical name
    """
    root = Path(root)
    files = collect_image_files(root, extensions)
    logger.info(f"Found {len(files)} images in {root}")

    result = IngestionResult()
    sources: Dict[str, Path] = {}

    for path in files:
        try:
            pixels = decode_image(path)
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
            logger.warning(f"Could not open file '{path}': {e}")
            result.skipped.append(SkippedFile(path=path, reason=str(e)))
            continue

        name = logical_name(path, root)
        image = ImageRecord.from_image(name, pixels, source=path)

        max_w = width if width is not None else image.width
        max_h = height if height is not None else image.height
        if image.width > max_w or image.height > max_h:
            raise OversizedImageError(name, image.size, (max_w, max_h), path)

        if name in sources:
            raise DuplicateNameError(name, [sources[name], path])
        sources[name] = path

        result.images.append(image)

    return result
