"""Custom exceptions for atlas generation"""

from pathlib import Path
from typing import Optional, Sequence, Tuple


class AtlasError(Exception):
    """Base exception for atlas generation errors"""
    pass


class ConfigurationError(AtlasError):
    """Run configuration errors. Fatal: the run aborts before writing anything."""
    pass


class InputDirectoryError(ConfigurationError):
    """Input directory is missing or not a directory"""

    def __init__(self, path):
        self.path = Path(path)
        super().__init__(f"Could not find directory '{path}'")


class OversizedImageError(ConfigurationError):
    """A source image is wider or taller than the atlas"""

    def __init__(
        self,
        name: str,
        image_size: Tuple[int, int],
        atlas_size: Tuple[int, int],
        path: Optional[Path] = None
    ):
        self.name = name
        self.path = path
        self.image_size = image_size
        self.atlas_size = atlas_size
        label = path if path is not None else name
        super().__init__(
            f"'{label}' ({image_size[0]}x{image_size[1]}) is larger than "
            f"the atlas ({atlas_size[0]}x{atlas_size[1]})"
        )


class DuplicateNameError(ConfigurationError):
    """Two source images map to the same logical name"""

    def __init__(self, name: str, paths: Sequence = ()):
        self.name = name
        self.paths = list(paths)
        message = f"Duplicate image name '{name}'"
        if self.paths:
            message += " (" + ", ".join(str(p) for p in self.paths) + ")"
        super().__init__(message)


class EmissionError(AtlasError):
    """One or more atlases could not be written"""
    pass
