"""
Run configuration for atlas generation.

All atlases in one run share the same canvas size. Values coming from the
command line arrive as strings and are coerced here ("2048" -> 2048).
"""

from pathlib import Path
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from atlasgen.ingest import DEFAULT_EXTENSIONS


class AtlasConfig(BaseModel):
    model_config = ConfigDict(extra='forbid', frozen=True)

    name: str = Field(..., min_length=1, description="Output base name; atlas n is written to <name><n>.png/.txt.")
    width: PositiveInt = Field(..., description="Atlas width in pixels.")
    height: PositiveInt = Field(..., description="Atlas height in pixels.")
    directory: Path = Field(..., description="Root directory searched recursively for images.")
    extensions: Tuple[str, ...] = Field(DEFAULT_EXTENSIONS, description="Accepted image file suffixes.")

    @field_validator('extensions')
    @classmethod
    def normalize_extensions(cls, v):
        normalized = tuple('.' + ext.strip().lstrip('.').lower() for ext in v if ext.strip().lstrip('.'))
        if not normalized:
            raise ValueError("At least one image extension is required")
        return normalized

    @property
    def atlas_size(self) -> Tuple[int, int]:
        return self.width, self.height

    def output_base(self, index: int) -> str:
        """Base path (no extension) for the 1-based atlas index."""
        return f"{self.name}{index}"
