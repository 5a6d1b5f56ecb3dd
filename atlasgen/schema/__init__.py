"""Run configuration schema."""
from .config import AtlasConfig

__all__ = [
    "AtlasConfig",
]
