"""
Atlas emission

Writes each atlas canvas as a PNG and its manifest as a text file with one
`name x y width height` line per placed image.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple

from atlasgen.exceptions import EmissionError

logger = logging.getLogger(__name__)

RASTER_EXTENSION = '.png'
MANIFEST_EXTENSION = '.txt'


@dataclass
class WriteFailure:
    """An atlas that could not be written"""
    index: int
    base_name: str
    reason: str


@dataclass
class EmissionReport:
    """Files written by write_atlases() and any per-atlas failures"""
    written: List[Tuple[Path, Path]] = field(default_factory=list)
    failures: List[WriteFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        """Raise EmissionError if any atlas failed to write."""
        if self.failures:
            details = "; ".join(f"{f.base_name}: {f.reason}" for f in self.failures)
            raise EmissionError(f"Failed to write {len(self.failures)} atlas(es): {details}")


def format_manifest(entries) -> str:
    """
    Format (name, rect) pairs as manifest text.

    Entries are written in the order given; Atlas.manifest_entries() already
    sorts them by name.
    """
    return "".join(
        f"{name} {rect.x} {rect.y} {rect.width} {rect.height}\n"
        for name, rect in entries
    )


def write_atlas(atlas, base_name: str) -> Tuple[Path, Path]:
    """
    Write one atlas to disk.

    Args:
        atlas: Atlas to write
        base_name: Output path without extension (e.g. "out/atlas1")

    Returns:
        Tuple of (png_path, manifest_path)

    Raises:
        OSError: If either file cannot be written
    """
    png_path = Path(f"{base_name}{RASTER_EXTENSION}")
    txt_path = Path(f"{base_name}{MANIFEST_EXTENSION}")

    atlas.canvas.save(png_path, format='PNG')
    with open(txt_path, 'w', encoding='utf-8', newline='\n') as f:
        f.write(format_manifest(atlas.manifest_entries()))

    logger.info(f"Wrote {png_path} and {txt_path} ({atlas.image_count} images)")
    return png_path, txt_path


def write_atlases(atlases: Iterable, base_name: str) -> EmissionReport:
    """
    Write every atlas as `<base_name><n>.png` / `<base_name><n>.txt`, n from 1.

    A failed write is logged and recorded; files already written stay on disk
    and the remaining atlases are still attempted.
    """
    report = EmissionReport()
    for index, atlas in enumerate(atlases, start=1):
        numbered = f"{base_name}{index}"
        try:
            report.written.append(write_atlas(atlas, numbered))
        except OSError as e:
            logger.error(f"Failed to write atlas {numbered}: {e}")
            report.failures.append(WriteFailure(index=index, base_name=numbered, reason=str(e)))
    return report
