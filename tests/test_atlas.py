"""
Tests for a single Atlas: placement, compositing and manifest entries
"""
import os
import tempfile

import pytest
from PIL import Image

from atlasgen.exceptions import DuplicateNameError
from atlasgen.images import ImageRecord
from atlasgen.packing import Atlas, Rect


def solid(name, width, height, color=(255, 0, 0, 255)):
    return ImageRecord.from_image(name, Image.new('RGBA', (width, height), color))


class TestAtlas:

    def test_new_atlas_is_blank(self):
        atlas = Atlas(32, 16)
        assert atlas.canvas.size == (32, 16)
        assert atlas.canvas.mode == 'RGBA'
        assert atlas.canvas.getpixel((0, 0)) == (0, 0, 0, 0)
        assert atlas.placements == {}
        assert atlas.packer.root.rect == Rect(0, 0, 32, 16)

    def test_add_image_records_and_composites(self):
        """Pixels land at the placed origin without scaling"""
        atlas = Atlas(32, 32)
        assert atlas.add_image(solid("red", 8, 8)) is True

        assert atlas.placements == {"red": Rect(0, 0, 8, 8)}
        assert atlas.canvas.getpixel((0, 0)) == (255, 0, 0, 255)
        assert atlas.canvas.getpixel((7, 7)) == (255, 0, 0, 255)
        assert atlas.canvas.getpixel((8, 8)) == (0, 0, 0, 0)

    def test_second_image_pasted_at_its_own_rect(self):
        atlas = Atlas(16, 8)
        atlas.add_image(solid("left", 8, 8, (255, 0, 0, 255)))
        atlas.add_image(solid("right", 8, 8, (0, 0, 255, 255)))

        assert atlas.placements["right"] == Rect(8, 0, 8, 8)
        assert atlas.canvas.getpixel((3, 3)) == (255, 0, 0, 255)
        assert atlas.canvas.getpixel((12, 3)) == (0, 0, 255, 255)

    def test_transparent_pixels_are_kept(self):
        atlas = Atlas(4, 4)
        atlas.add_image(solid("ghost", 4, 4, (10, 20, 30, 0)))
        assert atlas.canvas.getpixel((1, 1)) == (10, 20, 30, 0)

    def test_failed_add_leaves_atlas_unchanged(self):
        atlas = Atlas(10, 10)
        atlas.add_image(solid("full", 10, 10))
        nodes_before = atlas.packer.node_count

        assert atlas.add_image(solid("extra", 1, 1)) is False
        assert "extra" not in atlas.placements
        assert atlas.packer.node_count == nodes_before

    def test_name_override(self):
        atlas = Atlas(10, 10)
        atlas.add_image(solid("original", 5, 5), name="renamed")
        assert list(atlas.placements) == ["renamed"]

    def test_duplicate_name_raises(self):
        atlas = Atlas(20, 20)
        atlas.add_image(solid("same", 5, 5))
        with pytest.raises(DuplicateNameError):
            atlas.add_image(solid("same", 5, 5))

    def test_manifest_entries_sorted_by_name(self):
        """Packing order is by area, manifest order is by name"""
        atlas = Atlas(64, 64)
        atlas.add_image(solid("zebra", 32, 32))
        atlas.add_image(solid("apple", 8, 8))
        atlas.add_image(solid("mango", 16, 16))

        names = [name for name, _ in atlas.manifest_entries()]
        assert names == ["apple", "mango", "zebra"]

    def test_statistics(self):
        atlas = Atlas(10, 10)
        atlas.add_image(solid("half", 10, 5))
        assert atlas.image_count == 1
        assert atlas.used_area == 50
        assert atlas.occupancy == pytest.approx(0.5)

    def test_write(self):
        atlas = Atlas(16, 16)
        atlas.add_image(solid("b", 8, 8))
        atlas.add_image(solid("a", 4, 4, (0, 255, 0, 255)))

        with tempfile.TemporaryDirectory() as tmpdir:
            base = os.path.join(tmpdir, "atlas1")
            png_path, txt_path = atlas.write(base)

            assert str(png_path) == base + ".png"
            assert str(txt_path) == base + ".txt"

            with Image.open(png_path) as img:
                assert img.size == (16, 16)
                assert img.convert('RGBA').getpixel((0, 0)) == (255, 0, 0, 255)

            with open(txt_path) as f:
                lines = f.read().splitlines()
            rect_a = atlas.placements["a"]
            assert lines == [
                f"a {rect_a.x} {rect_a.y} 4 4",
                "b 0 0 8 8",
            ]
