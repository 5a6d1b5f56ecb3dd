"""
Tests for directory ingestion and logical naming
"""
import os
import tempfile
from pathlib import Path

import pytest
from PIL import Image

from atlasgen.exceptions import DuplicateNameError, InputDirectoryError, OversizedImageError
from atlasgen.ingest import collect_image_files, load_images, logical_name


def save_image(root, relative, size, mode='RGBA', color=(255, 255, 255, 255)):
    path = Path(root) / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    if mode != 'RGBA':
        color = color[:len(mode)] if len(mode) > 1 else color[0]
    Image.new(mode, size, color).save(path)
    return path


class TestCollectImageFiles:

    def test_recurses_into_subdirectories(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            save_image(tmpdir, "top.png", (4, 4))
            save_image(tmpdir, "ui/buttons/ok.png", (4, 4))
            save_image(tmpdir, "ui/panel.png", (4, 4))

            files = collect_image_files(tmpdir)
            relative = [p.relative_to(tmpdir).as_posix() for p in files]
            assert relative == ["top.png", "ui/buttons/ok.png", "ui/panel.png"]

    def test_filters_by_extension_case_insensitively(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            save_image(tmpdir, "upper.PNG", (4, 4))
            save_image(tmpdir, "photo.bmp", (4, 4), mode='RGB')
            Path(tmpdir, "notes.txt").write_text("not an image")

            names = [p.name for p in collect_image_files(tmpdir, ['.png'])]
            assert names == ["upper.PNG"]

    def test_missing_directory(self):
        with pytest.raises(InputDirectoryError) as exc_info:
            collect_image_files("/nonexistent/images")
        assert "nonexistent" in str(exc_info.value)

    def test_file_is_not_a_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = save_image(tmpdir, "single.png", (2, 2))
            with pytest.raises(InputDirectoryError):
                collect_image_files(path)


class TestLogicalName:

    def test_relative_path_without_extension(self):
        assert logical_name(Path("images/ui/ok.png"), Path("images")) == "ui/ok"

    def test_only_last_extension_stripped(self):
        assert logical_name(Path("root/icon.small.png"), Path("root")) == "icon.small"

    def test_top_level_file(self):
        assert logical_name(Path("root/hero.png"), Path("root")) == "hero"


class TestLoadImages:

    def test_decodes_images_as_rgba(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            save_image(tmpdir, "gray.png", (6, 3), mode='L')
            save_image(tmpdir, "chars/hero.png", (5, 7))

            result = load_images(tmpdir)

            by_name = {image.name: image for image in result.images}
            assert set(by_name) == {"gray", "chars/hero"}
            assert by_name["gray"].size == (6, 3)
            assert by_name["gray"].pixels.mode == 'RGBA'
            assert by_name["chars/hero"].size == (5, 7)
            assert by_name["chars/hero"].source == Path(tmpdir) / "chars" / "hero.png"
            assert result.skipped == []

    def test_corrupt_file_is_skipped(self):
        """A file that fails to decode is reported and the rest still load"""
        with tempfile.TemporaryDirectory() as tmpdir:
            save_image(tmpdir, "good.png", (4, 4))
            bad = Path(tmpdir) / "bad.png"
            bad.write_bytes(b"definitely not a png")

            result = load_images(tmpdir)

            assert [image.name for image in result.images] == ["good"]
            assert len(result.skipped) == 1
            assert result.skipped[0].path == bad
            assert result.skipped[0].reason

    def test_oversized_image_aborts(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = save_image(tmpdir, "banner.png", (200, 50))

            with pytest.raises(OversizedImageError) as exc_info:
                load_images(tmpdir, 150, 150)

            error = exc_info.value
            assert error.path == path
            assert error.image_size == (200, 50)
            assert error.atlas_size == (150, 150)
            assert "banner.png" in str(error)
            assert "200x50" in str(error)
            assert "150x150" in str(error)

    def test_images_equal_to_atlas_size_are_accepted(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            save_image(tmpdir, "exact.png", (32, 16))
            result = load_images(tmpdir, 32, 16)
            assert [image.name for image in result.images] == ["exact"]

    def test_duplicate_logical_names_rejected(self):
        """hero.png and hero.bmp both map to 'hero'"""
        with tempfile.TemporaryDirectory() as tmpdir:
            save_image(tmpdir, "hero.png", (4, 4))
            save_image(tmpdir, "hero.bmp", (4, 4), mode='RGB')

            with pytest.raises(DuplicateNameError) as exc_info:
                load_images(tmpdir)

            assert exc_info.value.name == "hero"
            assert len(exc_info.value.paths) == 2

    def test_missing_directory(self):
        with pytest.raises(InputDirectoryError):
            load_images(os.path.join(tempfile.gettempdir(), "atlasgen-does-not-exist"))

    def test_empty_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            result = load_images(tmpdir)
            assert result.images == []
            assert result.skipped == []
