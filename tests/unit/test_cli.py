"""Smoke tests for the command line interface."""

import logging
from pathlib import Path

import pytest
from PIL import Image
from typer.testing import CliRunner

from fontmaker import __version__
from fontmaker.cli import app
from fontmaker.io import load_state
from fontmaker.utils import logging as log_utils

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach the handlers each invocation installs on the root logger."""
    yield
    root = logging.getLogger()
    for handler in log_utils._installed_handlers:
        root.removeHandler(handler)
        handler.close()
    log_utils._installed_handlers.clear()


@pytest.fixture
def state(tmp_path: Path) -> Path:
    """Freshly initialized state file."""
    path = tmp_path / "project.json"
    result = runner.invoke(app, ["init", str(path), "--family", "Sketch"])
    assert result.exit_code == 0, result.output
    return path


@pytest.fixture
def artwork(tmp_path: Path) -> Path:
    """Small raster glyph with a solid block of ink."""
    image = Image.new("RGBA", (20, 20), (0, 0, 0, 0))
    for x in range(5, 15):
        for y in range(2, 18):
            image.putpixel((x, y), (0, 0, 0, 255))
    path = tmp_path / "glyph.png"
    image.save(path)
    return path


class TestGlobalOptions:
    """Tests for options shared by every command."""

    def test_version(self) -> None:
        """Test --version prints the version and exits cleanly."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_invalid_log_level(self, tmp_path: Path) -> None:
        """Test an unknown log level is rejected."""
        result = runner.invoke(app, ["--log-level", "LOUD", "init", str(tmp_path / "s.json")])
        assert result.exit_code == 1
        assert "Invalid log level" in result.output

    def test_log_file(self, tmp_path: Path) -> None:
        """Test --log-file writes a log."""
        log_file = tmp_path / "run.log"
        result = runner.invoke(
            app, ["--log-file", str(log_file), "init", str(tmp_path / "s.json")]
        )
        assert result.exit_code == 0
        assert log_file.exists()


class TestInit:
    """Tests for the init command."""

    def test_creates_state(self, state: Path) -> None:
        """Test init writes a loadable state with the family name."""
        project = load_state(state)
        assert project.metadata.family_name == "Sketch"
        assert len(project.records) == 87

    def test_refuses_overwrite(self, state: Path) -> None:
        """Test an existing state is kept without --force."""
        result = runner.invoke(app, ["init", str(state)])
        assert result.exit_code == 1
        assert "already exists" in result.output

        result = runner.invoke(app, ["init", str(state), "--force"])
        assert result.exit_code == 0
        assert load_state(state).metadata.family_name == "MyFont"


class TestAdd:
    """Tests for the add command."""

    def test_add_raster(self, state: Path, artwork: Path) -> None:
        """Test raster artwork is traced and aligned."""
        result = runner.invoke(
            app, ["add", str(state), "H", str(artwork), "--lock-cap", "--center"]
        )
        assert result.exit_code == 0, result.output

        record = load_state(state).records["H"]
        assert record.outline is not None
        assert record.lock_cap_height
        assert record.normalize_center

    def test_add_svg_with_transform(self, state: Path, tmp_path: Path) -> None:
        """Test SVG artwork and explicit transform options."""
        svg = tmp_path / "o.svg"
        svg.write_text(
            '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">'
            '<circle cx="50" cy="50" r="40"/></svg>',
            encoding="utf-8",
        )
        result = runner.invoke(
            app, ["add", str(state), "o", str(svg), "--scale", "2", "--x", "15"]
        )
        assert result.exit_code == 0, result.output

        record = load_state(state).records["o"]
        assert record.outline is not None
        assert record.transform.scale == 2.0
        assert record.transform.translate_x == 15.0

    def test_unsupported_character(self, state: Path, artwork: Path) -> None:
        """Test characters outside the repertoire are rejected."""
        result = runner.invoke(app, ["add", str(state), "é", str(artwork)])
        assert result.exit_code == 1
        assert "Unsupported" in result.output

    def test_missing_artwork(self, state: Path, tmp_path: Path) -> None:
        """Test a missing artwork file is reported."""
        result = runner.invoke(app, ["add", str(state), "A", str(tmp_path / "nope.png")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_unsupported_artwork_format(self, state: Path, tmp_path: Path) -> None:
        """Test files that are neither SVG nor raster images are rejected."""
        notes = tmp_path / "glyph.txt"
        notes.write_text("A", encoding="utf-8")
        result = runner.invoke(app, ["add", str(state), "A", str(notes)])
        assert result.exit_code == 1
        assert "Unsupported artwork format" in result.output
        assert load_state(state).records["A"].outline is None

    def test_unreadable_artwork(self, state: Path, tmp_path: Path) -> None:
        """Test a file that is not an image is reported."""
        fake = tmp_path / "fake.png"
        fake.write_text("not an image", encoding="utf-8")
        result = runner.invoke(app, ["add", str(state), "A", str(fake)])
        assert result.exit_code == 1
        assert "Could not load artwork" in result.output

    def test_missing_state(self, tmp_path: Path, artwork: Path) -> None:
        """Test a missing state file is reported."""
        result = runner.invoke(app, ["add", str(tmp_path / "none.json"), "A", str(artwork)])
        assert result.exit_code == 1
        assert "Could not load session" in result.output


class TestKern:
    """Tests for the kern command."""

    def test_set_and_remove(self, state: Path) -> None:
        """Test a negative value sets a pair and zero removes it."""
        result = runner.invoke(app, ["kern", str(state), "A", "V", "--", "-80"])
        assert result.exit_code == 0, result.output
        assert load_state(state).kerning.adjustment("A", "V") == -80

        result = runner.invoke(app, ["kern", str(state), "A", "V", "0"])
        assert result.exit_code == 0, result.output
        assert len(load_state(state).kerning) == 0

    def test_invalid_pair(self, state: Path) -> None:
        """Test unsupported characters are rejected."""
        result = runner.invoke(app, ["kern", str(state), "A", "VV", "10"])
        assert result.exit_code == 1


class TestPreview:
    """Tests for the preview command."""

    def test_layout_table(self, state: Path) -> None:
        """Test the layout table is printed."""
        result = runner.invoke(app, ["preview", str(state), "AV"])
        assert result.exit_code == 0, result.output
        assert "Layout (typeset)" in result.output
        assert "0 collisions" in result.output

    def test_collisions_reported(self, state: Path) -> None:
        """Test heavy kerning produces a collision."""
        runner.invoke(app, ["kern", str(state), "A", "V", "--", "-400"])
        result = runner.invoke(app, ["preview", str(state), "AV", "--mode", "monospace"])
        assert result.exit_code == 0, result.output
        assert "1 collisions" in result.output

    def test_invalid_mode(self, state: Path) -> None:
        """Test unknown modes are rejected."""
        result = runner.invoke(app, ["preview", str(state), "AV", "--mode", "wavy"])
        assert result.exit_code == 1
        assert "Invalid mode" in result.output


class TestExport:
    """Tests for the export command."""

    def test_export_styles(self, state: Path, artwork: Path, tmp_path: Path) -> None:
        """Test one font per requested style."""
        runner.invoke(app, ["add", str(state), "A", str(artwork), "--lock-cap"])
        out = tmp_path / "dist"

        result = runner.invoke(
            app, ["export", str(state), "-s", "Regular", "-s", "bold", "-o", str(out)]
        )

        assert result.exit_code == 0, result.output
        assert (out / "Sketch-Regular.otf").exists()
        assert (out / "Sketch-Bold.otf").exists()

    def test_family_override(self, state: Path, artwork: Path, tmp_path: Path) -> None:
        """Test --family renames the exported files."""
        runner.invoke(app, ["add", str(state), "A", str(artwork)])
        result = runner.invoke(
            app, ["-q", "export", str(state), "--family", "Draft", "-o", str(tmp_path)]
        )
        assert result.exit_code == 0, result.output
        assert (tmp_path / "Draft-Regular.otf").exists()

    def test_invalid_style(self, state: Path, tmp_path: Path) -> None:
        """Test unknown styles are rejected before anything is written."""
        result = runner.invoke(app, ["export", str(state), "-s", "Oblique", "-o", str(tmp_path)])
        assert result.exit_code == 1
        assert "Invalid style" in result.output
        assert not list(tmp_path.glob("*.otf"))


class TestImport:
    """Tests for the import command."""

    def test_import_exported_font(self, state: Path, artwork: Path, tmp_path: Path) -> None:
        """Test a font exported by fontmaker can be imported back."""
        runner.invoke(app, ["add", str(state), "A", str(artwork)])
        runner.invoke(app, ["export", str(state), "-o", str(tmp_path)])
        imported = tmp_path / "imported.json"

        result = runner.invoke(
            app, ["import", str(tmp_path / "Sketch-Regular.otf"), str(imported)]
        )

        assert result.exit_code == 0, result.output
        project = load_state(imported)
        assert project.metadata.family_name == "Sketch"
        assert project.records["A"].outline is not None

    def test_import_missing_font(self, tmp_path: Path) -> None:
        """Test a missing font is reported."""
        result = runner.invoke(
            app, ["import", str(tmp_path / "missing.otf"), str(tmp_path / "s.json")]
        )
        assert result.exit_code == 1
        assert "Could not load font" in result.output
