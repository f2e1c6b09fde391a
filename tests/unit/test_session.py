"""Unit tests for the in-memory font session."""

from pathlib import Path

import pytest
from PIL import Image

from fontmaker.core import FontSession, LayoutMode
from fontmaker.domain import GLYPHS, CommandType, GuideSet, Outline, PathCommand, StyleVariant
from fontmaker.exceptions import ArtworkLoadError, GlyphExportError, GlyphNotFoundError

INK = (0, 0, 0, 255)
CLEAR = (0, 0, 0, 0)

SQUARE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">'
    '<rect x="20" y="20" width="60" height="60"/></svg>'
)


@pytest.fixture
def session() -> FontSession:
    return FontSession()


class TestSessionRecords:
    """Tests for record access and edits."""

    def test_default_records(self, session: FontSession) -> None:
        """Test a new session covers the repertoire without artwork."""
        assert list(session.records) == list(GLYPHS)
        assert not any(r.has_outline for r in session.records.values())
        assert session.get("A").advance_width == 600.0

    def test_unknown_character(self, session: FontSession) -> None:
        """Test unknown characters raise GlyphNotFoundError."""
        with pytest.raises(GlyphNotFoundError):
            session.get("é")
        with pytest.raises(GlyphNotFoundError):
            session.attach_outline("é", Outline.rectangle(0, 0, 1, 1))

    def test_records_is_a_copy(self, session: FontSession) -> None:
        """Test callers cannot change the session through records."""
        records = session.records
        records["A"] = records["A"].with_metrics(advance_width=1.0)  # type: ignore[index]
        assert session.get("A").advance_width == 600.0

    def test_update_glyph(self, session: FontSession) -> None:
        """Test transform, metric and flag edits in one call."""
        record = session.update_glyph(
            "A", scale=2.0, x=10.0, rotate=5.0, advance_width=500.0, normalize_center=True
        )
        assert record.transform.scale == 2.0
        assert record.transform.translate_x == 10.0
        assert record.transform.rotate_degrees == 5.0
        assert record.advance_width == 500.0
        assert record.normalize_center
        assert session.get("A") == record

    def test_update_glyph_unknown_field(self, session: FontSession) -> None:
        """Test unknown fields are rejected."""
        with pytest.raises(ValueError, match="Unknown glyph field"):
            session.update_glyph("A", width=3)

    def test_update_glyph_invalid_value(self, session: FontSession) -> None:
        """Test invalid values leave the record untouched."""
        with pytest.raises(ValueError):
            session.update_glyph("A", left_bearing=-10.0)
        assert session.get("A").left_bearing == 100.0

    def test_update_metrics(self, session: FontSession) -> None:
        """Test bulk metric edits."""
        session.update_metrics("il", advance_width=300.0)
        assert session.get("i").advance_width == 300.0
        assert session.get("l").advance_width == 300.0
        assert session.get("m").advance_width == 600.0


class TestSessionArtwork:
    """Tests for attaching artwork."""

    def test_attach_pixels(self, session: FontSession) -> None:
        """Test pixel grids are traced and attached."""
        result = session.attach_pixels("I", [[INK, CLEAR], [INK, CLEAR]])
        assert result.ink_pixels == 2
        assert session.get("I").outline == result.outline

    def test_attach_image(self, session: FontSession, tmp_path: Path) -> None:
        """Test raster files are loaded and traced."""
        image = Image.new("RGBA", (4, 4), CLEAR)
        for y in range(4):
            image.putpixel((1, y), INK)
        path = tmp_path / "l.png"
        image.save(path)

        result = session.attach_image("l", path)
        assert not result.used_fallback
        assert session.get("l").outline.contour_count() == 4

    def test_attach_missing_image(self, session: FontSession, tmp_path: Path) -> None:
        """Test unreadable images leave the record untouched."""
        with pytest.raises(ArtworkLoadError):
            session.attach_image("A", tmp_path / "missing.png")
        assert session.get("A").outline is None

    def test_attach_svg(self, session: FontSession, tmp_path: Path) -> None:
        """Test SVG sources can be text or a path."""
        session.attach_svg("O", SQUARE_SVG)
        assert session.get("O").outline.contour_count() == 1

        path = tmp_path / "o.svg"
        path.write_text(SQUARE_SVG, encoding="utf-8")
        session.attach_svg("o", path)
        assert session.get("o").has_outline

    def test_clear_artwork(self, session: FontSession) -> None:
        """Test attaching None clears the artwork."""
        session.attach_outline("A", Outline.rectangle(0, 0, 10, 10))
        session.attach_outline("A", None)
        assert session.get("A").outline is None


class TestSessionAlignment:
    """Tests for alignment through the session."""

    def test_lock_cap_height_uses_session_guides(self, session: FontSession) -> None:
        """Test alignment targets the session guides."""
        session.set_guides(GuideSet(baseline=800.0, cap_height=300.0))
        session.attach_outline("H", Outline.rectangle(0, 0, 100, 100))
        record = session.lock_cap_height("H")
        assert record.transform.scale == pytest.approx(5.0)
        assert record.lock_cap_height

    def test_normalize_center(self, session: FontSession) -> None:
        """Test centering through the session."""
        session.attach_outline("o", Outline.rectangle(0, 0, 200, 200))
        assert session.normalize_center("o").transform.translate_x == 200.0


class TestSessionFontWide:
    """Tests for guides, metadata, kerning and spacing."""

    def test_set_guides_rederives_metadata(self, session: FontSession) -> None:
        """Test guides drive the vertical metrics."""
        session.override_metadata(family_name="Sketch")
        session.set_guides(GuideSet(em_top=0.0, baseline=750.0, em_bottom=1000.0))
        assert session.metadata.units_per_em == 1000.0
        assert session.metadata.ascender == 750.0
        assert session.metadata.descender == 250.0
        assert session.metadata.family_name == "Sketch"

    def test_override_metadata_unknown_field(self, session: FontSession) -> None:
        """Test unknown metadata fields are rejected."""
        with pytest.raises(TypeError):
            session.override_metadata(weight=700)

    def test_kerning(self, session: FontSession) -> None:
        """Test setting and removing pairs."""
        session.set_kerning("A", "V", -80)
        assert session.kerning.adjustment("A", "V") == -80
        session.remove_kerning("A", "V")
        assert len(session.kerning) == 0

    def test_letter_spacing(self, session: FontSession) -> None:
        """Test multiplier changes are relative to the previous value."""
        session.apply_letter_spacing(2.0)
        session.apply_letter_spacing(1.5)
        assert session.letter_spacing == 1.5
        assert session.get("A").advance_width == pytest.approx(900.0)

    def test_tracking(self, session: FontSession) -> None:
        """Test tracking changes are relative to the previous value."""
        session.apply_tracking(20.0)
        session.apply_tracking(5.0)
        assert session.tracking == 5.0
        assert session.get("A").advance_width == pytest.approx(605.0)

    def test_auto_tighten_and_distribute(self, session: FontSession) -> None:
        """Test automatic spacing operates on every record."""
        session.update_glyph("W", advance_width=900.0)
        session.auto_tighten(0.5)
        assert session.get("A").left_bearing == 50.0
        session.auto_distribute()
        advances = {r.advance_width for r in session.records.values()}
        assert len(advances) == 1

    def test_layout_uses_kerning(self, session: FontSession) -> None:
        """Test preview layout applies session kerning."""
        session.set_kerning("A", "V", -300)
        entries = session.layout("AV")
        assert entries[1].start == 300.0
        assert entries[1].collision

    def test_layout_mode_by_name(self, session: FontSession) -> None:
        """Test layout modes can be named."""
        session.update_glyph("W", advance_width=900.0)
        entries = session.layout("AW", "monospace")
        assert [e.advance for e in entries] == [900.0, 900.0]
        assert session.layout("A", LayoutMode.GRID)[0].advance == 600.0


class TestSessionExport:
    """Tests for assembling and exporting."""

    def test_assemble_sets_style(self, session: FontSession) -> None:
        """Test the planned font carries the requested style."""
        session.attach_outline("A", Outline.rectangle(0, 0, 400, 700))
        font = session.assemble("bold")
        assert font.style_name == "Bold"
        assert font.metadata.style_name == "Bold"
        assert [g.char for g in font.glyphs] == ["A"]

    def test_export_writes_file(self, session: FontSession, tmp_path: Path) -> None:
        """Test export writes {family}-{style}.otf."""
        session.override_metadata(family_name="Sketch")
        session.attach_outline("A", Outline.rectangle(0, 0, 400, 700))
        path = session.export(StyleVariant.ITALIC, tmp_path)
        assert path == tmp_path / "Sketch-Italic.otf"
        assert path.stat().st_size > 0

    def test_failed_export_writes_nothing(self, session: FontSession, tmp_path: Path) -> None:
        """Test an unmeasurable glyph aborts without output."""
        session.attach_outline("A", Outline.rectangle(0, 0, 400, 700))
        session.attach_outline("B", Outline(commands=(PathCommand(CommandType.CLOSE),)))
        with pytest.raises(GlyphExportError):
            session.export(StyleVariant.REGULAR, tmp_path)
        assert list(tmp_path.iterdir()) == []
        assert session.get("A").has_outline


class TestSessionState:
    """Tests for state snapshots."""

    def test_round_trip(self, session: FontSession) -> None:
        """Test to_state/from_state preserve the project."""
        session.attach_outline("A", Outline.rectangle(0, 0, 400, 700))
        session.set_kerning("A", "V", -80)
        session.apply_letter_spacing(1.25)
        session.override_metadata(family_name="Sketch")

        restored = FontSession.from_state(session.to_state())

        assert restored.records == session.records
        assert restored.kerning.adjustment("A", "V") == -80
        assert restored.letter_spacing == 1.25
        assert restored.metadata.family_name == "Sketch"

    def test_partial_state_keeps_defaults(self, session: FontSession) -> None:
        """Test characters missing from a snapshot keep default records."""
        state = session.to_state()
        state.records = {"A": state.records["A"].with_metrics(advance_width=700.0)}
        restored = FontSession.from_state(state)
        assert restored.get("A").advance_width == 700.0
        assert restored.get("B").advance_width == 600.0
