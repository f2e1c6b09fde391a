"""Unit tests for font assembly planning."""

import pytest

from fontmaker.config import FontMakerSettings, StyleConfig
from fontmaker.core.assembler import FontAssembler
from fontmaker.domain import (
    GLYPHS,
    CommandType,
    FontMetadata,
    GlyphRecord,
    KerningTable,
    Outline,
    PathCommand,
    Point,
    StyleVariant,
)
from fontmaker.exceptions import GlyphExportError


def drawn(char: str, width: float = 400.0, height: float = 700.0) -> GlyphRecord:
    """Record with a rectangular outline and default metrics."""
    return GlyphRecord(char=char, outline=Outline.rectangle(0, 0, width, height))


@pytest.fixture
def assembler() -> FontAssembler:
    return FontAssembler()


class TestAssembleGlyph:
    """Tests for resolving a single glyph."""

    def test_regular_advance(self, assembler: FontAssembler) -> None:
        """Test advance is left + glyph width + right."""
        glyph = assembler.assemble_glyph(drawn("A"), StyleVariant.REGULAR)
        assert glyph.name == "A"
        assert glyph.glyph_width == 400.0
        assert glyph.advance_width == 600
        assert glyph.left_side_bearing == 0

    def test_wide_artwork_widens_advance(self, assembler: FontAssembler) -> None:
        """Test artwork wider than the ink width pushes the advance out."""
        glyph = assembler.assemble_glyph(drawn("W", width=550.0), StyleVariant.REGULAR)
        assert glyph.glyph_width == 550.0
        assert glyph.advance_width == 750

    def test_narrow_artwork_keeps_ink_width(self, assembler: FontAssembler) -> None:
        """Test narrow artwork keeps the record's ink width."""
        glyph = assembler.assemble_glyph(drawn("i", width=50.0), StyleVariant.REGULAR)
        assert glyph.glyph_width == 400.0
        assert glyph.advance_width == 600

    def test_bearings_exceeding_advance(self, assembler: FontAssembler) -> None:
        """Test advance below left + right is exported from the measured width."""
        record = GlyphRecord(
            char="l",
            outline=Outline.rectangle(0, 0, 30, 700),
            advance_width=150.0,
        )
        glyph = assembler.assemble_glyph(record, StyleVariant.REGULAR)
        assert record.ink_width == -50.0
        assert glyph.glyph_width == 30.0
        assert glyph.advance_width == 230

    def test_bold_advance(self, assembler: FontAssembler) -> None:
        """Test Bold scales the outline and applies the advance factor."""
        glyph = assembler.assemble_glyph(drawn("A"), StyleVariant.BOLD)
        assert glyph.bounds.width == pytest.approx(448.0)
        assert glyph.advance_width == round((100 + 448 + 100) * 1.08)

    def test_italic_widens_bounds(self, assembler: FontAssembler) -> None:
        """Test Italic shear increases the measured width."""
        regular = assembler.assemble_glyph(drawn("A"), StyleVariant.REGULAR)
        italic = assembler.assemble_glyph(drawn("A"), StyleVariant.ITALIC)
        assert italic.bounds.width > regular.bounds.width
        assert italic.advance_width > regular.advance_width

    def test_custom_style_config(self) -> None:
        """Test style modifiers come from the settings."""
        settings = FontMakerSettings(style=StyleConfig(bold_scale=1.0, bold_advance_factor=2.0))
        glyph = FontAssembler(settings).assemble_glyph(drawn("A"), StyleVariant.BOLD)
        assert glyph.advance_width == 1200

    def test_no_artwork(self, assembler: FontAssembler) -> None:
        """Test a record without artwork cannot be assembled."""
        with pytest.raises(GlyphExportError, match="no artwork"):
            assembler.assemble_glyph(GlyphRecord(char="A"), StyleVariant.REGULAR)

    def test_unmeasurable_outline(self, assembler: FontAssembler) -> None:
        """Test an outline without coordinates aborts."""
        record = GlyphRecord(char="A", outline=Outline(commands=(PathCommand(CommandType.CLOSE),)))
        with pytest.raises(GlyphExportError) as exc_info:
            assembler.assemble_glyph(record, StyleVariant.REGULAR)
        assert exc_info.value.char == "A"

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_outline(self, assembler: FontAssembler, bad: float) -> None:
        """Test corrupt coordinates abort with an error naming the glyph."""
        outline = Outline(
            commands=(
                PathCommand(CommandType.MOVE, (Point(bad, 0.0),)),
                PathCommand(CommandType.LINE, (Point(400.0, 0.0),)),
                PathCommand(CommandType.LINE, (Point(400.0, 700.0),)),
                PathCommand(CommandType.CLOSE),
            )
        )
        record = GlyphRecord(char="A", outline=outline)
        with pytest.raises(GlyphExportError, match="non-finite") as exc_info:
            assembler.assemble_glyph(record, StyleVariant.REGULAR)
        assert exc_info.value.char == "A"

    def test_non_finite_outline_aborts_export(self, assembler: FontAssembler) -> None:
        """Test one corrupt glyph aborts the whole export."""
        records = {
            "A": drawn("A"),
            "B": GlyphRecord(
                char="B",
                outline=Outline(
                    commands=(
                        PathCommand(CommandType.MOVE, (Point(float("nan"), 0.0),)),
                        PathCommand(CommandType.CLOSE),
                    )
                ),
            ),
        }
        with pytest.raises(GlyphExportError) as exc_info:
            assembler.export(records, StyleVariant.REGULAR, FontMetadata())
        assert exc_info.value.char == "B"


class TestAssemble:
    """Tests for planning a whole font."""

    def test_only_glyphs_with_artwork(self, assembler: FontAssembler) -> None:
        """Test characters without artwork are omitted, order preserved."""
        records = {char: GlyphRecord(char=char) for char in GLYPHS}
        records["V"] = drawn("V")
        records["A"] = drawn("A")
        records["&"] = drawn("&")

        font = assembler.assemble(records, StyleVariant.REGULAR, FontMetadata())

        assert [g.char for g in font.glyphs] == ["A", "V", "&"]
        assert font.glyph_order == [".notdef", "A", "V", "ampersand"]
        assert len(font.skipped) == len(GLYPHS) - 3
        assert font.style_name == "Regular"

    def test_kerning_filtered_to_exported(self, assembler: FontAssembler) -> None:
        """Test pairs with a missing side are dropped."""
        records = {"A": drawn("A"), "V": drawn("V"), "B": GlyphRecord(char="B")}
        kerning = KerningTable({("A", "V"): -80.4, ("A", "B"): -20, ("V", "A"): -60})

        font = assembler.assemble(records, "Bold", FontMetadata(), kerning)

        assert [(p.left, p.right, p.value) for p in font.kerning] == [
            ("A", "V", -80),
            ("V", "A", -60),
        ]
        assert font.skipped_kerning == (("A", "B"),)
        assert font.style_name == "Bold"

    def test_custom_repertoire(self, assembler: FontAssembler) -> None:
        """Test a repertoire restricts and orders the characters."""
        records = {"A": drawn("A"), "B": drawn("B")}
        font = assembler.assemble(records, "Regular", FontMetadata(), repertoire="BA")
        assert [g.char for g in font.glyphs] == ["B", "A"]

    def test_failure_aborts(self, assembler: FontAssembler) -> None:
        """Test one unmeasurable glyph aborts the whole plan."""
        records = {
            "A": drawn("A"),
            "B": GlyphRecord(char="B", outline=Outline(commands=(PathCommand(CommandType.CLOSE),))),
        }
        with pytest.raises(GlyphExportError):
            assembler.assemble(records, "Regular", FontMetadata())

    def test_stats_recorded(self, assembler: FontAssembler) -> None:
        """Test export statistics are kept for the last call."""
        records = {"A": drawn("A"), "V": drawn("V")}
        assembler.assemble(records, "Regular", FontMetadata(), KerningTable({("A", "V"): -80}))
        stats = assembler.last_stats
        assert stats is not None
        assert stats.exported_count == 2
        assert stats.skipped_count == len(GLYPHS) - 2
        assert stats.kerning_pairs == 1

    def test_unknown_style(self, assembler: FontAssembler) -> None:
        """Test an unknown style name is rejected."""
        with pytest.raises(ValueError, match="Unknown style"):
            assembler.assemble({}, "Oblique", FontMetadata())
