"""Planned contents of an exported font.

The assembler resolves glyph records into these values; the writer only
compiles them. Nothing here knows about fontTools tables.
"""

from dataclasses import dataclass, field

from fontmaker.domain.metrics import BoundingBox, FontMetadata
from fontmaker.domain.outline import Outline


@dataclass(frozen=True)
class ExportGlyph:
    """One glyph as it will appear in the font.

    Attributes:
        char: Character mapped to the glyph
        name: Glyph name
        outline: Outline with transform and style already applied
        bounds: Bounds of the transformed outline
        glyph_width: Ink width used for the advance calculation
        advance_width: Final integer advance written to hmtx
    """

    char: str
    name: str
    outline: Outline
    bounds: BoundingBox
    glyph_width: float
    advance_width: int

    @property
    def left_side_bearing(self) -> int:
        """Left side bearing written to hmtx (outline x_min)."""
        return round(self.bounds.x_min)


@dataclass(frozen=True)
class KerningPair:
    """Glyph-pair positioning rule."""

    left: str
    right: str
    value: int


@dataclass(frozen=True)
class AssembledFont:
    """Everything needed to compile one style of a font.

    Attributes:
        metadata: Naming and vertical metrics
        style_name: Style written to the name table
        glyphs: Exported glyphs in repertoire order
        kerning: Pair adjustments between exported glyph names
        skipped: Characters omitted for lack of artwork
        skipped_kerning: Kerning pairs dropped because a side was not exported
    """

    metadata: FontMetadata
    style_name: str
    glyphs: tuple[ExportGlyph, ...] = ()
    kerning: tuple[KerningPair, ...] = ()
    skipped: tuple[str, ...] = ()
    skipped_kerning: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def family_name(self) -> str:
        return self.metadata.family_name

    @property
    def glyph_order(self) -> list[str]:
        """Glyph names with the .notdef placeholder first."""
        return [".notdef"] + [glyph.name for glyph in self.glyphs]

    @property
    def cmap(self) -> dict[int, str]:
        """Code point to glyph name mapping."""
        return {ord(glyph.char): glyph.name for glyph in self.glyphs}
