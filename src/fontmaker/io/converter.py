"""Converters between fonttools and domain models.

This module handles the conversion between fonttools drawing (pens, glyph
sets, CFF charstrings) and our Outline model, plus glyph naming.
"""

from typing import Any

from fontTools.agl import UV2AGL
from fontTools.pens.basePen import BasePen
from fontTools.pens.t2CharStringPen import T2CharStringPen

from fontmaker.domain import CommandType, Outline, PathCommand, Point


class OutlinePen(BasePen):
    """Segment pen that records drawing into an Outline.

    Quadratic segments are converted to cubic by BasePen, and components are
    decomposed through the glyph set, so the recorded outline only holds
    MOVE, LINE, CURVE and CLOSE commands. Open contours are closed: outlines
    are fill-only.

    Example:
        pen = OutlinePen(font.getGlyphSet())
        font.getGlyphSet()["A"].draw(pen)
        outline = pen.outline()
    """

    def __init__(self, glyphSet: Any = None) -> None:
        super().__init__(glyphSet)
        self._commands: list[PathCommand] = []

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self._commands.append(PathCommand(CommandType.MOVE, (Point(*pt),)))

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self._commands.append(PathCommand(CommandType.LINE, (Point(*pt),)))

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self._commands.append(
            PathCommand(CommandType.CURVE, (Point(*pt1), Point(*pt2), Point(*pt3)))
        )

    def _closePath(self) -> None:
        self._commands.append(PathCommand(CommandType.CLOSE))

    def _endPath(self) -> None:
        self._commands.append(PathCommand(CommandType.CLOSE))

    def outline(self, width: float | None = None, height: float | None = None) -> Outline:
        """Build an Outline from everything drawn so far.

        Args:
            width: Source canvas width, if known
            height: Source canvas height, if known

        Returns:
            Recorded Outline
        """
        return Outline(commands=tuple(self._commands), width=width, height=height)


def outline_from_glyph(glyph_set: Any, glyph_name: str) -> Outline:
    """Convert a glyph from a fonttools glyph set to an Outline.

    Handles both TrueType (quadratic) and CFF (cubic) glyphs.

    Args:
        glyph_set: Glyph set from TTFont.getGlyphSet()
        glyph_name: Name of the glyph to convert

    Returns:
        Outline in font units
    """
    pen = OutlinePen(glyph_set)
    glyph_set[glyph_name].draw(pen)
    return pen.outline()


def outline_to_charstring(outline: Outline, advance_width: int, glyph_set: Any = None) -> Any:
    """Compile an Outline to a Type 2 charstring.

    Args:
        outline: Outline to compile
        advance_width: Advance width stored in the charstring
        glyph_set: Optional glyph set for component lookups

    Returns:
        T2CharString ready for a CFF table
    """
    pen = T2CharStringPen(width=advance_width, glyphSet=glyph_set)
    outline.draw(pen)
    return pen.getCharString()


def glyph_name_for_char(char: str) -> str:
    """Resolve the production glyph name of a character.

    Uses the Adobe Glyph List, falling back to ``uniXXXX``.

    Examples:
        >>> glyph_name_for_char("A")
        'A'
        >>> glyph_name_for_char("&")
        'ampersand'
    """
    code_point = ord(char)
    return UV2AGL.get(code_point, f"uni{code_point:04X}")
