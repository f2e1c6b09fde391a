"""Typesetting engine for laying out a string of glyphs.

The engine walks the text left to right with a running cursor and resolves,
for every character, its advance, bearings, visible ink width and start
position. Kerning, letter spacing, tracking and the layout mode all feed into
the result. A glyph is flagged as colliding when its ink starts before the
furthest ink end of any earlier glyph, so heavy kerning that pulls a glyph
back over two or more predecessors is caught too.

Layout is a pure function of its inputs: the same text, records, kerning and
mode always give the same entries.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum

from fontmaker.config import LayoutConfig, StyleConfig
from fontmaker.core.bounds import glyph_bounds
from fontmaker.domain import BoundingBox, GlyphRecord, KerningTable


class LayoutMode(str, Enum):
    """How advances and positions are resolved."""

    TYPESET = "typeset"
    MONOSPACE = "monospace"
    GRID = "grid"
    BOUNDING = "bounding"


@dataclass(frozen=True)
class LayoutEntry:
    """Resolved placement of one character.

    Attributes:
        index: Position of the character in the text
        char: The character
        advance: Final advance after spacing, tracking and snapping
        left_bearing: Resolved left bearing
        right_bearing: Resolved right bearing
        width: Visible ink width
        start: Horizontal start position
        collision: True if the ink overlaps the previous glyph's ink
        ink_bounds: Transformed artwork bounds (bounding mode only)
    """

    index: int
    char: str
    advance: float
    left_bearing: float
    right_bearing: float
    width: float
    start: float
    collision: bool
    ink_bounds: BoundingBox | None = None

    @property
    def ink_start(self) -> float:
        """Left edge of the visible ink."""
        return self.start + self.left_bearing

    @property
    def ink_end(self) -> float:
        """Right edge of the visible ink."""
        return self.start + self.left_bearing + self.width

    @property
    def end(self) -> float:
        """Cursor position after this glyph."""
        return self.start + self.advance


class Typesetter:
    """Lays out text from glyph records, kerning and spacing settings.

    The typesetter is stateless; every call starts from a fresh cursor.

    Example:
        typesetter = Typesetter()
        for entry in typesetter.iter_layout("AV", records, kerning):
            print(entry.char, entry.start, entry.collision)
    """

    def __init__(
        self,
        config: LayoutConfig | None = None,
        style_config: StyleConfig | None = None,
    ) -> None:
        """Initialize the typesetter.

        Args:
            config: Layout fallbacks and grid size (defaults if None)
            style_config: Style settings used to measure artwork in bounding mode
        """
        self.config = config or LayoutConfig()
        self.style_config = style_config or StyleConfig()

    def uniform_advance(self, glyphs: Mapping[str, GlyphRecord]) -> float:
        """Advance used for every glyph in monospace mode.

        Args:
            glyphs: All known glyph records

        Returns:
            Maximum advance among the records, or the default advance if none
        """
        if not glyphs:
            return self.config.default_advance
        return max(record.advance_width for record in glyphs.values())

    def iter_layout(
        self,
        text: str,
        glyphs: Mapping[str, GlyphRecord],
        kerning: KerningTable | None = None,
        mode: LayoutMode = LayoutMode.TYPESET,
        letter_spacing: float = 1.0,
        tracking: float = 0.0,
    ) -> Iterator[LayoutEntry]:
        """Lazily lay out a string.

        Args:
            text: Characters to lay out
            glyphs: Lookup from character to glyph record
            kerning: Pair adjustments (none if None)
            mode: Layout mode
            letter_spacing: Multiplier for advances, bearings and ink width
            tracking: Offset added to every final advance

        Yields:
            One LayoutEntry per character, left to right
        """
        mode = LayoutMode(mode)
        kerning = kerning if kerning is not None else KerningTable()
        uniform = self.uniform_advance(glyphs) if mode == LayoutMode.MONOSPACE else None
        grid = self.config.grid_unit

        cursor = 0.0
        ink_reach = float("-inf")
        previous: LayoutEntry | None = None

        for index, char in enumerate(text):
            if previous is not None:
                cursor += kerning.adjustment(previous.char, char)

            record = glyphs.get(char)
            if record is not None:
                base_advance = record.advance_width
                base_left = record.left_bearing
                base_right = record.right_bearing
            else:
                base_advance = self.config.default_advance
                base_left = self.config.default_bearing
                base_right = self.config.default_bearing

            raw_width = max(base_advance - base_left - base_right, self.config.min_ink_width)
            used_advance = uniform if uniform is not None else base_advance
            ratio = used_advance / max(base_advance, 1.0)

            advance = used_advance * letter_spacing + tracking
            left = base_left * ratio * letter_spacing
            right = base_right * ratio * letter_spacing
            width = raw_width * ratio * letter_spacing

            start = cursor
            if mode == LayoutMode.GRID:
                start = _snap(start, grid)
                advance = _snap(advance, grid)

            collision = previous is not None and start + left < ink_reach

            ink_bounds = None
            if mode == LayoutMode.BOUNDING and record is not None:
                ink_bounds = glyph_bounds(record, style_config=self.style_config)

            entry = LayoutEntry(
                index=index,
                char=char,
                advance=advance,
                left_bearing=left,
                right_bearing=right,
                width=width,
                start=start,
                collision=collision,
                ink_bounds=ink_bounds,
            )
            yield entry

            previous = entry
            ink_reach = max(ink_reach, entry.ink_end)
            cursor = start + advance

    def layout(
        self,
        text: str,
        glyphs: Mapping[str, GlyphRecord],
        kerning: KerningTable | None = None,
        mode: LayoutMode = LayoutMode.TYPESET,
        letter_spacing: float = 1.0,
        tracking: float = 0.0,
    ) -> list[LayoutEntry]:
        """Lay out a string eagerly.

        Same arguments as iter_layout.

        Returns:
            List of LayoutEntry, one per character
        """
        return list(
            self.iter_layout(
                text,
                glyphs,
                kerning=kerning,
                mode=mode,
                letter_spacing=letter_spacing,
                tracking=tracking,
            )
        )


def _snap(value: float, unit: float) -> float:
    """Round to the nearest multiple of unit."""
    return round(value / unit) * unit


def total_width(entries: list[LayoutEntry]) -> float:
    """Rightmost cursor position reached by a layout."""
    return max((entry.end for entry in entries), default=0.0)
