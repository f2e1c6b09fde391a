"""Font importer for building glyph records from existing fonts.

This module provides the FontImporter class, which loads a TTF/OTF font and
converts the outlines of every repertoire character it maps into glyph
records.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

import structlog
from fontTools.ttLib import TTFont, TTLibError

from fontmaker.domain import GLYPHS, GlyphRecord
from fontmaker.exceptions import FontLoadError
from fontmaker.io.converter import outline_from_glyph

logger = structlog.get_logger(__name__)

NAME_ID_FAMILY = 1
IMPORT_BEARING = 100.0


@dataclass
class ImportResult:
    """Glyph records recovered from a font.

    Attributes:
        records: Imported records keyed by character
        family_name: Family name from the name table, if present
        skipped: Repertoire characters that could not be imported
    """

    records: dict[str, GlyphRecord] = field(default_factory=dict)
    family_name: str | None = None
    skipped: list[str] = field(default_factory=list)


class FontImporter:
    """Loads TTF/OTF fonts and converts mapped glyphs to records.

    Bearings of imported records are not taken from the font: they are set
    to a fixed default so the editor's spacing tools start from a known
    state.

    Example:
        with FontImporter(Path("font.otf")) as importer:
            result = importer.import_glyphs()
            print(result.family_name, len(result.records))
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the importer.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = Path(font_path)
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FontLoadError: If the file is missing or not a valid font
        """
        if not self._font_path.exists():
            raise FontLoadError(str(self._font_path), "file not found")

        try:
            self._font = TTFont(str(self._font_path))
        except (TTLibError, OSError) as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

    @property
    def font(self) -> TTFont:
        """Return the loaded TTFont.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def family_name(self) -> str | None:
        """Return the family name (name ID 1), if present."""
        name_table = self.font.get("name")
        if name_table is None:
            return None
        record = name_table.getName(NAME_ID_FAMILY, 3, 1, 0x409) or name_table.getName(
            NAME_ID_FAMILY, 1, 0, 0
        )
        if record is None:
            return None
        return record.toUnicode()

    @property
    def units_per_em(self) -> int:
        """Return font's units per em."""
        return self.font["head"].unitsPerEm  # type: ignore[attr-defined]

    def iter_records(self, repertoire: Iterable[str] = GLYPHS) -> Iterator[GlyphRecord]:
        """Convert every mapped repertoire character to a glyph record.

        Characters missing from the cmap, failing to draw or drawing an empty
        outline are skipped.

        Args:
            repertoire: Characters to look up, in order

        Yields:
            GlyphRecord with the font's outline and advance width
        """
        for char in repertoire:
            record = self.get_record(char)
            if record is not None:
                yield record

    def get_record(self, char: str) -> GlyphRecord | None:
        """Convert one character to a glyph record.

        Args:
            char: Character to look up

        Returns:
            GlyphRecord, or None if the character cannot be imported
        """
        font = self.font
        cmap = font.getBestCmap() or {}
        glyph_name = cmap.get(ord(char))
        if glyph_name is None:
            return None

        try:
            outline = outline_from_glyph(font.getGlyphSet(), glyph_name)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Glyph import failed", glyph=char, name=glyph_name, error=str(e))
            return None

        if outline.is_empty():
            logger.debug("Glyph has no outline, skipping", glyph=char, name=glyph_name)
            return None

        advance_width, _ = font["hmtx"].metrics[glyph_name]
        return GlyphRecord(
            char=char,
            outline=outline,
            advance_width=float(advance_width),
            left_bearing=IMPORT_BEARING,
            right_bearing=IMPORT_BEARING,
        )

    def import_glyphs(self, repertoire: Iterable[str] = GLYPHS) -> ImportResult:
        """Import every available repertoire character.

        Args:
            repertoire: Characters to look up, in order

        Returns:
            ImportResult with records, family name and skipped characters
        """
        result = ImportResult(family_name=self.family_name)
        for char in repertoire:
            record = self.get_record(char)
            if record is None:
                result.skipped.append(char)
            else:
                result.records[char] = record

        logger.info(
            "Font imported",
            path=str(self._font_path),
            family=result.family_name,
            imported=len(result.records),
            skipped=len(result.skipped),
        )
        return result

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontImporter":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
