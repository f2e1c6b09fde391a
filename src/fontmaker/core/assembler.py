"""Font assembly orchestration.

This module turns the glyph records of a project into an exportable font for
one style variant:

1. Walk the repertoire in order and skip characters without artwork
2. Apply each glyph's transform plus the style modifiers
3. Measure the transformed outline and resolve the advance width
4. Keep the kerning pairs whose both sides were exported
5. Hand the plan to the writer for compilation

A glyph that cannot be measured aborts the whole export; nothing is written
in that case.
"""

import math
import time
from collections.abc import Iterable, Mapping
from pathlib import Path

import structlog
from fontTools.ttLib import TTFont

from fontmaker.config import FontMakerSettings, get_default_settings
from fontmaker.core.bounds import compute_bounds
from fontmaker.core.transform import transform_outline
from fontmaker.domain import (
    GLYPHS,
    AssembledFont,
    ExportGlyph,
    FontMetadata,
    GlyphRecord,
    KerningPair,
    KerningTable,
    StyleVariant,
)
from fontmaker.exceptions import GlyphExportError
from fontmaker.io.converter import glyph_name_for_char
from fontmaker.io.writer import FontWriter
from fontmaker.utils import ExportLogger, ExportStats


class FontAssembler:
    """Plans and compiles fonts from glyph records.

    Example:
        assembler = FontAssembler(settings)
        font = assembler.assemble(records, StyleVariant.BOLD, metadata, kerning)
        data = assembler.export(records, StyleVariant.BOLD, metadata, kerning)
    """

    def __init__(self, settings: FontMakerSettings | None = None) -> None:
        """Initialize the assembler.

        Args:
            settings: Application settings (defaults if None)
        """
        self.settings = settings or get_default_settings()
        self.writer = FontWriter(self.settings.export)
        self.logger = structlog.get_logger(__name__)
        self._last_stats: ExportStats | None = None

    @property
    def last_stats(self) -> ExportStats | None:
        """Statistics of the most recent assemble call."""
        return self._last_stats

    def assemble_glyph(self, record: GlyphRecord, style: StyleVariant) -> ExportGlyph:
        """Resolve the exported form of one glyph.

        Args:
            record: Glyph record with artwork
            style: Style variant to apply

        Returns:
            ExportGlyph with transformed outline and final advance

        Raises:
            GlyphExportError: If the glyph has no artwork or no measurable bounds
        """
        if record.outline is None:
            raise GlyphExportError(record.char, "glyph has no artwork")

        outline = transform_outline(record.outline, record.transform, style, self.settings.style)
        if not all(math.isfinite(p.x) and math.isfinite(p.y) for p in outline.iter_points()):
            raise GlyphExportError(record.char, "outline has non-finite coordinates")

        bounds = compute_bounds(outline)
        if bounds is None:
            raise GlyphExportError(record.char, "outline has no coordinates")

        modifiers = self.settings.style.modifiers(style)
        glyph_width = max(bounds.width, record.ink_width)
        spaced = record.left_bearing + glyph_width + record.right_bearing
        advance = spaced * modifiers.advance_factor

        return ExportGlyph(
            char=record.char,
            name=glyph_name_for_char(record.char),
            outline=outline,
            bounds=bounds,
            glyph_width=glyph_width,
            advance_width=round(advance),
        )

    def assemble(
        self,
        records: Mapping[str, GlyphRecord],
        style: StyleVariant | str,
        metadata: FontMetadata,
        kerning: KerningTable | None = None,
        repertoire: Iterable[str] | None = None,
    ) -> AssembledFont:
        """Plan the contents of one exported style.

        Args:
            records: Glyph records keyed by character
            style: Style variant to export
            metadata: Font naming and vertical metrics
            kerning: Pair adjustments (none if None)
            repertoire: Characters to consider, in order (full repertoire if None)

        Returns:
            AssembledFont ready for compilation

        Raises:
            GlyphExportError: If any glyph with artwork cannot be measured
        """
        style = StyleVariant.parse(style)
        kerning = kerning if kerning is not None else KerningTable()
        chars = tuple(repertoire) if repertoire is not None else GLYPHS

        export_logger = ExportLogger(self.logger, style=style.value)
        export_logger.stats.start_time = time.time()

        glyphs: list[ExportGlyph] = []
        for char in chars:
            record = records.get(char)
            if record is None or record.outline is None:
                export_logger.log_glyph_skipped(char, "no artwork")
                continue

            export_logger.log_glyph_start(char)
            start = time.perf_counter()
            try:
                glyph = self.assemble_glyph(record, style)
            except GlyphExportError as e:
                export_logger.log_glyph_error(char, e)
                raise
            export_logger.log_glyph_complete(
                char, glyph.advance_width, (time.perf_counter() - start) * 1000
            )
            glyphs.append(glyph)

        names = {glyph.char: glyph.name for glyph in glyphs}
        pairs: list[KerningPair] = []
        skipped_pairs: list[tuple[str, str]] = []
        for (left, right), value in kerning.items():
            if left in names and right in names:
                pairs.append(KerningPair(names[left], names[right], round(value)))
            else:
                skipped_pairs.append((left, right))
        export_logger.log_kerning(len(pairs), len(skipped_pairs))

        export_logger.stats.end_time = time.time()
        self._last_stats = export_logger.stats

        self.logger.info(
            "Font assembled",
            family=metadata.family_name,
            style=style.value,
            glyphs=len(glyphs),
            skipped=export_logger.stats.skipped_count,
            kerning_pairs=len(pairs),
        )

        return AssembledFont(
            metadata=metadata,
            style_name=style.value,
            glyphs=tuple(glyphs),
            kerning=tuple(pairs),
            skipped=tuple(export_logger.stats.skipped),
            skipped_kerning=tuple(skipped_pairs),
        )

    def build(
        self,
        records: Mapping[str, GlyphRecord],
        style: StyleVariant | str,
        metadata: FontMetadata,
        kerning: KerningTable | None = None,
        repertoire: Iterable[str] | None = None,
    ) -> TTFont:
        """Assemble and compile one style to an in-memory TTFont."""
        return self.writer.build(self.assemble(records, style, metadata, kerning, repertoire))

    def export(
        self,
        records: Mapping[str, GlyphRecord],
        style: StyleVariant | str,
        metadata: FontMetadata,
        kerning: KerningTable | None = None,
        repertoire: Iterable[str] | None = None,
    ) -> bytes:
        """Assemble and compile one style to OpenType bytes.

        Args:
            records: Glyph records keyed by character
            style: Style variant to export
            metadata: Font naming and vertical metrics
            kerning: Pair adjustments (none if None)
            repertoire: Characters to consider (full repertoire if None)

        Returns:
            Binary font data
        """
        return self.writer.to_bytes(self.assemble(records, style, metadata, kerning, repertoire))

    def save(
        self,
        records: Mapping[str, GlyphRecord],
        style: StyleVariant | str,
        metadata: FontMetadata,
        kerning: KerningTable | None = None,
        output_dir: Path | None = None,
    ) -> Path:
        """Assemble, compile and write one style as ``{family}-{style}.otf``.

        Returns:
            Path of the written file
        """
        return self.writer.save(self.assemble(records, style, metadata, kerning), output_dir)
