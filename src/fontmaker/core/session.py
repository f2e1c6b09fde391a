"""In-memory font project.

A FontSession holds one record per repertoire character plus the font-wide
guides, metadata, kerning and global spacing. Every edit replaces whole
values, so records and tables handed out by the session never change under
the caller.
"""

import dataclasses
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import structlog

from fontmaker.config import FontMakerSettings, get_default_settings
from fontmaker.core import alignment, spacing
from fontmaker.core.assembler import FontAssembler
from fontmaker.core.tracer import PixelGrid, RasterTracer, TraceResult
from fontmaker.core.typesetting import LayoutEntry, LayoutMode, Typesetter
from fontmaker.domain import (
    GLYPHS,
    AssembledFont,
    FontMetadata,
    GlyphRecord,
    GuideSet,
    KerningTable,
    Outline,
    StyleVariant,
    is_supported,
)
from fontmaker.exceptions import GlyphNotFoundError
from fontmaker.io.image import load_pixels
from fontmaker.io.state import ProjectState
from fontmaker.io.svg import load_svg, outline_from_svg

logger = structlog.get_logger(__name__)

_TRANSFORM_FIELDS = {
    "scale": "scale",
    "rotate": "rotate_degrees",
    "rotate_degrees": "rotate_degrees",
    "x": "translate_x",
    "translate_x": "translate_x",
    "y": "translate_y",
    "translate_y": "translate_y",
}
_METRIC_FIELDS = ("advance_width", "left_bearing", "right_bearing")


class FontSession:
    """Editable state of one typeface project.

    Example:
        session = FontSession()
        session.attach_image("A", Path("a.png"))
        session.set_kerning("A", "V", -80)
        path = session.export(StyleVariant.BOLD, Path("dist"))
    """

    def __init__(self, settings: FontMakerSettings | None = None) -> None:
        """Create a session with default records for the full repertoire.

        Args:
            settings: Application settings (defaults if None)
        """
        self.settings = settings or get_default_settings()
        defaults = self.settings.glyph_defaults
        self._records: dict[str, GlyphRecord] = {
            char: GlyphRecord(
                char=char,
                advance_width=defaults.advance_width,
                left_bearing=defaults.left_bearing,
                right_bearing=defaults.right_bearing,
            )
            for char in GLYPHS
        }
        self.guides = GuideSet()
        self.metadata = FontMetadata.from_guides(self.guides)
        self.kerning = KerningTable()
        self.letter_spacing = 1.0
        self.tracking = 0.0

        self.tracer = RasterTracer(self.settings.tracer)
        self.typesetter = Typesetter(self.settings.layout, self.settings.style)
        self.assembler = FontAssembler(self.settings)

    @property
    def records(self) -> Mapping[str, GlyphRecord]:
        """Read-only view of the glyph records."""
        return dict(self._records)

    def get(self, char: str) -> GlyphRecord:
        """Return the record of one character.

        Raises:
            GlyphNotFoundError: If the character is not in the repertoire
        """
        try:
            return self._records[char]
        except KeyError:
            raise GlyphNotFoundError(char) from None

    def _replace(self, record: GlyphRecord) -> GlyphRecord:
        if record.char not in self._records:
            raise GlyphNotFoundError(record.char)
        self._records[record.char] = record
        return record

    # Artwork

    def attach_outline(self, char: str, outline: Outline | None) -> GlyphRecord:
        """Attach (or with None, clear) a glyph's artwork."""
        record = self._replace(self.get(char).with_outline(outline))
        logger.debug(
            "Artwork attached",
            glyph=char,
            contours=outline.contour_count() if outline is not None else 0,
        )
        return record

    def attach_pixels(self, char: str, pixels: PixelGrid) -> TraceResult:
        """Trace a pixel grid and attach the result.

        Returns:
            TraceResult of the trace
        """
        self.get(char)
        result = self.tracer.trace(pixels)
        self.attach_outline(char, result.outline)
        return result

    def attach_image(self, char: str, path: Path) -> TraceResult:
        """Trace a raster image file and attach the result.

        Raises:
            ArtworkLoadError: If the image cannot be read
        """
        self.get(char)
        return self.attach_pixels(char, load_pixels(path))

    def attach_svg(self, char: str, source: Path | bytes | str) -> GlyphRecord:
        """Parse SVG artwork and attach it.

        Args:
            char: Target character
            source: SVG file path, or the document itself as bytes/str

        Raises:
            ArtworkLoadError: If the document cannot be read or parsed
        """
        self.get(char)
        outline = load_svg(source) if isinstance(source, Path) else outline_from_svg(source)
        return self.attach_outline(char, outline)

    # Glyph edits

    def update_glyph(self, char: str, **changes: Any) -> GlyphRecord:
        """Edit metrics, transform fields and flags of one glyph.

        Accepted keys: advance_width, left_bearing, right_bearing, scale,
        rotate / rotate_degrees, x / translate_x, y / translate_y,
        lock_cap_height, lock_x_height, normalize_center.

        Raises:
            GlyphNotFoundError: If the character is not in the repertoire
            ValueError: On an unknown key or an invalid value
        """
        record = self.get(char)
        transform_changes = {}
        metric_changes = {}
        flag_changes = {}
        for key, value in changes.items():
            if key in _TRANSFORM_FIELDS:
                transform_changes[_TRANSFORM_FIELDS[key]] = value
            elif key in _METRIC_FIELDS:
                metric_changes[key] = value
            elif key in ("lock_cap_height", "lock_x_height", "normalize_center"):
                flag_changes[key] = bool(value)
            else:
                raise ValueError(f"Unknown glyph field: {key}")

        if transform_changes:
            record = record.with_transform(**transform_changes)
        if metric_changes:
            record = record.with_metrics(**metric_changes)
        if flag_changes:
            record = dataclasses.replace(record, **flag_changes)
        return self._replace(record)

    def update_metrics(
        self,
        chars: Iterable[str],
        advance_width: float | None = None,
        left_bearing: float | None = None,
        right_bearing: float | None = None,
    ) -> None:
        """Set the same metrics on several glyphs."""
        self._records = spacing.update_metrics(
            self._records, chars, advance_width, left_bearing, right_bearing
        )

    def lock_cap_height(self, char: str) -> GlyphRecord:
        """Align one glyph to the cap height."""
        return self._replace(alignment.lock_cap_height(self.get(char), self.guides))

    def lock_x_height(self, char: str) -> GlyphRecord:
        """Align one glyph to the x-height."""
        return self._replace(alignment.lock_x_height(self.get(char), self.guides))

    def normalize_center(self, char: str) -> GlyphRecord:
        """Center one glyph's ink in its advance."""
        return self._replace(alignment.normalize_center(self.get(char)))

    # Font-wide settings

    def set_guides(self, guides: GuideSet) -> None:
        """Replace the guides and re-derive the vertical metrics."""
        self.guides = guides
        self.metadata = self.metadata.with_guides(guides)

    def override_metadata(self, **changes: Any) -> FontMetadata:
        """Override metadata fields directly (family_name, units_per_em, ...)."""
        self.metadata = dataclasses.replace(self.metadata, **changes)
        return self.metadata

    def set_kerning(self, left: str, right: str, value: float) -> None:
        """Set one kerning pair."""
        self.kerning = self.kerning.with_pair(left, right, value)

    def remove_kerning(self, left: str, right: str) -> None:
        """Remove one kerning pair (no-op if absent)."""
        self.kerning = self.kerning.without_pair(left, right)

    def apply_letter_spacing(self, value: float) -> None:
        """Change the global advance multiplier, rescaling every record."""
        self._records = spacing.apply_letter_spacing(self._records, self.letter_spacing, value)
        self.letter_spacing = value

    def apply_tracking(self, value: float) -> None:
        """Change the global tracking, shifting every advance."""
        self._records = spacing.apply_tracking(self._records, self.tracking, value)
        self.tracking = value

    def auto_tighten(self, factor: float = 0.85) -> None:
        """Shrink every bearing by a factor."""
        self._records = spacing.auto_tighten(self._records, factor)

    def auto_distribute(self) -> None:
        """Equalize advances and redistribute spare space."""
        self._records = spacing.auto_distribute(self._records)

    # Layout and export

    def layout(self, text: str, mode: LayoutMode | str = LayoutMode.TYPESET) -> list[LayoutEntry]:
        """Lay out preview text with the session's kerning.

        Records are already spaced, so no extra multiplier or tracking is
        applied here.
        """
        return self.typesetter.layout(text, self._records, self.kerning, LayoutMode(mode))

    def assemble(self, style: StyleVariant | str = StyleVariant.REGULAR) -> AssembledFont:
        """Plan one exported style."""
        metadata = dataclasses.replace(self.metadata, style_name=StyleVariant.parse(style).value)
        return self.assembler.assemble(self._records, style, metadata, self.kerning)

    def export(
        self,
        style: StyleVariant | str = StyleVariant.REGULAR,
        output_dir: Path | None = None,
    ) -> Path:
        """Export one style as ``{family}-{style}.otf``.

        The font is fully assembled before anything is written; a failure
        leaves the output directory and the session untouched.

        Returns:
            Path of the written font
        """
        return self.assembler.writer.save(self.assemble(style), output_dir)

    # Persistence

    def to_state(self) -> ProjectState:
        """Snapshot the session for persistence."""
        return ProjectState(
            records=dict(self._records),
            guides=self.guides,
            metadata=self.metadata,
            kerning=self.kerning,
            letter_spacing=self.letter_spacing,
            tracking=self.tracking,
        )

    @classmethod
    def from_state(
        cls, state: ProjectState, settings: FontMakerSettings | None = None
    ) -> "FontSession":
        """Rebuild a session from a persisted snapshot.

        Characters missing from the snapshot keep default records.
        """
        session = cls(settings)
        for char, record in state.records.items():
            if is_supported(char):
                session._records[char] = record
        session.guides = state.guides
        session.metadata = state.metadata
        session.kerning = state.kerning
        session.letter_spacing = state.letter_spacing
        session.tracking = state.tracking
        return session
