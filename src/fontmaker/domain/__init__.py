"""Domain models for fontmaker.

This module contains the core domain models representing outlines, glyph
records and font-wide metrics. All models are designed to be:

- Immutable (frozen dataclasses, replaced whole on every edit)
- Serializable for session state files
- Independent of fonttools implementation details

Key classes:
- Point, PathCommand, Outline: Vector geometry of glyph artwork
- GlyphTransform: Scale/rotate/translate placement of artwork
- GlyphRecord: All editable state of one character
- GuideSet, FontMetadata: Vertical reference lines and font naming/metrics
- KerningTable: Ordered pair adjustments
- BoundingBox: Axis-aligned bounds
- StyleVariant: Regular/Bold/Italic/BoldItalic
- ExportGlyph, AssembledFont: Resolved contents of an exported font
"""

from fontmaker.domain.font import AssembledFont, ExportGlyph, KerningPair
from fontmaker.domain.glyph import GlyphRecord, GlyphTransform
from fontmaker.domain.metrics import BoundingBox, FontMetadata, GuideSet, KerningTable
from fontmaker.domain.outline import CommandType, Outline, PathCommand, Point
from fontmaker.domain.repertoire import GLYPHS, is_supported
from fontmaker.domain.style import StyleVariant

__all__: list[str] = [
    # Enums
    "CommandType",
    "StyleVariant",
    # Geometry
    "Point",
    "PathCommand",
    "Outline",
    "BoundingBox",
    # Glyphs
    "GlyphTransform",
    "GlyphRecord",
    # Export plan
    "AssembledFont",
    "ExportGlyph",
    "KerningPair",
    # Font-wide
    "GuideSet",
    "FontMetadata",
    "KerningTable",
    # Repertoire
    "GLYPHS",
    "is_supported",
]
