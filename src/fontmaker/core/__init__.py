"""Core processing algorithms for fontmaker.

This module contains the glyph geometry and typesetting pipeline:

- Raster tracing (pixel grids to rectangle-run outlines)
- Path transforms (scale, italic shear, rotation, translation)
- Bounding boxes of transformed outlines
- Typesetting (advances, kerning, tracking, collision flags)
- Font assembly (resolving records into an exportable font)
- Batch spacing and alignment edits
- The in-memory font session

The geometry services are stateless and pure; only FontSession holds state.

Key functions:
- transform_outline: Apply a glyph transform and style variant
- compute_bounds: Axis-aligned bounds of an outline
- glyph_bounds: Bounds of a record's transformed artwork

Key classes:
- RasterTracer: Converts bitmap artwork to outlines
- Typesetter: Lays out text
- FontAssembler: Plans and compiles fonts
- FontSession: Editable typeface project
"""

from fontmaker.core.assembler import FontAssembler
from fontmaker.core.bounds import compute_bounds, glyph_bounds
from fontmaker.core.session import FontSession
from fontmaker.core.tracer import RasterTracer, TraceResult, trace_pixels
from fontmaker.core.transform import transform_outline, transform_point
from fontmaker.core.typesetting import LayoutEntry, LayoutMode, Typesetter

__all__ = [
    # Assembly
    "FontAssembler",
    # Session
    "FontSession",
    # Typesetting
    "LayoutEntry",
    "LayoutMode",
    # Tracing
    "RasterTracer",
    "TraceResult",
    "Typesetter",
    # Geometry functions
    "compute_bounds",
    "glyph_bounds",
    "trace_pixels",
    "transform_outline",
    "transform_point",
]
