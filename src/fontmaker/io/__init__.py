"""Font and artwork I/O layer for fontmaker.

This module handles everything that crosses the process boundary. It
provides a clean abstraction layer between fonttools, Pillow and the
domain models.

Key responsibilities:
- Load raster artwork as pixel grids
- Parse SVG artwork into outlines
- Import glyph records from existing TTF/OTF fonts
- Compile and write OpenType fonts
- Persist and restore session state

Key classes:
- FontImporter: Load fonts and extract glyph records
- FontWriter: Compile and save fonts
- ProjectState: Persisted session snapshot
"""

from fontmaker.io.image import load_pixels
from fontmaker.io.reader import FontImporter, ImportResult
from fontmaker.io.state import ProjectState, load_state, save_state
from fontmaker.io.svg import load_svg, outline_from_svg
from fontmaker.io.writer import FontWriter

__all__ = [
    "FontImporter",
    "FontWriter",
    "ImportResult",
    "ProjectState",
    "load_pixels",
    "load_state",
    "load_svg",
    "outline_from_svg",
    "save_state",
]
