"""FontMaker - Assemble typefaces from glyph artwork.

FontMaker turns hand-drawn or traced glyph artwork into a binary OpenType font.
Raster images are traced into outlines, every glyph is transformed and spaced
according to its metrics, and one font file is exported per style variant
(Regular, Bold, Italic, BoldItalic).

Example:
    $ fontmaker init myfont.json
    $ fontmaker add myfont.json A drawings/A.png
    $ fontmaker export myfont.json --style Regular --style Bold

This will create MyFont-Regular.otf and MyFont-Bold.otf in the current directory.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
