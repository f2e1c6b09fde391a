"""The character repertoire a font project covers."""

UPPER: tuple[str, ...] = tuple("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
LOWER: tuple[str, ...] = tuple("abcdefghijklmnopqrstuvwxyz")
DIGITS: tuple[str, ...] = tuple("0123456789")
PUNCTUATION: tuple[str, ...] = (
    ".", ",", "!", "?", ":", ";", "'", '"', "(", ")", "[", "]", "{", "}",
    "-", "_", "+", "=", "/", "\\", "@", "#", "$", "%", "&",
)

GLYPHS: tuple[str, ...] = UPPER + LOWER + DIGITS + PUNCTUATION


def is_supported(char: str) -> bool:
    """Check whether a character belongs to the repertoire."""
    return char in _GLYPH_SET


_GLYPH_SET = frozenset(GLYPHS)
