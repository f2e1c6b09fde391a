"""Style variants selected at export time."""

from enum import Enum


class StyleVariant(str, Enum):
    """Synthesized style variant.

    Styles are not separate artwork: they are applied as geometric modifiers
    when a font is exported, so the underlying glyph records never change.
    """

    REGULAR = "Regular"
    BOLD = "Bold"
    ITALIC = "Italic"
    BOLD_ITALIC = "BoldItalic"

    @property
    def is_bold(self) -> bool:
        """Whether the style carries the bold modifiers."""
        return self in (StyleVariant.BOLD, StyleVariant.BOLD_ITALIC)

    @property
    def is_italic(self) -> bool:
        """Whether the style carries the italic slant."""
        return self in (StyleVariant.ITALIC, StyleVariant.BOLD_ITALIC)

    @classmethod
    def parse(cls, value: str) -> "StyleVariant":
        """Parse a style name case-insensitively.

        Args:
            value: Style name such as "bold" or "BoldItalic"

        Returns:
            Matching StyleVariant

        Raises:
            ValueError: If the name does not match any style
        """
        normalized = value.replace("-", "").replace("_", "").replace(" ", "").lower()
        for style in cls:
            if style.value.lower() == normalized:
                return style
        raise ValueError(f"Unknown style: {value}")
