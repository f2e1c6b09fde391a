"""Glyph records and their geometric transforms.

This module defines the per-character state of a font project: the artwork
outline, how it is placed (scale, rotation, translation) and how much
horizontal space the character consumes.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from fontmaker.domain.outline import Outline


@dataclass(frozen=True, slots=True)
class GlyphTransform:
    """Placement of a glyph's artwork in design space.

    Attributes:
        scale: Uniform scale factor (must be positive)
        rotate_degrees: Rotation about the origin, counter-clockwise
        translate_x: Horizontal offset in design units
        translate_y: Vertical offset in design units
    """

    scale: float = 1.0
    rotate_degrees: float = 0.0
    translate_x: float = 0.0
    translate_y: float = 0.0

    def __post_init__(self) -> None:
        if not self.scale > 0:
            raise ValueError(f"Glyph scale must be positive, got {self.scale}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with scale, rotate, x and y fields
        """
        return {
            "scale": self.scale,
            "rotate": self.rotate_degrees,
            "x": self.translate_x,
            "y": self.translate_y,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphTransform":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with scale, rotate, x and y fields

        Returns:
            GlyphTransform instance
        """
        return cls(
            scale=data.get("scale", 1.0),
            rotate_degrees=data.get("rotate", 0.0),
            translate_x=data.get("x", 0.0),
            translate_y=data.get("y", 0.0),
        )


@dataclass(frozen=True)
class GlyphRecord:
    """All editable state of one character.

    Records are replaced whole on every edit. Note that
    ``advance_width >= left_bearing + right_bearing`` is not enforced:
    consumers clamp where they need a positive ink width.

    Attributes:
        char: The character this record describes
        outline: Artwork outline, None until artwork is supplied
        transform: Placement of the artwork
        advance_width: Total horizontal space consumed by the glyph
        left_bearing: Empty margin before the ink
        right_bearing: Empty margin after the ink
        lock_cap_height: Cap-height alignment was the last one applied
        lock_x_height: X-height alignment was the last one applied
        normalize_center: Horizontal centering was the last one applied
    """

    char: str
    outline: Outline | None = None
    transform: GlyphTransform = field(default_factory=GlyphTransform)
    advance_width: float = 600.0
    left_bearing: float = 100.0
    right_bearing: float = 100.0
    lock_cap_height: bool = False
    lock_x_height: bool = False
    normalize_center: bool = False

    def __post_init__(self) -> None:
        if len(self.char) != 1:
            raise ValueError(f"Glyph record needs a single character, got {self.char!r}")
        if self.left_bearing < 0 or self.right_bearing < 0:
            raise ValueError(
                f"Bearings must be non-negative for '{self.char}': "
                f"{self.left_bearing}, {self.right_bearing}"
            )

    @property
    def has_outline(self) -> bool:
        """Whether artwork has been attached."""
        return self.outline is not None

    @property
    def ink_width(self) -> float:
        """Advance minus both bearings; may be negative."""
        return self.advance_width - self.left_bearing - self.right_bearing

    def with_outline(self, outline: Outline | None) -> "GlyphRecord":
        """Return a copy with the artwork replaced."""
        return dataclasses.replace(self, outline=outline)

    def with_transform(self, **changes: float) -> "GlyphRecord":
        """Return a copy with some transform fields replaced.

        Args:
            **changes: GlyphTransform field values

        Returns:
            New GlyphRecord
        """
        return dataclasses.replace(self, transform=dataclasses.replace(self.transform, **changes))

    def with_metrics(
        self,
        advance_width: float | None = None,
        left_bearing: float | None = None,
        right_bearing: float | None = None,
    ) -> "GlyphRecord":
        """Return a copy with the given metrics replaced.

        Args:
            advance_width: New advance width (unchanged if None)
            left_bearing: New left bearing (unchanged if None)
            right_bearing: New right bearing (unchanged if None)

        Returns:
            New GlyphRecord
        """
        return dataclasses.replace(
            self,
            advance_width=self.advance_width if advance_width is None else advance_width,
            left_bearing=self.left_bearing if left_bearing is None else left_bearing,
            right_bearing=self.right_bearing if right_bearing is None else right_bearing,
        )

    def to_dict(self, include_outline: bool = True) -> dict[str, Any]:
        """Serialize to dictionary.

        Args:
            include_outline: Whether to embed the outline commands

        Returns:
            Dictionary representation of the record
        """
        data: dict[str, Any] = {
            "advance_width": self.advance_width,
            "left_bearing": self.left_bearing,
            "right_bearing": self.right_bearing,
            "transform": self.transform.to_dict(),
            "lock_cap_height": self.lock_cap_height,
            "lock_x_height": self.lock_x_height,
            "normalize_center": self.normalize_center,
        }
        if include_outline:
            data["outline"] = self.outline.to_dict() if self.outline is not None else None
        return data

    @classmethod
    def from_dict(cls, char: str, data: dict[str, Any]) -> "GlyphRecord":
        """Deserialize from dictionary.

        Args:
            char: Character the record belongs to
            data: Dictionary representation of a record

        Returns:
            GlyphRecord instance
        """
        outline_data = data.get("outline")
        return cls(
            char=char,
            outline=Outline.from_dict(outline_data) if outline_data else None,
            transform=GlyphTransform.from_dict(data.get("transform", {})),
            advance_width=data.get("advance_width", 600.0),
            left_bearing=data.get("left_bearing", 100.0),
            right_bearing=data.get("right_bearing", 100.0),
            lock_cap_height=data.get("lock_cap_height", False),
            lock_x_height=data.get("lock_x_height", False),
            normalize_center=data.get("normalize_center", False),
        )
