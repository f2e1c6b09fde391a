"""Per-glyph geometric transforms and style variants.

Every coordinate of an outline is remapped in a fixed order:

1. Uniform scale by ``glyph scale x style scale`` (style scale > 1 for Bold)
2. Italic shear ``x' = x + y * tan(angle)``
3. Rotation about the origin
4. Translation

Curve control points go through exactly the same mapping as end points, so
curve shapes survive scaling, shearing and rotation. All functions are pure:
the input outline is never modified.
"""

import math

from fontmaker.config import StyleConfig
from fontmaker.domain import GlyphTransform, Outline, Point, StyleVariant


def transform_point(
    point: Point,
    transform: GlyphTransform,
    scale: float = 1.0,
    shear: float = 0.0,
) -> Point:
    """Map a single point through a glyph transform.

    Args:
        point: Point to map
        transform: Glyph placement
        scale: Extra style scale multiplied into the glyph scale
        shear: Horizontal shear factor (tan of the slant angle)

    Returns:
        Mapped point
    """
    s = transform.scale * scale
    x = point.x * s
    y = point.y * s
    if shear:
        x = x + y * shear

    rad = math.radians(transform.rotate_degrees)
    cos = math.cos(rad)
    sin = math.sin(rad)
    rx = x * cos - y * sin
    ry = x * sin + y * cos

    return Point(rx + transform.translate_x, ry + transform.translate_y)


def transform_outline(
    outline: Outline,
    transform: GlyphTransform,
    style: StyleVariant = StyleVariant.REGULAR,
    style_config: StyleConfig | None = None,
) -> Outline:
    """Apply a glyph transform and style variant to an outline.

    Args:
        outline: Source outline in design units
        transform: Glyph placement
        style: Style variant whose modifiers are applied
        style_config: Style modifier settings (defaults if None)

    Returns:
        New Outline with every coordinate remapped
    """
    modifiers = (style_config or StyleConfig()).modifiers(style)
    return outline.map_points(
        lambda p: transform_point(p, transform, scale=modifiers.scale, shear=modifiers.shear)
    )
