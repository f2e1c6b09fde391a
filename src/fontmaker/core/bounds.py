"""Bounding boxes of outlines.

Bounds are taken over every coordinate of every command, curve control
points included. That over-approximates curved segments but never cuts them
off, which is what metric calculations need.
"""

from fontmaker.config import StyleConfig
from fontmaker.core.transform import transform_outline
from fontmaker.domain import BoundingBox, GlyphRecord, Outline, StyleVariant


def compute_bounds(outline: Outline) -> BoundingBox | None:
    """Compute the axis-aligned bounds of an outline.

    Args:
        outline: Outline to measure

    Returns:
        BoundingBox, or None if no command carries coordinates

    Examples:
        >>> box = compute_bounds(Outline.rectangle(0.0, 0.0, 10.0, 20.0))
        >>> (box.width, box.height)
        (10.0, 20.0)
    """
    x_min = y_min = float("inf")
    x_max = y_max = float("-inf")
    found = False

    for point in outline.iter_points():
        found = True
        if point.x < x_min:
            x_min = point.x
        if point.x > x_max:
            x_max = point.x
        if point.y < y_min:
            y_min = point.y
        if point.y > y_max:
            y_max = point.y

    if not found:
        return None

    return BoundingBox(x_min=x_min, x_max=x_max, y_min=y_min, y_max=y_max)


def glyph_bounds(
    record: GlyphRecord,
    style: StyleVariant = StyleVariant.REGULAR,
    style_config: StyleConfig | None = None,
) -> BoundingBox | None:
    """Bounds of a glyph's artwork after its transform is applied.

    Args:
        record: Glyph record to measure
        style: Style variant to apply
        style_config: Style modifier settings

    Returns:
        BoundingBox, or None if the glyph has no artwork or no coordinates
    """
    if record.outline is None:
        return None
    return compute_bounds(transform_outline(record.outline, record.transform, style, style_config))
