"""Automatic alignment of glyph artwork to the guide lines.

Guides are editor-canvas positions measured top-down, so the target heights
are distances: ``baseline - cap_height`` for capitals and
``baseline - x_height`` for lowercase. Outlines are y-up with the baseline at
y = 0.

Each operation measures the glyph's transformed ink, adjusts the transform
and sets the matching informational flag. Records without artwork (or with
artwork that has no coordinates) are returned unchanged.
"""

import dataclasses

from fontmaker.core.bounds import glyph_bounds
from fontmaker.domain import GlyphRecord, GuideSet

MIN_SCALE = 0.01
MIN_HEIGHT = 1.0


def _lock_height(record: GlyphRecord, target_height: float, flag: str) -> GlyphRecord:
    bounds = glyph_bounds(record)
    if bounds is None:
        return record

    factor = target_height / max(bounds.height, MIN_HEIGHT)
    scale = max(MIN_SCALE, record.transform.scale * factor)

    # Scaling and rotation are about the origin, so the new ink bottom is the
    # old one (minus translation) times the scale ratio.
    ratio = scale / record.transform.scale
    new_bottom = (bounds.y_min - record.transform.translate_y) * ratio
    translate_y = -new_bottom

    aligned = record.with_transform(scale=scale, translate_y=translate_y)
    return dataclasses.replace(aligned, **{flag: True})


def lock_cap_height(record: GlyphRecord, guides: GuideSet) -> GlyphRecord:
    """Scale a glyph to cap height and seat it on the baseline.

    Args:
        record: Glyph record to align
        guides: Guide lines providing baseline and cap height

    Returns:
        New record with adjusted scale and vertical offset, flagged
        lock_cap_height
    """
    return _lock_height(record, guides.baseline - guides.cap_height, "lock_cap_height")


def lock_x_height(record: GlyphRecord, guides: GuideSet) -> GlyphRecord:
    """Scale a glyph to x-height and seat it on the baseline.

    Args:
        record: Glyph record to align
        guides: Guide lines providing baseline and x-height

    Returns:
        New record with adjusted scale and vertical offset, flagged
        lock_x_height
    """
    return _lock_height(record, guides.baseline - guides.x_height, "lock_x_height")


def normalize_center(record: GlyphRecord) -> GlyphRecord:
    """Shift a glyph horizontally so its ink is centered in the advance.

    Args:
        record: Glyph record to align

    Returns:
        New record whose ink center lies at advance_width / 2, flagged
        normalize_center
    """
    bounds = glyph_bounds(record)
    if bounds is None:
        return record

    shift = record.advance_width / 2 - bounds.center_x
    aligned = record.with_transform(translate_x=record.transform.translate_x + shift)
    return dataclasses.replace(aligned, normalize_center=True)
