"""Batch metric and kerning edits.

Every function takes a mapping of glyph records (or a kerning table) and
returns a new one; inputs are never modified. Characters are processed in
mapping order.
"""

from collections.abc import Iterable, Mapping

import structlog

from fontmaker.domain import GlyphRecord, KerningTable
from fontmaker.exceptions import GlyphNotFoundError

logger = structlog.get_logger(__name__)

Records = Mapping[str, GlyphRecord]

# Floor for the ink width auto_distribute keeps free of redistribution.
DISTRIBUTE_MIN_INK = 100.0
DISTRIBUTE_FALLBACK_RATIO = 0.25


def apply_letter_spacing(records: Records, old: float, new: float) -> dict[str, GlyphRecord]:
    """Rescale advances and bearings when the global multiplier changes.

    Args:
        records: Glyph records keyed by character
        old: Previous multiplier (must be positive)
        new: New multiplier

    Returns:
        New records with every advance and bearing multiplied by new / old

    Raises:
        ValueError: If old is not positive
    """
    if old <= 0:
        raise ValueError(f"Letter spacing must be positive, got {old}")
    factor = new / old
    return {
        char: record.with_metrics(
            advance_width=record.advance_width * factor,
            left_bearing=record.left_bearing * factor,
            right_bearing=record.right_bearing * factor,
        )
        for char, record in records.items()
    }


def apply_tracking(records: Records, old: float, new: float) -> dict[str, GlyphRecord]:
    """Shift every advance when the global tracking changes.

    Args:
        records: Glyph records keyed by character
        old: Previous tracking
        new: New tracking

    Returns:
        New records with new - old added to each advance
    """
    delta = new - old
    return {
        char: record.with_metrics(advance_width=record.advance_width + delta)
        for char, record in records.items()
    }


def auto_tighten(records: Records, factor: float = 0.85) -> dict[str, GlyphRecord]:
    """Shrink all bearings by a factor, floored at zero.

    Advances are left untouched.
    """
    return {
        char: record.with_metrics(
            left_bearing=max(0.0, record.left_bearing * factor),
            right_bearing=max(0.0, record.right_bearing * factor),
        )
        for char, record in records.items()
    }


def auto_distribute(records: Records) -> dict[str, GlyphRecord]:
    """Give every glyph the mean advance and redistribute the spare space.

    The spare space of a glyph is ``mean - ink`` (never negative), where the
    ink width is ``advance - left - right`` floored at 100. It is split
    between the bearings in proportion to each bearing's share of the old
    advance; glyphs with a non-positive advance use a 0.25 share per side.

    Args:
        records: Glyph records keyed by character

    Returns:
        New records; an empty mapping stays empty
    """
    if not records:
        return {}

    mean = sum(record.advance_width for record in records.values()) / len(records)
    distributed: dict[str, GlyphRecord] = {}
    for char, record in records.items():
        ink = max(record.ink_width, DISTRIBUTE_MIN_INK)
        spare = max(mean - ink, 0.0)
        if record.advance_width > 0:
            left_ratio = record.left_bearing / record.advance_width
            right_ratio = record.right_bearing / record.advance_width
        else:
            left_ratio = right_ratio = DISTRIBUTE_FALLBACK_RATIO
        distributed[char] = record.with_metrics(
            advance_width=mean,
            left_bearing=spare * left_ratio,
            right_bearing=spare * right_ratio,
        )

    logger.debug("Advances distributed", glyphs=len(distributed), advance=mean)
    return distributed


def update_metrics(
    records: Records,
    chars: Iterable[str],
    advance_width: float | None = None,
    left_bearing: float | None = None,
    right_bearing: float | None = None,
) -> dict[str, GlyphRecord]:
    """Set the same metrics on several glyphs at once.

    Args:
        records: Glyph records keyed by character
        chars: Characters to edit
        advance_width: New advance (unchanged if None)
        left_bearing: New left bearing (unchanged if None)
        right_bearing: New right bearing (unchanged if None)

    Returns:
        New records

    Raises:
        GlyphNotFoundError: If a character has no record
    """
    updated = dict(records)
    for char in chars:
        if char not in updated:
            raise GlyphNotFoundError(char)
        updated[char] = updated[char].with_metrics(
            advance_width=advance_width,
            left_bearing=left_bearing,
            right_bearing=right_bearing,
        )
    return updated


def update_kerning(
    kerning: KerningTable,
    pairs: Mapping[tuple[str, str], float] | Iterable[tuple[str, str, float]],
) -> KerningTable:
    """Set several kerning pairs at once.

    Args:
        kerning: Current table
        pairs: Mapping of (left, right) to value, or (left, right, value) triples

    Returns:
        New KerningTable
    """
    if isinstance(pairs, Mapping):
        return kerning.updated(pairs)
    return kerning.updated({(left, right): value for left, right, value in pairs})


def remove_kerning(kerning: KerningTable, pairs: Iterable[tuple[str, str]]) -> KerningTable:
    """Remove several kerning pairs; absent pairs are ignored."""
    for left, right in pairs:
        kerning = kerning.without_pair(left, right)
    return kerning
