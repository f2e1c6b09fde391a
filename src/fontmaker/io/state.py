"""Persisted session state.

A project is stored as one JSON document::

    {
      "version": 1,
      "glyphs": {"A": {"advance_width": 600, "left_bearing": 100, ...}},
      "metadata": {"family_name": "MyFont", ...},
      "kerning": [["A", "V", -80]],
      "guides": {"baseline": 820, ...},
      "letter_spacing": 1.0,
      "tracking": 0.0
    }

Loading is lenient. Every section is validated with pydantic, and a field
that fails validation is dropped and replaced by its default, with one
warning per dropped field. Only a document that is not JSON at all (or not
an object) is rejected. Kerning may also be given in the legacy
``{"A_V": -80}`` form.
"""

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, Field, ValidationError

from fontmaker.domain import (
    FontMetadata,
    GlyphRecord,
    GlyphTransform,
    GuideSet,
    KerningTable,
    Outline,
    is_supported,
)
from fontmaker.exceptions import OutlineError, StateLoadError, StateSaveError

logger = structlog.get_logger(__name__)

STATE_VERSION = 1

ModelT = TypeVar("ModelT", bound=BaseModel)


class TransformState(BaseModel):
    """Stored glyph transform."""

    scale: float = Field(default=1.0, gt=0.0)
    rotate: float = 0.0
    x: float = 0.0
    y: float = 0.0


class GlyphState(BaseModel):
    """Stored glyph record, outline excluded."""

    advance_width: float = 600.0
    left_bearing: float = Field(default=100.0, ge=0.0)
    right_bearing: float = Field(default=100.0, ge=0.0)
    transform: TransformState = Field(default_factory=TransformState)
    lock_cap_height: bool = False
    lock_x_height: bool = False
    normalize_center: bool = False


class MetadataState(BaseModel):
    """Stored font metadata."""

    family_name: str = Field(default="MyFont", min_length=1)
    style_name: str = "Regular"
    units_per_em: float = Field(default=1100.0, gt=0.0)
    ascender: float = 700.0
    descender: float = 400.0
    padding: float = 50.0


class GuidesState(BaseModel):
    """Stored guide lines."""

    baseline: float = 820.0
    cap_height: float = 260.0
    x_height: float = 440.0
    ascender: float = 180.0
    descender: float = 1120.0
    meanline: float = 520.0
    centerline: float = 600.0
    em_top: float = 120.0
    em_bottom: float = 1220.0


class SpacingState(BaseModel):
    """Stored global spacing settings."""

    letter_spacing: float = Field(default=1.0, gt=0.0)
    tracking: float = 0.0


@dataclass
class ProjectState:
    """Everything a session persists.

    Attributes:
        records: Glyph records keyed by character
        guides: Guide lines
        metadata: Font naming and vertical metrics
        kerning: Pair adjustments
        letter_spacing: Global advance multiplier
        tracking: Global advance offset
    """

    records: dict[str, GlyphRecord] = field(default_factory=dict)
    guides: GuideSet = field(default_factory=GuideSet)
    metadata: FontMetadata = field(default_factory=FontMetadata)
    kerning: KerningTable = field(default_factory=KerningTable)
    letter_spacing: float = 1.0
    tracking: float = 0.0


def validate_lenient(model: type[ModelT], data: Any, section: str) -> ModelT:
    """Validate a section, replacing invalid fields with their defaults.

    Args:
        model: Pydantic model describing the section
        data: Raw section data
        section: Name used in log messages

    Returns:
        Validated model instance
    """
    if data is None:
        return model()
    if not isinstance(data, dict):
        logger.warning("State section malformed, using defaults", section=section)
        return model()

    values = {key: value for key, value in data.items() if key in model.model_fields}
    while True:
        try:
            return model.model_validate(values)
        except ValidationError as e:
            bad_fields = {err["loc"][0] for err in e.errors() if err["loc"]}
            bad_fields &= values.keys()
            if not bad_fields:
                logger.warning("State section invalid, using defaults", section=section)
                return model()
            for name in sorted(bad_fields, key=str):
                logger.warning(
                    "State field invalid, using default",
                    section=section,
                    field=name,
                    value=repr(values[name]),
                )
                del values[name]


def _load_outline(data: Any, char: str) -> Outline | None:
    if data is None:
        return None
    if not isinstance(data, dict):
        logger.warning("State outline malformed, dropping artwork", glyph=char)
        return None
    try:
        return Outline.from_dict(data)
    except (OutlineError, TypeError, ValueError) as e:
        logger.warning("State outline malformed, dropping artwork", glyph=char, error=str(e))
        return None


def _load_record(char: str, data: Any) -> GlyphRecord:
    section = f"glyphs.{char}"
    raw = dict(data) if isinstance(data, dict) else {}
    if not isinstance(data, dict):
        logger.warning("State section malformed, using defaults", section=section)
    raw["transform"] = validate_lenient(
        TransformState, raw.get("transform"), f"{section}.transform"
    )
    state = validate_lenient(GlyphState, raw, section)

    return GlyphRecord(
        char=char,
        outline=_load_outline(raw.get("outline"), char),
        transform=GlyphTransform(
            scale=state.transform.scale,
            rotate_degrees=state.transform.rotate,
            translate_x=state.transform.x,
            translate_y=state.transform.y,
        ),
        advance_width=state.advance_width,
        left_bearing=state.left_bearing,
        right_bearing=state.right_bearing,
        lock_cap_height=state.lock_cap_height,
        lock_x_height=state.lock_x_height,
        normalize_center=state.normalize_center,
    )


def _is_char(value: Any) -> bool:
    return isinstance(value, str) and is_supported(value)


def _load_kerning(data: Any) -> KerningTable:
    """Read kerning from the triple list or the legacy "L_R" mapping."""
    if data is None:
        return KerningTable()

    entries: list[tuple[Any, Any, Any]] = []
    if isinstance(data, dict):
        for key, value in data.items():
            if isinstance(key, str) and len(key) == 3 and key[1] == "_":
                entries.append((key[0], key[2], value))
            else:
                logger.warning("State kerning key malformed, skipping", key=repr(key))
    elif isinstance(data, list):
        for entry in data:
            if isinstance(entry, (list, tuple)) and len(entry) == 3:
                entries.append((entry[0], entry[1], entry[2]))
            else:
                logger.warning("State kerning entry malformed, skipping", entry=repr(entry))
    else:
        logger.warning("State section malformed, using defaults", section="kerning")
        return KerningTable()

    pairs: dict[tuple[str, str], float] = {}
    for left, right, value in entries:
        if not (_is_char(left) and _is_char(right)):
            logger.warning(
                "State kerning pair malformed, skipping", left=repr(left), right=repr(right)
            )
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.warning("State kerning value malformed, skipping", left=left, right=right)
            continue
        pairs[(left, right)] = float(value)
    return KerningTable(pairs)


def state_from_dict(data: dict[str, Any]) -> ProjectState:
    """Build a ProjectState from a decoded document, tolerating bad fields.

    Args:
        data: Decoded JSON object

    Returns:
        ProjectState with defaults wherever the document was unusable
    """
    records: dict[str, GlyphRecord] = {}
    glyphs = data.get("glyphs")
    if isinstance(glyphs, dict):
        for char, glyph_data in glyphs.items():
            if not isinstance(char, str) or not is_supported(char):
                logger.warning("State glyph not in repertoire, skipping", glyph=repr(char))
                continue
            records[char] = _load_record(char, glyph_data)
    elif glyphs is not None:
        logger.warning("State section malformed, using defaults", section="glyphs")

    guides_state = validate_lenient(GuidesState, data.get("guides"), "guides")
    guides = GuideSet(**guides_state.model_dump())

    # Fields missing from the stored metadata are derived from the guides.
    metadata_state = validate_lenient(MetadataState, data.get("metadata"), "metadata")
    metadata = replace(
        FontMetadata.from_guides(guides), **metadata_state.model_dump(exclude_unset=True)
    )

    spacing = validate_lenient(
        SpacingState,
        {key: data[key] for key in ("letter_spacing", "tracking") if key in data},
        "spacing",
    )

    return ProjectState(
        records=records,
        guides=guides,
        metadata=metadata,
        kerning=_load_kerning(data.get("kerning")),
        letter_spacing=spacing.letter_spacing,
        tracking=spacing.tracking,
    )


def state_to_dict(state: ProjectState, include_outlines: bool = True) -> dict[str, Any]:
    """Serialize a ProjectState to a JSON-compatible dictionary.

    Args:
        state: State to serialize
        include_outlines: Whether glyph outlines are embedded

    Returns:
        Dictionary ready for json.dumps
    """
    return {
        "version": STATE_VERSION,
        "glyphs": {
            char: record.to_dict(include_outline=include_outlines)
            for char, record in state.records.items()
        },
        "metadata": state.metadata.to_dict(),
        "kerning": state.kerning.to_list(),
        "guides": state.guides.to_dict(),
        "letter_spacing": state.letter_spacing,
        "tracking": state.tracking,
    }


def load_state(path: Path) -> ProjectState:
    """Read a session state file.

    Args:
        path: JSON state file

    Returns:
        ProjectState

    Raises:
        StateLoadError: If the file cannot be read or is not a JSON object
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise StateLoadError(str(path), str(e)) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StateLoadError(str(path), f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise StateLoadError(str(path), "document is not a JSON object")

    state = state_from_dict(data)
    logger.debug("Session state loaded", path=str(path), glyphs=len(state.records))
    return state


def save_state(state: ProjectState, path: Path, include_outlines: bool = True) -> None:
    """Write a session state file.

    Args:
        state: State to persist
        path: Target JSON file
        include_outlines: Whether glyph outlines are embedded

    Raises:
        StateSaveError: If the file cannot be written
    """
    text = json.dumps(state_to_dict(state, include_outlines), indent=2, ensure_ascii=False)
    try:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        Path(path).write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        raise StateSaveError(str(path), str(e)) from e
    logger.debug("Session state saved", path=str(path), glyphs=len(state.records))
