"""Font-wide metrics: guides, metadata, kerning and bounding boxes."""

import dataclasses
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounds of an outline.

    Attributes:
        x_min: Leftmost coordinate
        x_max: Rightmost coordinate
        y_min: Lowest coordinate
        y_max: Highest coordinate
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def width(self) -> float:
        """Horizontal extent, never negative."""
        return max(0.0, self.x_max - self.x_min)

    @property
    def height(self) -> float:
        """Vertical extent, never negative."""
        return max(0.0, self.y_max - self.y_min)

    @property
    def center_x(self) -> float:
        """Horizontal midpoint."""
        return (self.x_min + self.x_max) / 2


@dataclass(frozen=True, slots=True)
class GuideSet:
    """Named horizontal reference lines.

    Values are positions on the editing canvas measured top-down, so the
    baseline normally has a larger value than the cap height. Distances such
    as ``baseline - cap_height`` are what the alignment tools use. Ordering is
    not validated.
    """

    baseline: float = 820.0
    cap_height: float = 260.0
    x_height: float = 440.0
    ascender: float = 180.0
    descender: float = 1120.0
    meanline: float = 520.0
    centerline: float = 600.0
    em_top: float = 120.0
    em_bottom: float = 1220.0

    def to_dict(self) -> dict[str, float]:
        """Serialize to dictionary."""
        return dataclasses.asdict(self)


@dataclass(frozen=True, slots=True)
class FontMetadata:
    """Font-level naming and vertical metrics.

    Attributes:
        family_name: Font family name
        style_name: Style name used when no variant is requested
        units_per_em: Size of the em square in design units
        ascender: Distance from baseline to the top of the em
        descender: Distance from baseline to the bottom of the em (positive magnitude)
        padding: Side padding used by the editing canvas
    """

    family_name: str = "MyFont"
    style_name: str = "Regular"
    units_per_em: float = 1100.0
    ascender: float = 700.0
    descender: float = 400.0
    padding: float = 50.0

    @classmethod
    def from_guides(
        cls,
        guides: GuideSet,
        family_name: str = "MyFont",
        style_name: str = "Regular",
        padding: float = 50.0,
    ) -> "FontMetadata":
        """Derive vertical metrics from a guide set.

        Args:
            guides: Guide lines to derive from
            family_name: Font family name
            style_name: Style name
            padding: Side padding

        Returns:
            FontMetadata with units per em, ascender and descender derived
        """
        return cls(
            family_name=family_name,
            style_name=style_name,
            units_per_em=guides.em_bottom - guides.em_top,
            ascender=guides.baseline - guides.em_top,
            descender=guides.em_bottom - guides.baseline,
            padding=padding,
        )

    def with_guides(self, guides: GuideSet) -> "FontMetadata":
        """Re-derive the vertical metrics, keeping names and padding."""
        return FontMetadata.from_guides(
            guides,
            family_name=self.family_name,
            style_name=self.style_name,
            padding=self.padding,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return dataclasses.asdict(self)


class KerningTable(Mapping[tuple[str, str], float]):
    """Immutable mapping of ordered character pairs to signed adjustments.

    Only the exact ordered pair is matched: ``("A", "V")`` says nothing about
    ``("V", "A")``. Pairs without an entry adjust by zero.

    Example:
        kerning = KerningTable({("A", "V"): -80})
        kerning.adjustment("A", "V")  # -80
        kerning.adjustment("V", "A")  # 0
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Mapping[tuple[str, str], float] | None = None) -> None:
        self._pairs: dict[tuple[str, str], float] = dict(pairs or {})

    def __getitem__(self, key: tuple[str, str]) -> float:
        return self._pairs[key]

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        return f"KerningTable({self._pairs!r})"

    def adjustment(self, left: str, right: str) -> float:
        """Look up the adjustment for an ordered pair (0 when absent)."""
        return self._pairs.get((left, right), 0.0)

    def with_pair(self, left: str, right: str, value: float) -> "KerningTable":
        """Return a copy with one pair set."""
        pairs = dict(self._pairs)
        pairs[(left, right)] = value
        return KerningTable(pairs)

    def without_pair(self, left: str, right: str) -> "KerningTable":
        """Return a copy with one pair removed (no-op if absent)."""
        pairs = dict(self._pairs)
        pairs.pop((left, right), None)
        return KerningTable(pairs)

    def updated(self, pairs: Mapping[tuple[str, str], float]) -> "KerningTable":
        """Return a copy with several pairs set at once."""
        merged = dict(self._pairs)
        merged.update(pairs)
        return KerningTable(merged)

    def scaled(self, factor: float) -> "KerningTable":
        """Return a copy with every adjustment multiplied by factor."""
        return KerningTable({pair: value * factor for pair, value in self._pairs.items()})

    def to_list(self) -> list[list[Any]]:
        """Serialize as a list of [left, right, value] triples."""
        return [[left, right, value] for (left, right), value in self._pairs.items()]

    @classmethod
    def from_list(cls, entries: Iterable[Iterable[Any]]) -> "KerningTable":
        """Deserialize from [left, right, value] triples."""
        pairs: dict[tuple[str, str], float] = {}
        for left, right, value in entries:
            pairs[(str(left), str(right))] = float(value)
        return cls(pairs)
