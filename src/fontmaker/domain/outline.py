"""Core geometric types for outline representation.

This module defines the vector geometry produced by tracing and consumed by
every later stage:
- Point: A 2D point in design units
- CommandType: Enum for drawing command kinds
- PathCommand: A single drawing command with its coordinates
- Outline: An immutable sequence of drawing commands
"""

import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from fontmaker.exceptions import OutlineError


class CommandType(str, Enum):
    """Drawing command kind.

    Commands follow the usual pen protocol:
    - MOVE: Start a new contour at one point
    - LINE: Straight segment to one point
    - CURVE: Cubic Bezier segment (two control points, then the end point)
    - CLOSE: Close the current contour
    """

    MOVE = "M"
    LINE = "L"
    CURVE = "C"
    CLOSE = "Z"

    @property
    def point_count(self) -> int:
        """Number of coordinate pairs the command carries."""
        return _POINT_COUNTS[self]


_POINT_COUNTS = {
    CommandType.MOVE: 1,
    CommandType.LINE: 1,
    CommandType.CURVE: 3,
    CommandType.CLOSE: 0,
}


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in design units
        y: Y coordinate in design units
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class PathCommand:
    """A single drawing command.

    Attributes:
        kind: Command kind
        points: Coordinates carried by the command (count depends on kind)
    """

    kind: CommandType
    points: tuple[Point, ...] = ()

    def __post_init__(self) -> None:
        if len(self.points) != self.kind.point_count:
            raise OutlineError(
                f"{self.kind.name} command takes {self.kind.point_count} points, "
                f"got {len(self.points)}"
            )

    def map_points(self, fn: Callable[[Point], Point]) -> "PathCommand":
        """Return a copy with every coordinate remapped.

        Args:
            fn: Mapping applied to each point independently

        Returns:
            New PathCommand of the same kind
        """
        return PathCommand(self.kind, tuple(fn(p) for p in self.points))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with the command letter and a flat coordinate list
        """
        return {
            "cmd": self.kind.value,
            "pts": [coord for p in self.points for coord in (p.x, p.y)],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PathCommand":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with "cmd" and "pts" fields

        Returns:
            PathCommand instance

        Raises:
            OutlineError: If the command letter or coordinates are invalid
        """
        try:
            kind = CommandType(data["cmd"])
        except (KeyError, ValueError) as e:
            raise OutlineError(f"Invalid path command: {data!r}") from e

        coords = data.get("pts", [])
        if len(coords) % 2:
            raise OutlineError(f"Odd coordinate count in {kind.name} command")
        points = tuple(
            Point(float(coords[i]), float(coords[i + 1])) for i in range(0, len(coords), 2)
        )
        if not all(math.isfinite(p.x) and math.isfinite(p.y) for p in points):
            raise OutlineError(f"Non-finite coordinate in {kind.name} command")
        return cls(kind, points)


@dataclass(frozen=True)
class Outline:
    """Fill-only vector geometry of a glyph.

    Outlines are immutable: transformations produce new outlines rather than
    editing commands in place.

    Attributes:
        commands: Ordered drawing commands
        width: Width of the source canvas, if known
        height: Height of the source canvas, if known
    """

    commands: tuple[PathCommand, ...] = field(default_factory=tuple)
    width: float | None = None
    height: float | None = None

    def __len__(self) -> int:
        return len(self.commands)

    def is_empty(self) -> bool:
        """Check if the outline has no commands.

        Returns:
            True if there are no drawing commands
        """
        return len(self.commands) == 0

    def iter_points(self) -> Iterator[Point]:
        """Iterate over every coordinate of every command, control points included.

        Yields:
            Points in command order
        """
        for command in self.commands:
            yield from command.points

    def contour_count(self) -> int:
        """Count contours (MOVE commands).

        Returns:
            Number of contours in the outline
        """
        return sum(1 for c in self.commands if c.kind == CommandType.MOVE)

    def map_points(self, fn: Callable[[Point], Point]) -> "Outline":
        """Return a new outline with every coordinate remapped.

        Args:
            fn: Mapping applied to each point independently

        Returns:
            New Outline with the same canvas size
        """
        return Outline(
            commands=tuple(c.map_points(fn) for c in self.commands),
            width=self.width,
            height=self.height,
        )

    def draw(self, pen: Any) -> None:
        """Replay the outline onto a segment pen.

        Works with any object implementing the fontTools pen protocol
        (moveTo, lineTo, curveTo, closePath).

        Args:
            pen: Target pen
        """
        open_contour = False
        for command in self.commands:
            pts = [p.to_tuple() for p in command.points]
            if command.kind == CommandType.MOVE:
                if open_contour:
                    pen.closePath()
                pen.moveTo(pts[0])
                open_contour = True
            elif command.kind == CommandType.LINE:
                pen.lineTo(pts[0])
            elif command.kind == CommandType.CURVE:
                pen.curveTo(*pts)
            elif command.kind == CommandType.CLOSE:
                if open_contour:
                    pen.closePath()
                open_contour = False
        if open_contour:
            pen.closePath()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the outline
        """
        return {
            "commands": [c.to_dict() for c in self.commands],
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Outline":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of an outline

        Returns:
            Outline instance

        Raises:
            OutlineError: If any command is malformed
        """
        commands = tuple(PathCommand.from_dict(c) for c in data.get("commands", []))
        return cls(
            commands=commands,
            width=data.get("width"),
            height=data.get("height"),
        )

    @classmethod
    def rectangle(cls, x0: float, y0: float, x1: float, y1: float) -> "Outline":
        """Build a single closed rectangle.

        Args:
            x0: Left edge
            y0: Bottom edge
            x1: Right edge
            y1: Top edge

        Returns:
            Outline with one rectangular contour
        """
        return cls(
            commands=(
                PathCommand(CommandType.MOVE, (Point(x0, y0),)),
                PathCommand(CommandType.LINE, (Point(x1, y0),)),
                PathCommand(CommandType.LINE, (Point(x1, y1),)),
                PathCommand(CommandType.LINE, (Point(x0, y1),)),
                PathCommand(CommandType.CLOSE),
            ),
            width=abs(x1 - x0),
            height=abs(y1 - y0),
        )
