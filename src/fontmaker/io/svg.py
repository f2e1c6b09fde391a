"""Vector artwork parsing.

SVG documents are read with fontTools.svgLib, which understands ``<path>``
plus the basic shapes (rect, circle, ellipse, line, polyline, polygon). Only
fill geometry is kept: styling, strokes and gradients are ignored.

SVG is y-down, so the document is flipped on the way in. The bottom edge of
the canvas lands on y = 0 and the top edge on y = canvas height.
"""

import re
import xml.etree.ElementTree as ET
from pathlib import Path

import structlog
from fontTools.svgLib.path import SVGPath

from fontmaker.domain import Outline
from fontmaker.exceptions import ArtworkLoadError
from fontmaker.io.converter import OutlinePen

logger = structlog.get_logger(__name__)

DEFAULT_CANVAS = 100.0

_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def _parse_length(value: str | None) -> float | None:
    """Parse an SVG length such as ``"120"`` or ``"120px"``."""
    if not value:
        return None
    match = _NUMBER.match(value.strip())
    if match is None:
        return None
    length = float(match.group())
    return length if length > 0 else None


def declared_size(root: ET.Element) -> tuple[float, float]:
    """Resolve the declared size of an SVG document.

    The width/height attributes take precedence, then the viewBox size, then
    a 100 x 100 default.

    Args:
        root: Parsed <svg> element

    Returns:
        Tuple of (width, height)
    """
    _, _, vb_width, vb_height = _view_box(root) or (0.0, 0.0, None, None)
    width = _parse_length(root.get("width")) or vb_width or DEFAULT_CANVAS
    height = _parse_length(root.get("height")) or vb_height or DEFAULT_CANVAS
    return width, height


def user_box(root: ET.Element) -> tuple[float, float, float, float]:
    """Resolve the user-space box that path coordinates live in.

    Args:
        root: Parsed <svg> element

    Returns:
        Tuple of (min_x, min_y, width, height): the viewBox when valid,
        otherwise the declared size anchored at the origin
    """
    box = _view_box(root)
    if box is not None:
        return box
    width, height = declared_size(root)
    return 0.0, 0.0, width, height


def _view_box(root: ET.Element) -> tuple[float, float, float, float] | None:
    view_box = root.get("viewBox")
    if not view_box:
        return None
    parts = [float(n) for n in _NUMBER.findall(view_box)]
    if len(parts) != 4 or parts[2] <= 0 or parts[3] <= 0:
        return None
    return parts[0], parts[1], parts[2], parts[3]


def outline_from_svg(data: bytes | str, source: str = "<svg>") -> Outline:
    """Convert an SVG document to an Outline.

    Args:
        data: SVG document
        source: Name used in log and error messages

    Returns:
        Outline in y-up coordinates. A canvas-sized rectangle is returned
        when the document holds no drawable geometry.

    Raises:
        ArtworkLoadError: If the document is not well-formed or its path data is invalid
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise ArtworkLoadError(source, f"invalid SVG: {e}") from e

    min_x, min_y, _, box_height = user_box(root)
    width, height = declared_size(root)
    flip = (1, 0, 0, -1, -min_x, min_y + box_height)

    pen = OutlinePen()
    try:
        SVGPath.fromstring(data, transform=flip).draw(pen)
    except (ValueError, IndexError) as e:
        raise ArtworkLoadError(source, f"invalid path data: {e}") from e

    outline = pen.outline(width=width, height=height)
    if outline.is_empty():
        logger.warning(
            "No drawable geometry in SVG, using placeholder outline",
            source=source,
            width=width,
            height=height,
        )
        return Outline.rectangle(0.0, 0.0, width, height)
    return outline


def load_svg(path: Path) -> Outline:
    """Read and convert an SVG file.

    Args:
        path: SVG file

    Returns:
        Outline in y-up coordinates

    Raises:
        ArtworkLoadError: If the file cannot be read or parsed
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise ArtworkLoadError(str(path), str(e)) from e
    return outline_from_svg(data, source=str(path))
