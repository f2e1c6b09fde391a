"""Raster artwork loading via Pillow."""

from pathlib import Path

from PIL import Image

from fontmaker.exceptions import ArtworkLoadError

Pixel = tuple[int, int, int, int]

RASTER_SUFFIXES = frozenset({".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tif", ".tiff", ".webp"})


def pixels_from_image(image: Image.Image) -> list[list[Pixel]]:
    """Convert a Pillow image to a row-major RGBA grid.

    Args:
        image: Image in any mode

    Returns:
        Rows of (r, g, b, a) tuples, top row first
    """
    rgba = image.convert("RGBA")
    width, height = rgba.size
    access = rgba.load()
    return [[access[x, y] for x in range(width)] for y in range(height)]


def load_pixels(path: Path) -> list[list[Pixel]]:
    """Load an image file as an RGBA pixel grid.

    Args:
        path: Image file readable by Pillow

    Returns:
        Rows of (r, g, b, a) tuples, top row first

    Raises:
        ArtworkLoadError: If the file is missing or not a readable image
    """
    try:
        with Image.open(path) as image:
            return pixels_from_image(image)
    except OSError as e:
        raise ArtworkLoadError(str(path), str(e)) from e


def is_raster(path: Path) -> bool:
    """Check whether a path looks like raster artwork."""
    return Path(path).suffix.lower() in RASTER_SUFFIXES
