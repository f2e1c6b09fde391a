"""Raster tracing of glyph artwork into outlines.

This module converts a grid of RGBA pixels into fill geometry. Each maximal
horizontal run of ink pixels in a row becomes one closed unit-high rectangle,
so the result is built entirely from axis-aligned rectangles: correct, but
not curve-smoothed.

Rows are flipped on the way out: pixel row 0 (the top of the image) becomes
the band ``height - 1 .. height`` so outlines come out y-up like font
coordinates.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

import structlog

from fontmaker.config import TracerConfig
from fontmaker.domain import CommandType, Outline, PathCommand, Point
from fontmaker.exceptions import TraceCancelledError

Pixel = tuple[int, int, int, int]
PixelGrid = Sequence[Sequence[Pixel]]

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TraceResult:
    """Outcome of tracing one image.

    Attributes:
        outline: Traced outline (never empty)
        width: Source grid width in pixels
        height: Source grid height in pixels
        ink_pixels: Number of pixels classified as ink
        used_fallback: True if no ink was found and a placeholder was emitted
    """

    outline: Outline
    width: int
    height: int
    ink_pixels: int
    used_fallback: bool = False


class RasterTracer:
    """Converts bitmap artwork into rectangle-run outlines.

    The tracer is stateless; one instance can trace any number of images.

    Example:
        tracer = RasterTracer()
        result = tracer.trace(pixels)
        print(result.outline.contour_count())
    """

    def __init__(self, config: TracerConfig | None = None) -> None:
        """Initialize the tracer.

        Args:
            config: Thresholds for ink classification (defaults if None)
        """
        self.config = config or TracerConfig()

    def has_transparent_background(self, pixels: PixelGrid) -> bool:
        """Decide which foreground test applies to an image.

        Args:
            pixels: Row-major RGBA grid

        Returns:
            True if fewer than ``opaque_ratio`` of the pixels are opaque
        """
        threshold = self.config.alpha_threshold
        total = 0
        opaque = 0
        for row in pixels:
            total += len(row)
            opaque += sum(1 for px in row if px[3] > threshold)
        if total == 0:
            return True
        return opaque < total * self.config.opaque_ratio

    def ink_test(self, transparent_background: bool) -> Callable[[Pixel], bool]:
        """Build the per-pixel ink predicate.

        Args:
            transparent_background: Result of has_transparent_background

        Returns:
            Predicate returning True for ink pixels
        """
        if transparent_background:
            alpha_threshold = self.config.alpha_threshold
            return lambda px: px[3] > alpha_threshold

        brightness_threshold = self.config.brightness_threshold
        return lambda px: (px[0] + px[1] + px[2]) / 3 < brightness_threshold

    def trace(self, pixels: PixelGrid) -> TraceResult:
        """Trace an image into an outline.

        Never fails: an image without ink yields a full-canvas rectangle and
        a logged warning instead.

        Args:
            pixels: Row-major grid of (r, g, b, a) tuples

        Returns:
            TraceResult with the outline and the source dimensions
        """
        height = len(pixels)
        width = max((len(row) for row in pixels), default=0)

        is_ink = self.ink_test(self.has_transparent_background(pixels))

        commands: list[PathCommand] = []
        ink_pixels = 0
        for row_idx, row in enumerate(pixels):
            top = float(height - row_idx)
            bottom = top - 1.0
            run_start: int | None = None
            for col_idx, px in enumerate(row):
                if is_ink(px):
                    ink_pixels += 1
                    if run_start is None:
                        run_start = col_idx
                elif run_start is not None:
                    commands.extend(_run_commands(run_start, col_idx, top, bottom))
                    run_start = None
            if run_start is not None:
                commands.extend(_run_commands(run_start, len(row), top, bottom))

        if not commands:
            logger.warning(
                "No ink found in artwork, using placeholder outline",
                width=width,
                height=height,
            )
            fallback = Outline.rectangle(0.0, 0.0, float(width), float(height))
            return TraceResult(
                outline=fallback,
                width=width,
                height=height,
                ink_pixels=0,
                used_fallback=True,
            )

        logger.debug(
            "Artwork traced",
            width=width,
            height=height,
            ink_pixels=ink_pixels,
            runs=len(commands) // 5,
        )
        return TraceResult(
            outline=Outline(commands=tuple(commands), width=width, height=height),
            width=width,
            height=height,
            ink_pixels=ink_pixels,
        )

    def trace_batch(
        self,
        grids: Iterable[PixelGrid],
        should_cancel: Callable[[], bool] | None = None,
    ) -> list[TraceResult]:
        """Trace several images in sequence.

        Cancellation is only checked between images; a single trace always
        runs to completion.

        Args:
            grids: Pixel grids to trace
            should_cancel: Optional callback polled before each image

        Returns:
            TraceResults in input order

        Raises:
            TraceCancelledError: If should_cancel returned True
        """
        pending = list(grids)
        results: list[TraceResult] = []
        for grid in pending:
            if should_cancel is not None and should_cancel():
                logger.info("Tracing cancelled", completed=len(results))
                raise TraceCancelledError(len(results), len(pending) - len(results))
            results.append(self.trace(grid))
        return results


def _run_commands(start: int, end: int, top: float, bottom: float) -> tuple[PathCommand, ...]:
    """Emit the closed rectangle for one ink run ``[start, end)``."""
    x0 = float(start)
    x1 = float(end)
    return (
        PathCommand(CommandType.MOVE, (Point(x0, top),)),
        PathCommand(CommandType.LINE, (Point(x1, top),)),
        PathCommand(CommandType.LINE, (Point(x1, bottom),)),
        PathCommand(CommandType.LINE, (Point(x0, bottom),)),
        PathCommand(CommandType.CLOSE),
    )


def trace_pixels(pixels: PixelGrid, config: TracerConfig | None = None) -> TraceResult:
    """Trace an image with a one-off tracer.

    Args:
        pixels: Row-major grid of (r, g, b, a) tuples
        config: Optional tracer thresholds

    Returns:
        TraceResult for the image
    """
    return RasterTracer(config).trace(pixels)
