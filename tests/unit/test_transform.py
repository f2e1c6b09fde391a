"""Unit tests for path transforms and bounding boxes."""

import math

import pytest

from fontmaker.config import StyleConfig
from fontmaker.core.bounds import compute_bounds, glyph_bounds
from fontmaker.core.transform import transform_outline, transform_point
from fontmaker.domain import (
    CommandType,
    GlyphRecord,
    GlyphTransform,
    Outline,
    PathCommand,
    Point,
    StyleVariant,
)


def curve_outline() -> Outline:
    return Outline(
        commands=(
            PathCommand(CommandType.MOVE, (Point(0, 0),)),
            PathCommand(CommandType.CURVE, (Point(10, 50), Point(90, 50), Point(100, 0))),
            PathCommand(CommandType.CLOSE),
        )
    )


class TestTransformPoint:
    """Tests for the per-point mapping."""

    def test_identity(self) -> None:
        """Test the default transform leaves points unchanged."""
        assert transform_point(Point(12.5, -3.0), GlyphTransform()) == Point(12.5, -3.0)

    def test_scale_then_translate(self) -> None:
        """Test scaling happens before translation."""
        t = GlyphTransform(scale=2.0, translate_x=10.0, translate_y=5.0)
        assert transform_point(Point(3, 4), t) == Point(16.0, 13.0)

    def test_rotation_about_origin(self) -> None:
        """Test a quarter turn is counter-clockwise about the origin."""
        p = transform_point(Point(10, 0), GlyphTransform(rotate_degrees=90.0))
        assert p.x == pytest.approx(0.0, abs=1e-9)
        assert p.y == pytest.approx(10.0)

    def test_shear_uses_scaled_y(self) -> None:
        """Test italic shear is applied after scaling."""
        p = transform_point(Point(0, 10), GlyphTransform(scale=2.0), shear=0.5)
        assert p == Point(10.0, 20.0)


class TestTransformOutline:
    """Tests for transform_outline."""

    def test_identity_is_equal(self) -> None:
        """Test the identity transform reproduces the outline."""
        outline = curve_outline()
        assert transform_outline(outline, GlyphTransform()) == outline

    def test_input_not_mutated(self) -> None:
        """Test the source outline is left untouched."""
        outline = curve_outline()
        before = outline.to_dict()
        transform_outline(outline, GlyphTransform(scale=3.0, rotate_degrees=30.0))
        assert outline.to_dict() == before

    def test_empty_outline(self) -> None:
        """Test an empty outline maps to an empty outline."""
        assert transform_outline(Outline(), GlyphTransform(scale=2.0)).is_empty()

    def test_control_points_transformed(self) -> None:
        """Test curve control points follow the same mapping."""
        result = transform_outline(curve_outline(), GlyphTransform(scale=2.0))
        curve = result.commands[1]
        assert curve.points == (Point(20, 100), Point(180, 100), Point(200, 0))

    def test_scales_compose(self) -> None:
        """Test applying scale a then b equals scale a * b."""
        outline = curve_outline()
        twice = transform_outline(
            transform_outline(outline, GlyphTransform(scale=2.0)), GlyphTransform(scale=1.5)
        )
        once = transform_outline(outline, GlyphTransform(scale=3.0))
        for a, b in zip(twice.iter_points(), once.iter_points(), strict=True):
            assert a.x == pytest.approx(b.x)
            assert a.y == pytest.approx(b.y)

    def test_rotations_compose(self) -> None:
        """Test rotating by 90 degrees twice equals rotating by 180 once."""
        outline = curve_outline()
        twice = transform_outline(
            transform_outline(outline, GlyphTransform(rotate_degrees=90.0)),
            GlyphTransform(rotate_degrees=90.0),
        )
        once = transform_outline(outline, GlyphTransform(rotate_degrees=180.0))
        for a, b in zip(twice.iter_points(), once.iter_points(), strict=True):
            assert a.x == pytest.approx(b.x, abs=1e-9)
            assert a.y == pytest.approx(b.y, abs=1e-9)

    def test_bold_scales_up(self) -> None:
        """Test Bold applies the extra style scale."""
        outline = Outline.rectangle(0, 0, 100, 100)
        bold = transform_outline(outline, GlyphTransform(), StyleVariant.BOLD)
        bounds = compute_bounds(bold)
        assert bounds is not None
        assert bounds.width == pytest.approx(112.0)

    def test_italic_shears_top_right(self) -> None:
        """Test Italic moves points right in proportion to their height."""
        outline = Outline.rectangle(0, 0, 100, 100)
        italic = transform_outline(outline, GlyphTransform(), StyleVariant.ITALIC)
        shift = 100 * math.tan(math.radians(12))
        top_right = italic.commands[2].points[0]
        assert top_right.x == pytest.approx(100 + shift)
        assert top_right.y == pytest.approx(100)

    def test_custom_style_config(self) -> None:
        """Test style modifiers come from the config."""
        config = StyleConfig(bold_scale=2.0)
        outline = Outline.rectangle(0, 0, 10, 10)
        bold = transform_outline(outline, GlyphTransform(), StyleVariant.BOLD, config)
        bounds = compute_bounds(bold)
        assert bounds is not None
        assert bounds.width == pytest.approx(20.0)


class TestBounds:
    """Tests for bounding-box evaluation."""

    def test_rectangle_bounds(self) -> None:
        """Test bounds of a simple rectangle."""
        bounds = compute_bounds(Outline.rectangle(-5, 10, 15, 40))
        assert bounds is not None
        assert (bounds.x_min, bounds.x_max, bounds.y_min, bounds.y_max) == (-5, 15, 10, 40)

    def test_control_points_included(self) -> None:
        """Test curve control points count toward the bounds."""
        bounds = compute_bounds(curve_outline())
        assert bounds is not None
        assert bounds.y_max == 50

    def test_no_coordinates(self) -> None:
        """Test outlines without coordinates have no bounds."""
        assert compute_bounds(Outline()) is None
        assert compute_bounds(Outline(commands=(PathCommand(CommandType.CLOSE),))) is None

    def test_single_point(self) -> None:
        """Test a single point has zero width and height."""
        outline = Outline(commands=(PathCommand(CommandType.MOVE, (Point(5, 5),)),))
        bounds = compute_bounds(outline)
        assert bounds is not None
        assert bounds.width == 0
        assert bounds.height == 0

    def test_glyph_bounds_applies_transform(self) -> None:
        """Test glyph bounds measure the transformed artwork."""
        record = GlyphRecord(
            char="A",
            outline=Outline.rectangle(0, 0, 10, 10),
            transform=GlyphTransform(scale=3.0, translate_x=5.0),
        )
        bounds = glyph_bounds(record)
        assert bounds is not None
        assert (bounds.x_min, bounds.x_max) == (5.0, 35.0)

    def test_glyph_bounds_without_artwork(self) -> None:
        """Test records without artwork have no bounds."""
        assert glyph_bounds(GlyphRecord(char="A")) is None
