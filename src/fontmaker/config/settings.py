"""Configuration settings for FontMaker."""

import math
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field

from fontmaker.domain.style import StyleVariant


@dataclass(frozen=True, slots=True)
class StyleModifiers:
    """Scalar geometry modifiers derived from a style variant.

    Attributes:
        scale: Extra uniform scale applied on top of the glyph scale
        shear: Horizontal shear factor (tan of the slant angle)
        advance_factor: Multiplier applied to exported advance widths
    """

    scale: float
    shear: float
    advance_factor: float


class TracerConfig(BaseModel):
    """Configuration for raster tracing."""

    alpha_threshold: int = Field(
        default=128,
        ge=0,
        le=254,
        description="Alpha above this value counts as ink on transparent artwork",
    )
    brightness_threshold: int = Field(
        default=128,
        ge=1,
        le=255,
        description="Average RGB below this value counts as ink on opaque artwork",
    )
    opaque_ratio: float = Field(
        default=0.95,
        gt=0.0,
        le=1.0,
        description="Share of opaque pixels above which the background is treated as opaque",
    )


class StyleConfig(BaseModel):
    """Geometry modifiers for synthesized style variants."""

    bold_scale: float = Field(
        default=1.12,
        gt=0.0,
        description="Uniform scale applied to Bold outlines",
    )
    italic_angle_degrees: float = Field(
        default=12.0,
        ge=-45.0,
        le=45.0,
        description="Slant angle applied to Italic outlines",
    )
    bold_advance_factor: float = Field(
        default=1.08,
        gt=0.0,
        description="Advance width compensation for Bold glyphs",
    )

    def modifiers(self, style: StyleVariant) -> StyleModifiers:
        """Resolve the scalar modifiers for a style variant.

        Args:
            style: Requested style variant

        Returns:
            StyleModifiers with scale, shear and advance factor
        """
        return StyleModifiers(
            scale=self.bold_scale if style.is_bold else 1.0,
            shear=math.tan(math.radians(self.italic_angle_degrees)) if style.is_italic else 0.0,
            advance_factor=self.bold_advance_factor if style.is_bold else 1.0,
        )


class LayoutConfig(BaseModel):
    """Configuration for the typesetting engine."""

    default_advance: float = Field(
        default=600.0,
        gt=0.0,
        description="Advance used for characters without a glyph record",
    )
    default_bearing: float = Field(
        default=80.0,
        ge=0.0,
        description="Bearing used on both sides of characters without a glyph record",
    )
    min_ink_width: float = Field(
        default=120.0,
        gt=0.0,
        description="Floor for the visible ink width of a glyph",
    )
    grid_unit: float = Field(
        default=20.0,
        gt=0.0,
        description="Snapping unit for grid layout mode",
    )


class GlyphDefaults(BaseModel):
    """Default metrics for newly created glyph records."""

    advance_width: float = Field(default=600.0, description="Default advance width")
    left_bearing: float = Field(default=100.0, ge=0.0, description="Default left bearing")
    right_bearing: float = Field(default=100.0, ge=0.0, description="Default right bearing")


class ExportConfig(BaseModel):
    """Configuration for font export."""

    output_dir: Path = Field(
        default=Path("."),
        description="Directory where exported fonts are written",
    )
    notdef_width_ratio: float = Field(
        default=0.5,
        gt=0.0,
        le=1.0,
        description="Width of the .notdef placeholder as a share of units per em",
    )
    version: str = Field(
        default="1.000",
        pattern=r"^\d+\.\d+$",
        description="Font version written to the name table",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class FontMakerSettings(BaseModel):
    """Main application settings."""

    tracer: TracerConfig = Field(default_factory=TracerConfig)
    style: StyleConfig = Field(default_factory=StyleConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    glyph_defaults: GlyphDefaults = Field(default_factory=GlyphDefaults)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> FontMakerSettings:
    """Get default application settings."""
    return FontMakerSettings()
