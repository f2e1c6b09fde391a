"""Font writer for compiling and saving exported fonts.

This module provides the FontWriter class, which turns an AssembledFont into
a CFF-flavoured OpenType binary and writes it with the
``{family}-{style}.otf`` naming convention.
"""

from io import BytesIO
from pathlib import Path

import structlog
from fontTools.feaLib.builder import addOpenTypeFeaturesFromString
from fontTools.fontBuilder import FontBuilder
from fontTools.ttLib import TTFont

from fontmaker.config import ExportConfig
from fontmaker.domain import AssembledFont, KerningPair, Outline
from fontmaker.exceptions import FontSaveError
from fontmaker.io.converter import outline_to_charstring

logger = structlog.get_logger(__name__)

NOTDEF = ".notdef"


def build_kern_feature(pairs: tuple[KerningPair, ...] | list[KerningPair]) -> str:
    """Generate feature code for simple pair kerning.

    Glyph names are escaped so names that collide with feature keywords
    still parse.

    Args:
        pairs: Pair adjustments between glyph names

    Returns:
        Feature file source, or an empty string when there are no pairs
    """
    if not pairs:
        return ""
    lines = ["feature kern {"]
    for pair in pairs:
        lines.append(f"    pos \\{pair.left} \\{pair.right} {pair.value};")
    lines.append("} kern;")
    return "\n".join(lines)


class FontWriter:
    """Compiles assembled fonts and writes them to disk.

    Compilation happens entirely in memory; nothing touches the filesystem
    until the binary is complete.

    Example:
        writer = FontWriter(ExportConfig(output_dir=Path("dist")))
        path = writer.save(assembled)
    """

    def __init__(self, config: ExportConfig | None = None) -> None:
        """Initialize the font writer.

        Args:
            config: Export settings (defaults if None)
        """
        self.config = config or ExportConfig()

    def build(self, font: AssembledFont) -> TTFont:
        """Build a TTFont from an assembled font.

        Head timestamps are pinned so identical input compiles to identical
        bytes.

        Args:
            font: Resolved glyphs, metrics and kerning

        Returns:
            In-memory TTFont with CFF outlines
        """
        metadata = font.metadata
        upm = round(metadata.units_per_em)
        ascender = round(metadata.ascender)
        descender = -abs(round(metadata.descender))
        family = metadata.family_name
        style = font.style_name
        ps_name = f"{family.replace(' ', '')}-{style.replace(' ', '')}"

        builder = FontBuilder(upm, isTTF=False)
        builder.setupHead(
            unitsPerEm=upm,
            fontRevision=float(self.config.version),
            created=0,
            modified=0,
        )
        builder.setupGlyphOrder(font.glyph_order)
        builder.setupCharacterMap(font.cmap)

        notdef_width = round(upm * self.config.notdef_width_ratio)
        notdef_outline = Outline.rectangle(0.0, 0.0, float(notdef_width), float(max(ascender, 1)))

        charstrings = {NOTDEF: outline_to_charstring(notdef_outline, notdef_width)}
        metrics = {NOTDEF: (notdef_width, 0)}
        for glyph in font.glyphs:
            charstrings[glyph.name] = outline_to_charstring(glyph.outline, glyph.advance_width)
            metrics[glyph.name] = (glyph.advance_width, glyph.left_side_bearing)

        builder.setupCFF(
            psName=ps_name,
            fontInfo={"FamilyName": family, "FullName": f"{family} {style}"},
            charStringsDict=charstrings,
            privateDict={},
        )
        builder.setupHorizontalMetrics(metrics)
        builder.setupHorizontalHeader(ascent=ascender, descent=descender)
        builder.setupNameTable(
            {
                "familyName": family,
                "styleName": style,
                "uniqueFontIdentifier": f"{ps_name};{self.config.version}",
                "fullName": f"{family} {style}",
                "psName": ps_name,
                "version": f"Version {self.config.version}",
            }
        )
        builder.setupOS2(
            sTypoAscender=ascender,
            sTypoDescender=descender,
            sTypoLineGap=0,
            usWinAscent=ascender,
            usWinDescent=abs(descender),
            fsType=0,
        )
        builder.setupPost()

        fea_code = build_kern_feature(font.kerning)
        if fea_code:
            addOpenTypeFeaturesFromString(builder.font, fea_code)

        logger.debug(
            "Font compiled",
            family=family,
            style=style,
            glyphs=len(font.glyphs),
            kerning_pairs=len(font.kerning),
        )
        return builder.font

    def to_bytes(self, font: AssembledFont) -> bytes:
        """Compile an assembled font to OpenType bytes.

        Args:
            font: Resolved glyphs, metrics and kerning

        Returns:
            Binary font data
        """
        buffer = BytesIO()
        self.build(font).save(buffer)
        return buffer.getvalue()

    def save(self, font: AssembledFont, output_dir: Path | None = None) -> Path:
        """Compile and write an assembled font.

        Args:
            font: Resolved glyphs, metrics and kerning
            output_dir: Target directory (config output_dir if None)

        Returns:
            Path of the written file

        Raises:
            FontSaveError: If the file cannot be written
        """
        data = self.to_bytes(font)
        directory = output_dir if output_dir is not None else self.config.output_dir
        path = Path(directory) / self.get_output_filename(font.family_name, font.style_name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise FontSaveError(str(path), str(e)) from e

        logger.info("Font written", path=str(path), size=len(data))
        return path

    @staticmethod
    def get_output_filename(family_name: str, style_name: str) -> str:
        """Generate the output file name for one style.

        Converts: ("MyFont", "Bold") -> "MyFont-Bold.otf"

        Args:
            family_name: Font family name
            style_name: Style name

        Returns:
            File name with .otf extension
        """
        return f"{family_name}-{style_name}.otf"
