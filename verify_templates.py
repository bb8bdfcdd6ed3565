#!/usr/bin/env python3
"""
Template verification script for hardsub recognition.

Renders the glyph template cache into a contact-sheet image so the font,
size and sub-pixel shifts can be checked by eye before running on frames.
"""

import argparse
import sys

from config import GLYPH_RENDER_SIZE, GLYPH_SHIFTS
from subtitle_recognition import GlyphRasterizationError, GlyphTemplateCache, PillowGlyphRasterizer
from subtitle_recognition.debug_output import save_template_sheet
from utils.logging import get_logger, setup_logging, log_section

log = get_logger()


def verify_templates(output: str, font_path: str = None, font_size: int = GLYPH_RENDER_SIZE,
                     shift_index: int = 0) -> bool:
    """
    Build the template cache and write one shift of it as a contact sheet.

    Args:
        output: Image file to write
        font_path: Font file (system default when None)
        font_size: Glyph render size
        shift_index: Which sub-pixel shift to show

    Returns:
        True if the sheet was written
    """
    cache = GlyphTemplateCache(PillowGlyphRasterizer(font_path, font_size))
    stats = cache.get_statistics()
    log_section(log, "Template statistics", "🔤", {
        "Characters": stats['character_count'],
        "Templates": stats['total_templates'],
        "Largest glyph": f"{stats['max_width']}x{stats['max_height']}",
        "Build time": f"{stats['build_time_ms']:.1f}ms",
    })
    return save_template_sheet(cache, output, shift_index)


def main():
    """Main function for template verification."""
    parser = argparse.ArgumentParser(description="Render glyph templates into a contact sheet")
    parser.add_argument("output", help="Image file for the contact sheet (PNG, PPM, ...)")
    parser.add_argument("--font", dest="font_path", default=None,
                       help="TrueType font to render (default: first system font found)")
    parser.add_argument("--font-size", type=int, default=GLYPH_RENDER_SIZE,
                       help="Glyph render size in points")
    parser.add_argument("--shift", type=int, default=0, choices=range(len(GLYPH_SHIFTS)),
                       help="Sub-pixel shift index to render")
    args = parser.parse_args()

    setup_logging('verbose', write_logs=False)

    try:
        ok = verify_templates(args.output, args.font_path, args.font_size, args.shift)
    except (FileNotFoundError, GlyphRasterizationError) as e:
        log.error(f"Cannot render templates: {e}")
        return 1

    if ok:
        log.info(f"Template sheet written: {args.output}")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
