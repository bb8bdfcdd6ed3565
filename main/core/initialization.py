#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core component initialization
"""

import argparse

from subtitle_recognition import GlyphTemplateCache, PillowGlyphRasterizer, SubtitleRecognizer
from utils.logging import get_logger, log_success

log = get_logger()


def initialize_recognizer(args: argparse.Namespace) -> SubtitleRecognizer:
    """
    Build the glyph template cache and the recognizer for the requested font.

    Raises:
        FileNotFoundError: no usable font file
        GlyphRasterizationError: the font lacks a glyph of the alphabet
    """
    log.info("Rendering glyph templates...")
    rasterizer = PillowGlyphRasterizer(args.font_path, args.font_size)
    cache = GlyphTemplateCache(rasterizer)
    log_success(log, f"Glyph templates ready ({cache.get_template_count()} templates)", "🔤")

    return SubtitleRecognizer(
        cache=cache,
        word_gap=args.word_gap,
        line_threshold=args.line_threshold,
        measure_time=bool(args.verbose or args.debug),
    )
