#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Glyph rasterizers.

A rasterizer turns (character, sub-pixel shift) into anti-aliased coverage
samples of a single font at a fixed size. The template cache only depends
on `GlyphRasterizer.rasterize`.
"""

from typing import List, Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw

from config import GLYPH_RENDER_SIZE, GLYPH_CANVAS_PADDING
from .shapes import CoverageSample
from utils.fonts import get_font
from utils.logging import get_logger

log = get_logger()


class GlyphRasterizationError(RuntimeError):
    """The font cannot produce a glyph for a requested character."""


class GlyphRasterizer:
    """Interface for glyph rasterizers."""

    size = GLYPH_RENDER_SIZE

    def rasterize(self, character: str, shift: Tuple[float, float]) -> List[CoverageSample]:
        """
        Render one character.

        Args:
            character: Single character to render
            shift: Fractional (x, y) start offset, each in [0, 1)

        Returns:
            (x, y, coverage) samples with coverage in [0, 1]
        """
        raise NotImplementedError("Subclasses must implement rasterize method")


def samples_from_canvas(canvas: np.ndarray) -> List[CoverageSample]:
    """Convert an 8-bit grayscale canvas into coverage samples of its non-zero pixels."""
    rows, cols = np.nonzero(canvas)
    return [
        (int(x), int(y), float(canvas[y, x]) / 255.0)
        for y, x in zip(rows, cols)
    ]


class PillowGlyphRasterizer(GlyphRasterizer):
    """Renders glyphs with Pillow's FreeType binding at fractional start positions."""

    def __init__(self, font_path: Optional[str] = None, size: int = GLYPH_RENDER_SIZE):
        self.font_path = font_path
        self.size = size
        self.font = get_font(font_path, size)
        # Room for ascenders/descenders of any glyph at this size
        self.canvas_size = size * 2 + GLYPH_CANVAS_PADDING * 2

    def rasterize(self, character: str, shift: Tuple[float, float]) -> List[CoverageSample]:
        if len(character) != 1:
            raise GlyphRasterizationError(f"Expected a single character, got {character!r}")

        canvas = Image.new("L", (self.canvas_size, self.canvas_size), 0)
        draw = ImageDraw.Draw(canvas)
        # Pillow passes the fractional part of the origin to FreeType as the start offset
        origin = (GLYPH_CANVAS_PADDING + shift[0], GLYPH_CANVAS_PADDING + shift[1])
        draw.text(origin, character, font=self.font, fill=255)

        samples = samples_from_canvas(np.asarray(canvas))
        if not samples:
            raise GlyphRasterizationError(
                f"Font {self.font_path or 'default'} has no visible glyph for {character!r}"
            )
        log.trace(f"[FONT] Rendered {character!r} at shift {shift}: {len(samples)} samples")
        return samples
