"""Test configuration and fixtures.

Provides reusable fixtures for:
- An ASCII-art glyph rasterizer (no system fonts needed)
- Template caches built from it
- Frame builders drawing glyphs / blobs onto black rasters
- Logging isolation
"""

import logging
from typing import Dict, List, Sequence, Tuple

import numpy as np
import pytest

from subtitle_recognition.geometry import Point
from subtitle_recognition.raster import FramePair, Raster
from subtitle_recognition.rasterizer import GlyphRasterizer
from subtitle_recognition.shapes import CoverageSample, make_shape
from subtitle_recognition.template_manager import GlyphTemplateCache


# =============================================================================
# Glyphs
# =============================================================================

# Glyphs are 4-connected and stay below 36 cells, so no single template can
# reach 8,000,000 on the 9x5 "rn" blob used by the ligature tests.
GLYPHS: Dict[str, Tuple[str, ...]] = {
    "r": (
        "#.##",
        "###.",
        "#...",
        "#...",
        "#...",
    ),
    "n": (
        "####.",
        "#..##",
        "#...#",
        "#...#",
        "#...#",
    ),
    "o": (
        "#####",
        "#...#",
        "#...#",
        "#...#",
        "#####",
    ),
    "l": (
        "#",
        "#",
        "#",
        "#",
        "#",
        "#",
        "#",
    ),
    "i": (
        "#",
        ".",
        "#",
        "#",
        "#",
        "#",
    ),
    ".": (
        "##",
        "##",
    ),
}

TEST_ALPHABET = "rnoli."


def art_samples(art: Sequence[str], origin: Point = Point(0, 0), coverage: float = 1.0) -> List[CoverageSample]:
    return [
        (origin.x + x, origin.y + y, coverage)
        for y, row in enumerate(art)
        for x, cell in enumerate(row)
        if cell == "#"
    ]


def art_shape(art: Sequence[str], origin: Point = Point(0, 0)):
    return make_shape(art_samples(art, origin))


def square_art(size: int) -> Tuple[str, ...]:
    return ("#" * size,) * size


class AsciiGlyphRasterizer(GlyphRasterizer):
    """Draws glyphs from ASCII art; characters without art produce no ink."""

    def __init__(self, glyphs: Dict[str, Tuple[str, ...]] = None, size: int = 24):
        self.glyphs = GLYPHS if glyphs is None else glyphs
        self.size = size
        self.calls = []

    def rasterize(self, character, shift):
        self.calls.append((character, shift))
        art = self.glyphs.get(character)
        if art is None:
            return []
        # Integer placement only; the cache normalizes the position away
        return art_samples(art, Point(3 + int(shift[0] * 2), 4 + int(shift[1] * 2)))


@pytest.fixture
def ascii_rasterizer():
    return AsciiGlyphRasterizer()


@pytest.fixture
def glyph_cache(ascii_rasterizer):
    """Template cache over the small test alphabet."""
    return GlyphTemplateCache(ascii_rasterizer, alphabet=TEST_ALPHABET)


# =============================================================================
# Frame builders
# =============================================================================

WHITE = (255, 255, 255)


def blank_pixels(width: int, height: int) -> np.ndarray:
    return np.zeros((height, width, 3), dtype=np.uint8)


def draw_art(pixels: np.ndarray, art: Sequence[str], origin: Point, color=WHITE) -> np.ndarray:
    for y, row in enumerate(art):
        for x, cell in enumerate(row):
            if cell == "#":
                pixels[origin.y + y, origin.x + x] = color
    return pixels


def frame_from_pixels(full: np.ndarray, mask: np.ndarray = None) -> FramePair:
    """Frame pair where the mask defaults to the full frame (every ink pixel changed)."""
    if mask is None:
        mask = full.copy()
    return FramePair(Raster(full), Raster(mask))


@pytest.fixture
def make_text_frame():
    """Build a frame with ASCII-art glyphs drawn at the given origins."""
    def _make(placements: Sequence[Tuple[Sequence[str], Point]], width: int = 60, height: int = 40) -> FramePair:
        pixels = blank_pixels(width, height)
        for art, origin in placements:
            draw_art(pixels, art, origin)
        return frame_from_pixels(pixels)
    return _make


# =============================================================================
# Logging isolation
# =============================================================================

@pytest.fixture(autouse=True)
def restore_root_logging():
    """Drop the root handlers a test's setup_logging() call installed."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)
