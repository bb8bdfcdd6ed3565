"""Tests for font discovery and the Pillow glyph rasterizer."""

import numpy as np
import pytest

import utils.fonts as fonts
from config import GLYPH_SHIFTS
from subtitle_recognition.rasterizer import (
    GlyphRasterizationError,
    GlyphRasterizer,
    PillowGlyphRasterizer,
    samples_from_canvas,
)


@pytest.fixture(autouse=True)
def clear_font_cache():
    fonts.get_font.cache_clear()
    yield
    fonts.get_font.cache_clear()


@pytest.fixture
def system_font():
    path = fonts.find_font_path()
    if path is None:
        pytest.skip("no TrueType font installed")
    return path


def test_find_font_path_prefers_platform_list(monkeypatch):
    monkeypatch.setattr(fonts.sys, "platform", "linux")
    wanted = fonts.FONT_PATHS["linux"][1]
    monkeypatch.setattr(fonts.os.path, "exists", lambda p: p == wanted)
    assert fonts.find_font_path() == wanted


def test_find_font_path_falls_back_to_other_platforms(monkeypatch):
    monkeypatch.setattr(fonts.sys, "platform", "linux")
    wanted = fonts.FONT_PATHS["win32"][0]
    monkeypatch.setattr(fonts.os.path, "exists", lambda p: p == wanted)
    assert fonts.find_font_path() == wanted


def test_get_font_without_any_font(monkeypatch):
    monkeypatch.setattr(fonts, "find_font_path", lambda: None)
    with pytest.raises(FileNotFoundError):
        fonts.get_font()


def test_samples_from_canvas():
    canvas = np.zeros((3, 4), dtype=np.uint8)
    canvas[1, 2] = 255
    canvas[2, 0] = 51
    assert sorted(samples_from_canvas(canvas)) == [(0, 2, pytest.approx(0.2)), (2, 1, 1.0)]


def test_base_rasterizer_is_abstract():
    with pytest.raises(NotImplementedError):
        GlyphRasterizer().rasterize("a", (0.0, 0.0))


class TestPillowGlyphRasterizer:
    def test_renders_coverage_samples(self, system_font):
        rasterizer = PillowGlyphRasterizer(system_font, 24)
        samples = rasterizer.rasterize("W", (0.0, 0.0))
        assert samples
        assert all(0.0 < c <= 1.0 for _, _, c in samples)

    def test_shifts_move_the_ink(self, system_font):
        rasterizer = PillowGlyphRasterizer(system_font, 24)
        renders = [rasterizer.rasterize("l", shift) for shift in GLYPH_SHIFTS]
        assert renders[0] != renders[3]

    def test_blank_glyph_is_an_error(self, system_font):
        rasterizer = PillowGlyphRasterizer(system_font, 24)
        with pytest.raises(GlyphRasterizationError):
            rasterizer.rasterize(" ", (0.0, 0.0))

    def test_rejects_multi_character_input(self, system_font):
        with pytest.raises(GlyphRasterizationError):
            PillowGlyphRasterizer(system_font, 24).rasterize("ab", (0.0, 0.0))
