"""End-to-end recognition of synthetic frames."""

import cv2
import numpy as np
import pytest

from subtitle_recognition.geometry import Point
from subtitle_recognition.recognizer import SubtitleRecognizer

from conftest import GLYPHS, blank_pixels, frame_from_pixels, square_art


@pytest.fixture
def recognizer(glyph_cache):
    return SubtitleRecognizer(cache=glyph_cache)


def test_single_glyph(recognizer, make_text_frame):
    result = recognizer.recognize(make_text_frame([(GLYPHS["o"], Point(10, 10))]))
    assert result.text() == "o"
    assert result.characters[0].is_confident
    assert result.characters[0].best.match_score == 10_000_000


def test_words_and_dot_merging(recognizer, make_text_frame):
    frame = make_text_frame([
        (GLYPHS["l"], Point(2, 5)),
        (GLYPHS["o"], Point(5, 7)),
        (GLYPHS["i"], Point(20, 6)),
        (GLYPHS["n"], Point(23, 7)),
    ])
    result = recognizer.recognize(frame)
    # "i" is segmented as dot + stem and merged back before matching
    assert len(result.shapes) == 4
    assert result.text() == "lo in"


def test_touching_glyphs_split_into_composite(recognizer, make_text_frame):
    frame = make_text_frame([(GLYPHS["r"], Point(10, 10)), (GLYPHS["n"], Point(14, 10))])
    result = recognizer.recognize(frame)
    assert len(result.characters) == 1
    assert result.text() == "rn"


def test_two_blobs_on_separate_lines(recognizer):
    pixels = blank_pixels(200, 200)
    cv2.circle(pixels, (50, 100), 5, (255, 255, 255), -1)
    cv2.circle(pixels, (52, 140), 5, (255, 255, 255), -1)
    result = recognizer.recognize(frame_from_pixels(pixels))
    assert len(result.characters) == 2
    assert len(result.lines) == 2
    assert [line.start_y for line in result.lines] == [95, 135]


def test_colored_surround_yields_nothing(recognizer):
    pixels = blank_pixels(40, 30)
    pixels[5:25, 5:35] = (40, 90, 200)
    pixels[10:20, 10:20] = (255, 255, 255)
    result = recognizer.recognize(frame_from_pixels(pixels))
    assert result.characters == []
    assert result.discarded_blobs == 1
    assert result.text() == ""
    assert not result.selection.any()


def test_uncertain_characters_are_marked(recognizer, make_text_frame):
    frame = make_text_frame([(square_art(3), Point(4, 4))])
    result = recognizer.recognize(frame)
    assert result.uncertain_count == 1
    assert result.text(mark_uncertain=True).endswith("?")


def test_selection_raster_has_frame_size(recognizer, make_text_frame):
    frame = make_text_frame([(GLYPHS["o"], Point(1, 1))], width=30, height=20)
    result = recognizer.recognize(frame)
    assert result.selection.shape == (20, 30, 3)
    assert int(np.count_nonzero(result.selection.any(axis=2))) == 16


def test_timing_statistics(recognizer, make_text_frame):
    frame = make_text_frame([(GLYPHS["o"], Point(10, 10))])
    recognizer.recognize(frame)
    recognizer.recognize(frame)
    stats = recognizer.get_timing_stats()
    assert stats['recognition_call_count'] == 2
    assert stats['avg_recognition_time'] > 0
    recognizer.reset_timing_stats()
    assert recognizer.get_timing_stats()['recognition_call_count'] == 0


def test_best_templates_pairs(recognizer, make_text_frame):
    frame = make_text_frame([
        (GLYPHS["o"], Point(2, 2)),
        (GLYPHS["r"], Point(20, 2)),
        (GLYPHS["n"], Point(24, 2)),
    ])
    result = recognizer.recognize(frame)
    pairs = recognizer.best_templates(result)
    assert len(pairs) == 2
    assert pairs[0][1] is recognizer.cache.get_template("o", 0)
    assert pairs[1][1] is None
