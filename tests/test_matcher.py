"""Tests for template scoring and ranking."""

import numpy as np
import pytest

from config import MATCH_SCORE_SCALE
from subtitle_recognition.geometry import Point
from subtitle_recognition.matcher import (
    CharacterMatch,
    match_all_characters,
    match_character,
    rank_matches,
    score_alignment,
    score_template,
    trim_leading_rows,
)

from conftest import GLYPHS, art_shape


def grid(*rows):
    return np.array([[1.0 if c == "#" else 0.0 for c in row] for row in rows])


class TestScoreAlignment:
    def test_identical_matrices_score_one_per_cell(self):
        image = grid("#.#", "###")
        assert score_alignment(image, image, 0, 0) == pytest.approx(6.0)

    def test_mismatches_cost_their_difference(self):
        image = np.array([[0.25, 1.0]])
        template = np.array([[1.0, 1.0]])
        assert score_alignment(image, template, 0, 0) == pytest.approx(1.25)

    def test_cells_outside_are_penalized_by_squared_distance(self):
        image = grid("#")
        template = grid("###")
        # Centre cell inside, one cell one column past each side
        assert score_alignment(image, template, -1, 0) == pytest.approx(1.0 - 2 * 1 / 100)
        # Cells at distance 1 and 2 beyond the right edge
        assert score_alignment(image, template, 0, 0) == pytest.approx(1.0 - (1 + 4) / 100)

    def test_corner_distance_adds_both_edges(self):
        image = grid("#")
        template = grid("##", "##")
        # (1, 1) sticks out one column and one row: distance 2
        expected = 1.0 - (1 + 1 + 4) / 100
        assert score_alignment(image, template, 0, 0) == pytest.approx(expected)

    def test_empty_template_cells_cost_nothing_outside(self):
        image = grid("#")
        template = grid("#..")
        assert score_alignment(image, template, 0, 0) == pytest.approx(1.0)

    def test_best_offset_wins(self):
        image = grid("...", ".#.", "...")
        template = grid("#")
        # Only the (1, 1) offset lands on the ink
        assert score_template(image, template) == pytest.approx(1.0)
        assert score_template(image, template, offsets=[(0, 0)]) == pytest.approx(0.0)


class TestTrimLeadingRows:
    def test_trims_only_for_narrower_templates(self):
        image = grid("...#", "#..#", "#...")
        assert trim_leading_rows(image, 2).shape == (2, 4)
        assert trim_leading_rows(image, 4).shape == (3, 4)

    def test_keeps_image_with_ink_on_top(self):
        image = grid("#..", "...")
        assert trim_leading_rows(image, 1) is image

    def test_keeps_image_without_ink_in_window(self):
        image = grid("..#", "..#")
        assert trim_leading_rows(image, 1) is image


class TestMatchCharacter:
    def test_own_rendering_scores_full_scale(self, glyph_cache):
        for character in "rnoli.":
            shape = art_shape(GLYPHS[character], Point(40, 12))
            match = match_character(shape, character, glyph_cache)
            assert match.match_score == MATCH_SCORE_SCALE
            assert match.template_score == MATCH_SCORE_SCALE
            assert match.shift_index == 0

    def test_scores_are_normalized_by_respective_areas(self, glyph_cache):
        # "." (2x2) fully inside a 5x5 "o": 3 of its 4 cells hit ink at the corner
        shape = art_shape(GLYPHS["o"])
        match = match_character(shape, ".", glyph_cache)
        assert match.template_score == int(MATCH_SCORE_SCALE * 3 / 4)
        assert match.match_score == int(MATCH_SCORE_SCALE * 3 / 25)

    def test_ranking_puts_best_first(self, glyph_cache):
        shape = art_shape(GLYPHS["o"], Point(7, 3))
        ranked = match_all_characters(shape, glyph_cache)
        assert ranked[0].label == "o"
        assert len(ranked) == glyph_cache.get_character_count()
        scores = [m.match_score for m in ranked]
        assert scores == sorted(scores, reverse=True)


def test_ties_break_alphabetically():
    matches = [
        CharacterMatch("b", 5, 1),
        CharacterMatch("a", 5, 2),
        CharacterMatch("c", 9, 0),
    ]
    assert [m.label for m in rank_matches(matches)] == ["c", "a", "b"]
