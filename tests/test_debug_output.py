"""Tests for debug renderings."""

import cv2
import numpy as np

from config import DEBUG_COMPARISON_GAP_PX, DEBUG_SHEET_COLUMNS
from subtitle_recognition.debug_output import (
    comparison_filename,
    dump_comparisons,
    render_comparison,
    render_template_sheet,
    save_selection_raster,
    save_template_sheet,
)
from subtitle_recognition.geometry import Bounds, Point
from subtitle_recognition.lines import RecognizedCharacter
from subtitle_recognition.matcher import CharacterMatch
from subtitle_recognition.recognizer import SubtitleRecognizer

from conftest import GLYPHS, TEST_ALPHABET, art_shape


def test_selection_raster_round_trips_colors(tmp_path):
    selection = np.zeros((4, 5, 3), dtype=np.uint8)
    selection[1, 2] = (255, 128, 0)
    path = tmp_path / "selection.ppm"
    assert save_selection_raster(selection, path)

    loaded = cv2.cvtColor(cv2.imread(str(path)), cv2.COLOR_BGR2RGB)
    assert np.array_equal(loaded, selection)


def test_comparison_places_shape_and_template_side_by_side():
    shape = art_shape(GLYPHS["l"])
    template = art_shape(GLYPHS["o"])
    canvas = render_comparison(shape, template)
    assert canvas.shape == (7, 1 + DEBUG_COMPARISON_GAP_PX + 5)
    assert canvas[6, 0] == 255
    assert canvas[0, 1 + DEBUG_COMPARISON_GAP_PX] == 255
    assert canvas[6, 1 + DEBUG_COMPARISON_GAP_PX] == 0
    assert not canvas[:, 1:1 + DEBUG_COMPARISON_GAP_PX].any()


def test_comparison_without_template():
    canvas = render_comparison(art_shape(GLYPHS["n"]), None)
    assert canvas.shape == (5, 5 + DEBUG_COMPARISON_GAP_PX)


def test_comparison_filename_is_filesystem_safe():
    character = RecognizedCharacter(Bounds.from_size(0, 0, 6, 5), (CharacterMatch("r.", 42, 42),))
    assert comparison_filename(3, character) == "003_72-2e_42.png"


def test_dump_comparisons_writes_one_file_per_character(tmp_path, glyph_cache, make_text_frame):
    recognizer = SubtitleRecognizer(cache=glyph_cache)
    frame = make_text_frame([(GLYPHS["o"], Point(2, 2)), (GLYPHS["l"], Point(20, 1))])
    result = recognizer.recognize(frame)

    written = dump_comparisons(tmp_path / "dumps", recognizer.best_templates(result), result.characters)
    assert written == 2
    assert len(list((tmp_path / "dumps").glob("*.png"))) == 2


def test_template_sheet_grid(tmp_path, glyph_cache):
    sheet = render_template_sheet(glyph_cache)
    cell_width, cell_height = 5 + 2, 7 + 2
    rows = (len(TEST_ALPHABET) + DEBUG_SHEET_COLUMNS - 1) // DEBUG_SHEET_COLUMNS
    assert sheet.shape == (rows * cell_height, DEBUG_SHEET_COLUMNS * cell_width)
    # First template ("r") starts inside its one pixel border
    assert sheet[1, 1] == 255
    assert sheet[0, 0] == 0

    assert save_template_sheet(glyph_cache, tmp_path / "sheet.png")
    assert (tmp_path / "sheet.png").exists()
