"""Tests for the flood-fill component segmenter."""

import numpy as np

from subtitle_recognition.geometry import Bounds, Point
from subtitle_recognition.raster import Color
from subtitle_recognition.segmentation import ComponentSegmenter, blobs_to_shapes, segment_frame

from conftest import GLYPHS, WHITE, blank_pixels, draw_art, frame_from_pixels


def square(pixels, x, y, size, color=WHITE):
    pixels[y:y + size, x:x + size] = color
    return pixels


class TestComponentSegmenter:
    def test_separate_blobs_on_black(self):
        pixels = blank_pixels(20, 10)
        square(pixels, 1, 1, 3)
        square(pixels, 10, 4, 2)
        blobs = segment_frame(frame_from_pixels(pixels))
        assert [len(b) for b in blobs] == [9, 4]

    def test_touching_glyphs_form_one_blob(self, make_text_frame):
        frame = make_text_frame([(GLYPHS["r"], Point(5, 5)), (GLYPHS["n"], Point(9, 5))])
        shapes = blobs_to_shapes(segment_frame(frame))
        assert len(shapes) == 1
        assert shapes[0].bounds == Bounds(Point(5, 5), Point(13, 9))

    def test_grey_antialiasing_is_part_of_the_blob(self):
        pixels = blank_pixels(10, 3)
        pixels[1, 2] = WHITE
        pixels[1, 3] = (128, 128, 128)
        pixels[1, 4] = (70, 70, 70)
        pixels[1, 5] = (30, 30, 30)
        pixels[1, 6] = WHITE
        blobs = segment_frame(frame_from_pixels(pixels))
        assert len(blobs) == 2
        assert sorted(blobs[0].points) == [Point(2, 1), Point(3, 1), Point(4, 1)]

    def test_colored_border_discards_blob(self):
        pixels = blank_pixels(12, 12)
        square(pixels, 2, 2, 8, color=(200, 30, 30))
        square(pixels, 4, 4, 4)
        frame = frame_from_pixels(pixels)

        segmenter = ComponentSegmenter(frame)
        blobs = segmenter.run()
        assert blobs == []
        assert blobs_to_shapes(blobs) == []
        assert segmenter.discarded == 1
        assert not segmenter.output_bitmap.any()

    def test_seeds_come_from_the_mask_only(self):
        full = blank_pixels(10, 5)
        square(full, 1, 1, 2)
        square(full, 6, 1, 2)
        mask = blank_pixels(10, 5)
        square(mask, 6, 1, 2)
        blobs = segment_frame(frame_from_pixels(full, mask))
        assert len(blobs) == 1
        assert min(blobs[0].points) == Point(6, 1)

    def test_dim_mask_pixels_do_not_seed(self):
        full = square(blank_pixels(6, 6), 1, 1, 3)
        mask = square(blank_pixels(6, 6), 1, 1, 3, color=(150, 150, 150))
        assert segment_frame(frame_from_pixels(full, mask)) == []

    def test_selection_raster_keeps_frame_colors(self):
        pixels = blank_pixels(8, 4)
        pixels[1, 1] = WHITE
        pixels[1, 2] = (200, 200, 200)
        segmenter = ComponentSegmenter(frame_from_pixels(pixels))
        segmenter.run()
        assert segmenter.output_bitmap[1, 2].tolist() == [200, 200, 200]
        assert segmenter.output_bitmap[1, 1].tolist() == [255, 255, 255]
        assert int(segmenter.output_bitmap.sum()) == 255 * 3 + 200 * 3

    def test_segmentation_is_idempotent(self, make_text_frame):
        frame = make_text_frame([
            (GLYPHS["o"], Point(2, 2)),
            (GLYPHS["l"], Point(12, 1)),
            (GLYPHS["i"], Point(20, 2)),
        ])
        first = segment_frame(frame)
        second = segment_frame(frame)
        assert [b.points for b in first] == [b.points for b in second]
        assert [b.colors for b in first] == [b.colors for b in second]

    def test_blob_without_ink_is_skipped(self):
        pixels = blank_pixels(4, 4)
        pixels[1, 1] = WHITE
        blobs = segment_frame(frame_from_pixels(pixels))
        blobs[0].colors[0] = Color.BLACK
        assert blobs_to_shapes(blobs) == []

    def test_shape_coverage_is_channel_mean(self):
        pixels = blank_pixels(4, 4)
        pixels[1, 1] = WHITE
        pixels[1, 2] = (150, 150, 150)
        shape = blobs_to_shapes(segment_frame(frame_from_pixels(pixels)))[0]
        assert np.allclose(shape.coverage, [[1.0, 150.0 / 255.0]])
