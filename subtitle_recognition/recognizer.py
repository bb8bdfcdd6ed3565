#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Subtitle recognizer for template matching-based hardsub recognition.

Wires the stages for one frame: segmentation, shape normalization, fragment
merging, template matching with ligature splitting, and line assembly.
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from config import GLYPH_RENDER_SIZE, LINE_GROUP_THRESHOLD_PX, WORD_GAP_PX
from .dot_merger import merge_fragments
from .ligatures import recognize_shape
from .lines import Line, RecognizedCharacter, assemble_text, group_lines
from .raster import FramePair
from .rasterizer import GlyphRasterizer, PillowGlyphRasterizer
from .segmentation import ComponentSegmenter, blobs_to_shapes
from .shapes import Shape
from .template_manager import GlyphTemplateCache
from utils.logging import get_logger

log = get_logger()


@dataclass
class RecognitionResult:
    """
    Everything one frame produced.

    Attributes:
        lines: Text lines in creation order
        characters: Recognized characters in reading order
        shapes: Merged shapes the characters came from (same order)
        selection: RGB raster of the kept ink pixels, black elsewhere
        discarded_blobs: Regions rejected for touching colored pixels
    """

    lines: List[Line] = field(default_factory=list)
    characters: List[RecognizedCharacter] = field(default_factory=list)
    shapes: List[Shape] = field(default_factory=list)
    selection: Optional[np.ndarray] = None
    discarded_blobs: int = 0
    word_gap: int = WORD_GAP_PX

    def text(self, mark_uncertain: bool = False) -> str:
        return assemble_text(self.lines, self.word_gap, mark_uncertain)

    @property
    def uncertain_count(self) -> int:
        return sum(1 for c in self.characters if not c.is_confident)


class SubtitleRecognizer:
    """Hardsub recognition against glyph templates of a single font."""

    def __init__(self, cache: Optional[GlyphTemplateCache] = None,
                 rasterizer: Optional[GlyphRasterizer] = None,
                 font_path: Optional[str] = None,
                 font_size: int = GLYPH_RENDER_SIZE,
                 word_gap: int = WORD_GAP_PX,
                 line_threshold: int = LINE_GROUP_THRESHOLD_PX,
                 measure_time: bool = True):
        """
        Initialize the recognizer.

        Args:
            cache: Prebuilt template cache (built from `rasterizer` when omitted)
            rasterizer: Glyph rasterizer (Pillow with `font_path`/`font_size` when omitted)
            font_path: Font file for the default rasterizer
            font_size: Render size for the default rasterizer
            word_gap: Empty columns between characters that make a space
            line_threshold: Max vertical start distance to join a line
            measure_time: Enable timing measurements for recognition operations
        """
        if cache is None:
            if rasterizer is None:
                rasterizer = PillowGlyphRasterizer(font_path, font_size)
            cache = GlyphTemplateCache(rasterizer)
        self.cache = cache
        self.word_gap = word_gap
        self.line_threshold = line_threshold
        self.measure_time = measure_time

        # Timing statistics
        self.last_recognition_time = 0.0
        self.avg_recognition_time = 0.0
        self.recognition_call_count = 0

        stats = self.cache.get_statistics()
        log.info(f"Subtitle recognizer initialized: {stats['character_count']} characters, "
                 f"{stats['total_templates']} templates")
        if self.measure_time:
            log.debug("[OCR:timing] Recognition timing measurements: ENABLED")

    def _timed(self, label: str, started: float):
        if self.measure_time:
            log.debug(f"[OCR:timing] {label}: {(time.perf_counter() - started) * 1000:.2f}ms")

    def recognize_shapes(self, shapes: List[Shape]) -> List[RecognizedCharacter]:
        """Match already merged shapes, keeping their order."""
        characters = []
        for shape in shapes:
            matches = recognize_shape(shape, self.cache)
            character = RecognizedCharacter(shape.bounds, tuple(matches))
            if not character.is_confident:
                log.debug(f"Low-confidence character at {tuple(shape.bounds.start)}: "
                          f"'{character.label}' ({character.best.match_score})")
            else:
                log.trace(f"Recognized '{character.label}' at {tuple(shape.bounds.start)} "
                          f"({character.best.match_score})")
            characters.append(character)
        return characters

    def recognize(self, frame: FramePair) -> RecognitionResult:
        """
        Recognize the subtitle text of one frame.

        Args:
            frame: Full-color frame and change mask

        Returns:
            RecognitionResult with lines, characters and the selection raster
        """
        start_time = time.perf_counter()

        stage_start = time.perf_counter()
        segmenter = ComponentSegmenter(frame)
        blobs = segmenter.run()
        self._timed("Segmentation", stage_start)

        stage_start = time.perf_counter()
        shapes = merge_fragments(blobs_to_shapes(blobs))
        self._timed("Shape normalization and merging", stage_start)

        stage_start = time.perf_counter()
        characters = self.recognize_shapes(shapes)
        self._timed("Template matching", stage_start)

        lines = group_lines(characters, self.line_threshold)
        result = RecognitionResult(
            lines=lines,
            characters=characters,
            shapes=shapes,
            selection=segmenter.output_bitmap,
            discarded_blobs=segmenter.discarded,
            word_gap=self.word_gap,
        )

        if self.measure_time:
            total_time = (time.perf_counter() - start_time) * 1000
            self.last_recognition_time = total_time
            self.recognition_call_count += 1
            self.avg_recognition_time = ((self.avg_recognition_time * (self.recognition_call_count - 1))
                                         + total_time) / self.recognition_call_count
            log.info(f"[OCR:timing] Total recognition time: {total_time:.2f}ms | "
                     f"Avg: {self.avg_recognition_time:.2f}ms | Count: {self.recognition_call_count}")

        log.debug(f"Frame {frame.width}x{frame.height}: {len(characters)} characters "
                  f"on {len(lines)} line(s), {result.uncertain_count} uncertain")
        return result

    def get_timing_stats(self) -> dict:
        """
        Get recognition timing statistics.

        Returns:
            Dictionary with timing statistics:
            - last_recognition_time: Time of last recognition operation (ms)
            - avg_recognition_time: Average recognition operation time (ms)
            - recognition_call_count: Total number of recognition calls
        """
        return {
            'last_recognition_time': self.last_recognition_time,
            'avg_recognition_time': self.avg_recognition_time,
            'recognition_call_count': self.recognition_call_count,
            'measure_time': self.measure_time,
        }

    def reset_timing_stats(self):
        """Reset recognition timing statistics."""
        self.last_recognition_time = 0.0
        self.avg_recognition_time = 0.0
        self.recognition_call_count = 0
        log.info("[OCR:timing] Timing statistics reset")

    def best_templates(self, result: RecognitionResult) -> List[Tuple[Shape, Optional[Shape]]]:
        """
        Pair each recognized shape with the template of its top label.

        Composite labels have no single template; those pairs carry None.
        """
        pairs = []
        for shape, character in zip(result.shapes, result.characters):
            best = character.best
            template = None
            if len(best.label) == 1:
                template = self.cache.get_template(best.label, best.shift_index)
            pairs.append((shape, template))
        return pairs
