#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Reading order and fragment merging.

The segmenter stops at outline pixels, so glyphs built from several strokes
("i", "j", "!" style dots, broken serifs) come out as separate shapes. They
sit on top of each other horizontally, which is what the merge pass looks for.
"""

from functools import cmp_to_key
from typing import List, Sequence

from config import MERGE_OVERLAP_RATIO, SAME_LINE_THRESHOLD_PX
from .shapes import Shape
from utils.logging import get_logger

log = get_logger()


def compare_reading_order(a: Shape, b: Shape) -> int:
    """Left to right within a line, top to bottom across lines."""
    if abs(a.bounds.start.y - b.bounds.start.y) < SAME_LINE_THRESHOLD_PX:
        return a.bounds.start.x - b.bounds.start.x
    return a.bounds.start.y - b.bounds.start.y


def reading_order(shapes: Sequence[Shape]) -> List[Shape]:
    return sorted(shapes, key=cmp_to_key(compare_reading_order))


def should_merge(a: Shape, b: Shape) -> bool:
    """Whether two shapes are fragments of one glyph (symmetric in a and b)."""
    narrower = min(a.width, b.width)
    overlap = a.bounds.horizontal_overlap(b.bounds)
    return (overlap > MERGE_OVERLAP_RATIO * narrower
            and abs(a.bounds.start.y - b.bounds.start.y) < SAME_LINE_THRESHOLD_PX)


def merge_fragments(shapes: Sequence[Shape]) -> List[Shape]:
    """
    Sort shapes into reading order and merge adjacent fragments.

    Walks the ordered list right to left, so a shape merged with its right
    neighbour can merge again with the one before it.

    Returns:
        Shapes in reading order, fragments united
    """
    ordered = reading_order(shapes)
    merged = 0
    for i in range(len(ordered) - 1, 0, -1):
        left, right = ordered[i - 1], ordered[i]
        if should_merge(left, right):
            ordered[i - 1] = left.merge(right)
            del ordered[i]
            merged += 1

    if merged:
        log.debug(f"[MERGE] United {merged} fragment(s), {len(ordered)} shapes left")
    return ordered
