#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Relative bitmap builder.

Turns scattered (x, y, coverage) samples - a segmented blob or a rendered
glyph - into a Shape: tight bounds plus a coverage matrix addressed
relative to the bounds' top-left corner.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np

from config import INK_COVERAGE_THRESHOLD
from .geometry import Bounds, Point

# (x, y, coverage)
CoverageSample = Tuple[int, int, float]


@dataclass(frozen=True, eq=False)
class Shape:
    """
    Bounds plus a coverage matrix of shape (height, width).

    `coverage[row, col]` is the ink of pixel (bounds.start.x + col, bounds.start.y + row).
    """

    bounds: Bounds
    coverage: np.ndarray

    def __post_init__(self):
        expected = (self.bounds.height, self.bounds.width)
        if self.coverage.shape != expected:
            raise ValueError(f"Coverage matrix {self.coverage.shape} does not match bounds {expected}")
        # Frozen copy; the caller keeps a writable array
        coverage = np.array(self.coverage, dtype=np.float32, copy=True)
        coverage.setflags(write=False)
        object.__setattr__(self, "coverage", coverage)

    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def height(self) -> int:
        return self.bounds.height

    @property
    def area(self) -> int:
        return self.bounds.area

    def coverage_at(self, point: Point) -> float:
        """Coverage at an absolute coordinate (0 outside the bounds)."""
        if not self.bounds.contains(point):
            return 0.0
        return float(self.coverage[point.y - self.bounds.start.y, point.x - self.bounds.start.x])

    def same_as(self, other: Shape) -> bool:
        return self.bounds == other.bounds and np.array_equal(self.coverage, other.coverage)

    def merge(self, other: Shape) -> Shape:
        """
        Union of two shapes: bounds union, each matrix placed at its own offset.

        Cells covered by both keep the larger coverage, so a.merge(b) equals b.merge(a).
        """
        bounds = self.bounds.union(other.bounds)
        coverage = np.zeros((bounds.height, bounds.width), dtype=np.float32)
        for part in (self, other):
            top = part.bounds.start.y - bounds.start.y
            left = part.bounds.start.x - bounds.start.x
            region = coverage[top:top + part.height, left:left + part.width]
            np.maximum(region, part.coverage, out=region)
        return Shape(bounds, coverage)

    def crop_columns(self, first_column: int) -> Optional[Shape]:
        """
        Keep the columns from `first_column` (relative) to the right edge, re-tightened.

        Returns:
            The remaining shape, or None when nothing above the ink threshold is left
        """
        if first_column <= 0:
            return self
        if first_column >= self.width:
            return None
        remainder = self.coverage[:, first_column:]
        origin = Point(self.bounds.start.x + first_column, self.bounds.start.y)
        return shape_from_matrix(remainder, origin)


def shape_from_matrix(matrix: np.ndarray, origin: Point = Point(0, 0)) -> Optional[Shape]:
    """
    Tighten a dense coverage matrix placed at `origin` into a Shape.

    Returns:
        Shape, or None when no cell exceeds the ink threshold
    """
    rows, cols = np.nonzero(matrix > INK_COVERAGE_THRESHOLD)
    if rows.size == 0:
        return None
    top, bottom = int(rows.min()), int(rows.max())
    left, right = int(cols.min()), int(cols.max())
    tight = np.where(matrix > INK_COVERAGE_THRESHOLD, matrix, 0.0)[top:bottom + 1, left:right + 1]
    bounds = Bounds(
        Point(origin.x + left, origin.y + top),
        Point(origin.x + right, origin.y + bottom),
    )
    return Shape(bounds, np.array(tight, dtype=np.float32))


def make_shape(samples: Iterable[CoverageSample]) -> Optional[Shape]:
    """
    Build a Shape from coverage samples.

    Bounds cover only samples above the ink threshold; fainter samples are
    not written. Returns None for a degenerate input with no ink at all.
    """
    inked = [(x, y, c) for x, y, c in samples if c > INK_COVERAGE_THRESHOLD]
    if not inked:
        return None

    bounds = Bounds.from_points(Point(x, y) for x, y, _ in inked)
    coverage = np.zeros((bounds.height, bounds.width), dtype=np.float32)
    for x, y, c in inked:
        coverage[y - bounds.start.y, x - bounds.start.x] = c
    return Shape(bounds, coverage)
