#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Integer geometry shared by every recognition stage.

Coordinates are signed: the template matcher probes alignments that
project a glyph past the left/top edge of an image shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, NamedTuple


class Point(NamedTuple):
    """Pixel coordinate, origin top-left, y growing downward."""
    x: int
    y: int


@dataclass(frozen=True)
class Bounds:
    """Inclusive bounding box from `start` to `end`."""

    start: Point
    end: Point

    @property
    def width(self) -> int:
        if self.is_empty:
            return 0
        return self.end.x - self.start.x + 1

    @property
    def height(self) -> int:
        if self.is_empty:
            return 0
        return self.end.y - self.start.y + 1

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.end.x < self.start.x or self.end.y < self.start.y

    def contains(self, point: Point) -> bool:
        return (self.start.x <= point.x <= self.end.x
                and self.start.y <= point.y <= self.end.y)

    def union(self, other: Bounds) -> Bounds:
        """Smallest bounds covering both boxes (empty boxes are ignored)."""
        if self.is_empty:
            return other
        if other.is_empty:
            return self
        return Bounds(
            Point(min(self.start.x, other.start.x), min(self.start.y, other.start.y)),
            Point(max(self.end.x, other.end.x), max(self.end.y, other.end.y)),
        )

    def horizontal_overlap(self, other: Bounds) -> int:
        """Number of columns both boxes share (0 when disjoint)."""
        if self.is_empty or other.is_empty:
            return 0
        return max(0, min(self.end.x, other.end.x) - max(self.start.x, other.start.x) + 1)

    def horizontal_gap(self, other: Bounds) -> int:
        """Empty columns between this box and a box further right (negative when overlapping)."""
        return other.start.x - self.end.x - 1

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> Bounds:
        xs: List[int] = []
        ys: List[int] = []
        for x, y in points:
            xs.append(x)
            ys.append(y)
        if not xs:
            return cls.EMPTY
        return cls(Point(min(xs), min(ys)), Point(max(xs), max(ys)))

    @classmethod
    def from_size(cls, x: int, y: int, width: int, height: int) -> Bounds:
        if width <= 0 or height <= 0:
            return cls.EMPTY
        return cls(Point(x, y), Point(x + width - 1, y + height - 1))


# Explicitly-empty sentinel: end lies before start on both axes
Bounds.EMPTY = Bounds(Point(0, 0), Point(-1, -1))


def get_surrounding(point: Point, width: int, height: int) -> List[Point]:
    """4-connected neighbours of `point` that lie inside a width x height raster."""
    options = []
    if point.x > 0:
        options.append(Point(point.x - 1, point.y))
    if point.x < width - 1:
        options.append(Point(point.x + 1, point.y))
    if point.y > 0:
        options.append(Point(point.x, point.y - 1))
    if point.y < height - 1:
        options.append(Point(point.x, point.y + 1))
    return options
