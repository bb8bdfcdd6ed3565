#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Character segmentation module for hardsub recognition.

Works like a magic-wand selection: every changed, nearly white pixel of
the change mask seeds a flood fill over the full frame that grows through
light/grey ink and stops at the black outline that stylized subtitles are
drawn with. Regions bordered by anything else (colors of the underlying
video) are rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .geometry import Point, get_surrounding
from .raster import Color, FramePair, PixelClass, classify_pixels
from .shapes import Shape, make_shape
from utils.logging import get_logger

log = get_logger()


@dataclass
class Blob:
    """Connected pixels of one segmented region with their frame colors."""

    points: List[Point] = field(default_factory=list)
    colors: List[Color] = field(default_factory=list)

    def add(self, point: Point, color: Color):
        self.points.append(point)
        self.colors.append(color)

    def __len__(self) -> int:
        return len(self.points)

    def to_shape(self) -> Optional[Shape]:
        """Normalize into a Shape (None when no pixel carries ink)."""
        return make_shape(
            (p.x, p.y, c.to_coverage()) for p, c in zip(self.points, self.colors)
        )


class ComponentSegmenter:
    """
    One segmentation run over a frame.

    Owns the visited grid, the collected blobs and the selection raster
    (kept pixels in their frame colors, everything else black).
    """

    def __init__(self, frame: FramePair):
        self.frame = frame
        self.width = frame.width
        self.height = frame.height
        self.visited = np.zeros((self.height, self.width), dtype=bool)
        self.output_bitmap = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        self.blobs: List[Blob] = []
        self.discarded = 0
        self._frame_classes = classify_pixels(frame.full.pixels)

    def _keep_pixel(self, blob: Blob, point: Point):
        color = self.frame.full.get_pixel(point)
        blob.add(point, color)
        self.output_bitmap[point.y, point.x] = color
        self.visited[point.y, point.x] = True

    def _check_surrounding(self, base_point: Point) -> List[Point]:
        """Unvisited neighbours of `base_point`, marked visited as they are handed out."""
        options = []
        for p in get_surrounding(base_point, self.width, self.height):
            if not self.visited[p.y, p.x]:
                self.visited[p.y, p.x] = True
                options.append(p)
        return options

    def _grow_blob(self, seed: Point) -> Optional[Blob]:
        """
        Flood fill from `seed` over 4-neighbours.

        Returns:
            The blob, or None when the region touched a non-black, non-ink border
        """
        blob = Blob()
        self._keep_pixel(blob, seed)
        pick_points = [seed]
        dirty_border = False

        while pick_points:
            base_point = pick_points.pop()
            for next_point in self._check_surrounding(base_point):
                pixel_class = self._frame_classes[next_point.y, next_point.x]
                if pixel_class in PixelClass.EXPANDABLE:
                    self._keep_pixel(blob, next_point)
                    pick_points.append(next_point)
                elif pixel_class != PixelClass.CLOSELY_BLACK:
                    dirty_border = True

        if dirty_border:
            for point in blob.points:
                self.output_bitmap[point.y, point.x] = 0
            log.trace(f"[SEG] Discarded blob of {len(blob)} px seeded at {tuple(seed)}: colored border")
            return None
        return blob

    def run(self) -> List[Blob]:
        """Segment the whole frame; seeds are visited in raster order."""
        mask_pixels = self.frame.mask.pixels
        mask_not_black = mask_pixels.any(axis=2)
        seed_candidates = mask_not_black & (classify_pixels(mask_pixels) == PixelClass.NEARLY_WHITE)

        for y, x in np.argwhere(seed_candidates):
            if self.visited[y, x]:
                continue
            blob = self._grow_blob(Point(int(x), int(y)))
            if blob is None:
                self.discarded += 1
            else:
                self.blobs.append(blob)

        log.debug(f"[SEG] {len(self.blobs)} blobs kept, {self.discarded} discarded")
        return self.blobs


def segment_frame(frame: FramePair) -> List[Blob]:
    """
    Segment a frame into ink blobs.

    Args:
        frame: Full-color frame and change mask

    Returns:
        Blobs in seed raster order
    """
    return ComponentSegmenter(frame).run()


def blobs_to_shapes(blobs: List[Blob]) -> List[Shape]:
    """Normalize blobs, silently skipping those without ink."""
    shapes = []
    for blob in blobs:
        shape = blob.to_shape()
        if shape is None:
            log.trace(f"[SEG] Skipped blob of {len(blob)} px without ink")
            continue
        shapes.append(shape)
    return shapes
