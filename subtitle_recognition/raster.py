#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Raster access and pixel color classification.

A frame arrives as two aligned RGB rasters: the full-color frame and the
change mask (pixels that changed since the previous frame keep their
color, everything else is black). Both are row-major, 3 bytes per pixel.
"""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple, Tuple, Union

import cv2
import numpy as np

from config import (
    NEARLY_WHITE_LIGHTNESS,
    CLOSELY_WHITE_LIGHTNESS,
    SOMEWHAT_WHITE_SATURATION,
    SOMEWHAT_WHITE_LIGHTNESS,
    CLOSELY_BLACK_LIGHTNESS,
    GREYISH_SATURATION,
)
from .geometry import Point
from utils.logging import get_logger

log = get_logger()


class RasterFormatError(ValueError):
    """Raster data that cannot be used (size mismatch, unreadable file)."""


def rgb_to_hsl(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """
    Convert an 8-bit RGB color to HSL.

    Returns:
        (hue, saturation, lightness), each in [0, 1]
    """
    r, g, b = r / 255.0, g / 255.0, b / 255.0
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2.0
    if high == low:
        return 0.0, 0.0, lightness  # achromatic

    d = high - low
    saturation = d / (2.0 - high - low) if lightness > 0.5 else d / (high + low)
    if high == r:
        hue = (g - b) / d + (6.0 if g < b else 0.0)
    elif high == g:
        hue = (b - r) / d + 2.0
    else:
        hue = (r - g) / d + 4.0
    return hue / 6.0, saturation, lightness


class Color(NamedTuple):
    """8-bit RGB color with the classification predicates used by segmentation."""
    r: int
    g: int
    b: int

    @property
    def saturation(self) -> float:
        return rgb_to_hsl(self.r, self.g, self.b)[1]

    @property
    def lightness(self) -> float:
        return rgb_to_hsl(self.r, self.g, self.b)[2]

    def is_black(self) -> bool:
        return self.r == 0 and self.g == 0 and self.b == 0

    def is_nearly_white(self) -> bool:
        return self.lightness > NEARLY_WHITE_LIGHTNESS

    def is_closely_white(self) -> bool:
        return self.lightness > CLOSELY_WHITE_LIGHTNESS

    def is_somewhat_white(self) -> bool:
        _, s, l = rgb_to_hsl(self.r, self.g, self.b)
        return (l > CLOSELY_WHITE_LIGHTNESS
                or (s < SOMEWHAT_WHITE_SATURATION and l > SOMEWHAT_WHITE_LIGHTNESS))

    def is_closely_black(self) -> bool:
        return self.lightness < CLOSELY_BLACK_LIGHTNESS

    def is_greyish(self) -> bool:
        _, s, l = rgb_to_hsl(self.r, self.g, self.b)
        return l >= CLOSELY_BLACK_LIGHTNESS and s < GREYISH_SATURATION

    def to_coverage(self) -> float:
        """Average channel intensity in [0, 1]."""
        return (self.r + self.g + self.b) / (255.0 * 3.0)

    @classmethod
    def from_coverage(cls, coverage: float) -> Color:
        """Grey level for a coverage value (used by debug renderings)."""
        level = int(255.0 * min(1.0, max(0.0, coverage)))
        return cls(level, level, level)


Color.BLACK = Color(0, 0, 0)


class PixelClass:
    """Per-pixel classification codes produced by `classify_pixels`."""
    OTHER = 0
    CLOSELY_BLACK = 1
    GREYISH = 2
    SOMEWHAT_WHITE = 3
    NEARLY_WHITE = 4

    # Classes the flood fill may grow into
    EXPANDABLE = (GREYISH, SOMEWHAT_WHITE, NEARLY_WHITE)


def hsl_channels(rgb: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Lightness and saturation planes of an RGB raster.

    Args:
        rgb: uint8 array of shape (height, width, 3)

    Returns:
        (lightness, saturation) float32 arrays of shape (height, width)
    """
    hls = cv2.cvtColor(rgb.astype(np.float32) / 255.0, cv2.COLOR_RGB2HLS)
    return hls[:, :, 1], hls[:, :, 2]


def classify_pixels(rgb: np.ndarray) -> np.ndarray:
    """
    Classify every pixel of an RGB raster.

    White classes take precedence over outline black, which takes
    precedence over low-saturation grey; anything left is OTHER.
    """
    lightness, saturation = hsl_channels(rgb)
    somewhat_white = (lightness > CLOSELY_WHITE_LIGHTNESS) | (
        (saturation < SOMEWHAT_WHITE_SATURATION) & (lightness > SOMEWHAT_WHITE_LIGHTNESS)
    )
    classes = np.full(lightness.shape, PixelClass.OTHER, dtype=np.uint8)
    classes[saturation < GREYISH_SATURATION] = PixelClass.GREYISH
    classes[lightness < CLOSELY_BLACK_LIGHTNESS] = PixelClass.CLOSELY_BLACK
    classes[somewhat_white] = PixelClass.SOMEWHAT_WHITE
    classes[lightness > NEARLY_WHITE_LIGHTNESS] = PixelClass.NEARLY_WHITE
    return classes


class Raster:
    """RGB raster with O(1) pixel lookup."""

    def __init__(self, pixels: np.ndarray):
        """
        Args:
            pixels: uint8 array of shape (height, width, 3) in RGB order
        """
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise RasterFormatError(f"Expected an RGB raster, got array of shape {pixels.shape}")
        self.pixels = np.ascontiguousarray(pixels, dtype=np.uint8)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.width, self.height

    def get_pixel(self, point: Point) -> Color:
        r, g, b = self.pixels[point.y, point.x]
        return Color(int(r), int(g), int(b))

    def get_byte_index(self, point: Point) -> int:
        return (point.y * self.width + point.x) * 3

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    @classmethod
    def from_bytes(cls, width: int, height: int, data: Union[bytes, bytearray, memoryview]) -> Raster:
        """
        Build a raster from packed row-major RGB bytes.

        Raises:
            RasterFormatError: byte length differs from width * height * 3
        """
        expected = width * height * 3
        if width <= 0 or height <= 0 or len(data) != expected:
            raise RasterFormatError(
                f"Unsupported pixel data: {width}x{height} needs {expected} bytes, got {len(data)}"
            )
        pixels = np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, width, 3)
        return cls(pixels.copy())

    @classmethod
    def load(cls, path: Union[str, Path]) -> Raster:
        """
        Load a raster from an image file (PPM, PNG, ... anything OpenCV decodes).

        Raises:
            RasterFormatError: the file is missing or cannot be decoded
        """
        bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if bgr is None:
            raise RasterFormatError(f"Failed to load raster: {path}")
        log.debug(f"Loaded raster {path} ({bgr.shape[1]}x{bgr.shape[0]})")
        return cls(cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB))


class FramePair:
    """The full-color frame and its change mask, aligned 1:1."""

    def __init__(self, full: Raster, mask: Raster):
        if full.shape != mask.shape:
            raise RasterFormatError(
                f"Frame {full.width}x{full.height} and mask {mask.width}x{mask.height} differ in size"
            )
        self.full = full
        self.mask = mask

    @property
    def width(self) -> int:
        return self.full.width

    @property
    def height(self) -> int:
        return self.full.height

    @classmethod
    def load(cls, full_path: Union[str, Path], mask_path: Union[str, Path]) -> FramePair:
        return cls(Raster.load(full_path), Raster.load(mask_path))
