#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Debug renderings for hardsub recognition.

Writes the segmenter's selection raster, side-by-side comparisons of an
image shape and the template it matched, and a contact sheet of the whole
glyph template cache. Coverage is drawn as grey level (0 black, 1 white).
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import cv2
import numpy as np

from config import DEBUG_COMPARISON_GAP_PX, DEBUG_SHEET_COLUMNS
from .lines import RecognizedCharacter
from .shapes import Shape
from .template_manager import GlyphTemplateCache
from utils.logging import get_logger

log = get_logger()

PathLike = Union[str, Path]


def coverage_to_grey(coverage: np.ndarray) -> np.ndarray:
    return (np.clip(coverage, 0.0, 1.0) * 255.0).astype(np.uint8)


def _write_image(path: PathLike, image: np.ndarray) -> bool:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(path), image):
        log.error(f"Failed to write debug image: {path}")
        return False
    log.debug(f"Debug image written: {path}")
    return True


def save_selection_raster(selection: np.ndarray, path: PathLike) -> bool:
    """
    Write the selection raster (kept pixels in their frame colors, black elsewhere).

    Args:
        selection: RGB uint8 array of the frame's size
        path: Output file; the extension picks the format (PPM, PNG, ...)

    Returns:
        True if the file was written
    """
    return _write_image(path, cv2.cvtColor(selection, cv2.COLOR_RGB2BGR))


def render_comparison(shape: Shape, template: Optional[Shape]) -> np.ndarray:
    """
    Draw an image shape and a template side by side, top aligned.

    A missing template (composite label) leaves its half black.
    """
    template_width = template.width if template is not None else 0
    template_height = template.height if template is not None else 0
    height = max(shape.height, template_height)
    width = shape.width + DEBUG_COMPARISON_GAP_PX + template_width

    canvas = np.zeros((height, width), dtype=np.uint8)
    canvas[:shape.height, :shape.width] = coverage_to_grey(shape.coverage)
    if template is not None:
        left = shape.width + DEBUG_COMPARISON_GAP_PX
        canvas[:template_height, left:left + template_width] = coverage_to_grey(template.coverage)
    return canvas


def save_comparison(path: PathLike, shape: Shape, template: Optional[Shape]) -> bool:
    return _write_image(path, render_comparison(shape, template))


def comparison_filename(index: int, character: RecognizedCharacter) -> str:
    """File name for a comparison dump; labels are hex-encoded to stay filesystem safe."""
    label = "-".join(f"{ord(c):02x}" for c in character.label)
    return f"{index:03d}_{label}_{character.best.match_score}.png"


def dump_comparisons(directory: PathLike,
                     pairs: Sequence[Tuple[Shape, Optional[Shape]]],
                     characters: Sequence[RecognizedCharacter]) -> int:
    """
    Write one comparison per recognized character.

    Returns:
        Number of files written
    """
    directory = Path(directory)
    written = 0
    for index, ((shape, template), character) in enumerate(zip(pairs, characters)):
        if save_comparison(directory / comparison_filename(index, character), shape, template):
            written += 1
    log.info(f"Wrote {written} match comparison(s) to {directory}")
    return written


def render_template_sheet(cache: GlyphTemplateCache, shift_index: int = 0,
                          columns: int = DEBUG_SHEET_COLUMNS) -> np.ndarray:
    """
    Lay out one template per character on a grid, in alphabet order.

    Every cell is as large as the largest template plus a one pixel border.
    """
    templates: List[Shape] = [cache.get_template(c, shift_index) for c in cache.get_all_characters()]
    cell_width = max(t.width for t in templates) + 2
    cell_height = max(t.height for t in templates) + 2
    rows = (len(templates) + columns - 1) // columns

    sheet = np.zeros((rows * cell_height, columns * cell_width), dtype=np.uint8)
    for index, template in enumerate(templates):
        top = (index // columns) * cell_height + 1
        left = (index % columns) * cell_width + 1
        sheet[top:top + template.height, left:left + template.width] = coverage_to_grey(template.coverage)
    return sheet


def save_template_sheet(cache: GlyphTemplateCache, path: PathLike, shift_index: int = 0) -> bool:
    return _write_image(path, render_template_sheet(cache, shift_index))
