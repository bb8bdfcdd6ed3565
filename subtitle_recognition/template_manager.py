#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Glyph template cache for character recognition.

Renders every character of the fixed alphabet at each sub-pixel shift once,
normalizes the renderings into Shapes and keeps them for the lifetime of
the process.
"""

import time
from typing import Dict, List, Sequence, Tuple

from config import CHARACTER_ALPHABET, GLYPH_SHIFTS
from .rasterizer import GlyphRasterizer, GlyphRasterizationError
from .shapes import Shape, make_shape
from utils.logging import get_logger

log = get_logger()


class UnsupportedCharacterError(KeyError):
    """A character outside the alphabet the cache was built for."""


class GlyphTemplateCache:
    """Pre-rendered glyph shapes keyed by character, one per sub-pixel shift."""

    def __init__(self, rasterizer: GlyphRasterizer,
                 alphabet: Sequence[str] = CHARACTER_ALPHABET,
                 shifts: Sequence[Tuple[float, float]] = GLYPH_SHIFTS):
        """
        Build all templates eagerly.

        Args:
            rasterizer: Glyph rasterizer for the subtitle font
            alphabet: Characters to prepare templates for
            shifts: Sub-pixel start offsets, one template per shift

        Raises:
            ValueError: empty alphabet or shift list
            GlyphRasterizationError: the font produced no ink for a character
        """
        self.rasterizer = rasterizer
        self.alphabet: Tuple[str, ...] = tuple(dict.fromkeys(alphabet))
        if not self.alphabet or not shifts:
            raise ValueError("Glyph template cache needs at least one character and one shift")
        self.shifts: Tuple[Tuple[float, float], ...] = tuple(shifts)
        self.templates: Dict[str, Tuple[Shape, ...]] = {}
        self.build_time_ms = 0.0

        self._build_templates()

    def _build_templates(self):
        start_time = time.perf_counter()
        for character in self.alphabet:
            self.templates[character] = tuple(
                self._render_template(character, shift) for shift in self.shifts
            )
        self.build_time_ms = (time.perf_counter() - start_time) * 1000
        log.info(f"Glyph templates ready: {len(self.templates)} characters, "
                 f"{self.get_template_count()} templates ({self.build_time_ms:.1f}ms)")

    def _render_template(self, character: str, shift: Tuple[float, float]) -> Shape:
        shape = make_shape(self.rasterizer.rasterize(character, shift))
        if shape is None:
            raise GlyphRasterizationError(f"Glyph for {character!r} at shift {shift} has no ink")
        log.trace(f"Template {character!r} shift {shift}: {shape.width}x{shape.height}")
        return shape

    def get_templates_for_character(self, character: str) -> Tuple[Shape, ...]:
        """
        Get the templates of a character, ordered like `shifts`.

        Raises:
            UnsupportedCharacterError: the character is not in the alphabet
        """
        try:
            return self.templates[character]
        except KeyError:
            raise UnsupportedCharacterError(
                f"No glyph templates for {character!r}; the alphabet is fixed at build time"
            ) from None

    def get_template(self, character: str, shift_index: int) -> Shape:
        return self.get_templates_for_character(character)[shift_index]

    def get_all_characters(self) -> List[str]:
        return list(self.alphabet)

    def has_character(self, character: str) -> bool:
        return character in self.templates

    def get_template_count(self) -> int:
        return sum(len(templates) for templates in self.templates.values())

    def get_character_count(self) -> int:
        return len(self.templates)

    def get_statistics(self) -> Dict:
        """
        Get statistics about the built templates.

        Returns:
            Dictionary with template statistics
        """
        widths = [t.width for templates in self.templates.values() for t in templates]
        heights = [t.height for templates in self.templates.values() for t in templates]
        return {
            'total_templates': self.get_template_count(),
            'character_count': self.get_character_count(),
            'shift_count': len(self.shifts),
            'max_width': max(widths, default=0),
            'max_height': max(heights, default=0),
            'build_time_ms': self.build_time_ms,
            'render_size': getattr(self.rasterizer, 'size', None),
        }
