#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pattern matching module for character recognition.

Scores an image shape against glyph templates cell by cell: matching
coverage earns up to one point per template cell, template ink that hangs
past the image edge costs in proportion to the squared overshoot. The best
of a few integer alignments is kept per template.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from config import MATCH_OFFSETS, MATCH_SCORE_SCALE, OUT_OF_BOUNDS_PENALTY_DIVISOR
from .shapes import Shape
from .template_manager import GlyphTemplateCache
from utils.logging import get_logger

log = get_logger()


@dataclass(frozen=True)
class CharacterMatch:
    """
    Score of one candidate label for an image shape.

    Attributes:
        label: Character, or several characters for split ligatures
        match_score: Raw score per image cell, scaled by MATCH_SCORE_SCALE
        template_score: Raw score per template cell, same scale
        shift_index: Template shift that produced the score
    """

    label: str
    match_score: int
    template_score: int
    shift_index: int = 0

    def sort_key(self) -> Tuple[int, str]:
        return -self.match_score, self.label


def rank_matches(matches: Sequence[CharacterMatch]) -> List[CharacterMatch]:
    """Best match first; equal scores ordered by label."""
    return sorted(matches, key=CharacterMatch.sort_key)


def trim_leading_rows(image: np.ndarray, template_width: int) -> np.ndarray:
    """
    Drop top rows that are empty across the first `template_width` columns.

    Only applies when the template is narrower than the image: a short glyph
    at the left of a blob whose bounds were stretched upward by a taller
    neighbour gets re-aligned with the template top.
    """
    if template_width >= image.shape[1]:
        return image
    window = image[:, :template_width]
    inked_rows = np.flatnonzero(window.any(axis=1))
    if inked_rows.size == 0 or inked_rows[0] == 0:
        return image
    return image[inked_rows[0]:]


def score_alignment(image: np.ndarray, template: np.ndarray, dx: int, dy: int) -> float:
    """
    Raw score of `template` laid over `image` with its origin at (dx, dy).

    Each template cell inside the image adds 1 - |template - image|; a cell
    outside subtracts template * distance^2 / OUT_OF_BOUNDS_PENALTY_DIVISOR,
    distance being how far it sticks out past the crossed edges.
    """
    image_height, image_width = image.shape
    rows, cols = np.indices(template.shape)
    ix = cols + dx
    iy = rows + dy

    overshoot = (np.maximum(0, -ix) + np.maximum(0, ix - (image_width - 1))
                 + np.maximum(0, -iy) + np.maximum(0, iy - (image_height - 1)))
    inside = overshoot == 0

    image_values = image[np.clip(iy, 0, image_height - 1), np.clip(ix, 0, image_width - 1)]
    cell_scores = np.where(
        inside,
        1.0 - np.abs(template - image_values),
        -template * (overshoot.astype(np.float64) ** 2) / OUT_OF_BOUNDS_PENALTY_DIVISOR,
    )
    return float(cell_scores.sum())


def score_template(image: np.ndarray, template: np.ndarray,
                   offsets: Sequence[Tuple[int, int]] = MATCH_OFFSETS) -> float:
    """Best raw score of a template over all alignment offsets."""
    image = image.astype(np.float64)
    template = template.astype(np.float64)
    return max(score_alignment(image, template, dx, dy) for dx, dy in offsets)


def normalize_score(raw_score: float, cells: int) -> int:
    """Scale a raw score per cell to the fixed-point range, truncating toward zero."""
    return int(MATCH_SCORE_SCALE * raw_score / cells)


def match_character(shape: Shape, character: str, cache: GlyphTemplateCache) -> CharacterMatch:
    """
    Match a shape against every shift of one character.

    Args:
        shape: Image shape to recognize
        character: Character from the cache alphabet
        cache: Glyph template cache

    Returns:
        The match of the shift with the highest image-area score
    """
    best = None
    for shift_index, template in enumerate(cache.get_templates_for_character(character)):
        image = trim_leading_rows(shape.coverage, template.width)
        raw_score = score_template(image, template.coverage)
        candidate = CharacterMatch(
            label=character,
            match_score=normalize_score(raw_score, image.size),
            template_score=normalize_score(raw_score, template.area),
            shift_index=shift_index,
        )
        if best is None or candidate.match_score > best.match_score:
            best = candidate
    return best


def match_all_characters(shape: Shape, cache: GlyphTemplateCache) -> List[CharacterMatch]:
    """
    Score a shape against the whole alphabet.

    Returns:
        One match per character, best first
    """
    matches = rank_matches([match_character(shape, character, cache)
                            for character in cache.get_all_characters()])
    if matches:
        top = matches[0]
        log.trace(f"[MATCH] {shape.width}x{shape.height} at {tuple(shape.bounds.start)} -> "
                  f"'{top.label}' ({top.match_score}/{top.template_score})")
    return matches
