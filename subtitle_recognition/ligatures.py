#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Ligature splitting.

Outlined subtitle glyphs often touch ("rn", "ff"), and the segmenter then
returns them as a single blob that no single template explains well. When
that happens, every character whose template fits well inside the blob is
tried as a prefix, and the rest of the blob is recognized on its own.
"""

from typing import List, Optional

from config import LIGATURE_MAX_DEPTH, MATCH_ACCEPT_THRESHOLD
from .matcher import CharacterMatch, match_all_characters, rank_matches
from .shapes import Shape
from .template_manager import GlyphTemplateCache
from utils.logging import get_logger

log = get_logger()


def compose_match(prefix: CharacterMatch, suffix: CharacterMatch,
                  prefix_width: int, image_width: int,
                  suffix_unsplit_score: Optional[int] = None) -> CharacterMatch:
    """
    Combine a prefix match and the best match of the remaining columns.

    The suffix contributes in proportion to the share of the image it covers;
    the prefix's image-area score already accounts for its own share. When
    the suffix label was itself split, `suffix_unsplit_score` is the suffix's
    best single-character score and caps the composite at prefix + that score.
    """
    p = prefix_width / image_width
    q = 1.0 - p
    match_score = int(prefix.match_score + q * suffix.match_score)
    if suffix_unsplit_score is not None:
        match_score = min(match_score, prefix.match_score + suffix_unsplit_score)
    return CharacterMatch(
        label=prefix.label + suffix.label,
        match_score=match_score,
        template_score=int(p * prefix.template_score + q * suffix.template_score),
        shift_index=prefix.shift_index,
    )


def split_candidates(shape: Shape, singles: List[CharacterMatch],
                     cache: GlyphTemplateCache, depth: int) -> List[CharacterMatch]:
    """Composite matches for every plausible prefix of `shape`."""
    composites = []
    for prefix in singles:
        if prefix.template_score < MATCH_ACCEPT_THRESHOLD:
            continue

        prefix_width = cache.get_template(prefix.label, prefix.shift_index).width
        if prefix_width >= shape.width:
            continue
        suffix_shape = shape.crop_columns(prefix_width)
        if suffix_shape is None:
            continue

        suffix_singles = match_all_characters(suffix_shape, cache)
        suffix_matches = resolve_splits(suffix_shape, suffix_singles, cache, depth + 1)
        if not suffix_matches or suffix_matches[0].match_score <= 0:
            continue

        composite = compose_match(prefix, suffix_matches[0], prefix_width, shape.width,
                                  suffix_unsplit_score=suffix_singles[0].match_score)
        log.trace(f"[LIGATURE] depth {depth}: '{prefix.label}' + '{suffix_matches[0].label}' "
                  f"-> {composite.match_score}")
        composites.append(composite)
    return composites


def resolve_splits(shape: Shape, singles: List[CharacterMatch],
                   cache: GlyphTemplateCache, depth: int) -> List[CharacterMatch]:
    """Add composite candidates to an already computed single-character ranking."""
    if not singles or singles[0].match_score >= MATCH_ACCEPT_THRESHOLD:
        return singles
    if depth >= LIGATURE_MAX_DEPTH:
        return singles

    composites = split_candidates(shape, singles, cache, depth)
    if not composites:
        return singles
    return rank_matches(singles + composites)


def recognize_shape(shape: Shape, cache: GlyphTemplateCache, depth: int = 0) -> List[CharacterMatch]:
    """
    Rank candidate labels for a shape, splitting it into several glyphs when needed.

    Args:
        shape: Image shape to recognize
        cache: Glyph template cache
        depth: Current split depth (0 for a whole blob)

    Returns:
        Single and composite matches, best first. When no split helps, this is
        the plain single-character ranking.
    """
    return resolve_splits(shape, match_all_characters(shape, cache), cache, depth)
