#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Line assembly: recognized characters to text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from config import LINE_GROUP_THRESHOLD_PX, MATCH_ACCEPT_THRESHOLD, WORD_GAP_PX
from .geometry import Bounds
from .matcher import CharacterMatch

UNCERTAIN_MARKER = "?"


@dataclass(frozen=True)
class RecognizedCharacter:
    """
    Bounds of a source shape with its ranked candidate labels.

    `matches` is never empty; the first entry is the recognized label.
    """

    bounds: Bounds
    matches: Tuple[CharacterMatch, ...]

    def __post_init__(self):
        if not self.matches:
            raise ValueError("A recognized character needs at least one match")

    @property
    def best(self) -> CharacterMatch:
        return self.matches[0]

    @property
    def label(self) -> str:
        return self.best.label

    @property
    def is_confident(self) -> bool:
        return self.best.match_score >= MATCH_ACCEPT_THRESHOLD


@dataclass(frozen=True)
class Line:
    """Characters sharing a vertical band, ordered left to right."""

    characters: Tuple[RecognizedCharacter, ...]

    @property
    def start_y(self) -> int:
        return self.characters[0].bounds.start.y if self.characters else 0

    def text(self, word_gap: int = WORD_GAP_PX, mark_uncertain: bool = False) -> str:
        return line_to_text(self, word_gap, mark_uncertain)


def group_lines(characters: Sequence[RecognizedCharacter],
                threshold: int = LINE_GROUP_THRESHOLD_PX) -> List[Line]:
    """
    Group characters into lines.

    A character joins the first line whose first member starts within
    `threshold` pixels vertically, otherwise it opens a new line. Lines keep
    creation order; members are sorted by horizontal start.
    """
    groups: List[List[RecognizedCharacter]] = []
    for character in characters:
        for group in groups:
            if abs(group[0].bounds.start.y - character.bounds.start.y) <= threshold:
                group.append(character)
                break
        else:
            groups.append([character])

    return [
        Line(tuple(sorted(group, key=lambda c: c.bounds.start.x)))
        for group in groups
    ]


def line_to_text(line: Line, word_gap: int = WORD_GAP_PX, mark_uncertain: bool = False) -> str:
    """
    Concatenate top labels, inserting a space where the gap between boxes exceeds `word_gap`.

    With `mark_uncertain`, low-confidence characters are followed by a '?'.
    """
    parts = []
    previous = None
    for character in line.characters:
        if previous is not None and previous.bounds.horizontal_gap(character.bounds) > word_gap:
            parts.append(" ")
        parts.append(character.label)
        if mark_uncertain and not character.is_confident:
            parts.append(UNCERTAIN_MARKER)
        previous = character
    return "".join(parts)


def assemble_text(lines: Sequence[Line], word_gap: int = WORD_GAP_PX,
                  mark_uncertain: bool = False) -> str:
    """One text line per Line, joined with newlines."""
    return "\n".join(line_to_text(line, word_gap, mark_uncertain) for line in lines)
