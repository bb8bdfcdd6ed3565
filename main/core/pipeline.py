#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Single frame recognition run
"""

import argparse
import sys
from typing import TextIO

from subtitle_recognition import FramePair, RecognitionResult, SubtitleRecognizer
from subtitle_recognition.debug_output import dump_comparisons, save_selection_raster
from utils.logging import get_logger, log_event, log_status

log = get_logger()

SCORE_CANDIDATES = 3


def format_scores(result: RecognitionResult) -> str:
    """One line per character: position, then the top candidates with their scores."""
    rows = []
    for character in result.characters:
        candidates = ", ".join(
            f"{m.label!r}={m.match_score}" for m in character.matches[:SCORE_CANDIDATES]
        )
        flag = "" if character.is_confident else " (uncertain)"
        rows.append(f"{tuple(character.bounds.start)}: {candidates}{flag}")
    return "\n".join(rows)


def write_debug_outputs(args: argparse.Namespace, recognizer: SubtitleRecognizer,
                        result: RecognitionResult) -> None:
    details = {}
    if args.debug_output and save_selection_raster(result.selection, args.debug_output):
        details["Selection"] = args.debug_output
    if args.dump_matches:
        written = dump_comparisons(args.dump_matches, recognizer.best_templates(result), result.characters)
        details["Comparisons"] = f"{written} in {args.dump_matches}"
    if details:
        log_event(log, "Debug output written", "🖼", details)


def run_frame(args: argparse.Namespace, recognizer: SubtitleRecognizer,
              out: TextIO = sys.stdout) -> RecognitionResult:
    """
    Recognize one frame and print its text.

    Raises:
        RasterFormatError: unreadable input or frame/mask size mismatch
    """
    frame = FramePair.load(args.frame, args.mask)
    result = recognizer.recognize(frame)

    log_status(log, "Lines recognized", len(result.lines), "📝")
    if result.uncertain_count:
        log.info(f"{result.uncertain_count} character(s) recognized with low confidence")

    write_debug_outputs(args, recognizer, result)

    text = result.text(mark_uncertain=args.mark_uncertain)
    if text:
        print(text, file=out)
    if args.show_scores and result.characters:
        print(format_scores(result), file=out)
    return result
