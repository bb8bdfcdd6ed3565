#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core subpackage
"""

from .initialization import initialize_recognizer
from .pipeline import format_scores, run_frame, write_debug_outputs

__all__ = [
    'initialize_recognizer',
    'format_scores',
    'run_frame',
    'write_debug_outputs',
]
