#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Setup subpackage
"""

from .arguments import build_parser, setup_arguments
from .initialization import get_log_mode_for, setup_logging_and_cleanup

__all__ = [
    'build_parser',
    'setup_arguments',
    'get_log_mode_for',
    'setup_logging_and_cleanup',
]
