#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utils Package - Utility functions and helpers

- paths: user data and log directories
- logging: logging setup and pretty logging helpers
- fonts: TrueType font discovery and loading
"""

# Import paths first (only depends on config)
from utils.paths import get_user_data_dir, get_logs_dir


# Lazy imports keep `import utils` cheap for code that only needs paths
def __getattr__(name):
    """Lazy import for logging and font helpers"""
    if name in {
        'get_logger', 'setup_logging', 'log_section', 'log_success',
        'log_status', 'get_log_mode', 'log_event', 'cleanup_logs', 'flush_logging'
    }:
        from utils import logging as _logging
        return getattr(_logging, name)

    if name in {'get_font', 'find_font_path'}:
        from utils import fonts as _fonts
        return getattr(_fonts, name)

    raise AttributeError(f"module 'utils' has no attribute '{name}'")


__all__ = [
    # Paths (eagerly imported)
    'get_user_data_dir', 'get_logs_dir',
    # Logging (lazy)
    'get_logger', 'setup_logging', 'log_section', 'log_success',
    'log_status', 'get_log_mode', 'log_event', 'cleanup_logs', 'flush_logging',
    # Fonts (lazy)
    'get_font', 'find_font_path',
]
