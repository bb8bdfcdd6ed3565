#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Initialization setup (logging)
"""

import argparse

from config import APP_VERSION
from utils.logging import setup_logging, cleanup_logs, get_logger, log_section

log = get_logger()


def get_log_mode_for(args: argparse.Namespace) -> str:
    """Determine log mode based on flags"""
    if args.debug:
        return 'debug'
    if args.verbose:
        return 'verbose'
    return 'customer'


def setup_logging_and_cleanup(args: argparse.Namespace) -> None:
    """Setup logging and clean up old logs"""
    write_logs = getattr(args, "write_logs", False)
    if write_logs:
        cleanup_logs()

    log_mode = get_log_mode_for(args)
    setup_logging(log_mode, write_logs=write_logs)

    # Customer mode already got its one-line startup message from setup_logging()
    if log_mode != 'customer':
        log_section(log, "Hardsub OCR Starting", "🚀", {
            "Version": APP_VERSION,
            "Frame": args.frame,
            "Mask": args.mask,
            "Font": args.font_path or "system default",
            "Font Size": args.font_size,
        })
