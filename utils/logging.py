#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging configuration and utilities
"""

# Standard library imports
import queue
import sys
import threading
import time
from datetime import datetime
from pathlib import Path

# Third-party imports
import logging

# Local imports
from config import (
    LOG_MAX_FILE_SIZE_MB_DEFAULT,
    LOG_MAX_AGE_HOURS,
    LOG_FILE_PATTERN,
    LOG_TIMESTAMP_FORMAT,
    LOG_SEPARATOR_WIDTH,
    APP_NAME,
)

# Add custom TRACE logging level (below DEBUG)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

def trace(self, message, *args, **kwargs):
    """Log a trace message (ultra-detailed, below DEBUG)"""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)

# Add trace() method to Logger class
logging.Logger.trace = trace

LOG_MODES = ('customer', 'verbose', 'debug')

# Global log mode (set by setup_logging)
_CURRENT_LOG_MODE = 'customer'

def get_log_mode() -> str:
    """Get the current logging mode"""
    return _CURRENT_LOG_MODE


def _format_for_mode(log_mode: str) -> str:
    if log_mode == 'customer':
        return "%(_when)s | %(message)s"
    if log_mode == 'verbose':
        return "%(_when)s | %(levelname)-7s | %(message)s"
    return "%(_when)s | %(levelname)-7s | %(name)-15s | %(funcName)-20s | %(message)s"


def _level_for_mode(log_mode: str) -> int:
    if log_mode == 'debug':
        return TRACE
    if log_mode == 'verbose':
        return logging.DEBUG
    return logging.INFO


class _TimeFormatter(logging.Formatter):
    """Formatter that stamps records with a wall-clock `_when` field."""

    def __init__(self, fmt: str, when_format: str = "%H:%M:%S"):
        super().__init__(fmt)
        self.when_format = when_format

    def format(self, record):
        record._when = time.strftime(self.when_format, time.localtime())
        return super().format(record)


class SizeRotatingCompositeHandler(logging.Handler):
    """
    A handler that delegates to an inner file handler and rolls over
    to a new file when the current file size reaches a threshold.

    - Creates files as: base.ext, base.ext.1, base.ext.2, ...
    - Does not delete on rotation (retention handled separately on startup)
    """
    def __init__(self, base_path: Path, create_handler_fn, max_bytes: int):
        super().__init__()
        self.base_path = Path(base_path)
        self.create_handler_fn = create_handler_fn
        self.max_bytes = max_bytes
        self._index = 0
        self.current_path = self._compute_current_path()
        self.current_handler = self.create_handler_fn(self.current_path)
        self._stored_formatter = None

    def _compute_current_path(self) -> Path:
        if self._index == 0:
            return self.base_path
        return self.base_path.with_name(f"{self.base_path.name}.{self._index}")

    def _maybe_rotate(self):
        current_size = self.current_path.stat().st_size if self.current_path.exists() else 0
        if current_size < self.max_bytes:
            return
        self.current_handler.close()
        self._index += 1
        self.current_path = self._compute_current_path()
        self.current_handler = self.create_handler_fn(self.current_path)
        self.current_handler.setLevel(self.level)
        if self._stored_formatter is not None:
            self.current_handler.setFormatter(self._stored_formatter)

    def emit(self, record):
        try:
            self._maybe_rotate()
            self.current_handler.emit(record)
        except OSError:
            self.handleError(record)

    def setFormatter(self, fmt):
        self._stored_formatter = fmt
        self.current_handler.setFormatter(fmt)
        super().setFormatter(fmt)

    def setLevel(self, level):
        super().setLevel(level)
        self.current_handler.setLevel(level)

    def close(self):
        self.current_handler.close()
        super().close()


class QueueHandler(logging.Handler):
    """A queue-based handler that never blocks the calling thread"""

    def __init__(self, target_handler: logging.Handler):
        super().__init__()
        self.target_handler = target_handler
        self.queue = queue.Queue(maxsize=1000)  # Limit queue size to prevent memory issues
        self._stop_event = threading.Event()
        self.worker_thread = threading.Thread(target=self._worker, daemon=True, name="LogQueueWorker")
        self.worker_thread.start()

    def _worker(self):
        while not self._stop_event.is_set():
            try:
                record = self.queue.get(timeout=0.1)
            except queue.Empty:
                continue
            try:
                if record is None:  # Sentinel value to stop
                    break
                self.target_handler.emit(record)
            finally:
                self.queue.task_done()

    def emit(self, record):
        """Queue the log record without blocking"""
        try:
            self.queue.put_nowait(record)
        except queue.Full:
            # Dropped rather than blocking the recognition run
            pass

    def flush(self):
        """Wait until every queued record reached the target handler"""
        if self.worker_thread.is_alive():
            self.queue.join()
        self.target_handler.flush()

    def close(self):
        """Drain the queue and stop the worker thread"""
        try:
            self.queue.put_nowait(None)
        except queue.Full:
            pass
        if self.worker_thread.is_alive():
            self.worker_thread.join(timeout=1.0)
        self._stop_event.set()
        super().close()


class SafeStreamHandler(logging.StreamHandler):
    """A stream handler that safely handles None streams and broken pipes"""

    def __init__(self, stream=None):
        if stream is None:
            import io
            stream = io.StringIO()
        super().__init__(stream)

    def emit(self, record):
        try:
            msg = self.format(record)
            self.stream.write(msg + self.terminator)
            self.stream.flush()
        except (BlockingIOError, BrokenPipeError, OSError, ValueError):
            # Stream is blocking or broken - skip this message
            pass


def setup_logging(log_mode: str = 'customer', *, write_logs: bool = True, stream=None):
    """
    Setup logging configuration with three modes.

    Console output goes to stderr so that recognized text on stdout stays clean.

    Args:
        log_mode: 'customer' (clean logs), 'verbose' (developer), or 'debug' (ultra-detailed)
        write_logs: If False, skip creating log files.
        stream: Console stream override (defaults to sys.stderr).
    """
    global _CURRENT_LOG_MODE
    if log_mode not in LOG_MODES:
        raise ValueError(f"Unknown log mode '{log_mode}', expected one of {LOG_MODES}")
    _CURRENT_LOG_MODE = log_mode

    output_stream = stream if stream is not None else sys.stderr
    safe_handler = SafeStreamHandler(output_stream)
    safe_handler.setFormatter(_TimeFormatter(_format_for_mode(log_mode)))

    # Wrap in queue handler to prevent blocking
    h = QueueHandler(safe_handler)
    h.setLevel(_level_for_mode(log_mode))

    file_handler = None
    log_file = None
    if write_logs:
        try:
            from .paths import get_logs_dir
            timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
            log_file = get_logs_dir() / f"hardsub_ocr_{timestamp}.log"
            max_bytes = int(LOG_MAX_FILE_SIZE_MB_DEFAULT * 1024 * 1024)

            def _factory_plain(p: Path):
                return logging.FileHandler(p, encoding='utf-8')

            file_handler = SizeRotatingCompositeHandler(log_file, _factory_plain, max_bytes)
            file_handler.setFormatter(_TimeFormatter(_format_for_mode(log_mode), "%Y-%m-%d %H:%M:%S"))
            file_handler.setLevel(_level_for_mode(log_mode))
        except OSError as e:
            # If file logging fails, continue without it
            file_handler = None
            log_file = None
            print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

    root = logging.getLogger()
    for old_handler in list(root.handlers):
        root.removeHandler(old_handler)
        old_handler.close()
    root.addHandler(h)
    if file_handler:
        root.addHandler(file_handler)

    # Root logger must be at TRACE to allow all handlers to receive all messages
    root.setLevel(TRACE)

    logger = logging.getLogger("startup")
    if log_mode == 'customer':
        logger.debug(f"{APP_NAME} started (Log: {log_file.name if log_file else 'disabled'})")
    else:
        logger.info("=" * LOG_SEPARATOR_WIDTH)
        logger.info(f"{APP_NAME} - Starting... (Log file: {log_file.name if log_file else 'disabled'})")
        logger.info("=" * LOG_SEPARATOR_WIDTH)
        if log_mode == 'debug':
            logger.info("Debug mode: ON (ultra-detailed logs with function traces)")
        else:
            logger.info("Verbose mode: ON (developer logs with technical details)")
        if log_file:
            logger.debug(f"Log file location: {log_file.absolute()}")

    # Pillow logs every plugin it probes at DEBUG
    logging.getLogger("PIL").setLevel(logging.INFO)
    return log_file


def flush_logging():
    """Flush every root handler (drains the console queue)"""
    for handler in logging.getLogger().handlers:
        handler.flush()


def get_logger(name: str = "hardsub_ocr") -> logging.Logger:
    """Get a logger instance"""
    return logging.getLogger(name)


def cleanup_logs():
    """
    Clean up old log files based on age.

    Logs older than LOG_MAX_AGE_HOURS are deleted; no limit on count or size.
    """
    from .paths import get_user_data_dir
    logs_dir = get_user_data_dir() / "logs"
    if not logs_dir.exists():
        return 0

    removed = 0
    now = time.time()
    max_age_seconds = LOG_MAX_AGE_HOURS * 60 * 60
    for log_file in logs_dir.glob(LOG_FILE_PATTERN + "*"):
        try:
            if now - log_file.stat().st_mtime > max_age_seconds:
                log_file.unlink()
                removed += 1
        except OSError as e:
            # Don't log this error to avoid recursion
            print(f"Warning: Failed to remove old log {log_file.name}: {e}", file=sys.stderr)
    return removed


# ==================== Pretty Logging Helpers ====================

def log_section(logger: logging.Logger, title: str, icon: str = "📌", details: dict = None, mode: str = None):
    """
    Log a section with title and optional details

    Args:
        logger: Logger instance
        title: Main title text (will be uppercased in verbose/debug mode)
        icon: Emoji icon to use
        details: Optional dict of key-value pairs to display
        mode: 'customer' (simple), 'verbose' (detailed), or 'debug' (ultra-detailed).
              If None, uses current global log mode.

    Example:
        log_section(log, "Templates Ready", "🔤", {"Characters": 54, "Shifts": 4})
    """
    if mode is None:
        mode = get_log_mode()

    if mode == 'customer':
        if details:
            detail_str = ", ".join(f"{k}: {v}" for k, v in details.items())
            logger.info(f"{icon} {title} ({detail_str})")
        else:
            logger.info(f"{icon} {title}")
    else:
        logger.info("=" * LOG_SEPARATOR_WIDTH)
        logger.info(f"{icon} {title.upper()}")
        if details:
            for key, value in details.items():
                logger.info(f"   📋 {key}: {value}")
        logger.info("=" * LOG_SEPARATOR_WIDTH)


def log_event(logger: logging.Logger, event: str, icon: str = "✓", details: dict = None):
    """
    Log a single event with optional details

    Example:
        log_event(log, "Blob discarded", "🗑", {"Pixels": 120, "Reason": "colored border"})
    """
    logger.info(f"{icon} {event}")
    if details:
        for key, value in details.items():
            logger.info(f"   • {key}: {value}")


def log_success(logger: logging.Logger, message: str, icon: str = "✅"):
    """Log a success message"""
    logger.info(f"{icon} {message}")


def log_status(logger: logging.Logger, status: str, value, icon: str = "ℹ️"):
    """
    Log a status update

    Example:
        log_status(log, "Lines recognized", 2, "📝")
    """
    logger.info(f"{icon} {status}: {value}")
