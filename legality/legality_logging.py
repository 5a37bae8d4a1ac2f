#!/usr/bin/env python3

"""
legality_logging.py — Logging setup and print redirector.

The core reports through print("[Tag] ...") lines. Call init_redirectors()
once at startup so those lines are captured to the log file as well.
"""

import logging
import os
import sys
from datetime import datetime

from . import __version__
from .config import LOG_DIR, LOG_FILE_NAME


def setup_logging(log_dir=None):
    """
    Set up logging to file only.
    Creates legality.log in log_dir (default config.LOG_DIR), overwriting
    the previous session. Console output is handled by the print redirector.
    """
    log_file = os.path.join(log_dir or LOG_DIR, LOG_FILE_NAME)

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # File handler - overwrites each session (no rotation)
    try:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    except OSError as e:
        print(f"Warning: Could not create log file: {e}")

    return log_file


class LoggingPrintRedirector:
    """
    Redirects print() output to both console and a logger.
    Intercepts sys.stdout to capture all print statements.
    """

    # Per-item lines that would flood the log during bulk scans
    SUPPRESS_PATTERNS = [
        "[Finder]   ",
    ]

    def __init__(self, original_stdout, logger):
        self.original_stdout = original_stdout
        self.logger = logger
        self.buffer = ""

    def _should_suppress(self, line):
        """Check if a line should be suppressed from output."""
        for pattern in self.SUPPRESS_PATTERNS:
            if pattern in line:
                return True
        return False

    def write(self, text):
        # Buffer text and process complete lines
        self.buffer += text
        while "\n" in self.buffer:
            line, self.buffer = self.buffer.split("\n", 1)
            if line.strip():
                if self._should_suppress(line):
                    continue
                if self.original_stdout:
                    self.original_stdout.write(line + "\n")
                self.logger.info(line.rstrip())

    def flush(self):
        if self.original_stdout:
            self.original_stdout.flush()
        if self.buffer.strip():
            if not self._should_suppress(self.buffer):
                if self.original_stdout:
                    self.original_stdout.write(self.buffer)
                self.logger.info(self.buffer.rstrip())
        self.buffer = ""


def init_redirectors(log_dir=None):
    """
    Initialize logging and redirect sys.stdout / sys.stderr.

    Returns the path to the log file.
    Idempotent: safe to call multiple times.
    """
    if isinstance(sys.stdout, LoggingPrintRedirector):
        return getattr(sys.stdout, "_log_file_path", "")

    log_file_path = setup_logging(log_dir)
    legality_logger = logging.getLogger("legality")

    original_stdout = sys.stdout
    sys.stdout = LoggingPrintRedirector(original_stdout, legality_logger)
    sys.stdout._log_file_path = log_file_path

    original_stderr = sys.stderr
    stderr_logger = logging.getLogger("legality.error")
    sys.stderr = LoggingPrintRedirector(original_stderr, stderr_logger)

    legality_logger.info("=" * 60)
    legality_logger.info(f"Encounter Legality {__version__}")
    legality_logger.info(f"Starting - {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    legality_logger.info(f"Log file: {log_file_path}")
    legality_logger.info(f"Python: {sys.version}")
    legality_logger.info(f"Platform: {sys.platform}")
    legality_logger.info("=" * 60)

    return log_file_path
