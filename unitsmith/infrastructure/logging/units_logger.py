"""
Buffered Logging System

Thread-safe logger with an in-memory buffer that is flushed to a log file
(or stderr when no file is configured), integrated with the standard
``logging`` module through the ``unitsmith`` logger.
"""

import atexit
import logging
import sys
import threading
import time
from datetime import datetime
from io import StringIO
from pathlib import Path
from typing import Any, Dict, Optional

LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}


def _level_number(level: str) -> int:
    """Numeric level of a level name, custom stdlib names included"""
    number = LEVELS.get(level)
    if number is None:
        number = logging.getLevelName(level)
    return number if isinstance(number, int) else logging.INFO


class UnitsLogger:
    """
    Buffered, thread-safe logging sink

    Messages below the configured level are dropped. The buffer is flushed
    when it holds ``buffer_size`` messages, when ``flush_interval`` seconds
    have passed since the last flush, or on explicit ``flush()``.
    """

    def __init__(self, log_file: Optional[str] = None,
                 overwrite: bool = False, level: str = "WARNING",
                 buffer_size: int = 1000, flush_interval: float = 10.0):
        """
        Initialize logger

        Args:
            log_file: Path to log file, None to write to stderr
            overwrite: Whether to overwrite existing log file
            level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            buffer_size: Size of log buffer before auto-flush
            flush_interval: Time interval for auto-flush (seconds)
        """
        if level not in LEVELS:
            raise ValueError(f"Unknown log level: {level}")
        self.level = level

        # File setup
        self.log_file_path = Path(log_file) if log_file else None
        if self.log_file_path is not None:
            self.log_file_path.parent.mkdir(parents=True, exist_ok=True)

        # Buffer setup
        self.buffer = StringIO()
        self.buffer_size = buffer_size
        self.buffer_count = 0
        self.flush_interval = flush_interval
        self.last_flush_time = time.time()

        self._lock = threading.Lock()

        self.stats = {
            'messages_logged': 0,
            'messages_dropped': 0,
            'bytes_written': 0,
            'flush_count': 0,
            'errors': 0
        }

        self._initialize_log_file(overwrite)
        self._setup_python_logging()

    def _initialize_log_file(self, overwrite: bool):
        """Initialize log file with header"""
        if self.log_file_path is None:
            return

        if overwrite and self.log_file_path.exists():
            self.log_file_path.unlink()

        header_lines = [
            "===== unitsmith Log =====",
            f"Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            f"Log File: {self.log_file_path}",
            "=" * 50
        ]

        with open(self.log_file_path, 'a', encoding='utf-8') as f:
            for line in header_lines:
                f.write(f"{line}\n")

    def set_level(self, level: str):
        """Change the minimum level of recorded messages"""
        if level not in LEVELS:
            raise ValueError(f"Unknown log level: {level}")
        self.level = level
        logging.getLogger('unitsmith').setLevel(LEVELS[level])

    def log(self, message: str, level: str = "INFO", category: str = None):
        """
        Log message with timestamp

        Args:
            message: Message to log
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            category: Optional category for message
        """
        if _level_number(level) < LEVELS[self.level]:
            self.stats['messages_dropped'] += 1
            return

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

        category_str = f"[{category}] " if category else ""
        formatted_msg = f"{timestamp} {level:7s} - {category_str}{message}"

        with self._lock:
            self.buffer.write(f"{formatted_msg}\n")
            self.buffer_count += 1
            self.stats['messages_logged'] += 1

            current_time = time.time()
            if (self.buffer_count >= self.buffer_size or
                    current_time - self.last_flush_time >= self.flush_interval):
                self._flush_buffer()

    def info(self, message: str, category: str = None):
        """Log info message"""
        self.log(message, "INFO", category)

    def warning(self, message: str, category: str = None):
        """Log warning message"""
        self.log(message, "WARNING", category)

    def error(self, message: str, category: str = None):
        """Log error message"""
        self.log(message, "ERROR", category)
        self.stats['errors'] += 1

    def debug(self, message: str, category: str = None):
        """Log debug message"""
        self.log(message, "DEBUG", category)

    def flush(self):
        """Force flush buffer to its sink"""
        with self._lock:
            self._flush_buffer()

    def _flush_buffer(self):
        """Internal buffer flush implementation"""
        if self.buffer_count == 0:
            return

        buffer_content = self.buffer.getvalue()

        try:
            if self.log_file_path is None:
                sys.stderr.write(buffer_content)
                sys.stderr.flush()
            else:
                with open(self.log_file_path, 'a', encoding='utf-8') as f:
                    f.write(buffer_content)

            self.stats['bytes_written'] += len(buffer_content)
            self.stats['flush_count'] += 1
        finally:
            self.buffer.truncate(0)
            self.buffer.seek(0)
            self.buffer_count = 0
            self.last_flush_time = time.time()

    def _setup_python_logging(self):
        """Route the ``unitsmith`` stdlib logger into this sink"""
        package_logger = logging.getLogger('unitsmith')
        for existing in list(package_logger.handlers):
            if isinstance(existing, UnitsLogHandler):
                package_logger.removeHandler(existing)

        handler = UnitsLogHandler(self)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter('%(name)s - %(message)s'))

        package_logger.addHandler(handler)
        package_logger.setLevel(LEVELS[self.level])
        package_logger.propagate = False

    def get_statistics(self) -> Dict[str, Any]:
        """Get logging statistics"""
        stats = self.stats.copy()
        stats.update({
            'buffer_size': self.buffer_count,
            'level': self.level,
            'log_file_size': (self.log_file_path.stat().st_size
                              if self.log_file_path is not None and self.log_file_path.exists() else 0),
        })
        return stats

    def finalize(self):
        """Flush pending messages and close the log file with a footer"""
        self.flush()

        if self.log_file_path is None:
            return

        footer_lines = [
            "=" * 50,
            f"Completed: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            f"Total messages logged: {self.stats['messages_logged']}",
            "===== End of Log ====="
        ]

        with open(self.log_file_path, 'a', encoding='utf-8') as f:
            for line in footer_lines:
                f.write(f"{line}\n")


class UnitsLogHandler(logging.Handler):
    """Logging handler forwarding stdlib records to a UnitsLogger"""

    def __init__(self, units_logger: UnitsLogger):
        super().__init__()
        self.units_logger = units_logger

    def emit(self, record):
        try:
            message = self.format(record)
            self.units_logger.log(message, record.levelname)
        except Exception:
            self.handleError(record)


# Global logger instance
_global_logger: Optional[UnitsLogger] = None


def setup_logging(log_file: Optional[str] = None,
                  overwrite: bool = False,
                  verbose: bool = False,
                  level: str = "WARNING") -> UnitsLogger:
    """
    Setup global logging

    Args:
        log_file: Path to log file, None for stderr
        overwrite: Whether to overwrite existing log
        verbose: Enable debug logging
        level: Minimum level when not verbose

    Returns:
        UnitsLogger instance
    """
    global _global_logger

    if _global_logger is not None:
        atexit.unregister(_global_logger.flush)
        _global_logger.finalize()

    _global_logger = UnitsLogger(log_file, overwrite, level=level)
    atexit.register(_global_logger.flush)

    if verbose:
        _global_logger.set_level("DEBUG")

    return _global_logger


def get_logger() -> UnitsLogger:
    """Get global logger instance"""
    if _global_logger is None:
        setup_logging()

    return _global_logger
