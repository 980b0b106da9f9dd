"""Leveled, categorised logging for TactSpectre.

The explorer, the solver backends, configuration loading and the CLI all
write through one module-global `TactSpectreLogger`. Entries carry a
category (``executor``, ``solver``, ``extraction``, ``config``, ``cli``)
so tests and tooling can pick out one subsystem's messages. Records sent
to the stdlib ``tactspectre`` logger can be routed here as well.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any, TextIO


class LogLevel(IntEnum):
    """Verbosity, from warnings-only up to per-query solver tracing."""

    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3
    TRACE = 4


class Colors:
    """ANSI escapes used by the logger and the text report."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    GRAY = "\033[90m"


# level -> (glyph, colour); QUIET entries are printed without a glyph
_INDICATORS: dict[LogLevel, tuple[str, str]] = {
    LogLevel.NORMAL: ("•", Colors.WHITE),
    LogLevel.VERBOSE: ("→", Colors.BLUE),
    LogLevel.DEBUG: ("⚙", Colors.MAGENTA),
    LogLevel.TRACE: ("⋯", Colors.GRAY),
}


def _paint(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{Colors.RESET}" if enabled else text


def supports_color(stream: TextIO) -> bool:
    """True when `stream` is a terminal that will render ANSI escapes.

    Honours the ``NO_COLOR`` convention.
    """
    isatty = getattr(stream, "isatty", None)
    if isatty is None or not isatty():
        return False
    if os.environ.get("NO_COLOR"):
        return False
    if sys.platform == "win32":
        return bool(os.environ.get("TERM") or "ANSICON" in os.environ)
    return True


@dataclass
class LogEntry:
    level: LogLevel
    message: str
    category: str = "general"
    timestamp: float = field(default_factory=time.time)
    context: dict[str, Any] = field(default_factory=dict)

    def format(self, color: bool = True, show_time: bool = True) -> str:
        """Render as ``HH:MM:SS <glyph> [category] message``."""
        parts = []
        if show_time:
            clock = time.strftime("%H:%M:%S", time.localtime(self.timestamp))
            parts.append(_paint(clock, Colors.GRAY, color))
        if self.level in _INDICATORS:
            glyph, glyph_color = _INDICATORS[self.level]
            parts.append(_paint(glyph, glyph_color, color))
        if self.category != "general":
            parts.append(_paint(f"[{self.category}]", Colors.CYAN, color))
        parts.append(self.message)
        return " ".join(parts)


class TactSpectreLogger:
    """Process-wide logger.

    Every entry is recorded whatever the level, so tests can inspect what
    the explorer did even when nothing reached the stream. Only entries at
    or below `level` are written. Warnings and errors are always written.
    """

    def __init__(
        self,
        level: LogLevel = LogLevel.NORMAL,
        color: bool = True,
        stream: TextIO | None = None,
        file_path: Path | None = None,
    ):
        self.level = level
        self._stream = stream or sys.stderr
        self._color = color and supports_color(self._stream)
        self._file_handle: TextIO | None = None
        self._entries: list[LogEntry] = []
        self._counters: dict[str, int] = {}
        if file_path is not None:
            self.open_file(file_path)

    def set_level(self, level: LogLevel) -> None:
        self.level = level

    def _write(self, text: str, plain: str) -> None:
        self._stream.write(text + "\n")
        self._stream.flush()
        if self._file_handle:
            self._file_handle.write(plain + "\n")
            self._file_handle.flush()

    def _marked(self, glyph: str, color: str, message: str) -> None:
        self._write(f"{_paint(glyph, color, self._color)} {message}", f"{glyph} {message}")

    def log(
        self,
        level: LogLevel,
        message: str,
        category: str = "general",
        **context: Any,
    ) -> None:
        """Record an entry and write it if `level` is enabled."""
        entry = LogEntry(level=level, message=message, category=category, context=context)
        self._entries.append(entry)
        if entry.level <= self.level:
            self._write(entry.format(color=self._color), entry.format(color=False))

    def info(self, message: str, **context: Any) -> None:
        self.log(LogLevel.NORMAL, message, **context)

    def verbose(self, message: str, **context: Any) -> None:
        self.log(LogLevel.VERBOSE, message, **context)

    def debug(self, message: str, **context: Any) -> None:
        self.log(LogLevel.DEBUG, message, **context)

    def trace(self, message: str, **context: Any) -> None:
        self.log(LogLevel.TRACE, message, **context)

    def success(self, message: str) -> None:
        """Write a check-marked line; suppressed in quiet mode and not recorded."""
        if self.level >= LogLevel.NORMAL:
            self._marked("✓", Colors.GREEN, message)

    def warning(self, message: str, category: str = "general") -> None:
        self._entries.append(LogEntry(level=LogLevel.QUIET, message=message, category=category))
        self._marked("⚠", Colors.YELLOW, message)

    def error(self, message: str, category: str = "general") -> None:
        self._entries.append(LogEntry(level=LogLevel.QUIET, message=message, category=category))
        self._marked("✗", Colors.RED, message)

    @contextmanager
    def timer(self, name: str, category: str = "timing"):
        """Log the wall-clock time spent in the block at VERBOSE."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.verbose(f"{name}: {time.perf_counter() - start:.3f}s", category=category)

    def count(self, name: str, increment: int = 1) -> int:
        """Bump counter `name` and return its new value."""
        self._counters[name] = self._counters.get(name, 0) + increment
        return self._counters[name]

    def get_count(self, name: str) -> int:
        return self._counters.get(name, 0)

    def get_entries(
        self,
        level: LogLevel | None = None,
        category: str | None = None,
    ) -> list[LogEntry]:
        """Recorded entries, optionally narrowed to one level and/or category."""
        return [
            entry
            for entry in self._entries
            if (level is None or entry.level == level)
            and (category is None or entry.category == category)
        ]

    def clear(self) -> None:
        """Forget recorded entries and counters."""
        self._entries.clear()
        self._counters.clear()

    def open_file(self, path: Path) -> None:
        """Mirror everything written to the stream into `path`, uncoloured."""
        self.close()
        self._file_handle = open(path, "w", encoding="utf-8")

    def close(self) -> None:
        if self._file_handle:
            self._file_handle.close()
            self._file_handle = None


_logger: TactSpectreLogger | None = None


def get_logger() -> TactSpectreLogger:
    """The module-global logger, created with defaults on first use."""
    global _logger
    if _logger is None:
        _logger = TactSpectreLogger()
    return _logger


def set_logger(logger: TactSpectreLogger) -> None:
    global _logger
    _logger = logger


def configure_logging(
    level: LogLevel = LogLevel.NORMAL,
    color: bool = True,
    stream: TextIO | None = None,
    file_path: Path | None = None,
) -> TactSpectreLogger:
    """Replace the module-global logger and return the new one."""
    logger = TactSpectreLogger(level=level, color=color, stream=stream, file_path=file_path)
    set_logger(logger)
    return logger


class PythonLoggingBridge(logging.Handler):
    """`logging.Handler` that forwards stdlib records under category ``python``."""

    _LEVELS = {logging.DEBUG: LogLevel.DEBUG, logging.INFO: LogLevel.NORMAL}

    def __init__(self, spectre_logger: TactSpectreLogger):
        super().__init__()
        self.spectre_logger = spectre_logger

    def emit(self, record: logging.LogRecord) -> None:
        message = self.format(record)
        if record.levelno >= logging.ERROR:
            self.spectre_logger.error(message, category="python")
        elif record.levelno >= logging.WARNING:
            self.spectre_logger.warning(message, category="python")
        else:
            level = self._LEVELS.get(record.levelno, LogLevel.DEBUG)
            self.spectre_logger.log(level, message, category="python")


def setup_python_logging(level: int = logging.INFO) -> None:
    """Route the stdlib ``tactspectre`` logger through the global logger."""
    logger = logging.getLogger("tactspectre")
    logger.setLevel(level)
    logger.addHandler(PythonLoggingBridge(get_logger()))


__all__ = [
    "LogLevel",
    "LogEntry",
    "Colors",
    "TactSpectreLogger",
    "PythonLoggingBridge",
    "get_logger",
    "set_logger",
    "configure_logging",
    "setup_python_logging",
    "supports_color",
]
