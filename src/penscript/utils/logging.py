"""Logging utilities for Penscript."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_HANDLER_NAME = "penscript"


@dataclass
class RenderStats:
    """Statistics from a render run."""

    lines: int = 0
    glyphs_placed: int = 0
    joins_drawn: int = 0
    missing: set[str] = field(default_factory=set)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def missing_count(self) -> int:
        """Number of distinct glyph keys that could not be found."""
        return len(self.missing)

    @property
    def duration_seconds(self) -> float:
        """Calculate render duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def _reset_handlers(root_logger: logging.Logger) -> None:
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)
            handler.close()


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    _reset_handlers(root_logger)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(_HANDLER_NAME)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("penscript")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class RenderLogger:
    """Logger for tracking render progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RenderStats()

    def log_line(self, index: int, text: str, width: float, missing: set[str]) -> None:
        """Log a laid out line."""
        self._logger.debug(
            "Line laid out",
            line=index,
            chars=len(text),
            width=round(width, 2),
            missing=sorted(missing),
        )
        self._stats.lines += 1
        self._stats.missing |= missing

    def log_glyph_placed(self, key: str, x: float, y: float) -> None:
        """Log a placed glyph."""
        self._logger.debug("Glyph placed", glyph=key, x=round(x, 2), y=round(y, 2))
        self._stats.glyphs_placed += 1

    def log_join(self, from_key: str, to_key: str) -> None:
        """Log a cursive join between two glyphs."""
        self._logger.debug("Cursive join", start=from_key, end=to_key)
        self._stats.joins_drawn += 1

    def log_missing(self, key: str) -> None:
        """Log a glyph key with no captured data."""
        self._logger.debug("Glyph missing", glyph=key)

    def log_render_complete(self, width: float, height: float, duration_ms: float) -> None:
        """Log a finished render."""
        self._logger.info(
            "Render complete",
            lines=self._stats.lines,
            glyphs=self._stats.glyphs_placed,
            joins=self._stats.joins_drawn,
            missing=sorted(self._stats.missing),
            width=round(width, 2),
            height=round(height, 2),
            duration_ms=round(duration_ms, 2),
        )

    @property
    def stats(self) -> RenderStats:
        """Get current render statistics."""
        return self._stats
