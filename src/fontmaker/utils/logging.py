"""Logging utilities for FontMaker."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers added by configure_logging, replaced on reconfiguration.
_installed_handlers: list[logging.Handler] = []


@dataclass
class ExportStats:
    """Statistics from one font export."""

    style: str = ""
    exported_count: int = 0
    skipped_count: int = 0
    kerning_pairs: int = 0
    skipped_kerning_pairs: int = 0
    skipped: list[str] = field(default_factory=list)
    glyph_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate export duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_glyph_time_ms(self) -> float | None:
        """Average per-glyph assembly time."""
        if not self.glyph_timings_ms:
            return None
        return sum(self.glyph_timings_ms) / len(self.glyph_timings_ms)

def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

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
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

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

    logger = structlog.get_logger("fontmaker")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger

class ExportLogger:
    """Logger for tracking export progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, style: str = "") -> None:
        self._logger = logger
        self._stats = ExportStats(style=style)

    def log_glyph_start(self, char: str) -> None:
        """Log start of glyph assembly."""
        self._logger.debug("Assembling glyph", glyph=char, style=self._stats.style)

    def log_glyph_complete(
        self,
        char: str,
        advance_width: int,
        duration_ms: float,
    ) -> None:
        """Log successful glyph assembly."""
        self._logger.debug(
            "Glyph assembled",
            glyph=char,
            style=self._stats.style,
            advance=advance_width,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.exported_count += 1
        self._stats.glyph_timings_ms.append(duration_ms)

    def log_glyph_skipped(self, char: str, reason: str) -> None:
        """Log skipped glyph."""
        self._logger.debug("Glyph skipped", glyph=char, reason=reason)
        self._stats.skipped_count += 1
        self._stats.skipped.append(char)

    def log_glyph_error(self, char: str, error: Exception) -> None:
        """Log the glyph failure that aborts an export."""
        self._logger.error(
            "Glyph export failed",
            glyph=char,
            style=self._stats.style,
            error=str(error),
            error_type=type(error).__name__,
        )

    def log_kerning(self, exported: int, skipped: int) -> None:
        """Log how many kerning pairs made it into the font."""
        self._logger.debug(
            "Kerning pairs resolved",
            style=self._stats.style,
            exported=exported,
            skipped=skipped,
        )
        self._stats.kerning_pairs = exported
        self._stats.skipped_kerning_pairs = skipped

    @property
    def stats(self) -> ExportStats:
        """Get current export statistics."""
        return self._stats
