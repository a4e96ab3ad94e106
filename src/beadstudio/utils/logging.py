"""Logging utilities for Bead Studio."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_installed_handlers: list[logging.Handler] = []


@dataclass
class LoadStats:
    """Statistics from a loading session."""

    loaded_count: int = 0
    failed_count: int = 0
    primitives_parsed: int = 0
    entities_skipped: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    durations_ms: list[float] = field(default_factory=list)

    @property
    def avg_load_time_ms(self) -> float | None:
        """Average time per successful load."""
        if not self.durations_ms:
            return None
        return sum(self.durations_ms) / len(self.durations_ms)


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

    # Reconfiguring replaces the handlers installed by an earlier call
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

    logger = structlog.get_logger("beadstudio")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level if log_file else console_level,
    )

    return logger


class LoadLogger:
    """Logger for tracking drawing loads and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("beadstudio")
        self._stats = LoadStats()

    def log_load_start(self, source: str, source_format: str) -> None:
        """Log start of a drawing load."""
        self._logger.debug("Loading drawing", source=source, format=source_format)

    def log_load_complete(
        self,
        source: str,
        primitives: int,
        skipped: int,
        width: float,
        height: float,
        duration_ms: float,
    ) -> None:
        """Log successful load."""
        self._logger.info(
            "Drawing loaded",
            source=source,
            primitives=primitives,
            skipped=skipped,
            width=round(width, 3),
            height=round(height, 3),
            duration_ms=round(duration_ms, 2),
        )
        self._stats.loaded_count += 1
        self._stats.primitives_parsed += primitives
        self._stats.entities_skipped += skipped
        self._stats.durations_ms.append(duration_ms)

    def log_load_error(self, source: str, error: Exception) -> None:
        """Log a failed load."""
        self._logger.error(
            "Drawing load failed",
            source=source,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.failed_count += 1
        self._stats.errors.append((source, str(error)))

    def log_contour_source(self, source: str, kind: str, points: int) -> None:
        """Log which primitive supplied the outline."""
        self._logger.debug("Contour extracted", source=source, kind=kind, points=points)

    @property
    def stats(self) -> LoadStats:
        """Get current load statistics."""
        return self._stats
