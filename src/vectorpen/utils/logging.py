"""Logging utilities for Vectorpen."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

LOGGER_NAME = "vectorpen"

_FILE_HANDLER = "vectorpen-file"
_CONSOLE_HANDLER = "vectorpen-console"
_HANDLER_NAMES = (_FILE_HANDLER, _CONSOLE_HANDLER)


@dataclass
class SessionStats:
    """Statistics from an editing session."""

    paths_created: int = 0
    points_added: int = 0
    connections: int = 0
    promotions: int = 0
    handle_drags: int = 0
    shapes_created: int = 0
    paths_finalized: int = 0
    text_edits_applied: int = 0
    text_edits_rejected: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)

    @property
    def edit_count(self) -> int:
        """Total number of edits that changed the document."""
        return (
            self.points_added
            + self.connections
            + self.promotions
            + self.handle_drags
            + self.shapes_created
            + self.text_edits_applied
        )


def get_logger() -> structlog.stdlib.BoundLogger:
    """Return the package logger without touching the logging configuration."""
    return structlog.get_logger(LOGGER_NAME)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
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

    # Reconfiguring replaces the handlers of the previous call
    for handler in list(root_logger.handlers):
        if handler.get_name() in _HANDLER_NAMES:
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(_FILE_HANDLER)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.set_name(_CONSOLE_HANDLER)
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

    logger = get_logger()
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class SessionLogger:
    """Logger for tracking editing events and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else get_logger()
        self._stats = SessionStats()

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        """The underlying bound logger."""
        return self._logger

    def log_path_created(self, path_id: str, x: float, y: float) -> None:
        """Log creation of a path by its first point."""
        self._logger.info("Path created", path=path_id, x=x, y=y)
        self._stats.paths_created += 1
        self._stats.points_added += 1

    def log_point_added(self, path_id: str, index: int, x: float, y: float) -> None:
        """Log a point appended to the in-progress path."""
        self._logger.debug("Point added", path=path_id, index=index, x=x, y=y)
        self._stats.points_added += 1

    def log_connection(self, path_id: str, from_index: int, letter: str, live: bool) -> None:
        """Log a committed (or live-updated) connector."""
        if live:
            self._logger.debug(
                "Connector updated", path=path_id, from_index=from_index, cmd=letter
            )
            return
        self._logger.info("Points connected", path=path_id, from_index=from_index, cmd=letter)
        self._stats.connections += 1

    def log_promotion(self, path_id: str, index: int) -> None:
        """Log a line promoted to a curve."""
        self._logger.info("Line promoted to curve", path=path_id, index=index)
        self._stats.promotions += 1

    def log_handle_drag(self, shape_id: str, index: int, handle: str) -> None:
        """Log the end of a handle or vertex drag."""
        self._logger.debug("Handle dragged", shape=shape_id, index=index, handle=handle)
        self._stats.handle_drags += 1

    def log_shape_created(self, shape_id: str, shape_type: str) -> None:
        """Log creation of a simple shape."""
        self._logger.info("Shape created", shape=shape_id, type=shape_type)
        self._stats.shapes_created += 1

    def log_path_finalized(self, path_id: str, command_count: int) -> None:
        """Log completion of the in-progress path."""
        self._logger.info("Path finalized", path=path_id, commands=command_count)
        self._stats.paths_finalized += 1

    def log_text_edit(self, path_id: str, text: str, error: Exception | None = None) -> None:
        """Log a direct edit of path-description text."""
        if error is None:
            self._logger.info("Path data replaced", path=path_id, d=text)
            self._stats.text_edits_applied += 1
            return
        self._logger.warning(
            "Path data rejected",
            path=path_id,
            d=text,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.text_edits_rejected += 1
        self._stats.errors.append((path_id, str(error)))

    def log_state_change(self, previous: str, current: str) -> None:
        """Log an interaction state transition."""
        if previous != current:
            self._logger.debug("State changed", previous=previous, current=current)

    @property
    def stats(self) -> SessionStats:
        """Get current session statistics."""
        return self._stats
