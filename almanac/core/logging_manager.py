#!/usr/bin/env python3
"""
logging_manager.py
------------------
Logging for almanac commands.

Each component gets two rotating files under its log directory:

    <component>.log   every record, DEBUG and up
    errors.log        errors with their context and traceback

Warnings are also echoed to stderr. Library classes accept an optional
logger and wrap it with ``safe_logger`` so a missing logger is a no-op.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _format_cli_error(error: Exception) -> str:
    return f"❌ {type(error).__name__}: {error}"


class AlmanacLogger:
    """
    Operations and error logger for one component.

    Attributes:
        log_dir: Where the log files live
        component_name: Prefix for logger names and the operations file
        main_logger: ``<component>.operations``, file plus console
        error_logger: ``<component>.errors``, errors.log only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "almanac",
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self._setup_loggers()

    def _setup_loggers(self) -> None:
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = self._fresh_logger("operations", logging.DEBUG)
        self.main_logger.addHandler(
            self._file_handler(f"{self.component_name}.log", logging.DEBUG)
        )
        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        self.main_logger.addHandler(console)

        self.error_logger = self._fresh_logger("errors", logging.ERROR)
        self.error_logger.addHandler(self._file_handler("errors.log", logging.ERROR))

    def _fresh_logger(self, suffix: str, level: int) -> logging.Logger:
        # handlers from an earlier instance with the same component are dropped
        logger = logging.getLogger(f"{self.component_name}.{suffix}")
        logger.setLevel(level)
        logger.handlers = []
        return logger

    def _file_handler(self, filename: str, level: int) -> RotatingFileHandler:
        handler = RotatingFileHandler(
            self.log_dir / filename,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        return handler

    def close(self) -> None:
        """Close and detach every handler."""
        for logger in (self.main_logger, self.error_logger):
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    def _emit(
        self, level: int, label: str, message: str, details: Optional[Dict[str, Any]]
    ) -> None:
        if details:
            message = f"{message}: {json.dumps(details, default=str)}"
        self.main_logger.log(level, f"{label} - {message}")

    def log_operation(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record a completed operation; details are serialized as JSON."""
        self._emit(logging.INFO, "OPERATION", operation, details or {})

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._emit(logging.DEBUG, "DEBUG", message, details)

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._emit(logging.INFO, "INFO", message, details)

    def log_warning(
        self, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self._emit(logging.WARNING, "WARNING", message, details)

    def log_error(
        self, error: Exception, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """Write the error, its context and the active traceback to errors.log."""
        self.error_logger.error(f"ERROR - {type(error).__name__}: {error}")
        if context:
            pairs = ", ".join(f"{key}={value}" for key, value in context.items())
            self.error_logger.error(f"Context: {pairs}")
        self.error_logger.error(f"Traceback:\n{traceback.format_exc()}")

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log ``error`` and return the line to show the user.

        Examples:
            >>> logger.log_cli_error(CorpusError("Posts directory not found"))
            '❌ CorpusError: Posts directory not found'
        """
        self.log_error(error, context or {"source": "cli"})
        message = _format_cli_error(error)
        if show_traceback:
            return f"{message}\n\n{traceback.format_exc()}"
        return message


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Log ``error`` through the command's logger, print it and exit.

    The logger and verbose flag come from ``ctx.obj`` as set by
    ``almanac_cli_group``; with ``--verbose`` the traceback is printed too.
    Never returns.
    """
    obj = ctx.obj or {}
    context: Dict[str, Any] = {"operation": operation, **(additional_context or {})}

    message = safe_logger(obj.get("logger")).log_cli_error(
        error, context, show_traceback=obj.get("verbose", False)
    )
    click.echo(message, err=True)
    sys.exit(exit_code)


class NullLogger:
    """AlmanacLogger stand-in whose methods do nothing."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return _format_cli_error(error)


_null_logger = NullLogger()


def safe_logger(logger: Optional[AlmanacLogger]) -> AlmanacLogger:
    """``logger`` itself, or the shared NullLogger when it is None."""
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
