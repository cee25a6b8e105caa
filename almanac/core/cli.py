#!/usr/bin/env python3
"""
cli.py
------
Shared CLI utilities and statistics for almanac commands.

Functions:
    setup_logger: Initialize AlmanacLogger for CLI operations

Classes:
    OperationStats: Files processed, errors and elapsed time
    ValidationStats: OperationStats plus warning and clean-file counts

Usage:
    from almanac.core.cli import setup_logger, ValidationStats

    logger = setup_logger(log_dir, "validators")
    stats = ValidationStats()
    stats.files_processed += 1
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Optional

# --- Local imports ---
from almanac.core.logging_manager import AlmanacLogger


# ═══════════════════════════════════════════════════════════════════════════
# LOGGER SETUP
# ═══════════════════════════════════════════════════════════════════════════

def setup_logger(log_dir: Path, component_name: str) -> AlmanacLogger:
    """
    Setup logging for CLI operations.

    Creates the operations log directory if it doesn't exist and initializes
    an AlmanacLogger instance for the specified component.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g., 'validators')

    Returns:
        Configured AlmanacLogger instance
    """
    operations_log_dir = log_dir / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return AlmanacLogger(operations_log_dir, component_name=component_name)


# ═══════════════════════════════════════════════════════════════════════════
# STATISTICS CLASSES
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class OperationStats:
    """
    Base class for CLI operation statistics.

    Attributes:
        files_processed: Number of files processed
        errors: Number of errors encountered
        start_time: Operation start timestamp
    """
    files_processed: int = 0
    errors: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate statistics on initialization."""
        if self.files_processed < 0:
            raise ValueError(f"files_processed must be non-negative, got {self.files_processed}")
        if self.errors < 0:
            raise ValueError(f"errors must be non-negative, got {self.errors}")

    def duration(self) -> float:
        """Get elapsed time in seconds (cached after first call)."""
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def summary(self) -> str:
        """Get formatted summary string."""
        return (
            f"{self.files_processed} files processed, "
            f"{self.errors} errors, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "files_processed": self.files_processed,
            "errors": self.errors,
            "duration": self.duration(),
        }


@dataclass
class ValidationStats(OperationStats):
    """
    Statistics for validation runs.

    Attributes:
        warnings: Number of warnings reported
        files_clean: Number of files with no errors or warnings
    """
    warnings: int = 0
    files_clean: int = 0

    def __post_init__(self) -> None:
        """Validate statistics on initialization."""
        super().__post_init__()
        if self.warnings < 0:
            raise ValueError(f"warnings must be non-negative, got {self.warnings}")
        if self.files_clean < 0:
            raise ValueError(f"files_clean must be non-negative, got {self.files_clean}")

    def summary(self) -> str:
        """Get formatted summary with warning metrics."""
        return (
            f"{self.files_processed} files processed, "
            f"{self.files_clean} clean, "
            f"{self.warnings} warnings, "
            f"{self.errors} errors, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with warning metrics."""
        d = super().to_dict()
        d.update({
            "warnings": self.warnings,
            "files_clean": self.files_clean,
        })
        return d
