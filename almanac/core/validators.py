#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities for front-matter values.

Provides type-safe conversion used by the Post dataclass (lenient loading)
and the markdown validator (strict checking).
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from .exceptions import ValidationError

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DataValidator:
    """Centralized data validation for front-matter values."""

    @staticmethod
    def validate_required_fields(
        data: Dict[str, Any], required_fields: List[str]
    ) -> None:
        """
        Validate that required fields are present and non-empty.

        A string holding only whitespace counts as empty.

        Args:
            data: Data dictionary to validate
            required_fields: List of required field names

        Raises:
            ValidationError: On the first missing or empty field
        """
        for field in required_fields:
            if field not in data:
                raise ValidationError(f"Required field '{field}' missing")
            value = data[field]
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(f"Required field '{field}' is empty")

    @staticmethod
    def normalize_date(date_value: Any) -> Optional[date]:
        """
        Normalize various date inputs to date object.

        Strings must be exactly YYYY-MM-DD and a real calendar day.

        Args:
            date_value: Date string, date object, or datetime

        Returns:
            Normalized date object or None

        Examples:
            >>> DataValidator.normalize_date("2024-01-15")
            datetime.date(2024, 1, 15)
            >>> DataValidator.normalize_date("January 15, 2024") is None
            True
        """
        # datetime is a subclass of date; check it first
        if isinstance(date_value, datetime):
            return date_value.date()
        if isinstance(date_value, date):
            return date_value
        if isinstance(date_value, str):
            value = date_value.strip()
            if not ISO_DATE_RE.match(value):
                return None
            try:
                return date.fromisoformat(value)
            except ValueError:
                return None
        return None

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """Strip a scalar value to a string, or None when empty."""
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @staticmethod
    def normalize_tags(value: Any) -> List[str]:
        """
        Coerce a tags value to a list of strings.

        A scalar becomes a one-element list; None items are dropped.

        Examples:
            >>> DataValidator.normalize_tags(["python", 3])
            ['python', '3']
            >>> DataValidator.normalize_tags("python")
            ['python']
            >>> DataValidator.normalize_tags(None)
            []
        """
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(t).strip() for t in value if t is not None and str(t).strip()]
        text = str(value).strip()
        return [text] if text else []
