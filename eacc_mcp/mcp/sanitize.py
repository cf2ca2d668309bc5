"""Shared sanitization utilities for the MCP layer.

These functions validate and normalize tool arguments so every tool handles
bad input the same way: by raising ``ValueError`` with a message naming the
offending field.
"""

import math
import re
from typing import Any, List, Optional


def sanitize_string(
    value: Any, field_name: str, max_length: int = 1000, required: bool = True
) -> str:
    """Sanitize and validate string inputs.

    Args:
        value: The value to sanitize.
        field_name: Name of the field for error messages.
        max_length: Maximum allowed string length.
        required: If True, empty strings are rejected.

    Returns:
        Sanitized string ("" when optional and absent).

    Raises:
        ValueError: If validation fails.
    """
    if value is None and not required:
        return ""

    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string, got {type(value).__name__}")

    if required and not value.strip():
        raise ValueError(f"{field_name} cannot be empty")

    if len(value) > max_length:
        raise ValueError(f"{field_name} too long (max {max_length} characters, got {len(value)})")

    # Remove null bytes and control characters except newlines and tabs
    return re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", value)


def validate_enum(
    value: Any,
    field_name: str,
    valid_values: List[str],
    default: Optional[str] = None,
    required: bool = False,
) -> Optional[str]:
    """Validate enum values (case-insensitive, normalized to lower case).

    Returns ``default`` when the value is absent and not required.

    Raises:
        ValueError: If validation fails.
    """
    if value is None:
        if required:
            raise ValueError(f"{field_name} is required")
        return default

    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")

    normalized = value.strip().lower()
    if normalized not in valid_values:
        raise ValueError(f"{field_name} must be one of {valid_values}, got '{value}'")

    return normalized


def validate_number(
    value: Any,
    field_name: str,
    min_val: Optional[float] = None,
    max_val: Optional[float] = None,
    default: Optional[float] = None,
) -> float:
    """Validate numeric values, rejecting NaN and Infinity.

    Raises:
        ValueError: If validation fails.
    """
    if value is None:
        if default is not None:
            return default
        raise ValueError(f"{field_name} is required")

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field_name} must be a number, got {type(value).__name__}")

    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        raise ValueError(f"{field_name} must be a finite number, got {value}")

    if min_val is not None and value < min_val:
        raise ValueError(f"{field_name} must be >= {min_val}, got {value}")

    if max_val is not None and value > max_val:
        raise ValueError(f"{field_name} must be <= {max_val}, got {value}")

    return float(value)


def validate_integer(
    value: Any,
    field_name: str,
    min_val: Optional[int] = None,
    max_val: Optional[int] = None,
    default: Optional[int] = None,
) -> int:
    """Validate integer values.

    JSON clients often send whole numbers as floats (``5.0``); those are
    accepted. Fractional values are rejected rather than truncated.
    """
    number = validate_number(value, field_name, min_val, max_val, default)
    if value is None:
        return int(number)
    if isinstance(value, int):
        return value
    if not number.is_integer():
        raise ValueError(f"{field_name} must be an integer, got {value}")
    return int(number)
