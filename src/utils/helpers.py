"""
Utility functions and helpers
"""

import logging
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)

def parse_iso_datetime(timestamp_str: str) -> datetime:
    """
    Parse an ISO date or date-time string into a naive UTC datetime.

    Raises ValueError for anything that is not ISO 8601.
    """
    if not isinstance(timestamp_str, str) or not timestamp_str.strip():
        raise ValueError("date value is required")
    value = timestamp_str.strip()

    # Handle ISO format with 'Z' (UTC)
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'

    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        logger.warning(f"Failed to parse date '{timestamp_str}'")
        raise ValueError(f"invalid date: {timestamp_str!r}")

    # Convert to UTC and make timezone-naive so aware and naive values compare
    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except OverflowError:
            logger.warning(f"Date out of range in UTC: '{timestamp_str}'")
            raise ValueError(f"invalid date: {timestamp_str!r} is out of range")
    return parsed

def parse_form_bool(value: Optional[str]) -> bool:
    """Multipart forms send booleans as text"""
    if value is None:
        return False
    return str(value).strip().lower() in ("true", "1", "yes", "on")
