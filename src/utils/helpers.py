"""
Utility functions and helpers
"""

import re
from datetime import timedelta
from typing import Any, Dict, List, Optional

from bson import ObjectId

# Unit suffixes accepted by EXPIRES_IN, in seconds
_DURATION_UNITS = {
    "ms": 0.001, "msec": 0.001, "msecs": 0.001, "millisecond": 0.001, "milliseconds": 0.001,
    "s": 1, "sec": 1, "secs": 1, "second": 1, "seconds": 1,
    "m": 60, "min": 60, "mins": 60, "minute": 60, "minutes": 60,
    "h": 3600, "hr": 3600, "hrs": 3600, "hour": 3600, "hours": 3600,
    "d": 86400, "day": 86400, "days": 86400,
    "w": 604800, "week": 604800, "weeks": 604800,
    "y": 31557600, "yr": 31557600, "yrs": 31557600, "year": 31557600, "years": 31557600,
}

_DURATION_PATTERN = re.compile(r"^(\d*\.?\d+)\s*([a-z]*)$", re.IGNORECASE)


def parse_duration(value: str) -> timedelta:
    """
    Parse a token lifetime such as "3600", "30m", "12h", "7d" or "2 weeks".

    A bare number is read as seconds.

    Raises:
        ValueError: If the value is empty, negative, or uses an unknown unit
    """
    match = _DURATION_PATTERN.match(str(value).strip())
    if not match:
        raise ValueError(f"Invalid duration: '{value}'")

    amount, unit = match.groups()
    unit = unit.lower() or "s"
    if unit not in _DURATION_UNITS:
        raise ValueError(f"Unknown duration unit '{unit}' in '{value}'")

    return timedelta(seconds=float(amount) * _DURATION_UNITS[unit])


def parse_bool(value: str) -> bool:
    """Interpret common truthy strings from the environment"""
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def serialize_document(value: Any) -> Any:
    """Convert ObjectIds inside a MongoDB document to hex strings for JSON output"""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, list):
        return [serialize_document(item) for item in value]
    return value


def serialize_documents(documents: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [serialize_document(document) for document in documents]


def envelope(message: Optional[str] = None, data: Any = None, success: bool = True) -> Dict[str, Any]:
    """Build the ``{success, message, data}`` response body, omitting empty keys"""
    body: Dict[str, Any] = {"success": success}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body
