"""
Enum definitions for the Winter Clothing Backend
"""

from enum import Enum

class ServiceErrorType(str, Enum):
    """
    Failure kinds reported by the service layer.

    - CONFLICT: registration with an email that already exists
    - UNAUTHORIZED: unknown email or wrong password on login
    - RESOURCE_NOT_FOUND: no document matches the id (or the id is malformed)
    - DATABASE_ERROR: the store raised or was unreachable
    """
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    DATABASE_ERROR = "DATABASE_ERROR"
