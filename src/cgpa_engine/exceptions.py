"""Errors raised by the CGPA engine."""

from typing import Any, Dict, List, Optional


class GPAEngineError(Exception):
    """Base class for all engine errors"""


class ValidationError(GPAEngineError, ValueError):
    """A course record or transcript snapshot is malformed"""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class InvalidInputError(GPAEngineError, ValueError):
    """A calculation argument is outside its valid range"""


__all__ = ["GPAEngineError", "ValidationError", "InvalidInputError"]
