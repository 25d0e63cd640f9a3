"""
Exceptions raised by the trigram language identification pipeline.
"""
from typing import Optional


class LequelError(Exception):
    """Base class for all pipeline errors."""


class DecodeError(LequelError, ValueError):
    """A line of input text is not valid Unicode."""

    def __init__(self, message: str, line_number: Optional[int] = None, position: Optional[int] = None):
        super().__init__(message)
        self.line_number = line_number
        self.position = position


class EmptyProfileError(LequelError, ValueError):
    """Normalization was attempted on a profile with zero total weight."""


class InvalidProfileError(LequelError, ValueError):
    """A language profile is malformed (empty code or non-mapping profile)."""
