"""Conversion errors raised by the GeoJSON <-> H3 converter."""

from typing import Optional


class GeoJSONH3Error(Exception):
    """Base conversion error."""
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.original_exception = original_exception


class UnsupportedInput(GeoJSONH3Error, ValueError):
    """Raised for unhandled GeoJSON types, missing features or invalid cells."""
    pass


class UnsupportedTopology(GeoJSONH3Error, ValueError):
    """Raised when a hole falls inside more than one outer ring (nested donuts)."""
    pass


class InternalInvariantViolation(GeoJSONH3Error, RuntimeError):
    """Raised when a hole falls inside no outer ring at all."""
    pass
