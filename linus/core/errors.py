"""Exceptions raised by the polarity engine."""


class LinusError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(LinusError):
    """Raised when catalog data is inconsistent (missing charge, unknown element, bad index)."""


class GeometryError(LinusError):
    """Raised when a field is evaluated at a point where it is undefined."""
