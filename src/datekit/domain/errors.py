"""Error kinds raised by the domain layer.

Every error is raised synchronously at the offending operation and never
retried internally. The service layer maps each kind to a ``ServiceError``
code via :attr:`DateKitError.code`.
"""

from __future__ import annotations


class DateKitError(Exception):
    """Base class for all datekit domain errors."""

    code = "DATEKIT_ERROR"


class InvalidDateComponentError(DateKitError):
    """A day, month, hour, ... is out of range, or arithmetic left the supported range."""

    code = "INVALID_COMPONENT"


class ZoneResolutionError(DateKitError):
    """Unknown zone id, or a local time that is ambiguous/nonexistent under strict resolution."""

    code = "ZONE_RESOLUTION"


class FormatMismatchError(DateKitError):
    """Text does not match a parse pattern exactly."""

    code = "FORMAT_MISMATCH"


class InvalidPatternError(DateKitError):
    """A pattern string contains an unknown or malformed token."""

    code = "INVALID_PATTERN"


class UnsupportedFieldError(DateKitError):
    """A field or unit does not apply to the value (e.g. hours on a date)."""

    code = "UNSUPPORTED_FIELD"


class ClockUnavailableError(DateKitError):
    """The host clock could not be read. Fatal."""

    code = "CLOCK_UNAVAILABLE"
