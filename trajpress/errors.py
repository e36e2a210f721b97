"""
Exception hierarchy for trajpress.

All errors derive from ValueError so callers catching ValueError keep working.
"""

__all__ = [
    'TrajPressError',
    'InvalidArgument',
    'EncodingOverflow',
    'DecodingCorrupt',
    'PltParseError',
]


class TrajPressError(Exception):
    """Base class for all trajpress errors."""


class InvalidArgument(TrajPressError, ValueError):
    """A caller passed an argument outside the operation's contract."""


class EncodingOverflow(TrajPressError, ValueError):
    """A field or delta does not fit the binary width chosen for it."""


class DecodingCorrupt(TrajPressError, ValueError):
    """An encoded buffer is truncated, has trailing bytes or an unknown tag."""


class PltParseError(TrajPressError, ValueError):
    """A Geolife .plt record could not be parsed."""

    def __init__(self, message: str, line_number: int = 0):
        self.line_number = line_number
        if line_number:
            message = f"line {line_number}: {message}"
        super().__init__(message)
