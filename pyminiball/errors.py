"""Exceptions raised by pyminiball.

Input problems derive from ``MiniballError``, itself a ``ValueError``, so
callers treating bad geometry like any other bad argument keep working.
"""


class MiniballError(ValueError):
    """Base class for invalid input to the enclosing ball routines."""


class EmptyInputError(MiniballError):
    """No points were given; a minimum ball is undefined."""


class WrongArityError(MiniballError):
    """The number of bounds does not fit the dimension of the points."""


class DegenerateInputError(MiniballError):
    """The bounds are affinely dependent, so no unique circumscribed ball exists."""


class DimensionMismatchError(MiniballError):
    """A point's coordinate count differs from the dimension of the call."""


class RecursionDepthError(RecursionError):
    """The requested recursion depth exceeds the supported maximum."""
