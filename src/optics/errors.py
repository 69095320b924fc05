"""Exception hierarchy for optics.

Every error aborts the current ``view``/``update`` call and propagates to the
caller unchanged; nothing inside the engine catches them.
"""

from __future__ import annotations


class LensError(Exception):
    """Base class for all errors raised by optics."""


class ShapeError(LensError, TypeError):
    """A step needed a list where a dict or scalar was found, or vice versa."""

    def __init__(self, message: str, expected: str = "", actual: str = "") -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class KeyNotFound(LensError, KeyError):
    """A ``key`` step named a key the target dict does not have."""

    def __init__(self, message: str, key: str = "") -> None:
        super().__init__(message)
        self.key = key

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class IndexOutOfRange(LensError, IndexError):
    """An ``index`` step pointed outside ``[0, len)``."""

    def __init__(self, message: str, position: int = 0, length: int = 0) -> None:
        super().__init__(message)
        self.position = position
        self.length = length


class MalformedLens(LensError, ValueError):
    """A lens, step or lens text failed structural validation."""


class UnsupportedOperation(LensError):
    """The operation cannot be carried out through the given lens.

    Raised when ``update``/``set``/``append`` meet a ``keys`` traversal.
    """
