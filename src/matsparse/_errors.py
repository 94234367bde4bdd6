"""
Error handling for matsparse.

Every failure is reported synchronously through a ``MatSparseError``
subclass. The subclasses also derive from the matching builtin exception
so callers can catch either.
"""

from __future__ import annotations


class MatSparseError(Exception):
    """Base exception for all matsparse errors."""


class InvalidArgumentError(MatSparseError, ValueError):
    """A value, coordinate or byte span violates the call contract."""


class DimensionMismatchError(InvalidArgumentError):
    """Array lengths or dimensions do not agree with each other."""


class IndexOutOfBoundsError(InvalidArgumentError, IndexError):
    """A (row, column) coordinate lies outside the matrix."""


class UnsupportedOperationError(InvalidArgumentError, NotImplementedError):
    """
    The operation has no meaning for sparse storage.

    Raised for flat-index access, which is rejected as an invalid
    argument, so it is also an ``InvalidArgumentError``.
    """
