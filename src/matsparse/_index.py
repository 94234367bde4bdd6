"""
Coordinate Keys and Stored Values

``IndexKey`` addresses one matrix element. Keys sort column-major, which
is the order the compressed-column arrays are laid out in. ``Entry`` is
the value held at a key: real only, imaginary only, or both.
"""

from dataclasses import dataclass, replace
from functools import total_ordering
from typing import Optional, Tuple

__all__ = ['IndexKey', 'Entry']


@total_ordering
@dataclass(frozen=True)
class IndexKey:
    """
    Matrix index (row, column).

    Ordering is column-major: ``(column, row)`` compared lexicographically,
    identical to comparing ``column * row_count + row`` for any fixed
    ``row_count`` larger than both rows. Bounds are the owning matrix's
    concern, not the key's.

    Example:
        >>> IndexKey(2, 0) < IndexKey(0, 1)
        True
        >>> IndexKey(2, 0).linear_index(3)
        2
    """
    row: int
    column: int

    def _order(self) -> Tuple[int, int]:
        return (self.column, self.row)

    def __lt__(self, other: "IndexKey") -> bool:
        if not isinstance(other, IndexKey):
            return NotImplemented
        return self._order() < other._order()

    def linear_index(self, row_count: int) -> int:
        """Column-major flat position inside a matrix with ``row_count`` rows."""
        return self.column * row_count + self.row

    @classmethod
    def from_linear(cls, index: int, row_count: int) -> "IndexKey":
        column, row = divmod(index, row_count)
        return cls(row, column)

    def __iter__(self):
        yield self.row
        yield self.column

    def __str__(self) -> str:
        return f"({self.row},{self.column})"


@dataclass(frozen=True)
class Entry:
    """Real and/or imaginary component stored at one coordinate."""
    real: Optional[float] = None
    imaginary: Optional[float] = None

    def with_real(self, value: float) -> "Entry":
        return replace(self, real=value)

    def with_imaginary(self, value: float) -> "Entry":
        return replace(self, imaginary=value)

    @property
    def real_or_zero(self) -> float:
        return 0.0 if self.real is None else self.real

    @property
    def imaginary_or_zero(self) -> float:
        return 0.0 if self.imaginary is None else self.imaginary
