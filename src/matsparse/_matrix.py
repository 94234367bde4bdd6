"""
Sparse Matrix Storage

Coordinate-addressed sparse matrix of double values with an optional
imaginary part. Entries live in a single map from ``IndexKey`` to
``Entry``; a sorted key list gives column-major traversal without a
separate sort step, so the compressed-column arrays (``ir``, ``jc``,
``pr``, ``pi``) fall straight out of iteration.

Example:
    >>> m = SparseMatrix("a", (3, 3))
    >>> m.set_real(5.0, 2, 0)
    >>> m.set_real(7.0, 0, 2)
    >>> m.export_row_indices().tolist()
    [2, 0]
    >>> m.export_column_pointers().tolist()
    [0, 1, 1, 2]
"""

from __future__ import annotations

import logging
from bisect import insort
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from ._config import config
from ._errors import (
    DimensionMismatchError,
    IndexOutOfBoundsError,
    InvalidArgumentError,
    UnsupportedOperationError,
)
from ._flags import ArrayFlags, MatClass
from ._index import Entry, IndexKey

if TYPE_CHECKING:
    from scipy.sparse import csc_matrix, spmatrix

logger = logging.getLogger("matsparse.matrix")

__all__ = ['SparseMatrix']


class SparseMatrix:
    """
    Two-dimensional sparse array in compressed-column form.

    Attributes:
        name (str): Array name as stored in the container
        dims (tuple): ``(rows, cols)``, fixed at creation
        attributes (int): Attribute bits (``ArrayFlags.COMPLEX`` etc.)
        max_nonzero (int): Declared capacity, informational only

    Unwritten coordinates read as ``0.0``. Writing a coordinate, even with
    zero, makes it occupied: it is exported and counts toward ``nnz``.
    """

    def __init__(self, name: str, dims: Sequence[int], attributes: int = 0, nzmax: int = 0):
        dims = tuple(dims)
        if len(dims) != 2:
            raise InvalidArgumentError(
                f"Sparse arrays must have exactly 2 dimensions, got {len(dims)}"
            )
        if any(int(d) != d or d < 0 for d in dims):
            raise InvalidArgumentError(f"Dimensions must be non-negative integers, got {dims}")
        if nzmax < 0:
            raise InvalidArgumentError(f"nzmax must be non-negative, got {nzmax}")

        self._name = name
        self._dims: Tuple[int, int] = (int(dims[0]), int(dims[1]))
        self._attributes = attributes & ArrayFlags.ATTRIBUTE_MASK
        self._nzmax = int(nzmax)

        self._entries: Dict[IndexKey, Entry] = {}
        self._keys: List[IndexKey] = []
        self._over_capacity_logged = False

        logger.debug(
            f"Created sparse '{name}' {self._dims[0]}x{self._dims[1]} "
            f"nzmax={self._nzmax} complex={self.is_complex}"
        )

    # =========================================================================
    # Metadata
    # =========================================================================

    @property
    def name(self) -> str:
        return self._name

    @property
    def dims(self) -> Tuple[int, int]:
        return self._dims

    @property
    def shape(self) -> Tuple[int, int]:
        """Matrix dimensions (rows, cols)."""
        return self._dims

    @property
    def rows(self) -> int:
        return self._dims[0]

    @property
    def cols(self) -> int:
        return self._dims[1]

    @property
    def ndim(self) -> int:
        return 2

    @property
    def size(self) -> int:
        """Total number of elements (rows * cols)."""
        return self._dims[0] * self._dims[1]

    @property
    def attributes(self) -> int:
        return self._attributes

    @property
    def mat_class(self) -> MatClass:
        return MatClass.SPARSE

    @property
    def flags(self) -> int:
        """Packed flags word (class code plus attribute bits)."""
        return ArrayFlags.pack(MatClass.SPARSE, self._attributes)

    @property
    def is_complex(self) -> bool:
        return ArrayFlags.has(self._attributes, ArrayFlags.COMPLEX)

    @property
    def is_global(self) -> bool:
        return ArrayFlags.has(self._attributes, ArrayFlags.GLOBAL)

    @property
    def is_logical(self) -> bool:
        return ArrayFlags.has(self._attributes, ArrayFlags.LOGICAL)

    @property
    def max_nonzero(self) -> int:
        """Maximum number of non-zero values declared at construction."""
        return self._nzmax

    @property
    def nnz(self) -> int:
        """Number of occupied coordinates."""
        return len(self._keys)

    @property
    def density(self) -> float:
        total = self.size
        return self.nnz / total if total > 0 else 0.0

    def __len__(self) -> int:
        return len(self._keys)

    # =========================================================================
    # Coordinate Access
    # =========================================================================

    def _key(self, row: int, column: int) -> IndexKey:
        # jc needs every column in [0, cols); check_bounds only relaxes rows.
        # Keys sort as column * rows + row only while row < rows.
        in_rows = 0 <= row < self._dims[0]
        if not 0 <= column < self._dims[1] or (config.check_bounds and not in_rows):
            raise IndexOutOfBoundsError(
                f"Index ({row},{column}) out of bounds for {self._dims[0]}x{self._dims[1]} matrix"
            )
        return IndexKey(row, column)

    def _store(self, key: IndexKey, entry: Entry) -> None:
        if key not in self._entries:
            insort(self._keys, key)
            if self._nzmax and len(self._keys) > self._nzmax and not self._over_capacity_logged:
                self._over_capacity_logged = True
                logger.debug(
                    f"Sparse '{self._name}' holds {len(self._keys)} entries, "
                    f"above declared nzmax={self._nzmax}"
                )
        self._entries[key] = entry

    def get_real(self, row: int, column: int) -> float:
        """Real part at (row, column), ``0.0`` if never written."""
        entry = self._entries.get(self._key(row, column))
        return 0.0 if entry is None else entry.real_or_zero

    def get_imaginary(self, row: int, column: int) -> float:
        """Imaginary part at (row, column), ``0.0`` if never written."""
        entry = self._entries.get(self._key(row, column))
        return 0.0 if entry is None else entry.imaginary_or_zero

    def set_real(self, value: float, row: int, column: int) -> None:
        """Insert or overwrite the real part; the imaginary part is kept."""
        key = self._key(row, column)
        entry = self._entries.get(key, Entry())
        self._store(key, entry.with_real(float(value)))

    def set_imaginary(self, value: float, row: int, column: int) -> None:
        """
        Insert or overwrite the imaginary part; the real part is kept.

        Raises:
            UnsupportedOperationError: If the matrix is not complex
        """
        if not self.is_complex:
            raise UnsupportedOperationError(
                f"Sparse '{self._name}' is not complex; cannot set imaginary values"
            )
        key = self._key(row, column)
        entry = self._entries.get(key, Entry())
        self._store(key, entry.with_imaginary(float(value)))

    def get_real_at(self, index: int) -> float:
        raise UnsupportedOperationError(
            "Can't get sparse array elements by index. Please use get_real(row, column) instead."
        )

    def get_imaginary_at(self, index: int) -> float:
        raise UnsupportedOperationError(
            "Can't get sparse array elements by index. Please use get_imaginary(row, column) instead."
        )

    def set_real_at(self, value: float, index: int) -> None:
        raise UnsupportedOperationError(
            "Can't set sparse array elements by index. Please use set_real(value, row, column) instead."
        )

    def set_imaginary_at(self, value: float, index: int) -> None:
        raise UnsupportedOperationError(
            "Can't set sparse array elements by index. Please use set_imaginary(value, row, column) instead."
        )

    def __getitem__(self, idx):
        """``m[row, col]``: float for real matrices, complex otherwise."""
        if not isinstance(idx, tuple):
            return self.get_real_at(idx)
        row, column = idx
        if self.is_complex:
            return complex(self.get_real(row, column), self.get_imaginary(row, column))
        return self.get_real(row, column)

    def __setitem__(self, idx, value) -> None:
        if not isinstance(idx, tuple):
            self.set_real_at(value, idx)
        row, column = idx
        if not isinstance(value, complex):
            self.set_real(value, row, column)
        elif self.is_complex:
            self.set_real(value.real, row, column)
            self.set_imaginary(value.imag, row, column)
        elif value.imag == 0.0:
            self.set_real(value.real, row, column)
        else:
            raise UnsupportedOperationError(
                f"Sparse '{self._name}' is not complex; cannot store {value!r}"
            )

    def __contains__(self, idx) -> bool:
        row, column = idx
        return IndexKey(row, column) in self._entries

    # =========================================================================
    # Iteration
    # =========================================================================

    def keys(self) -> Iterator[IndexKey]:
        """Occupied coordinates in column-major order."""
        return iter(list(self._keys))

    def items(self) -> Iterator[Tuple[IndexKey, float, float]]:
        """``(key, real, imaginary)`` in column-major order."""
        for key in list(self._keys):
            entry = self._entries[key]
            yield key, entry.real_or_zero, entry.imaginary_or_zero

    # =========================================================================
    # Compressed-Column Export
    # =========================================================================

    def export_row_indices(self) -> np.ndarray:
        """
        Gets row indices (``ir``).

        One entry per occupied coordinate, in column-major order, aligned
        with ``export_real``/``export_imaginary``.
        """
        return np.fromiter(
            (key.row for key in self._keys),
            dtype=config.index_type.numpy_dtype,
            count=len(self._keys),
        )

    def export_column_pointers(self) -> np.ndarray:
        """
        Gets column pointers (``jc``), length ``cols + 1``.

        ``jc[j]`` is the number of occupied coordinates in all columns
        before ``j``; ``jc[cols]`` equals ``nnz``.
        """
        dtype = config.index_type.numpy_dtype
        jc = np.zeros(self.cols + 1, dtype=dtype)
        if self._keys:
            columns = np.fromiter((key.column for key in self._keys), dtype=np.int64, count=len(self._keys))
            jc[1:] = np.cumsum(np.bincount(columns, minlength=self.cols)[: self.cols])
        return jc

    def export_real(self) -> np.ndarray:
        """Real part (``pr``), one value per occupied coordinate."""
        return np.fromiter(
            (self._entries[key].real_or_zero for key in self._keys),
            dtype=np.float64,
            count=len(self._keys),
        )

    def export_imaginary(self) -> np.ndarray:
        """Imaginary part (``pi``), one value per occupied coordinate."""
        return np.fromiter(
            (self._entries[key].imaginary_or_zero for key in self._keys),
            dtype=np.float64,
            count=len(self._keys),
        )

    # =========================================================================
    # Construction from Decoded Data
    # =========================================================================

    @classmethod
    def from_csc(
        cls,
        name: str,
        shape: Tuple[int, int],
        ir: Sequence[int],
        jc: Sequence[int],
        pr: Sequence[float],
        pi: Optional[Sequence[float]] = None,
        attributes: int = 0,
        nzmax: Optional[int] = None,
    ) -> "SparseMatrix":
        """
        Rebuild a matrix from decoded ``ir``/``jc``/``pr``/``pi`` arrays.

        Args:
            name: Array name
            shape: (rows, cols)
            ir: Row index of each stored value
            jc: Column pointers, length cols + 1
            pr: Real values
            pi: Imaginary values (sets the complex attribute)
            attributes: Extra attribute bits
            nzmax: Declared capacity (defaults to ``len(ir)``)

        Raises:
            DimensionMismatchError: If the arrays are inconsistent
            IndexOutOfBoundsError: If a row index is outside the matrix
        """
        ir = np.asarray(ir, dtype=np.int64)
        jc = np.asarray(jc, dtype=np.int64)
        pr = np.asarray(pr, dtype=np.float64)
        rows, cols = shape

        if len(jc) != cols + 1:
            raise DimensionMismatchError(f"jc must have length {cols + 1}, got {len(jc)}")
        if jc[0] != 0:
            raise DimensionMismatchError(f"jc[0] must be 0, got {jc[0]}")
        if np.any(np.diff(jc) < 0):
            raise DimensionMismatchError("jc must be non-decreasing")
        if jc[-1] != len(ir) or len(ir) != len(pr):
            raise DimensionMismatchError(
                f"jc[-1]={jc[-1]}, len(ir)={len(ir)} and len(pr)={len(pr)} must agree"
            )
        if pi is not None:
            pi = np.asarray(pi, dtype=np.float64)
            if len(pi) != len(pr):
                raise DimensionMismatchError(f"len(pi)={len(pi)} must equal len(pr)={len(pr)}")
            attributes |= ArrayFlags.COMPLEX
        if len(ir) and (ir.min() < 0 or ir.max() >= rows):
            raise IndexOutOfBoundsError(f"Row indices must lie in [0, {rows})")

        mat = cls(name, shape, attributes, len(ir) if nzmax is None else nzmax)
        for column in range(cols):
            for k in range(jc[column], jc[column + 1]):
                row = int(ir[k])
                mat.set_real(pr[k], row, column)
                if pi is not None:
                    mat.set_imaginary(pi[k], row, column)
        return mat

    @classmethod
    def from_dense(cls, name: str, dense, attributes: int = 0) -> "SparseMatrix":
        """Create from a dense 2D array/list, keeping non-zero entries only."""
        dense = np.asarray(dense)
        if dense.ndim != 2:
            raise InvalidArgumentError(f"Dense input must be 2D, got {dense.ndim}D")
        is_complex = np.iscomplexobj(dense)
        if is_complex:
            attributes |= ArrayFlags.COMPLEX

        rows, cols = np.nonzero(dense)
        mat = cls(name, dense.shape, attributes, len(rows))
        for row, column in zip(rows.tolist(), cols.tolist()):
            value = dense[row, column]
            mat.set_real(value.real, row, column)
            if is_complex:
                mat.set_imaginary(value.imag, row, column)
        return mat

    @classmethod
    def from_scipy(cls, name: str, mat: 'spmatrix', attributes: int = 0) -> "SparseMatrix":
        """Create from any scipy sparse matrix (converted to CSC)."""
        csc = mat.tocsc(copy=True)
        csc.sum_duplicates()
        csc.sort_indices()
        data = np.asarray(csc.data)
        pi = data.imag if np.iscomplexobj(data) else None
        return cls.from_csc(
            name, csc.shape, csc.indices, csc.indptr, data.real, pi, attributes=attributes
        )

    # =========================================================================
    # Conversion
    # =========================================================================

    def to_scipy(self) -> 'csc_matrix':
        """Convert to scipy CSC matrix."""
        import scipy.sparse as sp

        data = self.export_real()
        if self.is_complex:
            data = data + 1j * self.export_imaginary()
        return sp.csc_matrix(
            (data,
             self.export_row_indices().astype(np.int64),
             self.export_column_pointers().astype(np.int64)),
            shape=self._dims
        )

    def to_dense(self) -> np.ndarray:
        """Dense numpy array (complex128 for complex matrices)."""
        dtype = np.complex128 if self.is_complex else np.float64
        dense = np.zeros(self._dims, dtype=dtype)
        for key, real, imag in self.items():
            dense[key.row, key.column] = complex(real, imag) if self.is_complex else real
        return dense

    def copy(self) -> "SparseMatrix":
        """Create a deep copy."""
        new = type(self)(self._name, self._dims, self._attributes, self._nzmax)
        new._entries = dict(self._entries)
        new._keys = list(self._keys)
        new._over_capacity_logged = self._over_capacity_logged
        return new

    # =========================================================================
    # Representation
    # =========================================================================

    def content_to_string(self) -> str:
        """Diagnostic listing of occupied coordinates and values."""
        lines = [f"{self._name} = "]
        for key, real, imag in self.items():
            line = f"\t{key}\t{real}"
            if self.is_complex:
                line += f"+{imag}"
            lines.append(line)
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return (
            f"SparseMatrix(name={self._name!r}, shape={self._dims}, "
            f"nnz={self.nnz}, complex={self.is_complex})"
        )
