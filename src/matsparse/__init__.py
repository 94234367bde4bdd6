"""
matsparse - Sparse Arrays for MAT-style Containers

Coordinate-addressed sparse matrix storage that exports the
compressed-column arrays a binary container stores on disk:

    ir  row index of every stored value (column-major order)
    jc  column pointers, length cols + 1
    pr  real values
    pi  imaginary values (complex matrices only)

Modules:
- SparseMatrix: coordinate setters/getters and ir/jc/pr/pi export
- IndexKey / Entry: column-major coordinate key and stored value
- Float64Codec / IndexCodec: fixed-width byte codecs
- BufferedOutput / write_sparse: raw sink for exported arrays
- config: byte order, index width, bounds checking

Example:
    >>> from matsparse import SparseMatrix, ArrayFlags
    >>> m = SparseMatrix("a", (3, 3), ArrayFlags.COMPLEX)
    >>> m.set_real(1.0, 0, 0)
    >>> m.set_imaginary(2.0, 0, 0)
    >>> m[0, 0]
    (1+2j)
"""

__version__ = '0.1.0'

from ._errors import (
    MatSparseError,
    InvalidArgumentError,
    DimensionMismatchError,
    IndexOutOfBoundsError,
    UnsupportedOperationError,
)
from ._config import ByteOrder, IndexType, config, get_byte_order, get_index_type
from ._flags import ArrayFlags, MatClass
from ._index import IndexKey, Entry
from ._codec import Float64Codec, IndexCodec
from ._matrix import SparseMatrix
from ._output import BufferedOutput, ByteArrayOutput, SubElement, write_sparse

__all__ = [
    '__version__',
    # Errors
    'MatSparseError',
    'InvalidArgumentError',
    'DimensionMismatchError',
    'IndexOutOfBoundsError',
    'UnsupportedOperationError',
    # Config
    'ByteOrder',
    'IndexType',
    'config',
    'get_byte_order',
    'get_index_type',
    # Metadata
    'ArrayFlags',
    'MatClass',
    # Storage
    'IndexKey',
    'Entry',
    'SparseMatrix',
    # Codec / output
    'Float64Codec',
    'IndexCodec',
    'BufferedOutput',
    'ByteArrayOutput',
    'SubElement',
    'write_sparse',
]
