"""
Binary Value Codec

Fixed-width conversion between Python scalars and raw bytes in the byte
order declared by the container. Values are IEEE-754 doubles (8 bytes);
index arrays use the configured integer width.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np

from ._config import ByteOrder, IndexType, get_byte_order, get_index_type
from ._errors import InvalidArgumentError

__all__ = ['Float64Codec', 'IndexCodec']

BytesLike = Union[bytes, bytearray, memoryview]


class _FixedWidthCodec:
    """Shared encode/decode over a numpy dtype with explicit byte order."""

    kind = ""

    def __init__(self, base_dtype, byte_order: Optional[Union[ByteOrder, str]] = None):
        self._byte_order = get_byte_order() if byte_order is None else ByteOrder.parse(byte_order)
        self._dtype = np.dtype(base_dtype).newbyteorder(self._byte_order.value)

    @property
    def byte_order(self) -> ByteOrder:
        return self._byte_order

    @property
    def dtype(self) -> np.dtype:
        """Numpy dtype including the byte order."""
        return self._dtype

    @property
    def itemsize(self) -> int:
        """Bytes per encoded element."""
        return self._dtype.itemsize

    def _check_single(self, data: BytesLike) -> None:
        if len(data) != self.itemsize:
            raise InvalidArgumentError(
                f"To decode a {self.kind} I need exactly {self.itemsize} bytes, got {len(data)}"
            )

    def encode_array(self, values: Sequence) -> bytes:
        """Encode a sequence of values back to back."""
        return np.asarray(values, dtype=self._dtype).tobytes()

    def decode_array(self, data: BytesLike) -> np.ndarray:
        """Decode a buffer holding a whole number of elements."""
        if len(data) % self.itemsize != 0:
            raise InvalidArgumentError(
                f"Buffer length {len(data)} is not a multiple of {self.itemsize}"
            )
        return np.frombuffer(bytes(data), dtype=self._dtype).astype(self._dtype.newbyteorder("="))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(byte_order={self._byte_order.name})"


class Float64Codec(_FixedWidthCodec):
    """
    Per-element codec for double-precision values.

    Example:
        >>> codec = Float64Codec('big')
        >>> codec.encode(1.0)
        b'?\\xf0\\x00\\x00\\x00\\x00\\x00\\x00'
        >>> codec.decode(codec.encode(-0.0))
        -0.0
    """

    kind = "float64"

    def __init__(self, byte_order: Optional[Union[ByteOrder, str]] = None):
        super().__init__(np.float64, byte_order)

    def decode(self, data: BytesLike) -> float:
        """Build one float from exactly 8 bytes."""
        self._check_single(data)
        return float(np.frombuffer(bytes(data), dtype=self._dtype)[0])

    def encode(self, value: float) -> bytes:
        """Encode one float to exactly 8 bytes."""
        return np.array([value], dtype=self._dtype).tobytes()


class IndexCodec(_FixedWidthCodec):
    """Per-element codec for ``ir``/``jc`` integers."""

    kind = "index"

    def __init__(
        self,
        index_type: Optional[Union[IndexType, str]] = None,
        byte_order: Optional[Union[ByteOrder, str]] = None,
    ):
        self._index_type = get_index_type() if index_type is None else IndexType.parse(index_type)
        super().__init__(self._index_type.numpy_dtype, byte_order)

    @property
    def index_type(self) -> IndexType:
        return self._index_type

    def decode(self, data: BytesLike) -> int:
        self._check_single(data)
        return int(np.frombuffer(bytes(data), dtype=self._dtype)[0])

    def encode(self, value: int) -> bytes:
        return np.array([value], dtype=self._dtype).tobytes()
