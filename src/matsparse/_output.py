"""
Buffered Output

A sink for exported arrays. The matrix never performs I/O itself; the
container encoder hands it a ``BufferedOutput`` and reads back the raw
bytes and size once the sparse sub-elements have been written.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Union

from ._codec import Float64Codec, IndexCodec
from ._config import ByteOrder, IndexType
from ._errors import InvalidArgumentError

if TYPE_CHECKING:
    from ._matrix import SparseMatrix

logger = logging.getLogger("matsparse.output")

__all__ = ['BufferedOutput', 'ByteArrayOutput', 'SubElement', 'write_sparse']


class BufferedOutput(ABC):
    """Resizable byte sink exposing its current contents and size."""

    @abstractmethod
    def write(self, data: Union[bytes, bytearray, memoryview]) -> int:
        """Append bytes, returning the number written."""
        ...

    @abstractmethod
    def buffer(self) -> memoryview:
        """Current raw contents."""
        ...

    @abstractmethod
    def size(self) -> int:
        """Current size in bytes."""
        ...

    def getvalue(self) -> bytes:
        return bytes(self.buffer())


class ByteArrayOutput(BufferedOutput):
    """
    In-memory ``BufferedOutput`` backed by a growable ``bytearray``.

    Example:
        >>> out = ByteArrayOutput()
        >>> out.write(b'abc')
        3
        >>> out.size()
        3
    """

    def __init__(self):
        self._data = bytearray()
        self._closed = False

    def write(self, data: Union[bytes, bytearray, memoryview]) -> int:
        if self._closed:
            raise InvalidArgumentError("Write to closed output")
        self._data += data
        return len(data)

    def buffer(self) -> memoryview:
        return memoryview(bytes(self._data))

    def size(self) -> int:
        return len(self._data)

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "ByteArrayOutput":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ByteArrayOutput(size={self.size()})"


@dataclass(frozen=True)
class SubElement:
    """Where one exported array landed in the sink."""
    name: str
    dtype: str
    count: int
    nbytes: int
    offset: int


def write_sparse(
    matrix: 'SparseMatrix',
    sink: BufferedOutput,
    byte_order: Optional[Union[ByteOrder, str]] = None,
    index_type: Optional[Union[IndexType, str]] = None,
) -> List[SubElement]:
    """
    Write ``ir``, ``jc``, ``pr`` and (if complex) ``pi`` to ``sink``.

    Only the raw element data is written, in that fixed order; tag framing
    and padding belong to the container encoder, which can use the
    returned descriptors to build them.

    Returns:
        One ``SubElement`` per array written
    """
    index_codec = IndexCodec(index_type, byte_order)
    value_codec = Float64Codec(byte_order)

    arrays = [
        ("ir", index_codec, matrix.export_row_indices()),
        ("jc", index_codec, matrix.export_column_pointers()),
        ("pr", value_codec, matrix.export_real()),
    ]
    if matrix.is_complex:
        arrays.append(("pi", value_codec, matrix.export_imaginary()))

    elements = []
    for name, codec, values in arrays:
        offset = sink.size()
        payload = codec.encode_array(values)
        sink.write(payload)
        elements.append(SubElement(
            name=name,
            dtype=codec.dtype.name,
            count=len(values),
            nbytes=len(payload),
            offset=offset,
        ))

    logger.debug(
        f"Wrote sparse '{matrix.name}' nnz={matrix.nnz} "
        f"({sum(e.nbytes for e in elements)} bytes, {value_codec.byte_order.name})"
    )
    return elements
