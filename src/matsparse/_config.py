"""
Global configuration for matsparse.

Provides:
- Byte order used by the binary codec and writer
- On-disk index width for ``ir``/``jc`` arrays
- Coordinate bounds checking toggle
- Environment variable overrides
"""

from __future__ import annotations

import ctypes
import logging
import os
import sys
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Optional, Union

import numpy as np

from ._errors import InvalidArgumentError

logger = logging.getLogger("matsparse.config")

__all__ = [
    'ByteOrder',
    'IndexType',
    'config',
    'get_byte_order',
    'get_index_type',
]


# =============================================================================
# Enumerations
# =============================================================================

class ByteOrder(Enum):
    """Byte order of encoded scalars (numpy/struct prefix characters)."""
    BIG = ">"
    LITTLE = "<"

    @classmethod
    def native(cls) -> "ByteOrder":
        return cls.LITTLE if sys.byteorder == "little" else cls.BIG

    @classmethod
    def parse(cls, value: Union["ByteOrder", str]) -> "ByteOrder":
        """Accept an enum member, a prefix character or a name."""
        if isinstance(value, ByteOrder):
            return value
        if not isinstance(value, str):
            raise InvalidArgumentError(f"Byte order must be str or ByteOrder, got {type(value).__name__}")
        key = value.strip().lower()
        aliases = {
            ">": cls.BIG, "big": cls.BIG, "be": cls.BIG, "!": cls.BIG,
            "<": cls.LITTLE, "little": cls.LITTLE, "le": cls.LITTLE,
        }
        if key in ("=", "native"):
            return cls.native()
        if key not in aliases:
            raise InvalidArgumentError(f"Unknown byte order: {value!r}")
        return aliases[key]


class IndexType(Enum):
    """Integer width of the exported index arrays."""
    INT32 = "i32"
    INT64 = "i64"

    @property
    def numpy_dtype(self) -> np.dtype:
        return np.dtype(np.int32) if self == IndexType.INT32 else np.dtype(np.int64)

    @property
    def ctypes_type(self):
        return ctypes.c_int32 if self == IndexType.INT32 else ctypes.c_int64

    @property
    def itemsize(self) -> int:
        return 4 if self == IndexType.INT32 else 8

    @classmethod
    def parse(cls, value: Union["IndexType", str]) -> "IndexType":
        if isinstance(value, IndexType):
            return value
        if not isinstance(value, str):
            raise InvalidArgumentError(f"Index type must be str or IndexType, got {type(value).__name__}")
        key = value.strip().lower()
        if key in ("i32", "int32"):
            return cls.INT32
        if key in ("i64", "int64"):
            return cls.INT64
        raise InvalidArgumentError(f"Unknown index type: {value!r}")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ('0', 'false', 'no', 'off')


# =============================================================================
# Global Configuration State
# =============================================================================

class _Config:
    """
    Global configuration singleton.

    Defaults are big-endian scalars, int32 indices and bounds checking on.
    Environment variables are consulted once, on first access.
    """

    def __init__(self):
        self._byte_order = ByteOrder.BIG
        self._index_type = IndexType.INT32
        self._check_bounds = True
        self._env_loaded = False

    def _load_env(self) -> None:
        if self._env_loaded:
            return
        self._env_loaded = True

        order = os.environ.get('MATSPARSE_BYTE_ORDER')
        if order:
            self._byte_order = ByteOrder.parse(order)
            logger.debug(f"Byte order from environment: {self._byte_order.name}")

        index = os.environ.get('MATSPARSE_INDEX_TYPE')
        if index:
            self._index_type = IndexType.parse(index)
            logger.debug(f"Index type from environment: {self._index_type.name}")

        self._check_bounds = _env_flag('MATSPARSE_CHECK_BOUNDS', self._check_bounds)

    @property
    def byte_order(self) -> ByteOrder:
        """Get default byte order."""
        self._load_env()
        return self._byte_order

    @byte_order.setter
    def byte_order(self, value: Union[ByteOrder, str]):
        self._load_env()
        self._byte_order = ByteOrder.parse(value)

    @property
    def index_type(self) -> IndexType:
        """Get default index type."""
        self._load_env()
        return self._index_type

    @index_type.setter
    def index_type(self, value: Union[IndexType, str]):
        self._load_env()
        self._index_type = IndexType.parse(value)

    @property
    def check_bounds(self) -> bool:
        """Whether coordinate setters/getters validate (row, column)."""
        self._load_env()
        return self._check_bounds

    @check_bounds.setter
    def check_bounds(self, value: bool):
        self._load_env()
        self._check_bounds = bool(value)

    def reset(self) -> None:
        """Restore defaults and re-read the environment on next access."""
        self.__init__()

    @contextmanager
    def local(
        self,
        byte_order: Optional[Union[ByteOrder, str]] = None,
        index_type: Optional[Union[IndexType, str]] = None,
        check_bounds: Optional[bool] = None,
    ) -> Iterator["_Config"]:
        """
        Temporarily override settings.

        Example:
            >>> with config.local(byte_order='little'):
            ...     data = Float64Codec().encode(1.0)
        """
        saved = (self.byte_order, self.index_type, self.check_bounds)
        try:
            if byte_order is not None:
                self.byte_order = byte_order
            if index_type is not None:
                self.index_type = index_type
            if check_bounds is not None:
                self.check_bounds = check_bounds
            yield self
        finally:
            self._byte_order, self._index_type, self._check_bounds = saved

    def __repr__(self) -> str:
        return (
            f"Config(byte_order={self.byte_order.name}, "
            f"index_type={self.index_type.name}, "
            f"check_bounds={self.check_bounds})"
        )


config = _Config()


def get_byte_order() -> ByteOrder:
    return config.byte_order


def get_index_type() -> IndexType:
    return config.index_type
