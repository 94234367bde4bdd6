"""
Array Class Codes and Attribute Flags

The container format describes every array with a single 32-bit flags
word: the low byte holds the array class, the next bits hold attributes.

    bit layout:   ........ ........ ....CGL. CCCCCCCC
                                        |||  class code
                                        ||+- logical
                                        |+-- global
                                        +--- complex
"""

from enum import IntEnum
from typing import Tuple

__all__ = ['MatClass', 'ArrayFlags']


class MatClass(IntEnum):
    """Array class codes as stored in the flags word."""
    UNKNOWN = 0
    CELL = 1
    STRUCT = 2
    OBJECT = 3
    CHAR = 4
    SPARSE = 5
    DOUBLE = 6
    SINGLE = 7
    INT8 = 8
    UINT8 = 9
    INT16 = 10
    UINT16 = 11
    INT32 = 12
    UINT32 = 13
    INT64 = 14
    UINT64 = 15
    FUNCTION = 16
    OPAQUE = 17


class ArrayFlags:
    """Attribute bits and packing helpers for the flags word."""
    CLASS_MASK = 0x000000FF
    ATTRIBUTE_MASK = 0xFFFFFF00

    LOGICAL = 0x0200
    GLOBAL = 0x0400
    COMPLEX = 0x0800

    @classmethod
    def pack(cls, mat_class: int, attributes: int = 0) -> int:
        """Combine a class code and attribute bits into one word."""
        return (int(mat_class) & cls.CLASS_MASK) | (attributes & cls.ATTRIBUTE_MASK)

    @classmethod
    def unpack(cls, word: int) -> Tuple[int, int]:
        """Split a flags word into ``(class_code, attributes)``."""
        return word & cls.CLASS_MASK, word & cls.ATTRIBUTE_MASK

    @staticmethod
    def has(attributes: int, flag: int) -> bool:
        return (attributes & flag) != 0
