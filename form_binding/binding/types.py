"""Sized numeric type aliases for record field declarations.

Plain `int` and `float` fields bind at 64-bit width. Use these aliases when a
field must reject values outside a narrower range.
"""

from __future__ import annotations

from typing import Annotated

from .interfaces import BitSize

Int8 = Annotated[int, BitSize(8)]
Int16 = Annotated[int, BitSize(16)]
Int32 = Annotated[int, BitSize(32)]
Int64 = Annotated[int, BitSize(64)]
Uint = Annotated[int, BitSize(64, unsigned=True)]
Uint8 = Annotated[int, BitSize(8, unsigned=True)]
Uint16 = Annotated[int, BitSize(16, unsigned=True)]
Uint32 = Annotated[int, BitSize(32, unsigned=True)]
Uint64 = Annotated[int, BitSize(64, unsigned=True)]
Float32 = Annotated[float, BitSize(32)]
Float64 = Annotated[float, BitSize(64)]

__all__ = [
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Uint",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
]
