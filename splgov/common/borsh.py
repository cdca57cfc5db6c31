"""
Minimal Borsh codec.

Borsh is the little-endian binary layout the governance program uses for both
instruction arguments and account data. Only the primitives the governance
instructions and records need are covered.
"""

import struct
from typing import Callable, List, Optional, Sequence, TypeVar

from solders.pubkey import Pubkey

T = TypeVar("T")


class BorshWriter:
    """Append-only Borsh encoder."""

    def __init__(self):
        self._chunks: List[bytes] = []

    def u8(self, value: int) -> "BorshWriter":
        self._chunks.append(struct.pack("<B", value))
        return self

    def u16(self, value: int) -> "BorshWriter":
        self._chunks.append(struct.pack("<H", value))
        return self

    def u32(self, value: int) -> "BorshWriter":
        self._chunks.append(struct.pack("<I", value))
        return self

    def u64(self, value: int) -> "BorshWriter":
        self._chunks.append(struct.pack("<Q", value))
        return self

    def boolean(self, value: bool) -> "BorshWriter":
        return self.u8(1 if value else 0)

    def string(self, value: str) -> "BorshWriter":
        encoded = value.encode("utf-8")
        self.u32(len(encoded))
        self._chunks.append(encoded)
        return self

    def pubkey(self, value: Pubkey) -> "BorshWriter":
        self._chunks.append(bytes(value))
        return self

    def vec(self, items: Sequence[T], write_item: Callable[["BorshWriter", T], object]) -> "BorshWriter":
        self.u32(len(items))
        for item in items:
            write_item(self, item)
        return self

    def raw(self, data: bytes) -> "BorshWriter":
        self._chunks.append(bytes(data))
        return self

    def getvalue(self) -> bytes:
        return b"".join(self._chunks)


class BorshReader:
    """Sequential Borsh decoder over a byte buffer."""

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.offset = 0

    def _take(self, size: int) -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise ValueError(
                f"Buffer underflow: need {size} bytes at offset {self.offset}, "
                f"have {len(self.data) - self.offset}"
            )
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def u8(self) -> int:
        return struct.unpack("<B", self._take(1))[0]

    def u16(self) -> int:
        return struct.unpack("<H", self._take(2))[0]

    def u32(self) -> int:
        return struct.unpack("<I", self._take(4))[0]

    def u64(self) -> int:
        return struct.unpack("<Q", self._take(8))[0]

    def boolean(self) -> bool:
        value = self.u8()
        if value > 1:
            raise ValueError(f"Invalid bool byte {value} at offset {self.offset - 1}")
        return value == 1

    def string(self) -> str:
        length = self.u32()
        return self._take(length).decode("utf-8")

    def pubkey(self) -> Pubkey:
        return Pubkey(self._take(32))

    def option(self, read_item: Callable[["BorshReader"], T]) -> Optional[T]:
        return read_item(self) if self.boolean() else None

    def skip(self, size: int) -> None:
        self._take(size)

    def remaining(self) -> int:
        return len(self.data) - self.offset
