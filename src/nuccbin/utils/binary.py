"""Endian-aware binary I/O utilities for NUCC resource parsing."""

import struct
from enum import Enum
from typing import BinaryIO
from io import BytesIO

from ..errors import FieldOverflowError, MalformedStringError, MalformedTextError, TruncatedError


class ByteOrder(Enum):
    """Byte order enum for struct packing/unpacking."""
    BIG_ENDIAN = ">"
    LITTLE_ENDIAN = "<"

    @classmethod
    def from_big_endian(cls, big_endian: bool) -> 'ByteOrder':
        return cls.BIG_ENDIAN if big_endian else cls.LITTLE_ENDIAN


def align_up(value: int, alignment: int) -> int:
    """Round value up to the next multiple of alignment."""
    return (value + alignment - 1) // alignment * alignment


def decode_utf8(data: bytes, offset: int = 0) -> str:
    """Strict UTF-8 decode; stored strings that do not decode are rejected."""
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise MalformedStringError(offset, data) from e


def encode_utf8(value: str) -> bytes:
    try:
        return value.encode('utf-8')
    except UnicodeEncodeError as e:
        raise MalformedTextError(f"String {value!r} cannot be encoded as UTF-8: {e}") from e


class IoBuffer:
    """Binary reader/writer with endian support."""

    def __init__(self, stream: BinaryIO, byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN):
        self.stream = stream
        self.byte_order = byte_order

    @classmethod
    def from_bytes(cls, data: bytes, byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN) -> 'IoBuffer':
        """Create from bytes."""
        return cls(BytesIO(data), byte_order)

    @classmethod
    def writer(cls, byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN) -> 'IoBuffer':
        """Create an empty in-memory buffer for writing."""
        return cls(BytesIO(), byte_order)

    @property
    def position(self) -> int:
        """Current position in stream."""
        return self.stream.tell()

    @position.setter
    def position(self, value: int):
        """Seek to position."""
        self.stream.seek(value)

    @property
    def size(self) -> int:
        """Total length of the underlying stream."""
        current = self.stream.tell()
        self.stream.seek(0, 2)
        end = self.stream.tell()
        self.stream.seek(current)
        return end

    @property
    def has_more(self) -> bool:
        """Check if there are more bytes to read."""
        return self.position < self.size

    def has_bytes(self, num_bytes: int) -> bool:
        """Check if there are at least num_bytes remaining."""
        return (self.size - self.position) >= num_bytes

    def skip(self, num_bytes: int):
        """Skip bytes from current position."""
        self.stream.seek(num_bytes, 1)

    def seek(self, offset: int, whence: int = 0):
        """Seek in stream (whence: 0=start, 1=current, 2=end)."""
        self.stream.seek(offset, whence)

    def getvalue(self) -> bytes:
        """Full contents of the underlying stream."""
        current = self.stream.tell()
        self.stream.seek(0)
        data = self.stream.read()
        self.stream.seek(current)
        return data

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def _take(self, count: int) -> bytes:
        offset = self.position
        data = self.stream.read(count)
        if len(data) != count:
            raise TruncatedError(offset, count, offset + len(data))
        return data

    def _unpack(self, code: str, size: int):
        return struct.unpack(f"{self.byte_order.value}{code}", self._take(size))[0]

    def read_bytes(self, count: int) -> bytes:
        """Read raw bytes."""
        return self._take(count)

    def read_uint8(self) -> int:
        """Read unsigned 8-bit integer."""
        return self._take(1)[0]

    def read_int8(self) -> int:
        """Read signed byte (-128 to 127)."""
        return struct.unpack('b', self._take(1))[0]

    def read_uint16(self) -> int:
        return self._unpack("H", 2)

    def read_int16(self) -> int:
        return self._unpack("h", 2)

    def read_uint32(self) -> int:
        return self._unpack("I", 4)

    def read_int32(self) -> int:
        return self._unpack("i", 4)

    def read_uint64(self) -> int:
        return self._unpack("Q", 8)

    def read_int64(self) -> int:
        return self._unpack("q", 8)

    def read_float(self) -> float:
        """Read 32-bit float."""
        return self._unpack("f", 4)

    def read_double(self) -> float:
        """Read 64-bit double."""
        return self._unpack("d", 8)

    def read_cstring(self, length: int, trim_null: bool = True) -> str:
        """Read fixed-length UTF-8 string."""
        offset = self.position
        data = self._take(length)
        if trim_null:
            null_idx = data.find(b'\0')
            if null_idx != -1:
                data = data[:null_idx]
        return decode_utf8(data, offset)

    def read_null_terminated_string(self) -> str:
        """Read a NUL-terminated UTF-8 string, consuming the terminator."""
        offset = self.position
        chunks = []
        while True:
            c = self.stream.read(1)
            if not c:
                raise TruncatedError(offset, self.position - offset + 1, self.position)
            if c == b'\0':
                break
            chunks.append(c)
        return decode_utf8(b''.join(chunks), offset)

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def _pack(self, code: str, value):
        try:
            self.stream.write(struct.pack(f"{self.byte_order.value}{code}", value))
        except (struct.error, OverflowError) as e:
            raise FieldOverflowError(f"Cannot encode {value!r} as '{code}': {e}") from e

    def write_bytes(self, data: bytes):
        """Write raw bytes."""
        self.stream.write(data)

    def write_uint8(self, value: int):
        self._pack("B", value)

    def write_int8(self, value: int):
        self._pack("b", value)

    def write_uint16(self, value: int):
        self._pack("H", value)

    def write_int16(self, value: int):
        self._pack("h", value)

    def write_uint32(self, value: int):
        self._pack("I", value)

    def write_int32(self, value: int):
        self._pack("i", value)

    def write_uint64(self, value: int):
        self._pack("Q", value)

    def write_int64(self, value: int):
        self._pack("q", value)

    def write_float(self, value: float):
        self._pack("f", value)

    def write_double(self, value: float):
        self._pack("d", value)

    def write_null_terminated_string(self, value: str):
        """Write a UTF-8 string followed by a NUL byte."""
        self.stream.write(encode_utf8(value) + b'\0')

    def write_padding(self, count: int):
        """Write count zero bytes."""
        self.stream.write(b'\0' * count)

    def align(self, alignment: int) -> int:
        """Zero-pad up to the next multiple of alignment. Returns bytes written."""
        pad = align_up(self.position, alignment) - self.position
        if pad:
            self.write_padding(pad)
        return pad
