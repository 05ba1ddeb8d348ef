"""
Relocation Tables - header + fixed-stride entries + trailing string pool

Layout shared by the NUCC parameter tables:

  Header (0x10 bytes):
    - unk0 (4 bytes)
    - entry count (4 bytes)
    - unk1 / pointer size (4 bytes)
    - padding (4 bytes)
  Entries:
    - count * STRIDE bytes of fixed-size records
  Trailing pool(s):
    - NUL-terminated strings, each aligned to ALIGNMENT
    - (stage info only) nested sub-tables before the strings

Pointer fields inside a record are relative: the on-disk value is the
target position minus the absolute address of the pointer field itself.
A pointer of 0 means "no string"; strings never share storage.

Writing reserves the entry region, appends the pool, then seeks back into
the reserved region to patch each record once its pointers are known.
"""

import logging
from dataclasses import dataclass
from typing import ClassVar, Optional

from ..errors import MalformedPointerError, MalformedStringError, TruncatedError
from ..utils.binary import IoBuffer
from .base import NuccBinaryParsed

logger = logging.getLogger(__name__)


HEADER_SIZE = 0x10


def base_offset_forward(stride: int, index: int, field_offset: int = 0,
                        header_size: int = HEADER_SIZE) -> int:
    """Absolute address of a pointer field: the value its pointer is relative to."""
    return header_size + stride * index + field_offset


def base_offset_backward(stride: int, count: int, index: int, field_offset: int = 0) -> int:
    """
    Base of a pointer field measured back from the end of the entry array.

    Resolving against a view that starts at the trailing pool, a pointer
    lands at `pointer - base_offset_backward(...)`.
    """
    return stride * (count - index) - field_offset


def encode_pointer(position: Optional[int], base: int) -> int:
    """Relative pointer for a target written at `position`; 0 when nothing was written."""
    if position is None:
        return 0
    pointer = position - base
    if pointer <= 0:
        # Pools always follow the records that point into them
        raise MalformedPointerError(pointer, position, base, reason="does not point forward")
    return pointer


def resolve_string(io: IoBuffer, base: int, pointer: int) -> str:
    """
    Read the NUL-terminated string `pointer` bytes past `base`.

    The stream position is restored afterwards. A pointer of 0 is the empty
    string and never seeks.
    """
    if pointer == 0:
        return ""

    target = base + pointer
    limit = io.size
    if not 0 <= target < limit:
        raise MalformedPointerError(pointer, target, limit)

    saved = io.position
    io.seek(target)
    try:
        return io.read_null_terminated_string()
    except TruncatedError as e:
        raise MalformedPointerError(pointer, target, limit, reason="is not NUL-terminated") from e
    except MalformedStringError as e:
        raise MalformedPointerError(pointer, target, limit, reason="is not valid UTF-8") from e
    finally:
        io.seek(saved)


def check_region(pointer: int, target: int, length: int, limit: int):
    """Fail unless [target, target + length) lies inside the buffer."""
    if target < 0 or target + length > limit:
        raise MalformedPointerError(pointer, target, limit)


class StringPool:
    """Appends NUL-terminated, aligned strings to a stream and reports where each landed."""

    def __init__(self, io: IoBuffer, alignment: int):
        self.io = io
        self.alignment = alignment
        self.count = 0

    def add(self, value: str) -> Optional[int]:
        """Write value at the current position. Empty strings are not stored."""
        if not value:
            return None

        position = self.io.position
        self.io.write_null_terminated_string(value)
        self.io.align(self.alignment)
        self.count += 1
        return position


@dataclass
class PointerField:
    """A relative pointer inside a record, resolved into the string attribute `name`."""
    name: str
    offset: int
    width: int = 4

    def read(self, io: IoBuffer) -> int:
        return io.read_uint64() if self.width == 8 else io.read_uint32()

    def write(self, io: IoBuffer, value: int):
        if self.width == 8:
            io.write_uint64(value)
        else:
            io.write_uint32(value)


@dataclass
class RelocationHeader:
    """The 16-byte header every relocation table starts with."""
    unk0: int = 0
    count: int = 0
    unk1: int = 0
    padding: int = 0

    @classmethod
    def read(cls, io: IoBuffer) -> 'RelocationHeader':
        header = cls(
            unk0=io.read_uint32(),
            count=io.read_uint32(),
            unk1=io.read_uint32(),
            padding=io.read_uint32(),
        )
        if header.padding != 0:
            logger.warning("Non-zero header padding 0x%X ignored", header.padding)
        return header

    def write(self, io: IoBuffer):
        io.write_uint32(self.unk0)
        io.write_uint32(self.count)
        io.write_uint32(self.unk1)
        io.write_uint32(0)


def check_entry_block(io: IoBuffer, count: int, stride: int):
    """Fail fast when the declared entry array cannot fit in the buffer."""
    needed = count * stride
    if not io.has_bytes(needed):
        raise TruncatedError(io.position, needed, io.size)


@dataclass
class RelocationTable(NuccBinaryParsed):
    """
    Flat relocation table: one record per entry, every pointer resolving
    into a single trailing string pool.

    Subclasses set ENTRY_TYPE, STRIDE, ALIGNMENT and POINTER_FIELDS, name the
    header's third word with HEADER_FIELD, and declare `entries` and
    `big_endian`. Entry types provide read_record(io) -> (entry, pointers)
    and write_record(io, pointers).
    """
    ENTRY_TYPE: ClassVar[type] = object
    STRIDE: ClassVar[int] = 0
    ALIGNMENT: ClassVar[int] = 4
    POINTER_FIELDS: ClassVar[tuple] = ()
    HEADER_FIELD: ClassVar[str] = "unk1"

    unk0: int = 0

    def read(self, io: IoBuffer):
        header = RelocationHeader.read(io)
        self.unk0 = header.unk0
        setattr(self, self.HEADER_FIELD, header.unk1)

        check_entry_block(io, header.count, self.STRIDE)
        records = [self.ENTRY_TYPE.read_record(io) for _ in range(header.count)]

        # Strings are resolved against a view of everything after the entries
        pool = IoBuffer.from_bytes(io.read_bytes(io.size - io.position), io.byte_order)

        self.entries = []
        for index, (entry, pointers) in enumerate(records):
            for pointer_field in self.POINTER_FIELDS:
                base = -base_offset_backward(self.STRIDE, header.count, index, pointer_field.offset)
                setattr(entry, pointer_field.name,
                        resolve_string(pool, base, pointers[pointer_field.name]))
            self.entries.append(entry)

        logger.debug("Read %s: %d entries, %d pool bytes",
                     self.type_code, header.count, pool.size)

    def write(self, io: IoBuffer):
        count = len(self.entries)
        RelocationHeader(self.unk0, count, getattr(self, self.HEADER_FIELD)).write(io)

        # Reserved; patched below once string positions are known
        io.write_padding(count * self.STRIDE)

        pool = StringPool(io, self.ALIGNMENT)
        for index, entry in enumerate(self.entries):
            pointers = {}
            for pointer_field in self.POINTER_FIELDS:
                position = pool.add(getattr(entry, pointer_field.name))
                base = base_offset_forward(self.STRIDE, index, pointer_field.offset)
                pointers[pointer_field.name] = encode_pointer(position, base)

            end = io.position
            io.seek(base_offset_forward(self.STRIDE, index))
            entry.write_record(io, pointers)
            io.seek(end)

        logger.debug("Wrote %s: %d entries, %d strings, %d bytes",
                     self.type_code, count, pool.count, io.position)
