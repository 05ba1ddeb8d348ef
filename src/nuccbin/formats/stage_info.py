"""
StageInfo - stage prop metadata

Nested relocation table. Each 0xB0-byte entry points at:
  - its name string
  - an array of 64-bit pointers to xfbin path strings
  - an array of 0x38-byte props, each pointing at four strings

Every pointer (including the ones inside the sub-tables) is relative to the
address of the pointer field itself.

Written layout:
  header | entries | sub-tables (per entry: path pointers, then props) | strings
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..errors import MalformedPointerError
from ..utils.binary import IoBuffer
from .base import register_format
from .fields import fixed_list
from .relocation import (
    HEADER_SIZE, PointerField, RelocationHeader, RelocationTable, StringPool,
    base_offset_forward, check_entry_block, check_region, encode_pointer, resolve_string,
)

logger = logging.getLogger(__name__)


ENTRY_STRIDE = 0xB0
PATH_STRIDE = 0x08
PROP_STRIDE = 0x38

ENTRY_NAME_POINTER = PointerField("entry_name", 0x00, 8)
XFBIN_PATHS_POINTER = PointerField("xfbin_paths", 0x10, 8)
PROPS_POINTER = PointerField("props", 0x20, 8)

PROP_POINTERS = (
    PointerField("xfbin_path", 0x00, 8),
    PointerField("clump_name", 0x08, 8),
    PointerField("string2", 0x10, 8),
    PointerField("string3", 0x18, 8),
)


@dataclass
class StageProp:
    """A prop placed on the stage (0x38 bytes)."""
    xfbin_path: str = ""
    clump_name: str = ""
    string2: str = ""
    string3: str = ""
    unk0: int = 0
    unk1_float: float = 0.0
    unk2: int = 0
    unk3: int = 0
    unk4: int = 0
    unk5: int = 0

    @classmethod
    def read_record(cls, io: IoBuffer):
        pointers = {p.name: p.read(io) for p in PROP_POINTERS}
        prop = cls(
            unk0=io.read_uint32(),
            unk1_float=io.read_float(),
            unk2=io.read_uint32(),
            unk3=io.read_uint32(),
            unk4=io.read_uint32(),
            unk5=io.read_uint32(),
        )
        return prop, pointers

    def write_record(self, io: IoBuffer, pointers: dict):
        for p in PROP_POINTERS:
            p.write(io, pointers[p.name])
        io.write_uint32(self.unk0)
        io.write_float(self.unk1_float)
        io.write_uint32(self.unk2)
        io.write_uint32(self.unk3)
        io.write_uint32(self.unk4)
        io.write_uint32(self.unk5)


@dataclass
class StageInfoEntry:
    """A stage (0xB0 bytes)."""
    entry_name: str = ""
    xfbin_paths: list[str] = field(default_factory=list)
    props: list[StageProp] = field(default_factory=list)
    unk_bytes0: list[int] = field(default_factory=lambda: [0] * 0x18)
    unk_vec: list[float] = field(default_factory=lambda: [0.0] * 3)
    unk0: int = 0
    unk_floats0: list[float] = field(default_factory=lambda: [0.0] * 5)
    unk_bytes1: list[int] = field(default_factory=lambda: [0] * 4)
    unk1: int = 0
    unk_floats1: list[float] = field(default_factory=lambda: [0.0] * 0x11)

    @classmethod
    def read_record(cls, io: IoBuffer):
        pointers = {}
        pointers[ENTRY_NAME_POINTER.name] = ENTRY_NAME_POINTER.read(io)
        pointers["xfbin_paths_count"] = io.read_uint64()
        pointers[XFBIN_PATHS_POINTER.name] = XFBIN_PATHS_POINTER.read(io)
        pointers["props_count"] = io.read_uint64()
        pointers[PROPS_POINTER.name] = PROPS_POINTER.read(io)

        entry = cls()
        entry.unk_bytes0 = [io.read_int8() for _ in range(0x18)]
        entry.unk_vec = [io.read_float() for _ in range(3)]
        entry.unk0 = io.read_uint32()
        entry.unk_floats0 = [io.read_float() for _ in range(5)]
        entry.unk_bytes1 = [io.read_int8() for _ in range(4)]
        entry.unk1 = io.read_uint32()
        entry.unk_floats1 = [io.read_float() for _ in range(0x11)]
        return entry, pointers

    def write_record(self, io: IoBuffer, pointers: dict):
        ENTRY_NAME_POINTER.write(io, pointers[ENTRY_NAME_POINTER.name])
        io.write_uint64(len(self.xfbin_paths))
        XFBIN_PATHS_POINTER.write(io, pointers[XFBIN_PATHS_POINTER.name])
        io.write_uint64(len(self.props))
        PROPS_POINTER.write(io, pointers[PROPS_POINTER.name])

        for value in fixed_list(self.unk_bytes0, 0x18, "unk_bytes0"):
            io.write_int8(value)
        for value in fixed_list(self.unk_vec, 3, "unk_vec"):
            io.write_float(value)
        io.write_uint32(self.unk0)
        for value in fixed_list(self.unk_floats0, 5, "unk_floats0"):
            io.write_float(value)
        for value in fixed_list(self.unk_bytes1, 4, "unk_bytes1"):
            io.write_int8(value)
        io.write_uint32(self.unk1)
        for value in fixed_list(self.unk_floats1, 0x11, "unk_floats1"):
            io.write_float(value)


def _locate_subtable(io: IoBuffer, base: int, pointer: int, count: int, stride: int) -> Optional[int]:
    """Absolute start of a count * stride sub-table, or None when it is empty."""
    if count == 0:
        return None
    if pointer == 0:
        raise MalformedPointerError(pointer, base, io.size, reason=f"is null for {count} sub-entries")

    start = base + pointer
    check_region(pointer, start, count * stride, io.size)
    return start


def _absolute(region_start: int, position: Optional[int]) -> Optional[int]:
    return None if position is None else region_start + position


@dataclass
class _EntryLayout:
    """Where one entry's sub-tables and strings landed, relative to their regions."""
    entry_name: Optional[int] = None
    paths_at: Optional[int] = None
    path_strings: list = field(default_factory=list)
    props_at: Optional[int] = None
    prop_strings: list = field(default_factory=list)


@register_format("StageInfo")
@dataclass
class StageInfo(RelocationTable):
    """Stage prop table (StageInfo.bin)."""
    STRIDE = ENTRY_STRIDE
    ALIGNMENT = 8
    HEADER_FIELD = "pointer_size"

    pointer_size: int = 0
    entries: list[StageInfoEntry] = field(default_factory=list)
    big_endian: bool = False

    def read(self, io: IoBuffer):
        header = RelocationHeader.read(io)
        self.unk0 = header.unk0
        self.pointer_size = header.unk1

        check_entry_block(io, header.count, ENTRY_STRIDE)

        self.entries = []
        for index in range(header.count):
            record_start = base_offset_forward(ENTRY_STRIDE, index)
            io.seek(record_start)
            entry, pointers = StageInfoEntry.read_record(io)

            entry.entry_name = resolve_string(
                io, record_start + ENTRY_NAME_POINTER.offset, pointers[ENTRY_NAME_POINTER.name])
            entry.xfbin_paths = self._read_paths(
                io, record_start + XFBIN_PATHS_POINTER.offset,
                pointers[XFBIN_PATHS_POINTER.name], pointers["xfbin_paths_count"])
            entry.props = self._read_props(
                io, record_start + PROPS_POINTER.offset,
                pointers[PROPS_POINTER.name], pointers["props_count"])

            self.entries.append(entry)

        logger.debug("Read StageInfo: %d entries, %d props", header.count,
                     sum(len(e.props) for e in self.entries))

    def _read_paths(self, io: IoBuffer, base: int, pointer: int, count: int) -> list[str]:
        start = _locate_subtable(io, base, pointer, count, PATH_STRIDE)
        if start is None:
            return []

        paths = []
        for i in range(count):
            slot = start + PATH_STRIDE * i
            io.seek(slot)
            paths.append(resolve_string(io, slot, io.read_uint64()))
        return paths

    def _read_props(self, io: IoBuffer, base: int, pointer: int, count: int) -> list[StageProp]:
        start = _locate_subtable(io, base, pointer, count, PROP_STRIDE)
        if start is None:
            return []

        props = []
        for i in range(count):
            prop_start = start + PROP_STRIDE * i
            io.seek(prop_start)
            prop, pointers = StageProp.read_record(io)
            for p in PROP_POINTERS:
                setattr(prop, p.name, resolve_string(io, prop_start + p.offset, pointers[p.name]))
            props.append(prop)
        return props

    def write(self, io: IoBuffer):
        count = len(self.entries)
        RelocationHeader(self.unk0, count, self.pointer_size).write(io)

        # Reserved; patched once sub-table and string positions are known
        io.write_padding(count * ENTRY_STRIDE)

        tables = IoBuffer.writer(io.byte_order)
        strings = IoBuffer.writer(io.byte_order)
        pool = StringPool(strings, self.ALIGNMENT)

        layouts = []
        for entry in self.entries:
            layout = _EntryLayout(entry_name=pool.add(entry.entry_name))

            if entry.xfbin_paths:
                layout.paths_at = tables.position
                for path in entry.xfbin_paths:
                    tables.write_padding(PATH_STRIDE)
                    layout.path_strings.append(pool.add(path))

            if entry.props:
                layout.props_at = tables.position
                for prop in entry.props:
                    tables.write_padding(PROP_STRIDE)
                    layout.prop_strings.append([pool.add(getattr(prop, p.name)) for p in PROP_POINTERS])

            layouts.append(layout)

        tables_start = HEADER_SIZE + count * ENTRY_STRIDE
        strings_start = tables_start + tables.size

        for index, (entry, layout) in enumerate(zip(self.entries, layouts)):
            record_start = base_offset_forward(ENTRY_STRIDE, index)
            pointers = {
                ENTRY_NAME_POINTER.name: encode_pointer(
                    _absolute(strings_start, layout.entry_name),
                    record_start + ENTRY_NAME_POINTER.offset),
                XFBIN_PATHS_POINTER.name: encode_pointer(
                    _absolute(tables_start, layout.paths_at),
                    record_start + XFBIN_PATHS_POINTER.offset),
                PROPS_POINTER.name: encode_pointer(
                    _absolute(tables_start, layout.props_at),
                    record_start + PROPS_POINTER.offset),
            }
            io.seek(record_start)
            entry.write_record(io, pointers)

            for i, string_at in enumerate(layout.path_strings):
                slot = layout.paths_at + PATH_STRIDE * i
                tables.seek(slot)
                tables.write_uint64(encode_pointer(
                    _absolute(strings_start, string_at), tables_start + slot))

            for i, (prop, string_ats) in enumerate(zip(entry.props, layout.prop_strings)):
                prop_at = layout.props_at + PROP_STRIDE * i
                prop_pointers = {
                    p.name: encode_pointer(_absolute(strings_start, at), tables_start + prop_at + p.offset)
                    for p, at in zip(PROP_POINTERS, string_ats)
                }
                tables.seek(prop_at)
                prop.write_record(tables, prop_pointers)

        io.seek(0, 2)
        io.write_bytes(tables.getvalue())
        io.write_bytes(strings.getvalue())

        logger.debug("Wrote StageInfo: %d entries, %d sub-table bytes, %d strings",
                     count, tables.size, pool.count)
