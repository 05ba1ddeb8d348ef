"""
MessageInfo - Localized Message Tables

Found as WIN64/<lang>/message*.bin. Each 0x28-byte entry holds one message
string; the string pointer sits 0x10 bytes into the record and strings are
aligned to 8 bytes.
"""

from dataclasses import dataclass, field

from ..utils.binary import IoBuffer
from .base import register_format
from .fields import fixed_list
from .relocation import PointerField, RelocationTable


STRING_POINTER = PointerField("string", 0x10)


@dataclass
class MessageInfoEntry:
    """A single message. Layout (0x28 bytes):

    0x00 unk0 (4 raw bytes)
    0x04 unk1, unk2, unk3 (u32)
    0x10 string pointer (u32)
    0x14 unk4, unk5 (u32)
    0x1C unk6..unk9 (i16)
    0x24 unk10 (u32)
    """
    unk0: list[int] = field(default_factory=lambda: [0, 0, 0, 0])
    unk1: int = 0
    unk2: int = 0
    unk3: int = 0
    unk4: int = 0
    unk5: int = 0
    unk6: int = 0
    unk7: int = 0
    unk8: int = 0
    unk9: int = 0
    unk10: int = 0
    string: str = ""

    @classmethod
    def read_record(cls, io: IoBuffer):
        entry = cls()
        entry.unk0 = list(io.read_bytes(4))
        entry.unk1 = io.read_uint32()
        entry.unk2 = io.read_uint32()
        entry.unk3 = io.read_uint32()
        pointers = {STRING_POINTER.name: STRING_POINTER.read(io)}
        entry.unk4 = io.read_uint32()
        entry.unk5 = io.read_uint32()
        entry.unk6 = io.read_int16()
        entry.unk7 = io.read_int16()
        entry.unk8 = io.read_int16()
        entry.unk9 = io.read_int16()
        entry.unk10 = io.read_uint32()
        return entry, pointers

    def write_record(self, io: IoBuffer, pointers: dict):
        for byte in fixed_list(self.unk0, 4, "unk0"):
            io.write_uint8(byte)
        io.write_uint32(self.unk1)
        io.write_uint32(self.unk2)
        io.write_uint32(self.unk3)
        STRING_POINTER.write(io, pointers[STRING_POINTER.name])
        io.write_uint32(self.unk4)
        io.write_uint32(self.unk5)
        io.write_int16(self.unk6)
        io.write_int16(self.unk7)
        io.write_int16(self.unk8)
        io.write_int16(self.unk9)
        io.write_uint32(self.unk10)


@register_format("MessageInfo")
@dataclass
class MessageInfo(RelocationTable):
    """Localized message table."""
    ENTRY_TYPE = MessageInfoEntry
    STRIDE = 0x28
    ALIGNMENT = 8
    POINTER_FIELDS = (STRING_POINTER,)

    unk1: int = 0
    entries: list[MessageInfoEntry] = field(default_factory=list)
    big_endian: bool = False
