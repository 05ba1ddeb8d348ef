"""
SoundTestParam - sound test / jukebox metadata

Each 0x50-byte entry carries four 64-bit relative pointers (entry name,
character name, name message id, description message id). Every pointer is
relative to its own field address. Strings are aligned to 8 bytes.

Message ids are looked up by the game through their CRC-32/BZIP2 hash; the
hashes are shown next to the ids in the text form for reference and are
recomputed whenever the table is loaded.
"""

from dataclasses import dataclass, field

from ..utils.binary import IoBuffer
from ..utils.checksum import message_id_hash
from .base import DERIVED, register_format
from .fields import fixed_list
from .relocation import PointerField, RelocationTable


ENTRY_NAME_POINTER = PointerField("entry_name", 0x00, 8)
CHAR_NAME_POINTER = PointerField("char_name", 0x18, 8)
NAME_ID_POINTER = PointerField("name_id", 0x38, 8)
DESC_ID_POINTER = PointerField("desc_id", 0x40, 8)


@dataclass
class SoundTestParamEntry:
    entry_name: str = ""
    unk0: list[int] = field(default_factory=lambda: [0, 0, 0, 0])
    char_name: str = ""
    unk1: int = 0
    unk2: int = 0
    unlock_status: int = 0
    unk4: int = 0
    shop_cost: int = 0
    unk6: int = 0
    name_id: str = ""
    name_id_crc32: str = field(default="", metadata=DERIVED)
    desc_id: str = ""
    desc_id_crc32: str = field(default="", metadata=DERIVED)
    entry_number: int = 0
    unk8: int = 0

    @classmethod
    def read_record(cls, io: IoBuffer):
        entry = cls()
        pointers = {}
        pointers[ENTRY_NAME_POINTER.name] = ENTRY_NAME_POINTER.read(io)
        entry.unk0 = [io.read_uint32() for _ in range(4)]
        pointers[CHAR_NAME_POINTER.name] = CHAR_NAME_POINTER.read(io)
        entry.unk1 = io.read_uint32()
        entry.unk2 = io.read_uint32()
        entry.unlock_status = io.read_uint32()
        entry.unk4 = io.read_uint32()
        entry.shop_cost = io.read_uint32()
        entry.unk6 = io.read_uint32()
        pointers[NAME_ID_POINTER.name] = NAME_ID_POINTER.read(io)
        pointers[DESC_ID_POINTER.name] = DESC_ID_POINTER.read(io)
        entry.entry_number = io.read_uint32()
        entry.unk8 = io.read_uint32()
        return entry, pointers

    def write_record(self, io: IoBuffer, pointers: dict):
        ENTRY_NAME_POINTER.write(io, pointers[ENTRY_NAME_POINTER.name])
        for value in fixed_list(self.unk0, 4, "unk0"):
            io.write_uint32(value)
        CHAR_NAME_POINTER.write(io, pointers[CHAR_NAME_POINTER.name])
        io.write_uint32(self.unk1)
        io.write_uint32(self.unk2)
        io.write_uint32(self.unlock_status)
        io.write_uint32(self.unk4)
        io.write_uint32(self.shop_cost)
        io.write_uint32(self.unk6)
        NAME_ID_POINTER.write(io, pointers[NAME_ID_POINTER.name])
        DESC_ID_POINTER.write(io, pointers[DESC_ID_POINTER.name])
        io.write_uint32(self.entry_number)
        io.write_uint32(self.unk8)

    def refresh_hashes(self):
        self.name_id_crc32 = message_id_hash(self.name_id)
        self.desc_id_crc32 = message_id_hash(self.desc_id)


@register_format("SoundTestParam")
@dataclass
class SoundTestParam(RelocationTable):
    """Sound test table (SoundTestParam.bin)."""
    ENTRY_TYPE = SoundTestParamEntry
    STRIDE = 0x50
    ALIGNMENT = 8
    POINTER_FIELDS = (ENTRY_NAME_POINTER, CHAR_NAME_POINTER, NAME_ID_POINTER, DESC_ID_POINTER)
    HEADER_FIELD = "pointer_size"

    pointer_size: int = 0
    entries: list[SoundTestParamEntry] = field(default_factory=list)
    big_endian: bool = False

    def read(self, io: IoBuffer):
        super().read(io)
        self.refresh_derived()

    def refresh_derived(self):
        for entry in self.entries:
            entry.refresh_hashes()
