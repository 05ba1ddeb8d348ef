"""
PlayerColorParam - per-costume color tables

One 0x18-byte entry per character costume: a pointer to the character code
string followed by the costume index and an RGB triple. Strings are aligned
to 4 bytes.
"""

from dataclasses import dataclass, field

from ..utils.binary import IoBuffer
from .base import register_format
from .relocation import PointerField, RelocationTable


STRING_POINTER = PointerField("string", 0x00)


@dataclass
class PlayerColorParamEntry:
    unk0: int = 0
    costume_index: int = 0
    red: int = 0
    green: int = 0
    blue: int = 0
    string: str = ""

    @classmethod
    def read_record(cls, io: IoBuffer):
        pointers = {STRING_POINTER.name: STRING_POINTER.read(io)}
        entry = cls(
            unk0=io.read_uint32(),
            costume_index=io.read_uint32(),
            red=io.read_uint32(),
            green=io.read_uint32(),
            blue=io.read_uint32(),
        )
        return entry, pointers

    def write_record(self, io: IoBuffer, pointers: dict):
        STRING_POINTER.write(io, pointers[STRING_POINTER.name])
        io.write_uint32(self.unk0)
        io.write_uint32(self.costume_index)
        io.write_uint32(self.red)
        io.write_uint32(self.green)
        io.write_uint32(self.blue)

    @property
    def rgb(self) -> tuple:
        return (self.red, self.green, self.blue)


@register_format("PlayerColorParam")
@dataclass
class PlayerColorParam(RelocationTable):
    """Costume color table (PlayerColorParam.bin)."""
    ENTRY_TYPE = PlayerColorParamEntry
    STRIDE = 0x18
    ALIGNMENT = 4
    POINTER_FIELDS = (STRING_POINTER,)

    unk1: int = 0
    entries: list[PlayerColorParamEntry] = field(default_factory=list)
    big_endian: bool = False

    def find(self, chara_code: str, costume_index: int = None) -> list[PlayerColorParamEntry]:
        """Entries for a character code, optionally narrowed to one costume."""
        return [
            e for e in self.entries
            if e.string == chara_code and (costume_index is None or e.costume_index == costume_index)
        ]
