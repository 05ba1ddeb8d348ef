"""
PrmLoad - character parameter load lists (*_prm_load.bin)

A 32-bit count followed by 0x48-byte entries naming the files a character
loads: two 32-byte NUL-padded strings and two 32-bit words.
"""

from dataclasses import dataclass, field

from ..utils.binary import IoBuffer
from .base import register_format, NuccBinaryParsed
from .fields import read_fixed_string, write_fixed_string


NAME_SIZE = 0x20


@dataclass
class PrmLoadEntry:
    folder_name: str = ""
    file_name: str = ""
    file_type: int = 0
    unk1: int = 0


@register_format("PrmLoad")
@dataclass
class PrmLoad(NuccBinaryParsed):
    """Parameter load list."""
    entries: list[PrmLoadEntry] = field(default_factory=list)
    big_endian: bool = False

    def read(self, io: IoBuffer):
        count = io.read_uint32()
        self.entries = []
        for _ in range(count):
            entry = PrmLoadEntry()
            entry.folder_name = read_fixed_string(io, NAME_SIZE)
            entry.file_name = read_fixed_string(io, NAME_SIZE)
            entry.file_type = io.read_uint32()
            entry.unk1 = io.read_uint32()
            self.entries.append(entry)

    def write(self, io: IoBuffer):
        io.write_uint32(len(self.entries))
        for entry in self.entries:
            write_fixed_string(io, entry.folder_name, NAME_SIZE)
            write_fixed_string(io, entry.file_name, NAME_SIZE)
            io.write_uint32(entry.file_type)
            io.write_uint32(entry.unk1)
