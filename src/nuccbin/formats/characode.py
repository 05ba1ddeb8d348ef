"""
CharaCode - character code table (characode.bin)

A 32-bit count followed by 12-byte entries: a character index and its
8-byte NUL-padded code (e.g. "1jnt01").
"""

from dataclasses import dataclass, field
from typing import Optional

from ..utils.binary import IoBuffer
from .base import register_format, NuccBinaryParsed
from .fields import read_fixed_string, write_fixed_string


CODE_SIZE = 8


@dataclass
class CharaCodeEntry:
    index: int = 0
    chara: str = ""


@register_format("CharaCode")
@dataclass
class CharaCode(NuccBinaryParsed):
    """Character code table."""
    entries: list[CharaCodeEntry] = field(default_factory=list)
    big_endian: bool = False

    def read(self, io: IoBuffer):
        count = io.read_uint32()
        self.entries = []
        for _ in range(count):
            index = io.read_uint32()
            self.entries.append(CharaCodeEntry(index, read_fixed_string(io, CODE_SIZE)))

    def write(self, io: IoBuffer):
        io.write_uint32(len(self.entries))
        for entry in self.entries:
            io.write_uint32(entry.index)
            write_fixed_string(io, entry.chara, CODE_SIZE)

    def lookup(self, chara: str) -> Optional[int]:
        """Index for a character code."""
        for entry in self.entries:
            if entry.chara == chara:
                return entry.index
        return None
