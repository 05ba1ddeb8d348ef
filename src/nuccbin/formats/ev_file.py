"""
EvFile - event timing tables (*_ev.bin)

A 16-bit count followed by packed 202-byte entries. Every string field is a
32-byte fixed field; in the encrypted version those fields go through the
block XOR cipher. The version is not stored in the file and must be chosen
by the caller.
"""

from dataclasses import dataclass, field
from enum import Enum

from ..errors import TruncatedError
from ..utils.binary import IoBuffer
from .base import register_format, NuccBinaryParsed
from .fields import fixed_list, read_cipher_string, write_cipher_string


class EvVersion(Enum):
    """Event file string encoding. Values are the game families using it."""
    ENCRYPTED = "JoJo"
    UNENCRYPTED = "Storm"

    @property
    def encrypted(self) -> bool:
        return self is EvVersion.ENCRYPTED


ENTRY_SIZE = 0xCA


@dataclass
class EvEntry:
    sound_name: str = ""
    unk0: int = 0
    volume: float = 0.0
    unk2: list[int] = field(default_factory=lambda: [0, 0, 0])
    timing: int = 0
    unk3: float = 0.0
    unk4: float = 0.0
    xfbin_path: str = ""
    anm_name: str = ""
    target_bone: str = ""
    x_position: int = 0
    y_position: int = 0
    z_position: int = 0
    unk5: int = 0
    unk_int16: int = 0
    loop_int16: int = 0
    anm_command: str = ""

    @classmethod
    def read_record(cls, io: IoBuffer, encrypted: bool) -> 'EvEntry':
        entry = cls()
        entry.sound_name = read_cipher_string(io, encrypted)
        entry.unk0 = io.read_int16()
        entry.volume = io.read_float()
        entry.unk2 = [io.read_int16() for _ in range(3)]
        entry.timing = io.read_int16()
        entry.unk3 = io.read_float()
        entry.unk4 = io.read_float()
        entry.xfbin_path = read_cipher_string(io, encrypted)
        entry.anm_name = read_cipher_string(io, encrypted)
        entry.target_bone = read_cipher_string(io, encrypted)
        entry.x_position = io.read_int32()
        entry.y_position = io.read_int32()
        entry.z_position = io.read_int32()
        entry.unk5 = io.read_int32()
        entry.unk_int16 = io.read_int16()
        entry.loop_int16 = io.read_int16()
        entry.anm_command = read_cipher_string(io, encrypted)
        return entry

    def write_record(self, io: IoBuffer, encrypted: bool):
        write_cipher_string(io, self.sound_name, encrypted)
        io.write_int16(self.unk0)
        io.write_float(self.volume)
        for value in fixed_list(self.unk2, 3, "unk2"):
            io.write_int16(value)
        io.write_int16(self.timing)
        io.write_float(self.unk3)
        io.write_float(self.unk4)
        write_cipher_string(io, self.xfbin_path, encrypted)
        write_cipher_string(io, self.anm_name, encrypted)
        write_cipher_string(io, self.target_bone, encrypted)
        io.write_int32(self.x_position)
        io.write_int32(self.y_position)
        io.write_int32(self.z_position)
        io.write_int32(self.unk5)
        io.write_int16(self.unk_int16)
        io.write_int16(self.loop_int16)
        write_cipher_string(io, self.anm_command, encrypted)


@register_format("Ev")
@dataclass
class EvFile(NuccBinaryParsed):
    """Event timing table."""
    VERSIONS = tuple(EvVersion)

    entries: list[EvEntry] = field(default_factory=list)
    big_endian: bool = False
    stored_version: EvVersion = EvVersion.ENCRYPTED

    def read(self, io: IoBuffer):
        count = io.read_uint16()
        if not io.has_bytes(count * ENTRY_SIZE):
            raise TruncatedError(io.position, count * ENTRY_SIZE, io.size)
        encrypted = self.stored_version.encrypted
        self.entries = [EvEntry.read_record(io, encrypted) for _ in range(count)]

    def write(self, io: IoBuffer):
        io.write_uint16(len(self.entries))
        encrypted = self.stored_version.encrypted
        for entry in self.entries:
            entry.write_record(io, encrypted)
