"""
Pass-through blobs - textures, images, scripts, markup, face curves

No layout logic: the bytes are kept verbatim and the editable form is the
file itself, saved with its native extension.
"""

from dataclasses import dataclass
from typing import Union

from ..utils.binary import IoBuffer
from .base import register_format, NuccBinaryParsed


@dataclass
class RawFile(NuccBinaryParsed):
    """Raw file contents."""
    file: bytes = b""

    def read(self, io: IoBuffer):
        self.file = io.read_bytes(io.size - io.position)

    def write(self, io: IoBuffer):
        io.write_bytes(self.file)

    def file_extension(self, as_text: bool) -> str:
        return self.EXTENSION

    def to_text(self) -> bytes:
        return self.file

    @classmethod
    def from_text(cls, text: Union[str, bytes]) -> 'RawFile':
        if isinstance(text, str):
            text = text.encode('utf-8')
        return cls(file=bytes(text))


@register_format("DDS")
@dataclass
class DdsFile(RawFile):
    EXTENSION = ".dds"


@register_format("PNG")
@dataclass
class PngFile(RawFile):
    EXTENSION = ".png"


@register_format("LUA")
@dataclass
class LuaFile(RawFile):
    EXTENSION = ".lua"


@register_format("XML")
@dataclass
class XmlFile(RawFile):
    EXTENSION = ".xml"


@register_format("FCV")
@dataclass
class FcvFile(RawFile):
    EXTENSION = ".fcv"
