"""
Format registry - maps NUCC binary type tags to their codecs

Every supported format is one member of NuccBinaryType. The tag selects the
parsed class; the caller supplies the byte order (and for Ev, the version
index). Path patterns let tooling guess the tag from a resource path inside
an extracted XFBIN tree.
"""

import logging
import re
from enum import Enum
from types import MappingProxyType
from typing import Union

from .errors import UnsupportedVersionError
from .formats import FORMAT_TYPES, NuccBinaryParsed
from .utils.binary import ByteOrder

logger = logging.getLogger(__name__)


class NuccBinaryType(Enum):
    """Closed set of supported formats. Values are the registered type codes."""
    CHARACODE = "CharaCode"
    DDS = "DDS"
    EV = "Ev"
    FCV = "FCV"
    LUA = "LUA"
    MESSAGE_INFO = "MessageInfo"
    PLAYER_COLOR_PARAM = "PlayerColorParam"
    PNG = "PNG"
    PRM_LOAD = "PrmLoad"
    SOUND_TEST_PARAM = "SoundTestParam"
    STAGE_INFO = "StageInfo"
    XML = "XML"

    @property
    def parsed_class(self) -> type:
        return FORMAT_TYPES[self.value]

    def patterns(self) -> tuple:
        """(compiled regex, ByteOrder) pairs matching this format's paths."""
        return PATTERNS[self]

    def examples(self) -> tuple:
        return EXAMPLES[self]

    def versions(self) -> tuple:
        """(name, description) for each selectable version; empty if unversioned."""
        return VERSIONS[self]

    @classmethod
    def of(cls, parsed: NuccBinaryParsed) -> 'NuccBinaryType':
        return cls(parsed.type_code)


_LE = ByteOrder.LITTLE_ENDIAN

PATTERNS = MappingProxyType({
    NuccBinaryType.CHARACODE: ((re.compile(r"(characode\.bin)$"), _LE),),
    NuccBinaryType.DDS: ((re.compile(r"(\.dds)$"), _LE),),
    NuccBinaryType.EV: ((re.compile(r"(_ev\.bin)$"), _LE),),
    NuccBinaryType.FCV: ((re.compile(r"(\.fcv)$"), _LE),),
    NuccBinaryType.LUA: ((re.compile(r"(\.lua)$"), _LE),),
    NuccBinaryType.MESSAGE_INFO: (
        (re.compile(r"((WIN(32|64)|PS4).*?/message.*?\.bin)$"), _LE),
        # TODO: enable once a PS3 message table confirms the big-endian layout
        # (re.compile(r"(PS3.*?/message.*?\.bin)$"), ByteOrder.BIG_ENDIAN),
    ),
    NuccBinaryType.PLAYER_COLOR_PARAM: ((re.compile(r"(PlayerColorParam\.bin)$"), _LE),),
    NuccBinaryType.PNG: ((re.compile(r"(\.png)$"), _LE),),
    NuccBinaryType.PRM_LOAD: ((re.compile(r"(_prm_load\.bin)$"), _LE),),
    NuccBinaryType.SOUND_TEST_PARAM: ((re.compile(r"(SoundTestParam\.bin)$"), _LE),),
    NuccBinaryType.STAGE_INFO: ((re.compile(r"(StageInfo\.bin)$"), _LE),),
    NuccBinaryType.XML: ((re.compile(r"(\.xml)$"), _LE),),
})

EXAMPLES = MappingProxyType({
    NuccBinaryType.CHARACODE: ("spc/characode.bin",),
    NuccBinaryType.DDS: ("Z:/STORM4_UI_DATA/charsel/charsel_I3.dds",),
    NuccBinaryType.EV: ("player/1dio01_ev/1dio01_ev.bin",),
    NuccBinaryType.FCV: ("spc/1nrt/fcv/1nrt01.fcv",),
    NuccBinaryType.LUA: ("d01/d01_010.lua",),
    NuccBinaryType.MESSAGE_INFO: ("WIN64/eng/message_DLC110.bin",),
    NuccBinaryType.PLAYER_COLOR_PARAM: ("PlayerColorParam.bin",),
    NuccBinaryType.PNG: ("Z:/char/x/duel_item/tex/c_bat_067.png",),
    NuccBinaryType.PRM_LOAD: ("spc/1nrtbod1_prm_load.bin",),
    NuccBinaryType.SOUND_TEST_PARAM: ("param/sound/SoundTestParam.bin",),
    NuccBinaryType.STAGE_INFO: ("param/stage/StageInfo.bin",),
    NuccBinaryType.XML: ("D:/JARP/trunk/param/spm/spm/0bao01_SPM.xml",),
})

VERSIONS = MappingProxyType({
    binary_type: tuple(
        (version.name, version.value) for version in binary_type.parsed_class.VERSIONS
    )
    for binary_type in NuccBinaryType
})


def detect(path: str) -> list:
    """All (NuccBinaryType, ByteOrder) candidates whose pattern matches path."""
    normalized = str(path).replace("\\", "/")
    candidates = []
    for binary_type in NuccBinaryType:
        for pattern, byte_order in binary_type.patterns():
            if pattern.search(normalized):
                candidates.append((binary_type, byte_order))
    return candidates


def parse(binary_type: NuccBinaryType, data: bytes,
          byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN, version: int = 0) -> NuccBinaryParsed:
    """Parse raw bytes into the structured value for binary_type."""
    parsed_class = binary_type.parsed_class
    if not parsed_class.VERSIONS and version != 0:
        raise UnsupportedVersionError(version, 1)

    parsed = parsed_class.from_bytes(bytes(data), byte_order, version)
    logger.debug("Parsed %s (%d bytes, %s)", binary_type.name, len(data), byte_order.name)
    return parsed


def to_bytes(parsed: NuccBinaryParsed) -> bytes:
    """Re-emit the binary form of a structured value."""
    return parsed.to_bytes()


def to_text(parsed: NuccBinaryParsed) -> Union[str, bytes]:
    """Editable form: JSON text for tables, the raw bytes for pass-through blobs."""
    return parsed.to_text()


def from_text(binary_type: NuccBinaryType, text: Union[str, bytes]) -> NuccBinaryParsed:
    """Rebuild a structured value from its editable form."""
    return binary_type.parsed_class.from_text(text)


def file_extension(target: Union[NuccBinaryType, NuccBinaryParsed], as_text: bool) -> str:
    """Extension for the binary (as_text=False) or editable (as_text=True) form."""
    if isinstance(target, NuccBinaryType):
        target = target.parsed_class()
    return target.file_extension(as_text)
