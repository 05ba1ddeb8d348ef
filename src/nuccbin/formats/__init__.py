"""
Formats package - every NUCC binary format implementation.

Importing this package registers all formats in FORMAT_TYPES.
"""
from .base import NuccBinaryParsed, register_format, get_format_class, FORMAT_TYPES
from .relocation import RelocationTable, RelocationHeader, PointerField, StringPool
# Relocation tables
from .message_info import MessageInfo, MessageInfoEntry
from .player_color_param import PlayerColorParam, PlayerColorParamEntry
from .sound_test_param import SoundTestParam, SoundTestParamEntry
from .stage_info import StageInfo, StageInfoEntry, StageProp
# Fixed-record tables
from .ev_file import EvFile, EvEntry, EvVersion
from .characode import CharaCode, CharaCodeEntry
from .prm_load import PrmLoad, PrmLoadEntry
# Pass-through blobs
from .passthrough import RawFile, DdsFile, PngFile, LuaFile, XmlFile, FcvFile

__all__ = [
    'NuccBinaryParsed', 'register_format', 'get_format_class', 'FORMAT_TYPES',
    'RelocationTable', 'RelocationHeader', 'PointerField', 'StringPool',
    'MessageInfo', 'MessageInfoEntry',
    'PlayerColorParam', 'PlayerColorParamEntry',
    'SoundTestParam', 'SoundTestParamEntry',
    'StageInfo', 'StageInfoEntry', 'StageProp',
    'EvFile', 'EvEntry', 'EvVersion',
    'CharaCode', 'CharaCodeEntry',
    'PrmLoad', 'PrmLoadEntry',
    'RawFile', 'DdsFile', 'PngFile', 'LuaFile', 'XmlFile', 'FcvFile',
]
