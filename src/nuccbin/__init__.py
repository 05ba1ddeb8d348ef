"""nuccbin - codecs for NUCC game resource binaries."""
from .errors import (
    NuccError, TruncatedError, MalformedPointerError, MalformedTextError,
    FieldOverflowError, UnsupportedVersionError, MalformedStringError,
)
from .utils.binary import ByteOrder, IoBuffer
from .formats import NuccBinaryParsed, EvVersion
from .registry import (
    NuccBinaryType, detect, parse, to_bytes, to_text, from_text, file_extension,
)

__version__ = "0.1.0"

__all__ = [
    'NuccError', 'TruncatedError', 'MalformedPointerError', 'MalformedTextError',
    'FieldOverflowError', 'UnsupportedVersionError', 'MalformedStringError',
    'ByteOrder', 'IoBuffer',
    'NuccBinaryParsed', 'EvVersion',
    'NuccBinaryType', 'detect', 'parse', 'to_bytes', 'to_text', 'from_text', 'file_extension',
]
