"""
NUCC Binary Base Class

Every parsed format is a dataclass deriving from NuccBinaryParsed. Table
formats project to pretty-printed JSON for editing; blob formats keep their
raw bytes as the editable form.
"""

import json
import logging
import typing
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict, fields, is_dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Union

from ..errors import MalformedTextError, UnsupportedVersionError
from ..utils.binary import ByteOrder, IoBuffer

logger = logging.getLogger(__name__)


# Format registry - maps type codes to parsed classes. Only register_format
# writes to it; everything else sees the read-only view.
_FORMAT_TYPES: dict[str, type] = {}
FORMAT_TYPES = MappingProxyType(_FORMAT_TYPES)


def register_format(type_code: str):
    """Decorator to register a format class under its type code."""
    def decorator(cls):
        cls.type_code = type_code
        _FORMAT_TYPES[type_code] = cls
        return cls
    return decorator


def get_format_class(type_code: str) -> type:
    """Get the parsed class for a type code."""
    return FORMAT_TYPES[type_code]


# Field metadata flag: value is recomputed from other fields, never read from text
DERIVED = {"derived": True}


@dataclass
class NuccBinaryParsed(ABC):
    """
    Base class for all parsed NUCC binaries.

    Subclasses implement read() and write() against an IoBuffer that already
    carries the byte order. Versioned formats list their versions in VERSIONS
    and keep the selected one in a `stored_version` field.
    """
    type_code: ClassVar[str] = ""
    VERSIONS: ClassVar[tuple] = ()
    EXTENSION: ClassVar[str] = ".bin"
    TEXT_EXTENSION: ClassVar[str] = ".json"

    @abstractmethod
    def read(self, io: IoBuffer):
        """Read binary data from stream."""
        pass

    @abstractmethod
    def write(self, io: IoBuffer):
        """Write binary data to stream."""
        pass

    @property
    def byte_order(self) -> ByteOrder:
        return ByteOrder.from_big_endian(getattr(self, "big_endian", False))

    @classmethod
    def from_bytes(cls, data: bytes, byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN,
                   version: int = 0) -> 'NuccBinaryParsed':
        """Parse a binary buffer."""
        parsed = cls()
        if hasattr(parsed, "big_endian"):
            parsed.big_endian = byte_order is ByteOrder.BIG_ENDIAN
        if cls.VERSIONS:
            parsed.stored_version = cls.select_version(version)

        parsed.read(IoBuffer.from_bytes(data, byte_order))
        return parsed

    @classmethod
    def select_version(cls, version: int):
        if not 0 <= version < len(cls.VERSIONS):
            raise UnsupportedVersionError(version, len(cls.VERSIONS))
        return cls.VERSIONS[version]

    def to_bytes(self) -> bytes:
        """Emit the binary form. Does not modify self."""
        io = IoBuffer.writer(self.byte_order)
        self.write(io)
        return io.getvalue()

    def file_extension(self, as_text: bool) -> str:
        return self.TEXT_EXTENSION if as_text else self.EXTENSION

    # ------------------------------------------------------------------
    # Editable text form
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        return asdict(self, dict_factory=_text_dict)

    def to_text(self) -> Union[str, bytes]:
        """
        Pretty-printed JSON. Non-finite floats read from a file are kept and
        written as the `NaN` / `Infinity` tokens Python's json module reads back.
        """
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_text(cls, text: Union[str, bytes]) -> 'NuccBinaryParsed':
        try:
            data = json.loads(text)
        except ValueError as e:
            # JSONDecodeError, UnicodeDecodeError and oversized integer literals
            raise MalformedTextError(f"{cls.__name__}: invalid JSON: {e}") from e
        parsed = from_dict(cls, data, cls.__name__)
        parsed.refresh_derived()
        logger.debug("Loaded %s from text (%d top-level fields)", cls.__name__, len(data))
        return parsed

    def refresh_derived(self):
        """Recompute derived fields after loading from text."""
        pass

    def __str__(self) -> str:
        entries = getattr(self, "entries", None)
        if entries is None:
            return f"{self.type_code}"
        return f"{self.type_code} ({len(entries)} entries, {self.byte_order.name})"


def _text_dict(items: list) -> dict:
    return {key: value.name if isinstance(value, Enum) else value for key, value in items}


def from_dict(cls: type, data: Any, path: str):
    """Build dataclass `cls` from a decoded JSON object, validating every field."""
    if not isinstance(data, dict):
        raise MalformedTextError(f"{path}: expected object, got {type(data).__name__}")

    hints = typing.get_type_hints(cls)
    known = set()
    kwargs = {}
    for f in fields(cls):
        if not f.init:
            continue
        known.add(f.name)
        if f.metadata.get("derived"):
            continue
        if f.name not in data:
            raise MalformedTextError(f"{path}: missing field '{f.name}'")
        kwargs[f.name] = _coerce(data[f.name], hints[f.name], f"{path}.{f.name}")

    unknown = set(data) - known
    if unknown:
        raise MalformedTextError(f"{path}: unknown field(s) {', '.join(sorted(unknown))}")

    return cls(**kwargs)


def _coerce(value: Any, hint: Any, path: str):
    origin = typing.get_origin(hint)
    if origin is list:
        (item_hint,) = typing.get_args(hint)
        if not isinstance(value, list):
            raise MalformedTextError(f"{path}: expected list, got {type(value).__name__}")
        return [_coerce(item, item_hint, f"{path}[{i}]") for i, item in enumerate(value)]

    if is_dataclass(hint):
        return from_dict(hint, value, path)

    if isinstance(hint, type) and issubclass(hint, Enum):
        if not isinstance(value, str) or value not in hint.__members__:
            raise MalformedTextError(f"{path}: expected one of {', '.join(hint.__members__)}")
        return hint[value]

    if hint is bool:
        if not isinstance(value, bool):
            raise MalformedTextError(f"{path}: expected bool")
        return value

    if hint is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise MalformedTextError(f"{path}: expected integer")
        return value

    if hint is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MalformedTextError(f"{path}: expected number")
        try:
            return float(value)
        except OverflowError as e:
            raise MalformedTextError(f"{path}: number is out of range for a float") from e

    if hint is str:
        if not isinstance(value, str):
            raise MalformedTextError(f"{path}: expected string")
        return value

    raise MalformedTextError(f"{path}: unsupported field type {hint!r}")

