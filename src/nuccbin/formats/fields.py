"""
Field Codecs - fixed-length string fields and the block XOR cipher

Fixed-length strings are NUL-padded in place inside a record. The event
timing table additionally obfuscates its 32-byte string fields with a
repeating-key XOR over byte-reversed 4-byte blocks.
"""

from itertools import cycle

from ..errors import FieldOverflowError
from ..utils.binary import IoBuffer, decode_utf8, encode_utf8


XOR_KEY = b"\x8C\x91\x9B\x9A\x89\xD1\x87\x99\x9D\x96\x91"
BLOCK_SIZE = 4
CIPHER_FIELD_SIZE = 0x20


def xor_decrypt(data: bytes) -> bytes:
    """XOR each byte with the cycling key, then reverse every 4-byte block."""
    key = cycle(XOR_KEY)
    result = bytearray()
    block = bytearray()

    for byte in data:
        block.append(byte ^ next(key))
        if len(block) == BLOCK_SIZE:
            result.extend(reversed(block))
            block = bytearray()

    return bytes(result)


def xor_encrypt(data: bytes) -> bytes:
    """Reverse every 4-byte block, then XOR each byte with the cycling key."""
    key = cycle(XOR_KEY)
    result = bytearray()
    block = bytearray()

    for byte in data:
        block.append(byte)
        if len(block) == BLOCK_SIZE:
            result.extend(b ^ next(key) for b in reversed(block))
            block = bytearray()

    return bytes(result)


def pad_fixed(value: str, size: int) -> bytes:
    """UTF-8 encode and NUL-pad to exactly size bytes."""
    data = encode_utf8(value)
    if len(data) > size:
        raise FieldOverflowError(f"String {value!r} is {len(data)} bytes, field holds {size}")
    return data + b'\0' * (size - len(data))


def trim_fixed(data: bytes, offset: int = 0) -> str:
    """Cut at the first NUL and decode. `offset` is only used for error reports."""
    null_idx = data.find(b'\0')
    if null_idx != -1:
        data = data[:null_idx]
    return decode_utf8(data, offset)


def read_fixed_string(io: IoBuffer, size: int) -> str:
    return io.read_cstring(size)


def write_fixed_string(io: IoBuffer, value: str, size: int):
    io.write_bytes(pad_fixed(value, size))


def read_cipher_string(io: IoBuffer, encrypted: bool, size: int = CIPHER_FIELD_SIZE) -> str:
    """Read a fixed string field, decrypting it first when the file version is encrypted."""
    offset = io.position
    data = io.read_bytes(size)
    if encrypted:
        data = xor_decrypt(data)
    return trim_fixed(data, offset)


def write_cipher_string(io: IoBuffer, value: str, encrypted: bool, size: int = CIPHER_FIELD_SIZE):
    data = pad_fixed(value, size)
    if encrypted:
        data = xor_encrypt(data)
    io.write_bytes(data)


def fixed_list(values: list, length: int, name: str) -> list:
    """Return values unchanged if it holds exactly `length` items."""
    if len(values) != length:
        raise FieldOverflowError(f"{name} needs exactly {length} values, got {len(values)}")
    return values
