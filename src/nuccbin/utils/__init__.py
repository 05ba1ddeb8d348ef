"""Binary helpers shared by every format."""
from .binary import ByteOrder, IoBuffer, align_up, decode_utf8, encode_utf8
from .checksum import crc32_bzip2, message_id_hash

__all__ = ['ByteOrder', 'IoBuffer', 'align_up', 'decode_utf8', 'encode_utf8', 'crc32_bzip2', 'message_id_hash']
