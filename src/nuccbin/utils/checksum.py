"""Checksums used by NUCC parameter tables."""

import struct


def crc32_bzip2(data: bytes) -> int:
    """
    Calculate CRC-32/BZIP2, the hash the game uses for message ids.

    Parameters: poly=0x04C11DB7, init=0xFFFFFFFF, xorout=0xFFFFFFFF,
                refin=false, refout=false
    """
    crc = 0xFFFFFFFF

    for byte in data:
        crc ^= (byte << 24)

        for _ in range(8):
            if crc & 0x80000000:
                crc = ((crc << 1) ^ 0x04C11DB7) & 0xFFFFFFFF
            else:
                crc = (crc << 1) & 0xFFFFFFFF

    return (crc ^ 0xFFFFFFFF) & 0xFFFFFFFF


def message_id_hash(message_id: str) -> str:
    """Hex of the little-endian CRC-32/BZIP2 of a message id, as shown next to the id."""
    return struct.pack('<I', crc32_bzip2(message_id.encode('utf-8'))).hex()
