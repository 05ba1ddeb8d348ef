"""Shared fixtures for the nuccbin test modules."""

import struct
import sys
from pathlib import Path

import pytest

# Path setup so the tests run from a checkout without installing
TESTS_DIR = Path(__file__).parent
SUITE_DIR = TESTS_DIR.parent.parent
SRC_DIR = SUITE_DIR / "src"

sys.path.insert(0, str(SRC_DIR))


MESSAGE_RECORD = struct.Struct("<4s3II2I4hI")
COLOR_RECORD = struct.Struct("<6I")


def message_record(pointer, unk1=0, unk10=0):
    return MESSAGE_RECORD.pack(b"\x01\x02\x03\x04", unk1, 0, 0, pointer, 0, 0, -1, 0, 0, 0, unk10)


@pytest.fixture
def message_buffer():
    """Two message entries: "HELLO" and an empty string."""
    header = struct.pack("<4I", 0, 2, 7, 0)
    # First pointer field sits at 0x20, strings start after both records at 0x60
    entries = message_record(0x40, unk1=100) + message_record(0, unk1=101)
    return header + entries + b"HELLO\0\0\0"


@pytest.fixture
def color_buffer():
    """One costume color entry for 1jnt01."""
    header = struct.pack("<4I", 0, 1, 0, 0)
    entry = COLOR_RECORD.pack(0x18, 3, 2, 255, 128, 0)
    return header + entry + b"1jnt01\0\0"
