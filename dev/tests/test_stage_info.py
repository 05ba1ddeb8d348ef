"""
nuccbin - StageInfo tests

The nested table: entries pointing at path arrays and prop arrays, which
in turn point into the shared string pool.
"""

import struct

import pytest

from nuccbin.errors import FieldOverflowError, MalformedPointerError
from nuccbin.formats import StageInfo, StageInfoEntry, StageProp
from nuccbin.formats.relocation import HEADER_SIZE


def stage_table():
    return StageInfo(pointer_size=8, entries=[
        StageInfoEntry(
            entry_name="STAGE_01",
            xfbin_paths=["data/stage/s01.xfbin", "data/stage/s01_sky.xfbin"],
            props=[
                StageProp(xfbin_path="data/prop/rock.xfbin", clump_name="rock", unk1_float=0.5),
                StageProp(xfbin_path="data/prop/tree.xfbin", clump_name="tree", string2="sway", unk5=3),
            ],
            unk_vec=[1.0, 2.5, -4.0],
            unk_bytes1=[-1, 0, 1, 2],
        ),
    ])


def u64_at(data, offset):
    return struct.unpack_from("<Q", data, offset)[0]


def test_stage_info_round_trip():
    table = stage_table()
    data = table.to_bytes()
    parsed = StageInfo.from_bytes(data)

    assert parsed == table
    assert parsed.to_bytes() == data


def test_stage_info_layout():
    data = stage_table().to_bytes()
    record = HEADER_SIZE
    tables_start = HEADER_SIZE + 0xB0

    assert u64_at(data, record + 0x08) == 2
    assert u64_at(data, record + 0x18) == 2
    # Paths come first in the sub-table region, props right after
    assert record + 0x10 + u64_at(data, record + 0x10) == tables_start
    assert record + 0x20 + u64_at(data, record + 0x20) == tables_start + 2 * 0x08

    strings_start = tables_start + 2 * 0x08 + 2 * 0x38
    name_at = record + u64_at(data, record)
    assert name_at == strings_start
    assert data[name_at:name_at + 9] == b"STAGE_01\0"


def test_stage_info_mutating_one_prop_string():
    table = stage_table()
    parsed = StageInfo.from_bytes(table.to_bytes())

    parsed.entries[0].props[1].clump_name = "tree_autumn_variant"
    reparsed = StageInfo.from_bytes(parsed.to_bytes())

    before, after = table.entries[0], reparsed.entries[0]
    assert after.props[1].clump_name == "tree_autumn_variant"
    assert after.props[1].xfbin_path == before.props[1].xfbin_path
    assert after.props[1].string2 == "sway"
    assert after.props[0] == before.props[0]
    assert after.xfbin_paths == before.xfbin_paths
    assert after.entry_name == before.entry_name


def test_stage_info_strings_are_aligned():
    data = stage_table().to_bytes()
    assert len(data) % 8 == 0

    tables_start = HEADER_SIZE + 0xB0
    for slot in (tables_start, tables_start + 8):
        assert (slot + u64_at(data, slot)) % 8 == 0


def test_stage_info_empty_sub_tables_use_null_pointers():
    table = StageInfo(entries=[StageInfoEntry(entry_name="EMPTY")])
    data = table.to_bytes()
    assert u64_at(data, HEADER_SIZE + 0x10) == 0
    assert u64_at(data, HEADER_SIZE + 0x20) == 0
    assert StageInfo.from_bytes(data) == table


def test_stage_info_empty_prop_strings():
    table = StageInfo(entries=[StageInfoEntry(props=[StageProp()])])
    data = table.to_bytes()
    prop_at = HEADER_SIZE + 0xB0
    for offset in (0x00, 0x08, 0x10, 0x18):
        assert u64_at(data, prop_at + offset) == 0
    assert StageInfo.from_bytes(data) == table


def test_stage_info_null_sub_table_with_count():
    data = bytearray(stage_table().to_bytes())
    struct.pack_into("<Q", data, HEADER_SIZE + 0x20, 0)
    with pytest.raises(MalformedPointerError):
        StageInfo.from_bytes(bytes(data))


def test_stage_info_sub_table_out_of_bounds():
    data = bytearray(stage_table().to_bytes())
    struct.pack_into("<Q", data, HEADER_SIZE + 0x18, 1000)
    with pytest.raises(MalformedPointerError):
        StageInfo.from_bytes(bytes(data))


def test_stage_info_fixed_array_length_checked():
    table = stage_table()
    table.entries[0].unk_vec = [1.0, 2.0]
    with pytest.raises(FieldOverflowError):
        table.to_bytes()
