"""
nuccbin - registry and text form tests

Format detection from resource paths, dispatch by type tag, version
handling, file extensions, pass-through blobs and the JSON edit form.
"""

import json

import pytest

from nuccbin import (
    ByteOrder, MalformedTextError, NuccBinaryType, UnsupportedVersionError,
    detect, file_extension, from_text, parse, to_bytes, to_text,
)
from nuccbin.formats import (
    EvEntry, EvFile, EvVersion, FORMAT_TYPES, MessageInfo, MessageInfoEntry,
    SoundTestParam, SoundTestParamEntry,
)


def test_every_type_is_registered():
    for binary_type in NuccBinaryType:
        assert FORMAT_TYPES[binary_type.value] is binary_type.parsed_class
        assert binary_type.parsed_class.type_code == binary_type.value


def test_format_registry_is_read_only():
    with pytest.raises(TypeError):
        FORMAT_TYPES["Bogus"] = MessageInfo


@pytest.mark.parametrize("binary_type", list(NuccBinaryType))
def test_examples_detect_their_own_type(binary_type):
    assert binary_type.examples()
    for example in binary_type.examples():
        assert (binary_type, ByteOrder.LITTLE_ENDIAN) in detect(example)


def test_detect_normalizes_backslashes():
    assert detect(r"data\WIN64\eng\message_DLC110.bin") == [
        (NuccBinaryType.MESSAGE_INFO, ByteOrder.LITTLE_ENDIAN),
    ]


def test_detect_unknown_path():
    assert detect("data/readme.txt") == []


def test_detect_ignores_unsupported_platform():
    assert detect("PS3/eng/message_DLC110.bin") == []


def test_versions():
    assert NuccBinaryType.EV.versions() == (("ENCRYPTED", "JoJo"), ("UNENCRYPTED", "Storm"))
    assert NuccBinaryType.MESSAGE_INFO.versions() == ()


def test_parse_rejects_version_for_unversioned_type(message_buffer):
    with pytest.raises(UnsupportedVersionError):
        parse(NuccBinaryType.MESSAGE_INFO, message_buffer, version=1)


def test_parse_dispatches_by_type(message_buffer):
    parsed = parse(NuccBinaryType.MESSAGE_INFO, message_buffer)
    assert isinstance(parsed, MessageInfo)
    assert NuccBinaryType.of(parsed) is NuccBinaryType.MESSAGE_INFO
    assert to_bytes(parsed) == message_buffer


def test_parse_sets_byte_order():
    table = MessageInfo(entries=[], big_endian=True)
    parsed = parse(NuccBinaryType.MESSAGE_INFO, table.to_bytes(), ByteOrder.BIG_ENDIAN)
    assert parsed.big_endian
    assert parsed.byte_order is ByteOrder.BIG_ENDIAN


def test_file_extensions():
    assert file_extension(NuccBinaryType.MESSAGE_INFO, as_text=False) == ".bin"
    assert file_extension(NuccBinaryType.MESSAGE_INFO, as_text=True) == ".json"
    assert file_extension(NuccBinaryType.DDS, as_text=True) == ".dds"
    assert file_extension(NuccBinaryType.FCV, as_text=False) == ".fcv"
    assert file_extension(EvFile(), as_text=True) == ".json"


# ----------------------------------------------------------------------
# Pass-through blobs
# ----------------------------------------------------------------------

def test_passthrough_is_identity():
    blob = bytes(range(256)) * 3 + b"DDS \x7c"
    parsed = parse(NuccBinaryType.DDS, blob)
    assert to_bytes(parsed) == blob
    assert to_text(parsed) == blob
    assert to_bytes(from_text(NuccBinaryType.DDS, blob)) == blob


def test_passthrough_empty():
    assert to_bytes(parse(NuccBinaryType.PNG, b"")) == b""


def test_passthrough_text_from_str():
    script = "print('hello')\n"
    assert to_bytes(from_text(NuccBinaryType.LUA, script)) == script.encode()


# ----------------------------------------------------------------------
# Text form
# ----------------------------------------------------------------------

def test_message_info_text_round_trip(message_buffer):
    parsed = parse(NuccBinaryType.MESSAGE_INFO, message_buffer)
    text = to_text(parsed)

    document = json.loads(text)
    assert list(document) == ["unk0", "unk1", "entries", "big_endian"]
    assert document["entries"][0]["string"] == "HELLO"

    restored = from_text(NuccBinaryType.MESSAGE_INFO, text)
    assert restored == parsed
    assert to_bytes(restored) == message_buffer


def test_ev_text_keeps_version_by_name():
    ev = EvFile(entries=[EvEntry(sound_name="snd_01", volume=0.5)], stored_version=EvVersion.UNENCRYPTED)
    text = to_text(ev)
    assert json.loads(text)["stored_version"] == "UNENCRYPTED"
    assert from_text(NuccBinaryType.EV, text) == ev


def test_sound_test_hashes_are_not_trusted_from_text():
    table = SoundTestParam(entries=[SoundTestParamEntry(name_id="bgm_name_01")])
    table.refresh_derived()
    document = json.loads(to_text(table))
    expected = document["entries"][0]["name_id_crc32"]

    document["entries"][0]["name_id_crc32"] = "deadbeef"
    restored = from_text(NuccBinaryType.SOUND_TEST_PARAM, json.dumps(document))
    assert restored.entries[0].name_id_crc32 == expected
    assert restored == table


def test_text_rejects_invalid_json():
    with pytest.raises(MalformedTextError):
        from_text(NuccBinaryType.MESSAGE_INFO, "{not json")


def test_text_rejects_missing_field(message_buffer):
    document = json.loads(to_text(parse(NuccBinaryType.MESSAGE_INFO, message_buffer)))
    del document["entries"][1]["unk10"]
    with pytest.raises(MalformedTextError):
        from_text(NuccBinaryType.MESSAGE_INFO, json.dumps(document))


def test_text_rejects_unknown_field(message_buffer):
    document = json.loads(to_text(parse(NuccBinaryType.MESSAGE_INFO, message_buffer)))
    document["extra"] = 1
    with pytest.raises(MalformedTextError):
        from_text(NuccBinaryType.MESSAGE_INFO, json.dumps(document))


def test_text_rejects_wrong_types(message_buffer):
    document = json.loads(to_text(parse(NuccBinaryType.MESSAGE_INFO, message_buffer)))
    document["entries"][0]["unk1"] = "100"
    with pytest.raises(MalformedTextError):
        from_text(NuccBinaryType.MESSAGE_INFO, json.dumps(document))

    document["entries"][0]["unk1"] = True
    with pytest.raises(MalformedTextError):
        from_text(NuccBinaryType.MESSAGE_INFO, json.dumps(document))


def test_text_rejects_unknown_version_name():
    document = json.loads(to_text(EvFile()))
    document["stored_version"] = "ROT13"
    with pytest.raises(MalformedTextError):
        from_text(NuccBinaryType.EV, json.dumps(document))


def test_text_rejects_number_too_large_for_float():
    document = json.loads(to_text(EvFile(entries=[EvEntry()])))
    document["entries"][0]["volume"] = 10 ** 400
    with pytest.raises(MalformedTextError):
        from_text(NuccBinaryType.EV, json.dumps(document))


def test_text_rejects_oversized_integer_literal():
    text = '{"entries": [], "big_endian": false, "stored_version": "ENCRYPTED", "extra": 1' + "0" * 5000 + "}"
    with pytest.raises(MalformedTextError):
        from_text(NuccBinaryType.EV, text)


def test_text_keeps_non_finite_floats():
    ev = EvFile(entries=[EvEntry(volume=float("inf"), unk3=float("-inf"))])
    text = to_text(ev)
    assert "Infinity" in text
    restored = from_text(NuccBinaryType.EV, text)
    assert restored == ev
    assert to_bytes(restored) == to_bytes(ev)


def test_unencodable_text_string_fails_on_write():
    document = json.loads(to_text(MessageInfo(entries=[MessageInfoEntry()])))
    document["entries"][0]["string"] = "\ud800"
    restored = from_text(NuccBinaryType.MESSAGE_INFO, json.dumps(document))
    with pytest.raises(MalformedTextError):
        to_bytes(restored)


def test_text_rejects_non_object():
    with pytest.raises(MalformedTextError):
        from_text(NuccBinaryType.CHARACODE, "[1, 2, 3]")
