import struct

import pytest

MAGIC = b"LfLe"
HEADER = struct.Struct("<IIIIIHHHHHHIIIIII")


def utf16z(text):
    return text.encode("utf-16-le") + b"\x00\x00"


def pad4(data):
    return data + b"\x00" * (-len(data) % 4)


def make_sid(revision=1, authority=5, subs=(21,)):
    return (struct.pack("<BB", revision, len(subs)) + authority.to_bytes(6, "big") +
            b"".join(struct.pack("<I", s) for s in subs))


def build_record(record_number=1, time_generated=1136073600, time_written=1136073601,
                 event_id=4624, event_id_high=0, event_type=0x0008, category=2,
                 source="Security", computer="WORKSTATION", sid=None,
                 strings=("alice", "WORKGROUP"), num_strings=None, data=b"",
                 trailer=None):
    """Builds one EVENTLOGRECORD the way the event log service writes it"""
    names = pad4(utf16z(source) + utf16z(computer))
    body_offset = HEADER.size + len(names)

    sid_bytes = pad4(sid) if sid else b""
    sid_offset = body_offset if sid else 0
    string_offset = body_offset + len(sid_bytes)

    string_bytes = b"".join(utf16z(s) for s in strings)
    data_offset = string_offset + len(string_bytes)
    tail = pad4(string_bytes + data)

    length = HEADER.size + len(names) + len(sid_bytes) + len(tail) + 4
    if num_strings is None:
        num_strings = len(strings)

    header = HEADER.pack(length, 0x654C664C, record_number, time_generated, time_written,
                         event_id, event_id_high, event_type, num_strings, category, 0,
                         record_number, string_offset, len(sid) if sid else 0, sid_offset,
                         len(data), data_offset)
    end = struct.pack("<I", length if trailer is None else trailer)
    return header + names + sid_bytes + tail + end


def place(size, *chunks, filler=b"\xaa"):
    """Returns size bytes of filler with (offset, data) chunks written in"""
    buf = bytearray(filler * size)
    for offset, data in chunks:
        buf[offset:offset + len(data)] = data
    return bytes(buf)


@pytest.fixture
def record_builder():
    return build_record


@pytest.fixture
def sid_builder():
    return make_sid


@pytest.fixture
def image_builder():
    return place
