import pytest

from evtcarve import addrspace, exceptions


def test_file_reads_are_clipped(tmp_path):
    path = tmp_path / "image.bin"
    path.write_bytes(b"0123456789")
    with addrspace.load_as(str(path)) as addr_space:
        assert addr_space.size() == 10
        assert addr_space.read(8, 4) == b"89"
        assert addr_space.read(10, 4) == b""
        assert addr_space.read(-4, 4) == b""
        assert addr_space.zread(8, 4) == b"89\x00\x00"


def test_missing_file(tmp_path):
    with pytest.raises(exceptions.AddrSpaceError) as excinfo:
        addrspace.load_as(str(tmp_path / "nope.raw"))
    assert "nope.raw" in str(excinfo.value)
    assert excinfo.value.reasons


def test_directory_is_not_an_image(tmp_path):
    with pytest.raises(exceptions.AddrSpaceError):
        addrspace.load_as(str(tmp_path))


def test_buffer_address_space():
    addr_space = addrspace.BufferAddressSpace(data=b"abcdef")
    assert addr_space.size() == 6
    assert addr_space.read(4, 10) == b"ef"
    assert addr_space.read(-1, 2) == b""
    assert addr_space.zread(4, 4) == b"ef\x00\x00"
