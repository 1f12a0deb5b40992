import io
import struct
import sys

import pytest

import lfle


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("FILE", "STATS", "DEBUG", "OFFSET", "OUTPUT_FILE"):
        monkeypatch.delenv("EVTCARVE_" + name, raising=False)
    monkeypatch.setenv("EVTCARVE_CONF_FILE", str(tmp_path / "no-rc"))


@pytest.fixture
def image(tmp_path, record_builder, image_builder):
    data = image_builder(0x3000,
                         (0x100, record_builder(record_number=1, time_generated=100)),
                         (0x800, struct.pack("<I", 0x30) + b"LfLe"),
                         (0x1000, record_builder(record_number=2, trailer=9)),
                         (0x2000, struct.pack("<I", 0x5000) + b"LfLe"),
                         (0x2800, record_builder(record_number=3, time_generated=300,
                                                 event_type=0x0001, strings=("disk full",))))
    path = tmp_path / "pagefile.sys"
    path.write_bytes(data)
    return str(path)


def test_records_to_stdout(image, capsys):
    assert lfle.main(["-f", image]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == [
        "100|EVT|WORKSTATION|N/A|[1] - Security/4624;Success;alice,WORKGROUP",
        "300|EVT|WORKSTATION|N/A|[3] - Security/4624;Error;disk full",
    ]


def test_stats_report(image, capsys):
    assert lfle.main(["--file", image, "--stats"]) == 0
    out = capsys.readouterr().out
    assert out.endswith("\n\nSmall records skipped    : 1\n"
                        "Large records skipped    : 1\n"
                        "Malformed records skipped: 1\n"
                        "Records retrieved        : 2\n")


def test_debug_dumps_rejected_records(image, capsys, caplog):
    assert lfle.main(["-f", image, "-d"]) == 0
    assert "0x00000000   30 00 00 00 4C 66 4C 65" in capsys.readouterr().out
    assert "Magic number located at offset 0x104" in caplog.text


def test_output_file(image, tmp_path, capsys):
    target = tmp_path / "out.tln"
    assert lfle.main(["-f", image, "--output-file", str(target)]) == 0
    assert len(target.read_text().splitlines()) == 2
    assert capsys.readouterr().out == ""


def test_output_file_is_never_overwritten(image, tmp_path):
    target = tmp_path / "out.tln"
    target.write_text("keep me")
    with pytest.raises(SystemExit) as excinfo:
        lfle.main(["-f", image, "--output-file", str(target)])
    assert excinfo.value.code == 1
    assert target.read_text() == "keep me"


def test_start_offset(image, capsys):
    assert lfle.main(["-f", image, "-o", "0x2000"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert [line.split("|")[4][:3] for line in lines] == ["[3]"]


def test_bad_offset(image):
    with pytest.raises(SystemExit) as excinfo:
        lfle.main(["-f", image, "-o", "-4"])
    assert excinfo.value.code == 1


def test_missing_file_argument(capsys):
    assert lfle.main([]) == 1
    assert "-f" in capsys.readouterr().out


def test_file_not_found(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        lfle.main(["-f", str(tmp_path / "missing.raw")])
    assert excinfo.value.code == 1


def test_help(capsys):
    with pytest.raises(SystemExit) as excinfo:
        lfle.main(["-h"])
    assert excinfo.value.code == 1
    assert "lfle -f mem.raw" in capsys.readouterr().out


def test_file_from_environment(image, monkeypatch, capsys):
    monkeypatch.setenv("EVTCARVE_FILE", image)
    assert lfle.main([]) == 0
    assert len(capsys.readouterr().out.splitlines()) == 2


def test_same_output_twice(image, capsys):
    lfle.main(["-f", image, "-s"])
    first = capsys.readouterr().out
    lfle.main(["-f", image, "-s"])
    assert capsys.readouterr().out == first


def test_unencodable_text_does_not_stop_the_scan(tmp_path, monkeypatch, record_builder, image_builder):
    ## 0x81 has no cp1252 character
    data = image_builder(0x400,
                         (0x10, record_builder(record_number=1, source="Sec\x81rity")),
                         (0x200, record_builder(record_number=2)))
    path = tmp_path / "unalloc.bin"
    path.write_bytes(data)

    stream = io.TextIOWrapper(io.BytesIO(), encoding="cp1252")
    monkeypatch.setattr(sys, "stdout", stream)
    assert lfle.main(["-f", str(path), "-s"]) == 0
    stream.flush()
    out = stream.buffer.getvalue()

    assert b"[1] - Sec\\x81rity/4624" in out
    assert b"[2] - Security/4624" in out
    assert out.endswith(b"Records retrieved        : 2\n")


def test_unencodable_text_in_output_file(tmp_path, record_builder, image_builder):
    data = image_builder(0x400,
                         (0x10, record_builder(record_number=1, computer="PC\x81\xff")),
                         (0x200, record_builder(record_number=2)))
    path = tmp_path / "unalloc.bin"
    path.write_bytes(data)
    target = tmp_path / "out.tln"

    assert lfle.main(["-f", str(path), "-s", "--output-file", str(target)]) == 0
    lines = target.read_text(errors="replace").splitlines()
    assert [line.split("|")[4][:3] for line in lines[:2]] == ["[1]", "[2]"]
    assert lines[-1] == "Records retrieved        : 2"


def test_malformed_config_file(image, tmp_path, monkeypatch):
    rc = tmp_path / "broken-rc"
    rc.write_text("no section header\n")
    monkeypatch.setenv("EVTCARVE_CONF_FILE", str(rc))
    with pytest.raises(SystemExit) as excinfo:
        lfle.main(["-f", image])
    assert excinfo.value.code == 1
