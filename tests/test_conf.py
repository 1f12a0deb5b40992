import pytest

from evtcarve import conf, exceptions


def make_config(argv):
    config = conf.ConfObject(argv)
    config.add_option("FILE", short_option='f', default=None, help="file")
    config.add_option("STATS", short_option='s', default=False, action='store_true')
    config.add_option("DEBUG", short_option='d', default=0, action='count')
    config.add_option("OFFSET", default=0, type='str')
    config.parse_options()
    return config


def test_command_line_values():
    config = make_config(["-f", "mem.raw", "-s", "-d", "-d"])
    assert config.FILE == "mem.raw"
    assert config.STATS is True
    assert config.get_int("DEBUG") == 2


def test_defaults():
    config = make_config([])
    assert config.FILE is None
    assert config.get_bool("STATS") is False
    assert config.get_int("DEBUG") == 0


def test_environment(monkeypatch):
    monkeypatch.setenv("EVTCARVE_OFFSET", "0x100")
    monkeypatch.setenv("EVTCARVE_STATS", "yes")
    config = make_config([])
    assert config.get_int("OFFSET") == 0x100
    assert config.get_bool("STATS") is True


def test_command_line_beats_environment(monkeypatch):
    monkeypatch.setenv("EVTCARVE_FILE", "env.raw")
    assert make_config(["--file", "cli.raw"]).FILE == "cli.raw"
    assert make_config([]).FILE == "env.raw"


def test_config_file(tmp_path, monkeypatch):
    monkeypatch.delenv("EVTCARVE_STATS", raising=False)
    rc = tmp_path / "evtcarverc"
    rc.write_text("[DEFAULT]\nstats = true\noffset = 64\n")
    config = make_config([])
    config.add_file(str(rc))
    assert config.get_bool("STATS") is True
    assert config.get_int("OFFSET") == 64


def test_forced_value():
    config = make_config(["-f", "a.raw"])
    config.update("FILE", "b.raw")
    assert config.FILE == "b.raw"


def test_bad_integer(monkeypatch):
    monkeypatch.setenv("EVTCARVE_OFFSET", "lots")
    with pytest.raises(exceptions.ConfigurationError):
        make_config([]).get_int("OFFSET")


def test_unknown_parameter():
    with pytest.raises(AttributeError):
        make_config([]).NOT_AN_OPTION


def test_bad_option_exits():
    with pytest.raises(SystemExit) as excinfo:
        make_config(["--no-such-option"])
    assert excinfo.value.code == 1


def test_help_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        make_config(["-h"])
    assert excinfo.value.code == 1
    assert "--file" in capsys.readouterr().out


@pytest.mark.parametrize("content", ["stats = true\n", "[DEFAULT]\noffset = 100%\n"])
def test_malformed_config_file(tmp_path, content):
    rc = tmp_path / "evtcarverc"
    rc.write_text(content)
    config = make_config([])
    with pytest.raises(exceptions.ConfigurationError) as excinfo:
        config.add_file(str(rc))
    assert str(rc) in str(excinfo.value)
