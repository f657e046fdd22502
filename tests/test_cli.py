# tests/test_cli.py

import logging

import pytest

from uhf_llrp import cli
from uhf_llrp.core.profiles import InventoryProfile, QTScenario


def parse(*argv):
    return cli.options_from_args(cli.build_parser().parse_args(list(argv)))


# --- Argument parsing ---

def test_defaults():
    options = parse("reader")
    assert options.profile == InventoryProfile.QT_ACCESS
    assert options.qt_scenario == QTScenario.READ_STANDARD_TID
    assert options.password == 0
    assert options.new_password == 0
    assert not options.tid
    assert not options.short_range
    assert options.verbose == 0
    assert options.monitor_duration is None
    assert options.monitor_seconds == 1.0


def test_all_options():
    options = parse("-p", "0x12345678", "-n", "42", "-t", "-s", "-v", "2", "-q", "4",
                    "--duration", "2.5", "reader:5085")
    assert options.password == 0x12345678
    assert options.new_password == 42
    assert options.tid
    assert options.short_range
    assert options.verbose == 2
    assert options.qt_scenario == QTScenario.SET_QT_PRIVATE
    assert options.monitor_seconds == 2.5


def test_filtered_profile():
    options = parse("--profile", "filtered", "reader")
    assert options.profile == InventoryProfile.FILTERED
    assert options.monitor_seconds == 60.0
    assert options.poll_reports


def test_unknown_scenario_falls_back_to_qt_status():
    assert parse("-q", "42", "reader").qt_scenario == QTScenario.GET_QT_STATUS


@pytest.mark.parametrize("argv", [
    [],                              # missing host
    ["-p", "secret", "reader"],      # not a number
    ["--profile", "fast", "reader"],
    ["-x", "reader"],
])
def test_bad_arguments_exit_with_usage_code(argv, capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.build_parser().parse_args(argv)
    assert exc_info.value.code == cli.EXIT_USAGE
    assert "usage: uhf-llrp" in capsys.readouterr().err


def test_help_lists_scenarios(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.build_parser().parse_args(["-h"])
    assert exc_info.value.code == 0
    out = capsys.readouterr().out
    assert "3 -- read QT status of tag (uses -p)" in out
    assert "9 -- Read Reserved memory" in out


# --- Logging ---

@pytest.mark.parametrize("verbose, level", [
    (0, logging.WARNING),
    (1, logging.INFO),
    (2, logging.DEBUG),
])
def test_configure_logging(verbose, level, monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    monkeypatch.setattr(cli.logger, "level", logging.NOTSET)

    cli.configure_logging(verbose)

    assert calls == [{"level": level, "format": cli.LOG_FORMAT}]
    assert cli.logger.level == logging.INFO


# --- main ---

class FakeSession:
    rc = 0
    instances = []

    def __init__(self, options):
        self.options = options
        self.hosts = []
        FakeSession.instances.append(self)

    async def run(self, host):
        self.hosts.append(host)
        return self.rc


@pytest.fixture
def fake_session(monkeypatch):
    FakeSession.instances = []
    monkeypatch.setattr(cli, "Session", FakeSession)
    monkeypatch.setattr(cli, "configure_logging", lambda verbose: None)
    return FakeSession


def test_main_success(fake_session):
    assert cli.main(["-q", "3", "-p", "0x1234", "reader"]) == cli.EXIT_OK

    session = fake_session.instances[0]
    assert session.hosts == ["reader"]
    assert session.options.qt_scenario == QTScenario.GET_QT_STATUS
    assert session.options.password == 0x1234


@pytest.mark.parametrize("rc", [1, 7, 12, -3])
def test_main_failure(fake_session, monkeypatch, rc):
    monkeypatch.setattr(fake_session, "rc", rc)
    assert cli.main(["reader"]) == cli.EXIT_FAILED


def test_main_logs_done(fake_session, caplog):
    caplog.set_level(logging.INFO, logger=cli.logger.name)
    cli.main(["reader"])
    assert "Done" in caplog.text
