"""Tests for shell helpers and logging utilities."""

import io
import logging
import subprocess

from rempower.dns import logging_utils, shell


def _runner():
    return shell.ShellRunner(logger=logging_utils.LoggingManager("test_logger"))


def test_cmd_str_quotes_arguments():
    """cmd_str should shell-escape each argument for readability."""

    rendered = _runner().cmd_str(["networksetup", "-getdnsservers", "USB 10/100 LAN", "special&chars"])

    assert rendered == "networksetup -getdnsservers 'USB 10/100 LAN' 'special&chars'"


def test_run_cmd_maps_timeout_to_result(monkeypatch):
    """A hung command becomes a failed result instead of blocking forever."""

    def _timeout(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(shell.subprocess, "run", _timeout)

    result = _runner().run_cmd(["scutil", "--dns"], timeout=3)

    assert result.returncode == shell.TIMEOUT_RETURNCODE
    assert "timed out after 3 seconds" in result.stderr


def test_run_cmd_maps_spawn_failure_to_result(monkeypatch):
    def _missing(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(shell.subprocess, "run", _missing)

    result = _runner().run_cmd(["networksetup", "-listallnetworkservices"])

    assert result.returncode == shell.SPAWN_FAILURE_RETURNCODE
    assert "No such file or directory" in result.stderr
    assert result.detail == result.stderr


def test_run_cmd_captures_output(monkeypatch):
    seen = {}

    def _run(cmd, **kwargs):
        seen.update(kwargs)
        return subprocess.CompletedProcess(cmd, 0, stdout="Wi-Fi\n", stderr="")

    monkeypatch.setattr(shell.subprocess, "run", _run)

    result = _runner().run_cmd(["networksetup", "-listallnetworkservices"])

    assert result.returncode == 0
    assert result.stdout == "Wi-Fi\n"
    assert seen["stdin"] is subprocess.DEVNULL
    assert seen["timeout"] == shell.READ_TIMEOUT


def test_logging_manager_sets_level(tmp_path):
    """setup should configure the logger with the requested verbosity."""

    manager = logging_utils.LoggingManager("level_test")

    manager.setup(verbose=False, log_file=str(tmp_path / "rempower.log"))
    assert manager.logger.level == logging.INFO
    assert len(manager.logger.handlers) == 2

    manager.setup(verbose=True, log_file=None)
    assert manager.logger.level == logging.DEBUG
    assert len(manager.logger.handlers) == 1


def test_logging_manager_survives_unwritable_log_file(tmp_path):
    manager = logging_utils.LoggingManager("unwritable_test")

    manager.setup(verbose=False, log_file=str(tmp_path / "missing" / "rempower.log"))

    assert len(manager.logger.handlers) == 1


def test_logging_manager_formats_debug_arguments():
    """debug should accept formatting args like the stdlib logger."""

    manager = logging_utils.LoggingManager("arg_formatting")
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))

    manager.logger.handlers = [handler]
    manager.logger.setLevel(logging.DEBUG)

    manager.debug("service=%s attempts=%s", "Wi-Fi", 3)

    handler.flush()
    assert "service=Wi-Fi attempts=3" in stream.getvalue()
