"""Shell helpers used by the DNS probes and writer."""

from __future__ import annotations

import shlex
import subprocess

from rempower.dns.logging_utils import DEFAULT_LOGGER, LoggingManager
from rempower.dns.types import CommandResult

READ_TIMEOUT = 10
WRITE_TIMEOUT = 30
AUTH_TIMEOUT = 120

TIMEOUT_RETURNCODE = 124
SPAWN_FAILURE_RETURNCODE = 255


class ShellRunner:
    """Execute shell commands with consistent logging and bounded runtime."""

    def __init__(self, *, logger: LoggingManager = DEFAULT_LOGGER) -> None:
        self.logger = logger

    def cmd_str(self, cmd: list[str]) -> str:
        """Return a shell-escaped string for display."""
        return " ".join(shlex.quote(part) for part in cmd)

    def run_cmd(
        self,
        cmd: list[str],
        timeout: int = READ_TIMEOUT,
    ) -> CommandResult:
        """Run command and capture stdout/stderr."""
        self.logger.debug(f"Running: {self.cmd_str(cmd)}")
        try:
            proc = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                timeout=timeout,
                text=True,
            )
        except subprocess.TimeoutExpired:
            self.logger.debug(f"Command timed out after {timeout}s")
            return CommandResult(
                cmd=cmd,
                returncode=TIMEOUT_RETURNCODE,
                stdout="",
                stderr=f"{self.cmd_str(cmd)} timed out after {timeout} seconds",
            )
        except Exception as exc:  # noqa: BLE001 - broad to log spawn issues
            self.logger.debug(f"Command failed to start: {exc}")
            return CommandResult(
                cmd=cmd,
                returncode=SPAWN_FAILURE_RETURNCODE,
                stdout="",
                stderr=str(exc),
            )

        self.logger.debug(
            f"Command rc={proc.returncode} stdout={proc.stdout!r} stderr={proc.stderr!r}",
        )
        return CommandResult(
            cmd=cmd,
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
        )

    def run_interactive(self, cmd: list[str], timeout: int = AUTH_TIMEOUT) -> CommandResult:
        """Run command attached to the terminal so it can prompt the user."""
        self.logger.debug(f"Running interactively: {self.cmd_str(cmd)}")
        try:
            proc = subprocess.run(cmd, timeout=timeout)
        except subprocess.TimeoutExpired:
            return CommandResult(
                cmd=cmd,
                returncode=TIMEOUT_RETURNCODE,
                stdout="",
                stderr=f"{self.cmd_str(cmd)} was not answered within {timeout} seconds",
            )
        except Exception as exc:  # noqa: BLE001 - broad to log spawn issues
            self.logger.debug(f"Command failed to start: {exc}")
            return CommandResult(cmd=cmd, returncode=SPAWN_FAILURE_RETURNCODE, stdout="", stderr=str(exc))

        self.logger.debug(f"Interactive command rc={proc.returncode}")
        return CommandResult(cmd=cmd, returncode=proc.returncode, stdout="", stderr="")


DEFAULT_SHELL = ShellRunner()
