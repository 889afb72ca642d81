"""Privileged writer for manual DNS server lists."""

from __future__ import annotations

import os

from rempower.dns.errors import PrivilegeError, WriteError
from rempower.dns.logging_utils import DEFAULT_LOGGER, LoggingManager
from rempower.dns.probes import is_error_output
from rempower.dns.shell import AUTH_TIMEOUT, DEFAULT_SHELL, READ_TIMEOUT, WRITE_TIMEOUT, ShellRunner
from rempower.dns.types import ManualDns

# networksetup keyword that removes a manual DNS override.
CLEAR_KEYWORD = "Empty"
NETWORKSETUP_PATH = "/usr/sbin/networksetup"

SUDO_DENIED_MARKERS = (
    "a password is required",
    "a terminal is required",
    "is not in the sudoers file",
    "incorrect password",
    "is not allowed to execute",
)


def running_as_root() -> bool:
    return hasattr(os, "geteuid") and os.geteuid() == 0


def is_privilege_denial(stderr: str) -> bool:
    lowered = stderr.lower()
    return lowered.startswith("sudo:") or any(marker in lowered for marker in SUDO_DENIED_MARKERS)


class ResolverWriter:
    """Abstract interface for changing the manual resolvers of a service."""

    name = "writer"

    def __init__(self, *, shell: ShellRunner = DEFAULT_SHELL, logger: LoggingManager | None = None) -> None:
        self.shell = shell
        self.logger = logger or DEFAULT_LOGGER

    def authenticate(self) -> None:
        """Obtain any privileges needed before writing; no-op by default."""

    def write_manual(self, interface: str, desired: ManualDns) -> None:  # pragma: no cover - interface contract
        raise NotImplementedError


class NetworksetupWriter(ResolverWriter):
    """Apply DNS servers with ``networksetup -setdnsservers`` under sudo."""

    name = "networksetup"

    def __init__(
        self,
        *,
        shell: ShellRunner = DEFAULT_SHELL,
        logger: LoggingManager | None = None,
        use_sudo: bool | None = None,
    ) -> None:
        super().__init__(shell=shell, logger=logger)
        self._use_sudo = use_sudo

    @property
    def use_sudo(self) -> bool:
        if self._use_sudo is None:
            return not running_as_root()
        return self._use_sudo

    def build_cmd(self, interface: str, desired: ManualDns) -> list[str]:
        servers = [CLEAR_KEYWORD] if desired.is_cleared else list(desired.servers)
        cmd = ["networksetup", "-setdnsservers", interface, *servers]
        if self.use_sudo:
            # Never prompt here; credentials come from authenticate().
            cmd = ["sudo", "-n", *cmd]
        return cmd

    def authenticate(self) -> None:
        """Cache sudo credentials once; a refusal surfaces later per service."""
        if not self.use_sudo:
            return
        allowed = self.shell.run_cmd(["sudo", "-n", "-l", NETWORKSETUP_PATH], timeout=READ_TIMEOUT)
        if allowed.returncode == 0:
            self.logger.debug("sudo allows networksetup without a password prompt")
            return

        self.logger.log("[INFO] Administrator privileges are required to change DNS settings.")
        res = self.shell.run_interactive(["sudo", "-v"], timeout=AUTH_TIMEOUT)
        if res.returncode != 0:
            self.logger.log(f"[WARN] sudo authentication failed ({res.detail}); attempting each service anyway.")

    def write_manual(self, interface: str, desired: ManualDns) -> None:
        cmd = self.build_cmd(interface, desired)
        res = self.shell.run_cmd(cmd, timeout=WRITE_TIMEOUT)

        if res.returncode != 0 and self.use_sudo and is_privilege_denial(res.stderr):
            self.logger.log(f"[WARN] Privilege escalation denied for '{interface}': {res.stderr.strip()}")
            raise PrivilegeError(f"Privilege escalation denied: {res.stderr.strip()}")

        if res.returncode != 0 or is_error_output(res.stdout):
            self.logger.log(
                f"[WARN] Action failed (rc={res.returncode}): {self.shell.cmd_str(cmd)} stderr={res.stderr.strip()}",
            )
            raise WriteError(f"Failed to update DNS servers: {res.detail}")


DEFAULT_WRITER = NetworksetupWriter()
