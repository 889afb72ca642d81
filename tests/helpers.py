"""Reusable test utilities and recording stubs for the test suite."""

from __future__ import annotations

from rempower.dns.errors import EnumerationError, ReadError, WriteError
from rempower.dns.probes import ResolverReader
from rempower.dns.types import AddressList, CommandResult, ManualDns
from rempower.dns.writer import ResolverWriter


class RecordingLogger:
    """In-memory logger capturing log messages and setup calls."""

    def __init__(self):
        self.messages: list[str] = []
        self.setup_calls: list[bool] = []

    def setup(self, verbose: bool) -> None:
        self.setup_calls.append(verbose)

    def log(self, msg: str) -> None:
        self.messages.append(msg)

    def debug(self, msg: str) -> None:  # pragma: no cover - simple passthrough
        self.messages.append(f"DEBUG:{msg}")


class ScriptedShell:
    """Record issued commands and return canned results keyed by argv."""

    def __init__(self, responses: dict[tuple[str, ...], CommandResult] | None = None):
        self.responses = responses or {}
        self.calls: list[tuple[list[str], int]] = []
        self.interactive_calls: list[list[str]] = []
        self.interactive_returncode = 0

    def cmd_str(self, cmd: list[str]) -> str:  # pragma: no cover - trivial passthrough
        return " ".join(cmd)

    def run_cmd(self, cmd: list[str], timeout: int = 5) -> CommandResult:
        self.calls.append((cmd, timeout))
        key = tuple(cmd)
        if key in self.responses:
            return self.responses[key]
        return CommandResult(cmd=list(cmd), returncode=1, stdout="", stderr="missing response")

    def run_interactive(self, cmd: list[str], timeout: int = 5) -> CommandResult:  # noqa: ARG002
        self.interactive_calls.append(cmd)
        return CommandResult(cmd=cmd, returncode=self.interactive_returncode, stdout="", stderr="")


def ok(stdout: str = "") -> CommandResult:
    return CommandResult(cmd=[], returncode=0, stdout=stdout, stderr="")


def failed(stderr: str, returncode: int = 1, stdout: str = "") -> CommandResult:
    return CommandResult(cmd=[], returncode=returncode, stdout=stdout, stderr=stderr)


class FakeNetwork:
    """Simulated OS resolver state shared by FakeReader and FakeWriter."""

    def __init__(self, interfaces: list[str], dhcp: dict[str, AddressList] | None = None):
        self.interfaces = list(interfaces)
        self.manual: dict[str, ManualDns] = {iface: ManualDns.cleared() for iface in interfaces}
        self.dhcp: dict[str, AddressList] = dict(dhcp or {})
        self.write_errors: dict[str, WriteError] = {}
        self.read_errors: dict[str, ReadError] = {}
        # What the OS ends up storing instead of the requested value.
        self.stored_instead: dict[str, ManualDns] = {}
        self.enumeration_error: EnumerationError | None = None
        self.events: list[tuple[str, str]] = []


class FakeReader(ResolverReader):
    name = "fake"

    def __init__(self, network: FakeNetwork):
        super().__init__(logger=RecordingLogger())
        self.network = network

    def list_active_interfaces(self) -> list[str]:
        self.network.events.append(("enumerate", ""))
        if self.network.enumeration_error is not None:
            raise self.network.enumeration_error
        return list(self.network.interfaces)

    def read_manual(self, interface: str) -> ManualDns:
        self.network.events.append(("read_manual", interface))
        if interface in self.network.read_errors:
            raise self.network.read_errors[interface]
        return self.network.manual[interface]

    def read_dhcp(self, interface: str) -> AddressList:
        self.network.events.append(("read_dhcp", interface))
        return self.network.dhcp.get(interface, ())


class FakeWriter(ResolverWriter):
    name = "fake"

    def __init__(self, network: FakeNetwork):
        super().__init__(logger=RecordingLogger())
        self.network = network
        self.authenticated = 0

    def authenticate(self) -> None:
        self.authenticated += 1

    def write_manual(self, interface: str, desired: ManualDns) -> None:
        self.network.events.append(("write", interface))
        if interface in self.network.write_errors:
            raise self.network.write_errors[interface]
        self.network.manual[interface] = self.network.stored_instead.get(interface, desired)
