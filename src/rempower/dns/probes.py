"""Probe helpers for enumerating network services and reading their resolvers."""

from __future__ import annotations

import dataclasses
import ipaddress
import re

from rempower.dns.errors import EnumerationError, ReadError
from rempower.dns.logging_utils import DEFAULT_LOGGER, LoggingManager
from rempower.dns.shell import DEFAULT_SHELL, READ_TIMEOUT, ShellRunner
from rempower.dns.types import AddressList, CommandResult, ManualDns, ResolverSnapshot

NO_MANUAL_DNS_MARKER = "There aren't any DNS Servers set on"
DISABLED_SERVICES_HEADER = "An asterisk"
NETWORKSETUP_ERROR_PREFIX = "**"


@dataclasses.dataclass
class ScutilResolver:
    """One ``resolver #N`` block from ``scutil --dns``."""

    nameservers: list[str]
    device: str | None = None


_SERVICE_ORDER_RE = re.compile(r"^\((?:\d+|\*)\)\s+(?P<name>.+)$")
_DEVICE_RE = re.compile(r"Device:\s*(?P<device>[^)]*)\)")
_IF_INDEX_RE = re.compile(r"\((?P<device>[^)]+)\)")


def is_error_output(text: str) -> bool:
    return any(line.strip().startswith(NETWORKSETUP_ERROR_PREFIX) for line in text.splitlines())


def _is_ip_address(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def parse_service_list(output: str) -> list[str]:
    """Return enabled services from ``networksetup -listallnetworkservices``."""
    services: list[str] = []
    for line in output.splitlines():
        entry = line.strip()
        if not entry or entry.startswith(DISABLED_SERVICES_HEADER):
            continue
        if entry.startswith("*"):
            continue
        services.append(entry)
    return services


def parse_manual_servers(interface: str, output: str) -> ManualDns:
    """Parse ``networksetup -getdnsservers`` output into a ``ManualDns``.

    Anything that is neither the "no servers" sentence nor an address literal
    is treated as a failed query rather than an empty list.
    """
    lines = [line.strip() for line in output.splitlines() if line.strip()]
    if not lines or any(NO_MANUAL_DNS_MARKER in line for line in lines):
        return ManualDns.cleared()

    invalid = [line for line in lines if not _is_ip_address(line)]
    if invalid:
        raise ReadError(f"Unexpected DNS server output for '{interface}': {' / '.join(invalid)}")
    return ManualDns.of(lines)


def parse_scutil_resolvers(output: str) -> list[ScutilResolver]:
    """Split ``scutil --dns`` output into resolver blocks."""
    resolvers: list[ScutilResolver] = []
    current: ScutilResolver | None = None

    for raw in output.splitlines():
        line = raw.strip()
        if line.startswith("DNS configuration"):
            current = None
            continue
        if line.startswith("resolver #"):
            current = ScutilResolver(nameservers=[])
            resolvers.append(current)
            continue
        if current is None or ":" not in line:
            continue

        key, value = (part.strip() for part in line.split(":", 1))
        if key.startswith("nameserver["):
            current.nameservers.append(value)
        elif key == "if_index":
            if match := _IF_INDEX_RE.search(value):
                current.device = match.group("device")
    return resolvers


def parse_service_devices(output: str) -> dict[str, str]:
    """Map service names to hardware devices from ``-listnetworkserviceorder``."""
    devices: dict[str, str] = {}
    service: str | None = None
    for raw in output.splitlines():
        line = raw.strip()
        if match := _SERVICE_ORDER_RE.match(line):
            service = match.group("name")
            continue
        if service and (match := _DEVICE_RE.search(line)):
            device = match.group("device").strip()
            if device:
                devices[service] = device
            service = None
    return devices


def collect_nameservers(resolvers: list[ScutilResolver], device: str | None = None) -> AddressList:
    """Return de-duplicated nameservers, limited to ``device`` when it has any."""
    selected = resolvers
    if device:
        scoped = [resolver for resolver in resolvers if resolver.device == device]
        if any(resolver.nameservers for resolver in scoped):
            selected = scoped

    servers: list[str] = []
    for resolver in selected:
        for server in resolver.nameservers:
            if server not in servers:
                servers.append(server)
    return tuple(servers)


class ResolverReader:
    """Abstract interface for enumerating services and reading resolver state."""

    name = "resolver"

    def __init__(self, *, shell: ShellRunner = DEFAULT_SHELL, logger: LoggingManager | None = None) -> None:
        self.shell = shell
        self.logger = logger or DEFAULT_LOGGER

    def list_active_interfaces(self) -> list[str]:  # pragma: no cover - interface contract
        raise NotImplementedError

    def read_manual(self, interface: str) -> ManualDns:  # pragma: no cover - interface contract
        raise NotImplementedError

    def read_dhcp(self, interface: str) -> AddressList:  # pragma: no cover - interface contract
        raise NotImplementedError

    def snapshot(self, interface: str) -> ResolverSnapshot:
        """Read both resolver views of ``interface`` afresh."""
        return ResolverSnapshot(
            manual=self.read_manual(interface),
            dhcp=self.read_dhcp(interface),
        )


class NetworksetupReader(ResolverReader):
    """macOS reader backed by ``networksetup`` and ``scutil``."""

    name = "networksetup"

    def _query(self, cmd: list[str]) -> CommandResult:
        return self.shell.run_cmd(cmd, timeout=READ_TIMEOUT)

    def list_active_interfaces(self) -> list[str]:
        res = self._query(["networksetup", "-listallnetworkservices"])
        if res.returncode != 0 or is_error_output(res.stdout):
            raise EnumerationError(f"Could not list network services: {res.detail}")

        services = parse_service_list(res.stdout)
        self.logger.debug(f"Active network services: {services}")
        return services

    def read_manual(self, interface: str) -> ManualDns:
        res = self._query(["networksetup", "-getdnsservers", interface])
        if res.returncode != 0 or is_error_output(res.stdout):
            raise ReadError(f"Could not read DNS servers of '{interface}': {res.detail}")
        return parse_manual_servers(interface, res.stdout)

    def read_dhcp(self, interface: str) -> AddressList:
        res = self._query(["scutil", "--dns"])
        if res.returncode != 0:
            raise ReadError(f"Could not read resolver configuration: {res.detail}")

        device = self._device_for(interface)
        servers = collect_nameservers(parse_scutil_resolvers(res.stdout), device)
        self.logger.debug(f"DHCP-derived DNS servers for '{interface}' ({device or 'any device'}): {servers}")
        return servers

    def _device_for(self, interface: str) -> str | None:
        res = self._query(["networksetup", "-listnetworkserviceorder"])
        if res.returncode != 0:
            self.logger.debug(f"Service order lookup failed rc={res.returncode}: {res.stderr!r}")
            return None
        return parse_service_devices(res.stdout).get(interface)


DEFAULT_READER = NetworksetupReader()
