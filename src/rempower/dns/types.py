"""Shared dataclasses and enums for the DNS switching tool."""

from __future__ import annotations

import dataclasses
import enum

AddressList = tuple[str, ...]


@dataclasses.dataclass
class CommandResult:
    cmd: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def detail(self) -> str:
        """Best available human-readable explanation of the result."""
        return self.stderr.strip() or self.stdout.strip() or f"rc={self.returncode}"


class OverrideKind(enum.Enum):
    NO_OVERRIDE = "no_override"
    SERVERS = "servers"


@dataclasses.dataclass(frozen=True)
class ManualDns:
    """Manually configured resolvers of one network service.

    ``NO_OVERRIDE`` means the service defers to DHCP. ``SERVERS`` always
    carries at least one address; an empty explicit list is not a state
    macOS can hold.
    """

    kind: OverrideKind
    servers: AddressList = ()

    def __post_init__(self) -> None:
        if self.kind is OverrideKind.SERVERS and not self.servers:
            raise ValueError("a manual DNS override needs at least one server")
        if self.kind is OverrideKind.NO_OVERRIDE and self.servers:
            raise ValueError("a cleared DNS override cannot carry servers")

    @classmethod
    def cleared(cls) -> ManualDns:
        return cls(OverrideKind.NO_OVERRIDE)

    @classmethod
    def of(cls, servers: list[str] | AddressList) -> ManualDns:
        """Build an explicit override; an empty sequence yields ``cleared()``."""
        servers = tuple(servers)
        if not servers:
            return cls.cleared()
        return cls(OverrideKind.SERVERS, servers)

    @property
    def is_cleared(self) -> bool:
        return self.kind is OverrideKind.NO_OVERRIDE

    def as_set(self) -> frozenset[str]:
        return frozenset(self.servers)

    def describe(self) -> str:
        if self.is_cleared:
            return "no manual DNS servers (DHCP-assigned)"
        return f"[{', '.join(self.servers)}]"


@dataclasses.dataclass(frozen=True)
class ResolverSnapshot:
    """Fresh view of one service's resolver configuration."""

    manual: ManualDns
    dhcp: AddressList

    @property
    def effective(self) -> AddressList:
        """Resolvers in use: the manual override if set, otherwise DHCP's."""
        return self.dhcp if self.manual.is_cleared else self.manual.servers


class ResolverMode(enum.Enum):
    PUBLIC = "public"
    DHCP = "dhcp"


class OutcomeStatus(enum.Enum):
    APPLIED = "applied"
    UNCHANGED = "unchanged"
    FAILED = "failed"


class FailureKind(enum.Enum):
    WRITE = "write"
    READ = "read"
    MISMATCH = "mismatch"


@dataclasses.dataclass
class InterfaceOutcome:
    """Result of applying a resolver mode to one network service."""

    interface: str
    status: OutcomeStatus
    detail: str = ""
    failure: FailureKind | None = None
    snapshot: ResolverSnapshot | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is not OutcomeStatus.FAILED


@dataclasses.dataclass
class DnsReport:
    """Aggregate of per-service outcomes for one apply operation."""

    mode: ResolverMode
    outcomes: list[InterfaceOutcome]

    @property
    def success(self) -> bool:
        return all(outcome.succeeded for outcome in self.outcomes)

    @property
    def failures(self) -> list[InterfaceOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

    def outcome_for(self, interface: str) -> InterfaceOutcome | None:
        for outcome in self.outcomes:
            if outcome.interface == interface:
                return outcome
        return None


@dataclasses.dataclass
class ListingEntry:
    """Read-only view of one service; exactly one of snapshot/error is set."""

    interface: str
    snapshot: ResolverSnapshot | None = None
    error: str | None = None
