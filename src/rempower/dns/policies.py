"""Public and DHCP resolver policies."""

from __future__ import annotations

from typing import Final

from rempower.dns.engine import DnsPolicy, apply_to_all
from rempower.dns.logging_utils import LoggingManager
from rempower.dns.probes import DEFAULT_READER, ResolverReader
from rempower.dns.types import AddressList, DnsReport, ManualDns, ResolverMode, ResolverSnapshot
from rempower.dns.writer import DEFAULT_WRITER, ResolverWriter

# CloudFlare and Google, IPv4 and IPv6. Bump the revision whenever this changes.
PUBLIC_DNS: Final[AddressList] = (
    "1.1.1.1",
    "2606:4700:4700::1111",
    "8.8.4.4",
    "2001:4860:4860::8844",
)
PUBLIC_DNS_REVISION: Final[int] = 1


def matches_public_dns(snapshot: ResolverSnapshot) -> bool:
    """True only when the manual servers are exactly the public set."""
    return not snapshot.manual.is_cleared and snapshot.manual.as_set() == frozenset(PUBLIC_DNS)


def manual_dns_cleared(snapshot: ResolverSnapshot) -> bool:
    return snapshot.manual.is_cleared


PUBLIC_POLICY: Final = DnsPolicy(
    mode=ResolverMode.PUBLIC,
    desired=ManualDns.of(PUBLIC_DNS),
    validate=matches_public_dns,
    expected=f"exactly [{', '.join(PUBLIC_DNS)}]",
    action=f"Enable public DNS servers [{', '.join(PUBLIC_DNS)}]",
)

DHCP_POLICY: Final = DnsPolicy(
    mode=ResolverMode.DHCP,
    desired=ManualDns.cleared(),
    validate=manual_dns_cleared,
    expected=ManualDns.cleared().describe(),
    action="Revert to DHCP-assigned DNS servers",
)

POLICIES: Final[dict[ResolverMode, DnsPolicy]] = {
    ResolverMode.PUBLIC: PUBLIC_POLICY,
    ResolverMode.DHCP: DHCP_POLICY,
}


def policy_for(mode: ResolverMode) -> DnsPolicy:
    return POLICIES[mode]


def enable_pub_dns(
    *,
    reader: ResolverReader = DEFAULT_READER,
    writer: ResolverWriter = DEFAULT_WRITER,
    dry_run: bool = False,
    logger: LoggingManager | None = None,
) -> DnsReport:
    """Point every active service at the public resolvers."""
    return apply_to_all(PUBLIC_POLICY, reader=reader, writer=writer, dry_run=dry_run, logger=logger)


def enable_dhcp_dns(
    *,
    reader: ResolverReader = DEFAULT_READER,
    writer: ResolverWriter = DEFAULT_WRITER,
    dry_run: bool = False,
    logger: LoggingManager | None = None,
) -> DnsReport:
    """Clear manual resolvers so every active service uses DHCP's."""
    return apply_to_all(DHCP_POLICY, reader=reader, writer=writer, dry_run=dry_run, logger=logger)
