"""Rich rendering of DNS listings and apply reports."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from rempower.dns.policies import PUBLIC_DNS_REVISION
from rempower.dns.types import AddressList, DnsReport, ListingEntry, OutcomeStatus, ResolverMode

STATUS_STYLES: dict[OutcomeStatus, str] = {
    OutcomeStatus.APPLIED: "green",
    OutcomeStatus.UNCHANGED: "yellow",
    OutcomeStatus.FAILED: "red",
}

MODE_LABELS: dict[ResolverMode, str] = {
    ResolverMode.PUBLIC: f"public DNS (revision {PUBLIC_DNS_REVISION})",
    ResolverMode.DHCP: "DHCP-assigned DNS",
}


def _servers(servers: AddressList) -> str:
    return ", ".join(servers) if servers else "-"


def listing_table(entries: list[ListingEntry]) -> Table:
    table = Table(title="DNS servers per network service")
    table.add_column("Service", justify="right", style="bold")
    table.add_column("Manual")
    table.add_column("DHCP")
    table.add_column("Active")

    for entry in entries:
        if entry.snapshot is None:
            table.add_row(entry.interface, Text(entry.error or "unknown error", style="red"), "", "")
            continue
        snapshot = entry.snapshot
        manual = "(none)" if snapshot.manual.is_cleared else _servers(snapshot.manual.servers)
        table.add_row(entry.interface, manual, _servers(snapshot.dhcp), _servers(snapshot.effective))
    return table


def report_table(report: DnsReport) -> Table:
    table = Table(title=f"Switch to {MODE_LABELS[report.mode]}")
    table.add_column("Service", justify="right", style="bold")
    table.add_column("Result")
    table.add_column("Detail")

    for outcome in report.outcomes:
        style = STATUS_STYLES[outcome.status]
        table.add_row(
            outcome.interface,
            Text(outcome.status.value.upper(), style=style),
            Text(outcome.detail, style=style if outcome.status is OutcomeStatus.FAILED else ""),
        )
    return table


def report_summary(report: DnsReport) -> Text:
    if not report.outcomes:
        return Text("No active network services found.", style="yellow")
    failed = len(report.failures)
    total = len(report.outcomes)
    if failed:
        return Text(f"{failed} of {total} services not configured correctly.", style="red")
    return Text(f"All {total} services configured.", style="green")


def print_listing(entries: list[ListingEntry], console: Console | None = None) -> None:
    console = console or Console(force_terminal=False)
    if not entries:
        console.print(Text("No active network services found.", style="yellow"))
        return
    console.print(listing_table(entries))


def print_report(report: DnsReport, console: Console | None = None) -> None:
    console = console or Console(force_terminal=False)
    if report.outcomes:
        console.print(report_table(report))
    console.print(report_summary(report))
