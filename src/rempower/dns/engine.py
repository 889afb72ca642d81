"""Apply a resolver policy to network services and verify the result."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable

from rempower.dns.errors import ReadError, WriteError
from rempower.dns.logging_utils import DEFAULT_LOGGER, LoggingManager
from rempower.dns.probes import DEFAULT_READER, ResolverReader
from rempower.dns.types import (
    DnsReport,
    FailureKind,
    InterfaceOutcome,
    ManualDns,
    OutcomeStatus,
    ResolverMode,
    ResolverSnapshot,
)
from rempower.dns.writer import DEFAULT_WRITER, ResolverWriter

Validator = Callable[[ResolverSnapshot], bool]


@dataclasses.dataclass(frozen=True)
class DnsPolicy:
    """What to write for a resolver mode and how to tell that it stuck."""

    mode: ResolverMode
    desired: ManualDns
    validate: Validator
    expected: str
    action: str


def apply_dns_config(
    interface: str,
    policy: DnsPolicy,
    *,
    reader: ResolverReader = DEFAULT_READER,
    writer: ResolverWriter = DEFAULT_WRITER,
    dry_run: bool = False,
    logger: LoggingManager | None = None,
) -> InterfaceOutcome:
    """Write ``policy.desired`` to ``interface``, re-read it and validate it.

    A write failure returns immediately without reading. The snapshot used
    for validation is always read after the write.
    """
    logger = logger or DEFAULT_LOGGER
    logger.log(f"[ACTION] {policy.action} on '{interface}'")
    if dry_run:
        return InterfaceOutcome(interface, OutcomeStatus.UNCHANGED, "Dry run: no changes made")

    try:
        writer.write_manual(interface, policy.desired)
    except WriteError as exc:
        logger.log(f"[FAIL] {interface}: {exc}")
        return InterfaceOutcome(interface, OutcomeStatus.FAILED, str(exc), failure=FailureKind.WRITE)

    try:
        snapshot = reader.snapshot(interface)
    except ReadError as exc:
        detail = f"Could not verify DNS servers after update: {exc}"
        logger.log(f"[FAIL] {interface}: {detail}")
        return InterfaceOutcome(interface, OutcomeStatus.FAILED, detail, failure=FailureKind.READ)

    if policy.validate(snapshot):
        logger.log(f"[OK] {interface}")
        return InterfaceOutcome(interface, OutcomeStatus.APPLIED, "OK", snapshot=snapshot)

    detail = f"Not OK: expected {policy.expected}, but got {snapshot.manual.describe()}"
    logger.log(f"[FAIL] {interface}: {detail}")
    return InterfaceOutcome(
        interface,
        OutcomeStatus.FAILED,
        detail,
        failure=FailureKind.MISMATCH,
        snapshot=snapshot,
    )


def apply_to_all(
    policy: DnsPolicy,
    *,
    reader: ResolverReader = DEFAULT_READER,
    writer: ResolverWriter = DEFAULT_WRITER,
    dry_run: bool = False,
    logger: LoggingManager | None = None,
) -> DnsReport:
    """Apply ``policy`` to every active service, in enumeration order.

    An enumeration error propagates before anything is
    written. Per-service failures never stop the remaining services.
    """
    logger = logger or DEFAULT_LOGGER
    interfaces = reader.list_active_interfaces()
    if not interfaces:
        logger.log("[WARN] No active network services found.")
        return DnsReport(policy.mode, [])

    if not dry_run:
        writer.authenticate()

    outcomes = [
        apply_dns_config(
            interface,
            policy,
            reader=reader,
            writer=writer,
            dry_run=dry_run,
            logger=logger,
        )
        for interface in interfaces
    ]
    return DnsReport(policy.mode, outcomes)
