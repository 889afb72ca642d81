"""Read-only listing of the resolvers configured on each service."""

from __future__ import annotations

from rempower.dns.errors import ReadError
from rempower.dns.logging_utils import DEFAULT_LOGGER, LoggingManager
from rempower.dns.probes import DEFAULT_READER, ResolverReader
from rempower.dns.types import ListingEntry


def list_dns(
    *,
    reader: ResolverReader = DEFAULT_READER,
    logger: LoggingManager | None = None,
) -> list[ListingEntry]:
    """Return one entry per active service; read errors stay per-service."""
    logger = logger or DEFAULT_LOGGER
    entries: list[ListingEntry] = []
    for interface in reader.list_active_interfaces():
        try:
            entries.append(ListingEntry(interface, snapshot=reader.snapshot(interface)))
        except ReadError as exc:
            logger.log(f"[WARN] {exc}")
            entries.append(ListingEntry(interface, error=str(exc)))
    return entries
