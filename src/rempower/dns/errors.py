"""Exceptions raised by the DNS probes and writer."""

from __future__ import annotations


class DnsError(Exception):
    """Base class for DNS configuration failures."""


class EnumerationError(DnsError):
    """The active network services could not be listed."""


class ReadError(DnsError):
    """A resolver query failed or returned output that could not be parsed."""


class WriteError(DnsError):
    """The OS rejected a DNS configuration change."""


class PrivilegeError(WriteError):
    """Elevated privileges were denied or could not be obtained."""
