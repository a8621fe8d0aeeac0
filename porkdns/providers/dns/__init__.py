"""DNS provider implementations."""

from porkdns.providers.dns.base import (
    DNSProvider,
    Record,
    RecordAPIError,
    ServerError,
    StatusError,
)
from porkdns.providers.dns.porkbun import PorkbunProvider

__all__ = [
    "DNSProvider",
    "PorkbunProvider",
    "Record",
    "RecordAPIError",
    "ServerError",
    "StatusError",
]
