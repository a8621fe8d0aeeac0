"""Abstract base class and failure types for DNS record providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Record:
    """A DNS record as sent to or returned by the record API.

    The API is string-typed throughout, so ``ttl`` and ``prio`` stay strings.
    ``name`` is the subdomain fragment on the way in and the fully-qualified
    name on the way out.
    """

    name: str
    type: str
    content: str
    id: str = ""
    ttl: str | None = None
    prio: str | None = None
    notes: str | None = None

    def to_payload(self) -> dict[str, str]:
        """Build the request body fields for create/edit calls."""
        payload = {
            "name": self.name,
            "type": self.type,
            "content": self.content,
        }
        for key in ("ttl", "prio", "notes"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Record":
        """Build a record from one entry of a retrieve response."""
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            type=data.get("type") or "",
            content=data.get("content") or "",
            ttl=_optional_str(data.get("ttl")),
            prio=_optional_str(data.get("prio")),
            notes=data.get("notes") or "",
        )


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


class RecordAPIError(Exception):
    """Base class for failures reported by the record API."""


class StatusError(RecordAPIError):
    """The API answered, but its ``status`` field was not ``SUCCESS``."""

    def __init__(self, status: str, message: str = ""):
        self.status = status
        self.message = message
        super().__init__(f"status: {status}, message: {message}")


class ServerError(RecordAPIError):
    """The API answered with a non-200 HTTP status code."""

    def __init__(self, status_code: int, message: str = ""):
        self.status_code = status_code
        self.message = message
        super().__init__(f"status code: {status_code}, message: {message}")


class DNSProvider(ABC):
    """Abstract DNS record provider interface."""

    @abstractmethod
    def create_record(self, domain: str, record: Record) -> int:
        """Create a DNS record.

        Args:
            domain: The parent domain (e.g., "example.com")
            record: The record to create, ``name`` being the subdomain fragment

        Returns:
            The identifier assigned to the new record
        """
        pass

    @abstractmethod
    def retrieve_records(self, domain: str) -> list[Record]:
        """List all DNS records for a domain.

        Args:
            domain: The parent domain (e.g., "example.com")

        Returns:
            Records with fully-qualified names
        """
        pass

    @abstractmethod
    def edit_record(self, domain: str, record_id: int, record: Record) -> None:
        """Replace the fields of an existing record.

        Args:
            domain: The parent domain (e.g., "example.com")
            record_id: The identifier of the record to edit
            record: The new record fields
        """
        pass

    @abstractmethod
    def delete_record(self, domain: str, record_id: int) -> None:
        """Delete a record.

        Args:
            domain: The parent domain (e.g., "example.com")
            record_id: The identifier of the record to delete
        """
        pass
