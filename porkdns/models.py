"""Declared and managed record models."""

from typing import Any

from pydantic import BaseModel, field_validator

from porkdns.providers.dns.base import Record


class DesiredRecordSpec(BaseModel):
    """A record as declared in porkdns.yaml."""

    name: str  # Subdomain fragment, empty string for the apex
    domain: str
    type: str
    content: str
    ttl: str | None = None  # Porkbun minimum is 600
    prio: str | None = None
    notes: str | None = None

    @field_validator("name", "content", "ttl", "prio", "notes", mode="before")
    @classmethod
    def stringify_scalars(cls, v: Any) -> Any:
        # YAML turns `ttl: 600` into an int, the API wants strings
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    def to_record(self) -> Record:
        """Build the request payload for create/edit calls."""
        return Record(
            name=self.name,
            type=self.type,
            content=self.content,
            ttl=self.ttl,
            prio=self.prio,
            notes=self.notes,
        )


class ManagedRecordState(DesiredRecordSpec):
    """A record as persisted in the state file."""

    id: str | None = None

    @classmethod
    def from_spec(cls, spec: DesiredRecordSpec, record_id: str | None) -> "ManagedRecordState":
        return cls(**spec.model_dump(exclude={"id"}), id=record_id)

    def to_spec(self) -> DesiredRecordSpec:
        return DesiredRecordSpec(**self.model_dump(exclude={"id"}))
