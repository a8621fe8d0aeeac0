"""Create/Read/Update/Delete/Import operations for managed DNS records.

Every operation returns an OperationResult instead of raising: API failures,
exhausted retries and malformed identifiers all become error diagnostics so
the caller can carry on with other records.
"""

import logging
import re
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from porkdns.diagnostics import Diagnostics
from porkdns.models import DesiredRecordSpec, ManagedRecordState
from porkdns.names import normalize_name
from porkdns.providers.dns.base import DNSProvider
from porkdns.retry import RetryError, RetryPolicy, retry

logger = logging.getLogger(__name__)

T = TypeVar("T")

RECORD_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass
class OperationResult:
    """State handed back to the caller, ``None`` once a record is deleted."""

    state: ManagedRecordState | None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def parse_record_id(record_id: str | None) -> int:
    """Convert a stored identifier to the integer the API expects."""
    if record_id is None:
        raise ValueError("record has no identifier")
    if not RECORD_ID_PATTERN.fullmatch(record_id):
        raise ValueError(f"invalid record identifier: {record_id!r}")
    return int(record_id)


class RecordReconciler:
    """Reconciles declared records against the record API."""

    def __init__(
        self,
        provider: DNSProvider,
        max_retries: int,
        *,
        cancel: threading.Event | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.provider = provider
        self.max_retries = max_retries
        # Frozen, so the same policy is safe to share across calls
        self.policy = RetryPolicy(max_attempts=max_retries)
        self.cancel = cancel
        self.sleep = sleep

    def _retry(self, operation: Callable[[], T]) -> T:
        return retry(operation, self.policy, cancel=self.cancel, sleep=self.sleep)

    def create(self, spec: DesiredRecordSpec) -> OperationResult:
        result = OperationResult(state=ManagedRecordState.from_spec(spec, None))
        record = spec.to_record()

        try:
            record_id = self._retry(lambda: self.provider.create_record(spec.domain, record))
        except RetryError as e:
            result.diagnostics.add_error("Error creating DNS Record", f"Error: {e}")
            return result

        logger.info("Created %s record %s on %s", spec.type, record_id, spec.domain)
        result.state = ManagedRecordState.from_spec(spec, str(record_id))
        return result

    def read(self, state: ManagedRecordState) -> OperationResult:
        """Refresh ``state`` from the remote record with the same identifier.

        A record that is gone remotely leaves the state untouched and adds a
        warning; recreating it is left to the operator.
        """
        result = OperationResult(state=state)

        try:
            records = self._retry(lambda: self.provider.retrieve_records(state.domain))
        except RetryError as e:
            result.diagnostics.add_error(
                f"Could not retrieve records for {state.domain}.", f"Error: {e}"
            )
            return result

        logger.debug("Found %d records on %s", len(records), state.domain)
        for record in records:
            if state.id is not None and record.id == state.id:
                result.state = state.model_copy(
                    update={
                        "content": record.content,
                        "name": normalize_name(record.name, state.domain),
                        "notes": record.notes,
                        "ttl": record.ttl,
                        "type": record.type,
                    }
                )
                return result

        result.diagnostics.add_warning(
            f"Record {state.id} not found on {state.domain}",
            "The record may have been deleted outside porkdns; state was left unchanged.",
        )
        return result

    def update(self, state: ManagedRecordState, spec: DesiredRecordSpec) -> OperationResult:
        result = OperationResult(state=state)

        try:
            record_id = parse_record_id(state.id)
        except ValueError as e:
            result.diagnostics.add_error("Error converting ID to an integer", f"Error: {e}")
            return result

        record = spec.to_record()
        try:
            self._retry(lambda: self.provider.edit_record(spec.domain, record_id, record))
        except RetryError as e:
            result.diagnostics.add_error("Error updating the record", f"Error {e}")
            return result

        logger.info("Updated record %s on %s", state.id, spec.domain)
        result.state = ManagedRecordState.from_spec(spec, state.id)
        return result

    def delete(self, state: ManagedRecordState) -> OperationResult:
        result = OperationResult(state=state)

        try:
            record_id = parse_record_id(state.id)
        except ValueError as e:
            result.diagnostics.add_error("Error converting ID to an integer", f"Error: {e}")
            return result

        try:
            self._retry(lambda: self.provider.delete_record(state.domain, record_id))
        except RetryError as e:
            result.diagnostics.add_error("Error deleting record", f"Error: {e}")
            return result

        logger.info("Deleted record %s on %s", state.id, state.domain)
        result.state = None
        return result

    def import_state(self, identifier: str) -> OperationResult:
        """Start tracking an existing record; a Read fills in the rest."""
        return OperationResult(
            state=ManagedRecordState(id=identifier, name="", domain="", type="", content="")
        )
