"""Diff declared records against the state file."""

from dataclasses import dataclass
from enum import Enum

from porkdns.models import DesiredRecordSpec, ManagedRecordState
from porkdns.state import StateFile


class Action(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    REPLACE = "replace"
    DELETE = "delete"
    NOOP = "noop"


@dataclass
class PlannedChange:
    address: str
    action: Action
    desired: DesiredRecordSpec | None = None
    current: ManagedRecordState | None = None


def diff_action(desired: DesiredRecordSpec, current: ManagedRecordState) -> Action:
    """Pick the action that brings ``current`` in line with ``desired``."""
    if current.id is None:
        return Action.CREATE
    # Record identifiers are scoped to their domain
    if current.domain != desired.domain:
        return Action.REPLACE
    if _differs(desired, current):
        return Action.UPDATE
    return Action.NOOP


def _differs(desired: DesiredRecordSpec, current: ManagedRecordState) -> bool:
    for key, value in desired.model_dump().items():
        # Unset optional fields take whatever the API defaults them to
        if value is not None and getattr(current, key) != value:
            return True
    return False


def build_plan(declared: dict[str, DesiredRecordSpec], state: StateFile) -> list[PlannedChange]:
    """Return changes for declared records, then deletions for dropped ones."""
    changes = []

    for address, desired in declared.items():
        current = state.records.get(address)
        if current is None:
            action = Action.CREATE
        else:
            action = diff_action(desired, current)
        changes.append(PlannedChange(address, action, desired=desired, current=current))

    for address, current in state.records.items():
        if address not in declared:
            changes.append(PlannedChange(address, Action.DELETE, current=current))

    return changes
