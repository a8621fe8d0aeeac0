"""Persisted state of managed records."""

import os
import tempfile
from pathlib import Path

from pydantic import BaseModel, Field

from porkdns.models import ManagedRecordState

STATE_FILENAME = "porkdns.state.json"
STATE_VERSION = 1


class StateFile(BaseModel):
    """Managed records keyed by their address in porkdns.yaml."""

    version: int = STATE_VERSION
    records: dict[str, ManagedRecordState] = Field(default_factory=dict)


def get_state_path(project_root: Path) -> Path:
    """Get the state file path for a project."""
    return project_root / STATE_FILENAME


def load_state(path: Path) -> StateFile:
    """Load the state file, or an empty state if there is none yet."""
    if not path.exists():
        return StateFile()
    state = StateFile.model_validate_json(path.read_text())
    if state.version != STATE_VERSION:
        raise ValueError(f"Unsupported state file version {state.version} in {path}")
    return state


def save_state(state: StateFile, path: Path) -> None:
    """Write the state file atomically."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(state.model_dump_json(indent=2))
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        os.unlink(tmp_name)
        raise
