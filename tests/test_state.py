"""Tests for the state file and the planner."""

import json
from pathlib import Path

import pytest

from porkdns.models import DesiredRecordSpec, ManagedRecordState
from porkdns.plan import Action, build_plan, diff_action
from porkdns.state import StateFile, get_state_path, load_state, save_state


class TestStateFile:
    """Tests for load_state() and save_state()."""

    def test_missing_file_is_empty_state(self, tmp_path: Path):
        """Test a missing state file loads as empty state."""
        state = load_state(tmp_path / "porkdns.state.json")

        assert state.version == 1
        assert state.records == {}

    def test_save_and_load(self, tmp_path: Path, www_state):
        """Test saved state loads back and leaves no temp file."""
        path = get_state_path(tmp_path)
        save_state(StateFile(records={"www": www_state}), path)

        loaded = load_state(path)

        assert loaded.records["www"] == www_state
        assert not list(tmp_path.glob("*.tmp"))

    def test_saved_file_is_json(self, tmp_path: Path, www_state):
        """Test the state file is plain JSON."""
        path = get_state_path(tmp_path)
        save_state(StateFile(records={"www": www_state}), path)

        data = json.loads(path.read_text())

        assert data["records"]["www"]["id"] == "1001"
        assert data["records"]["www"]["domain"] == "example.com"

    def test_unsupported_version(self, tmp_path: Path):
        """Test an unknown state version is rejected."""
        path = get_state_path(tmp_path)
        path.write_text('{"version": 99, "records": {}}')

        with pytest.raises(ValueError, match="Unsupported state file version"):
            load_state(path)


class TestPlan:
    """Tests for build_plan() and diff_action()."""

    def test_new_record_is_created(self, www_spec):
        """Test a declared record missing from state is planned as create."""
        changes = build_plan({"www": www_spec}, StateFile())

        assert len(changes) == 1
        assert changes[0].action is Action.CREATE
        assert changes[0].desired == www_spec

    def test_unchanged_record_is_noop(self, www_spec, www_state):
        """Test a matching record is planned as noop."""
        changes = build_plan({"www": www_spec}, StateFile(records={"www": www_state}))

        assert changes[0].action is Action.NOOP

    def test_changed_content_is_update(self, www_spec, www_state):
        """Test changed content is planned as update."""
        desired = www_spec.model_copy(update={"content": "4.3.2.1"})

        assert diff_action(desired, www_state) is Action.UPDATE

    def test_changed_domain_is_replace(self, www_spec, www_state):
        """Test a changed domain is planned as replace."""
        desired = www_spec.model_copy(update={"domain": "example.org"})

        assert diff_action(desired, www_state) is Action.REPLACE

    def test_state_without_id_is_create(self, www_spec):
        """Test a state entry without an ID is planned as create."""
        current = ManagedRecordState.from_spec(www_spec, None)

        assert diff_action(www_spec, current) is Action.CREATE

    def test_unset_optional_fields_ignore_remote_values(self):
        """Test unset optional fields do not cause an update."""
        desired = DesiredRecordSpec(name="www", domain="example.com", type="A", content="1.2.3.4")
        current = ManagedRecordState.from_spec(desired, "1001").model_copy(
            update={"ttl": "600", "notes": ""}
        )

        assert diff_action(desired, current) is Action.NOOP

    def test_dropped_record_is_deleted(self, www_state):
        """Test a record removed from config is planned as delete."""
        changes = build_plan({}, StateFile(records={"www": www_state}))

        assert changes[0].action is Action.DELETE
        assert changes[0].current == www_state
        assert changes[0].desired is None

    def test_deletions_come_last(self, www_spec, www_state):
        """Test deletes are ordered after other changes."""
        api = www_spec.model_copy(update={"name": "api"})
        changes = build_plan({"api": api}, StateFile(records={"www": www_state}))

        assert [c.action for c in changes] == [Action.CREATE, Action.DELETE]
