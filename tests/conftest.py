"""Shared test fixtures for porkdns tests."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import yaml
from typer.testing import CliRunner

from porkdns.config import EnvironmentSettings
from porkdns.models import DesiredRecordSpec, ManagedRecordState
from porkdns.providers.dns.base import DNSProvider, Record, StatusError


# ============================================================================
# Fake provider
# ============================================================================


class FakeDNSProvider(DNSProvider):
    """In-memory record API that stores fully-qualified names like Porkbun."""

    def __init__(self):
        self.records: dict[str, dict[str, Record]] = {}
        self.next_id = 1000
        self.calls: list[tuple] = []

    def ping(self) -> str:
        return "203.0.113.7"

    def add(self, domain: str, record: Record) -> Record:
        self.next_id += 1
        stored = Record(
            id=str(self.next_id),
            name=f"{record.name}.{domain}" if record.name else domain,
            type=record.type,
            content=record.content,
            ttl=record.ttl or "600",
            prio=record.prio or "0",
            notes=record.notes or "",
        )
        self.records.setdefault(domain, {})[stored.id] = stored
        return stored

    def create_record(self, domain: str, record: Record) -> int:
        self.calls.append(("create", domain, record))
        return int(self.add(domain, record).id)

    def retrieve_records(self, domain: str) -> list[Record]:
        self.calls.append(("retrieve", domain))
        return list(self.records.get(domain, {}).values())

    def edit_record(self, domain: str, record_id: int, record: Record) -> None:
        self.calls.append(("edit", domain, record_id, record))
        existing = self.records.get(domain, {}).get(str(record_id))
        if existing is None:
            raise StatusError("ERROR", "Edit error: Could not edit record.")
        self.records[domain][str(record_id)] = Record(
            id=existing.id,
            name=f"{record.name}.{domain}" if record.name else domain,
            type=record.type,
            content=record.content,
            ttl=record.ttl or existing.ttl,
            prio=record.prio or existing.prio,
            notes=record.notes or "",
        )

    def delete_record(self, domain: str, record_id: int) -> None:
        self.calls.append(("delete", domain, record_id))
        if self.records.get(domain, {}).pop(str(record_id), None) is None:
            raise StatusError("ERROR", "Delete error: Invalid record ID.")


@pytest.fixture
def fake_provider() -> FakeDNSProvider:
    """Provide an empty in-memory record API."""
    return FakeDNSProvider()


# ============================================================================
# CLI Fixtures
# ============================================================================


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


# ============================================================================
# Project Directory Fixtures
# ============================================================================


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch) -> Path:
    """Create a temporary project directory with porkdns.yaml."""
    config_data = {
        "domain": "example.com",
        "provider": {"max_retries": 2},
        "records": {
            "www": {
                "name": "www",
                "type": "A",
                "content": "1.2.3.4",
                "ttl": 600,
            },
            "mail": {
                "name": "",
                "type": "MX",
                "content": "mx.example.net",
                "prio": 10,
            },
        },
    }

    config_file = tmp_path / "porkdns.yaml"
    with open(config_file, "w") as f:
        yaml.dump(config_data, f)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ============================================================================
# Mock Fixtures - Environment Settings
# ============================================================================


@pytest.fixture
def mock_env_settings():
    """Mock environment settings with test credentials."""
    settings = EnvironmentSettings(
        api_key="pk1_test",
        secret_api_key="sk1_test",
    )
    # Patch in multiple modules where load_env_settings is imported
    with patch("porkdns.config.load_env_settings", return_value=settings):
        with patch("porkdns.commands.records.load_env_settings", return_value=settings):
            with patch("porkdns.commands.apply.load_env_settings", return_value=settings):
                yield settings


@pytest.fixture
def mock_env_settings_missing_keys():
    """Mock environment settings without API credentials."""
    settings = EnvironmentSettings(api_key=None, secret_api_key=None)
    with patch("porkdns.config.load_env_settings", return_value=settings):
        with patch("porkdns.commands.records.load_env_settings", return_value=settings):
            with patch("porkdns.commands.apply.load_env_settings", return_value=settings):
                yield settings


@pytest.fixture
def mock_httpx_client():
    """Mock httpx.Client for API calls."""
    with patch("httpx.Client") as mock_client_class:
        mock_client = MagicMock()
        mock_client_class.return_value = mock_client
        yield mock_client


@pytest.fixture
def use_fake_provider(fake_provider, mock_env_settings):
    """Route CLI commands to the in-memory provider."""
    with patch("porkdns.commands.apply.get_dns_provider", return_value=fake_provider):
        with patch("porkdns.commands.records.get_dns_provider", return_value=fake_provider):
            yield fake_provider


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def www_spec() -> DesiredRecordSpec:
    """Provide a declared www A record."""
    return DesiredRecordSpec(
        name="www",
        domain="example.com",
        type="A",
        content="1.2.3.4",
        ttl="600",
    )


@pytest.fixture
def www_state(www_spec) -> ManagedRecordState:
    """Provide managed state for the www record."""
    return ManagedRecordState.from_spec(www_spec, "1001")
