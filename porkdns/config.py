"""Configuration management for porkdns."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from porkdns.models import DesiredRecordSpec
from porkdns.providers.dns.porkbun import PorkbunProvider

CONFIG_FILENAMES = ("porkdns.yaml", "porkdns.yml")


class ProviderConfig(BaseModel):
    """Record API configuration."""

    max_retries: int = Field(default=3, ge=1)
    base_url: str = PorkbunProvider.BASE_URL


class PorkDNSConfig(BaseModel):
    """Main configuration for porkdns."""

    domain: str | None = None  # Default for records that omit their own
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    records: dict[str, DesiredRecordSpec] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def apply_default_domain(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        domain = data.get("domain")
        records = data.get("records") or {}
        if domain:
            records = {
                address: {"domain": domain, **spec} if isinstance(spec, dict) else spec
                for address, spec in records.items()
            }
        return {**data, "records": records}


class EnvironmentSettings(BaseSettings):
    """Environment variables for credentials and overrides."""

    model_config = SettingsConfigDict(env_prefix="PORKDNS_", env_file=".env", extra="ignore")

    api_key: str | None = None
    secret_api_key: str | None = None
    max_retries: int | None = Field(default=None, ge=1)


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find porkdns.yaml in current or parent directories."""
    search_path = start_path or Path.cwd()

    for path in [search_path, *search_path.parents]:
        for filename in CONFIG_FILENAMES:
            config_file = path / filename
            if config_file.exists():
                return config_file

    return None


def load_config(config_path: Path | None = None) -> PorkDNSConfig:
    """Load configuration from YAML file."""
    if config_path is None:
        config_path = find_config_file()

    if config_path is None or not config_path.exists():
        raise FileNotFoundError(
            "No porkdns.yaml found. Run 'porkdns init' to create one."
        )

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return PorkDNSConfig(**data)


def load_env_settings() -> EnvironmentSettings:
    """Load environment settings from .env and environment variables."""
    return EnvironmentSettings()


def get_max_retries(config: PorkDNSConfig, settings: EnvironmentSettings) -> int:
    """Attempt limit, with the environment taking precedence over the file."""
    if settings.max_retries is not None:
        return settings.max_retries
    return config.provider.max_retries


def get_project_root() -> Path:
    """Get the project root directory (where porkdns.yaml is located)."""
    config_file = find_config_file()
    if config_file:
        return config_file.parent
    return Path.cwd()


def dump_yaml(data: dict, stream=None) -> str | None:
    """Dump data to YAML keeping key order."""
    return yaml.dump(
        data,
        stream=stream,
        Dumper=yaml.SafeDumper,
        default_flow_style=False,
        sort_keys=False,
    )
