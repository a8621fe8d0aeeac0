"""Porkbun DNS provider implementation."""

from typing import Any

import httpx

from porkdns.providers.dns.base import (
    DNSProvider,
    Record,
    ServerError,
    StatusError,
)

SUCCESS = "SUCCESS"


class PorkbunProvider(DNSProvider):
    """DNS provider implementation for the Porkbun JSON API (v3)."""

    BASE_URL = "https://api.porkbun.com/api/json/v3"

    def __init__(self, api_key: str, secret_api_key: str, base_url: str | None = None):
        """Initialize Porkbun provider.

        Args:
            api_key: Porkbun API key
            secret_api_key: Porkbun secret API key
            base_url: Override for the API endpoint (default: BASE_URL)
        """
        self.api_key = api_key
        self.secret_api_key = secret_api_key
        self.client = httpx.Client(
            base_url=base_url or self.BASE_URL,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            timeout=30.0,
        )

    def _post(self, path: str, body: dict[str, Any] | None = None) -> dict[str, Any]:
        """POST an authenticated request and return the decoded body.

        Raises:
            ServerError: The HTTP status was not 200.
            StatusError: The body reported a status other than SUCCESS.
        """
        payload = {
            "apikey": self.api_key,
            "secretapikey": self.secret_api_key,
            **(body or {}),
        }
        response = self.client.post(path, json=payload)

        if response.status_code != 200:
            raise ServerError(response.status_code, response.text)

        data = response.json()
        if data.get("status") != SUCCESS:
            raise StatusError(data.get("status", ""), data.get("message", ""))

        return data

    def ping(self) -> str:
        """Check the credentials and return the caller's public IP."""
        data = self._post("/ping")
        return data.get("yourIp", "")

    def create_record(self, domain: str, record: Record) -> int:
        """Create a DNS record and return its identifier."""
        data = self._post(f"/dns/create/{domain}", record.to_payload())
        return int(data["id"])

    def retrieve_records(self, domain: str) -> list[Record]:
        """List all DNS records for a domain."""
        data = self._post(f"/dns/retrieve/{domain}")
        return [Record.from_api(item) for item in data.get("records", [])]

    def edit_record(self, domain: str, record_id: int, record: Record) -> None:
        """Edit a DNS record by identifier."""
        self._post(f"/dns/edit/{domain}/{record_id}", record.to_payload())

    def delete_record(self, domain: str, record_id: int) -> None:
        """Delete a DNS record by identifier."""
        self._post(f"/dns/delete/{domain}/{record_id}")
