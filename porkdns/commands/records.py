"""Remote record commands."""

import typer
from rich.console import Console
from rich.table import Table

from porkdns.config import get_max_retries, load_config, load_env_settings
from porkdns.providers.dns.porkbun import PorkbunProvider
from porkdns.retry import RetryError, RetryPolicy, retry

app = typer.Typer()
console = Console()


def get_dns_provider() -> PorkbunProvider:
    """Get the Porkbun provider from configuration and credentials."""
    config = load_config()
    settings = load_env_settings()

    if not settings.api_key or not settings.secret_api_key:
        console.print("[red]✗[/red] Porkbun credentials not configured")
        console.print("  Set PORKDNS_API_KEY and PORKDNS_SECRET_API_KEY")
        raise typer.Exit(1)

    return PorkbunProvider(
        api_key=settings.api_key,
        secret_api_key=settings.secret_api_key,
        base_url=config.provider.base_url,
    )


def get_retry_policy() -> RetryPolicy:
    """Retry policy for one-off commands."""
    return RetryPolicy(max_attempts=get_max_retries(load_config(), load_env_settings()))


@app.command("list")
def list_records(
    domain: str | None = typer.Argument(None, help="Domain to list (default: domain from porkdns.yaml)"),
) -> None:
    """List all DNS records for a domain."""
    config = load_config()
    domain = domain or config.domain
    if not domain:
        console.print("[red]✗[/red] No domain given and none set in porkdns.yaml")
        raise typer.Exit(1)

    provider = get_dns_provider()

    console.print(f"[bold]DNS records for {domain}[/bold]")

    try:
        records = retry(lambda: provider.retrieve_records(domain), get_retry_policy())
    except RetryError as e:
        console.print(f"[red]✗[/red] Failed to list records: {e}")
        raise typer.Exit(1)

    table = Table()
    table.add_column("ID")
    table.add_column("Type")
    table.add_column("Name")
    table.add_column("Content")
    table.add_column("TTL")

    for record in records:
        table.add_row(
            record.id,
            record.type,
            record.name,
            record.content,
            record.ttl or "-",
        )

    console.print(table)


def ping() -> None:
    """Check the configured Porkbun credentials."""
    provider = get_dns_provider()

    try:
        ip = retry(provider.ping, get_retry_policy())
    except RetryError as e:
        console.print(f"[red]✗[/red] Ping failed: {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Credentials OK (your IP: {ip})")
