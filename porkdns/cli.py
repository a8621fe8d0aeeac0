"""CLI entry point for porkdns."""

from pathlib import Path

import typer
from rich.console import Console

from porkdns import __version__
from porkdns.commands import apply, records
from porkdns.config import dump_yaml
from porkdns.log import configure_logging

app = typer.Typer(
    name="porkdns",
    help="Declarative DNS records for Porkbun.",
    no_args_is_help=True,
)
console = Console()

# Register sub-commands
app.add_typer(records.app, name="records", help="Inspect remote DNS records")


@app.command()
def init(
    domain: str = typer.Option(..., prompt="Enter your domain", help="Your domain name"),
) -> None:
    """Initialize a new porkdns project."""
    config_path = Path.cwd() / "porkdns.yaml"

    if config_path.exists():
        overwrite = typer.confirm("porkdns.yaml already exists. Overwrite?")
        if not overwrite:
            raise typer.Abort()

    config = {
        "domain": domain,
        "provider": {"max_retries": 3},
        "records": {
            "apex": {
                "name": "",
                "type": "A",
                "content": "192.0.2.1",
                "ttl": "600",
            },
            "www": {
                "name": "www",
                "type": "CNAME",
                "content": domain,
                "ttl": "600",
            },
        },
    }

    with open(config_path, "w") as f:
        dump_yaml(config, f)

    env_example_path = Path.cwd() / ".env.example"
    env_content = """# porkdns Environment Variables
# Copy this to .env and fill in your credentials
# API access must be enabled for the domain in the Porkbun dashboard

PORKDNS_API_KEY=pk1_your-api-key
PORKDNS_SECRET_API_KEY=sk1_your-secret-api-key

# Optional: override provider.max_retries from porkdns.yaml
# PORKDNS_MAX_RETRIES=5
"""
    with open(env_example_path, "w") as f:
        f.write(env_content)

    gitignore_path = Path.cwd() / ".gitignore"
    if not gitignore_path.exists():
        gitignore_path.write_text("# porkdns\n.env\n")
    elif ".env" not in gitignore_path.read_text().splitlines():
        with open(gitignore_path, "a") as f:
            f.write("\n# porkdns\n.env\n")

    console.print("[green]✓[/green] Created porkdns.yaml")
    console.print("[green]✓[/green] Created .env.example")
    console.print("[green]✓[/green] Created/updated .gitignore")
    console.print()
    console.print("Next steps:")
    console.print("  1. Copy .env.example to .env and fill in your API keys")
    console.print("  2. Run [bold]porkdns ping[/bold] to check the credentials")
    console.print("  3. Edit porkdns.yaml to declare your records")
    console.print("  4. Run [bold]porkdns plan[/bold], then [bold]porkdns apply[/bold]")


@app.command()
def version() -> None:
    """Show the porkdns version."""
    console.print(f"porkdns v{__version__}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """porkdns - Declarative DNS records for Porkbun."""
    configure_logging(verbose=verbose)


# Record lifecycle commands live at root level
app.command(name="ping")(records.ping)
app.command(name="plan")(apply.plan)
app.command(name="apply")(apply.apply)
app.command(name="refresh")(apply.refresh)
app.command(name="import")(apply.import_record)
app.command(name="destroy")(apply.destroy)

if __name__ == "__main__":
    app()
