"""Plan, apply, refresh, import and destroy managed records."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from porkdns.commands.records import get_dns_provider
from porkdns.config import (
    PorkDNSConfig,
    get_max_retries,
    get_project_root,
    load_config,
    load_env_settings,
)
from porkdns.diagnostics import Diagnostics, Severity
from porkdns.plan import Action, PlannedChange, build_plan
from porkdns.reconciler import RecordReconciler
from porkdns.state import StateFile, get_state_path, load_state, save_state

console = Console()

ACTION_STYLES = {
    Action.CREATE: "[green]+ create[/green]",
    Action.UPDATE: "[yellow]~ update[/yellow]",
    Action.REPLACE: "[magenta]± replace[/magenta]",
    Action.DELETE: "[red]- delete[/red]",
    Action.NOOP: "[dim]  no changes[/dim]",
}


def load_project() -> tuple[PorkDNSConfig, Path, StateFile]:
    """Load porkdns.yaml and the state file next to it."""
    try:
        config = load_config()
    except FileNotFoundError:
        console.print("[yellow]![/yellow] No porkdns.yaml found. Run 'porkdns init' first.")
        raise typer.Exit(1)

    state_path = get_state_path(get_project_root())
    try:
        state = load_state(state_path)
    except ValueError as e:
        console.print(f"[red]✗[/red] Could not read state: {e}")
        raise typer.Exit(1)

    return config, state_path, state


def get_reconciler(config: PorkDNSConfig) -> RecordReconciler:
    """Build a reconciler for the configured provider."""
    provider = get_dns_provider()
    return RecordReconciler(provider, get_max_retries(config, load_env_settings()))


def print_diagnostics(address: str, diagnostics: Diagnostics) -> None:
    """Print diagnostics for one record address."""
    for diagnostic in diagnostics:
        if diagnostic.severity is Severity.ERROR:
            console.print(f"[red]✗[/red] {address}: {diagnostic.summary}")
        else:
            console.print(f"[yellow]![/yellow] {address}: {diagnostic.summary}")
        if diagnostic.detail:
            console.print(f"  {diagnostic.detail}")


def render_plan(changes: list[PlannedChange]) -> Table:
    """Render planned changes as a table."""
    table = Table()
    table.add_column("Address")
    table.add_column("Action")
    table.add_column("Record")

    for change in changes:
        spec = change.desired or change.current
        name = f"{spec.name}.{spec.domain}" if spec.name else spec.domain
        table.add_row(
            change.address,
            ACTION_STYLES[change.action],
            f"{spec.type} {name} → {spec.content}",
        )

    return table


def _apply_change(
    reconciler: RecordReconciler, change: PlannedChange, state: StateFile
) -> Diagnostics:
    """Run the reconciler operations for one change and record the outcome in state."""
    if change.action is Action.CREATE:
        result = reconciler.create(change.desired)
        if result.state.id is not None:
            state.records[change.address] = result.state
        return result.diagnostics

    if change.action is Action.UPDATE:
        result = reconciler.update(change.current, change.desired)
        state.records[change.address] = result.state
        return result.diagnostics

    if change.action is Action.REPLACE:
        result = reconciler.delete(change.current)
        if result.diagnostics.has_error():
            return result.diagnostics
        del state.records[change.address]
        created = reconciler.create(change.desired)
        if created.state.id is not None:
            state.records[change.address] = created.state
        return Diagnostics([*result.diagnostics, *created.diagnostics])

    if change.action is Action.DELETE:
        result = reconciler.delete(change.current)
        if result.state is None:
            del state.records[change.address]
        return result.diagnostics

    return Diagnostics()


def plan() -> None:
    """Show the changes apply would make."""
    config, _, state = load_project()
    changes = build_plan(config.records, state)

    if not changes:
        console.print("No records declared.")
        return

    console.print(render_plan(changes))

    pending = [c for c in changes if c.action is not Action.NOOP]
    console.print(f"{len(pending)} change(s) pending.")


def apply(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Create, update and delete records to match porkdns.yaml."""
    config, state_path, state = load_project()
    changes = [c for c in build_plan(config.records, state) if c.action is not Action.NOOP]

    if not changes:
        console.print("[green]✓[/green] No changes. Records are up-to-date.")
        return

    console.print(render_plan(changes))
    if not yes:
        confirm = typer.confirm(f"Apply {len(changes)} change(s)?")
        if not confirm:
            raise typer.Abort()

    reconciler = get_reconciler(config)
    failed = False

    for change in changes:
        diagnostics = _apply_change(reconciler, change, state)
        save_state(state, state_path)
        print_diagnostics(change.address, diagnostics)
        if diagnostics.has_error():
            failed = True
        else:
            console.print(f"[green]✓[/green] {change.address}: {change.action.value}")

    if failed:
        raise typer.Exit(1)


def refresh() -> None:
    """Read every managed record back from the API."""
    config, state_path, state = load_project()

    if not state.records:
        console.print("No managed records.")
        return

    reconciler = get_reconciler(config)
    failed = False

    for address, current in list(state.records.items()):
        result = reconciler.read(current)
        state.records[address] = result.state
        print_diagnostics(address, result.diagnostics)
        if result.diagnostics.has_error():
            failed = True
        elif result.state != current:
            console.print(f"[yellow]~[/yellow] {address}: refreshed from remote")

    save_state(state, state_path)
    console.print(f"[green]✓[/green] Refreshed {len(state.records)} record(s)")

    if failed:
        raise typer.Exit(1)


def import_record(
    address: str = typer.Argument(..., help="Record address in porkdns.yaml"),
    record_id: str = typer.Argument(..., help="Porkbun record ID"),
) -> None:
    """Start managing an existing record."""
    config, state_path, state = load_project()

    declared = config.records.get(address)
    if declared is None:
        console.print(f"[red]✗[/red] Record '{address}' is not declared in porkdns.yaml")
        raise typer.Exit(1)
    if address in state.records:
        console.print(f"[red]✗[/red] Record '{address}' is already managed")
        raise typer.Exit(1)

    reconciler = get_reconciler(config)
    imported = reconciler.import_state(record_id)
    result = reconciler.read(imported.state.model_copy(update={"domain": declared.domain}))

    # A read that did not find the record leaves only the identifier behind
    if result.diagnostics:
        print_diagnostics(address, result.diagnostics)
        raise typer.Exit(1)

    state.records[address] = result.state
    save_state(state, state_path)
    console.print(f"[green]✓[/green] Imported {address} (ID {record_id})")


def destroy(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete every managed record."""
    config, state_path, state = load_project()

    if not state.records:
        console.print("No managed records.")
        return

    if not force:
        confirm = typer.confirm(f"Delete {len(state.records)} managed record(s)?")
        if not confirm:
            raise typer.Abort()

    reconciler = get_reconciler(config)
    failed = False

    for address, current in list(state.records.items()):
        result = reconciler.delete(current)
        if result.state is None:
            del state.records[address]
            console.print(f"[green]✓[/green] {address}: deleted")
        save_state(state, state_path)
        print_diagnostics(address, result.diagnostics)
        if result.diagnostics.has_error():
            failed = True

    if failed:
        raise typer.Exit(1)
