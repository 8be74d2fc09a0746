"""CLI entry point for school-permissions.

Invoked as::

    school-perms [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m school_permissions.cli.main

Commands
--------
- version   Show version information
- actions   List the module/action vocabulary
- check     Evaluate one access request against a permission document
- score     Show the access level and headline permissions of a document
- validate  Validate a permission document file
- init      Write a preset permission document
"""
from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from school_permissions.document.schema import PermissionDocument

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="school-permissions")
def cli() -> None:
    """School permissions CLI: inspect, check and score role permission documents."""


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from school_permissions import __version__

    console.print(
        Panel(
            f"[bold]school-permissions[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Role-based authorization policy engine for school management systems.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# actions
# ---------------------------------------------------------------------------


@cli.command(name="actions")
@click.option("--module", "-m", "module_name", default=None, help="Only list this module.")
def actions_command(module_name: str | None) -> None:
    """List the registered modules and their actions."""
    from school_permissions.policy.registry import actions_for, get_module, module_names

    if module_name is not None:
        spec = get_module(module_name)
        if spec is None:
            err_console.print(f"[red]Unknown module:[/red] {module_name}")
            sys.exit(1)
        names: tuple[str, ...] = (spec.name,)
    else:
        names = module_names()

    table = Table(title="Modules and Actions", box=box.SIMPLE)
    table.add_column("Module", style="cyan", no_wrap=True)
    table.add_column("Kind", style="magenta")
    table.add_column("Actions")
    for name in names:
        spec = get_module(name)
        kind = "crud" if spec is not None and spec.is_crud else "flat"
        table.add_row(name, kind, ", ".join(actions_for(name)))
    console.print(table)


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


def _load_document_or_exit(document_path: str) -> PermissionDocument:
    from school_permissions.document.loader import DocumentConfigError, DocumentLoader

    try:
        return DocumentLoader().load(document_path)
    except (DocumentConfigError, FileNotFoundError) as exc:
        err_console.print(f"[red]Invalid document:[/red] {exc}")
        sys.exit(1)


@cli.command(name="check")
@click.option(
    "--document",
    "-d",
    "document_path",
    default=None,
    type=click.Path(exists=True),
    help="Path to a permission document (.json, .yaml or .yml).",
)
@click.option(
    "--role",
    "-r",
    "role_code",
    default=None,
    help="Role code whose document path is taken from the engine config.",
)
@click.option("--module", "-m", "module_name", required=True, help="Module wire name, e.g. calificaciones.")
@click.option("--action", "-a", "action_name", required=True, help="Action wire name, e.g. ver.")
@click.option(
    "--at",
    "at",
    default=None,
    help="Request time in ISO-8601 (default: now), e.g. 2024-03-04T08:00:00.",
)
@click.option("--ip", default=None, help="Client IP address.")
@click.option("--device", "device_id", default=None, help="Device identifier.")
@click.option("--location", "location_id", default=None, help="Location identifier.")
@click.option(
    "--config",
    "-c",
    "config_path",
    default=None,
    type=click.Path(exists=True),
    help="Path to an engine config YAML.",
)
def check_command(
    document_path: str | None,
    role_code: str | None,
    module_name: str,
    action_name: str,
    at: str | None,
    ip: str | None,
    device_id: str | None,
    location_id: str | None,
    config_path: str | None,
) -> None:
    """Evaluate one access request against a permission document."""
    from school_permissions.config.loader import ConfigLoader
    from school_permissions.guard import AccessGuard
    from school_permissions.policy.evaluator import AccessRequest

    timestamp: datetime | None = None
    if at is not None:
        try:
            timestamp = datetime.fromisoformat(at)
        except ValueError as exc:
            err_console.print(f"[red]Invalid --at timestamp:[/red] {exc}")
            sys.exit(1)

    loader = ConfigLoader()
    config = loader.load(Path(config_path)) if config_path else loader.defaults()

    if (document_path is None) == (role_code is None):
        err_console.print("[red]Pass exactly one of --document or --role.[/red]")
        sys.exit(2)
    if role_code is not None:
        role_path = config.document_path(role_code)
        if role_path is None:
            err_console.print(f"[red]Role not configured:[/red] {role_code}")
            sys.exit(1)
        document_path = str(role_path)
    document = _load_document_or_exit(document_path)

    guard = AccessGuard(config=config)
    request = AccessRequest(
        module=module_name,
        action=action_name,
        timestamp=timestamp,
        ip=ip,
        device_id=device_id,
        location_id=location_id,
    )
    decision = guard.check(document, request, role_code=role_code.upper() if role_code else None)

    status_str = "[green]ALLOWED[/green]" if decision.allowed else "[red]DENIED[/red]"
    console.print(Panel(status_str, title="Access Check Result", border_style="blue"))
    if decision.failed_check:
        console.print(f"  Failed check: [bold red]{decision.failed_check}[/bold red]")
    console.print(f"  Reason: {decision.reason}")

    sys.exit(0 if decision.allowed else 1)


# ---------------------------------------------------------------------------
# score
# ---------------------------------------------------------------------------


@cli.command(name="score")
@click.option(
    "--document",
    "-d",
    "document_path",
    required=True,
    type=click.Path(exists=True),
    help="Path to a permission document.",
)
def score_command(document_path: str) -> None:
    """Show the access level and headline permissions of a document."""
    from school_permissions.policy.evaluator import granted_actions
    from school_permissions.policy.scorer import access_level, permission_summary

    document = _load_document_or_exit(document_path)

    console.print(
        Panel(
            f"Access level: [bold cyan]{access_level(document)}[/bold cyan]\n"
            f"Summary: {', '.join(permission_summary(document))}",
            title="Access Score",
            border_style="blue",
        )
    )

    granted = granted_actions(document)
    if not granted:
        console.print("[yellow]No actions granted.[/yellow]")
        return

    table = Table(title="Granted Actions", box=box.SIMPLE)
    table.add_column("Module", style="cyan", no_wrap=True)
    table.add_column("Actions")
    for module, actions in granted.items():
        table.add_row(module, ", ".join(actions))
    console.print(table)


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


@cli.command(name="validate")
@click.option(
    "--document",
    "-d",
    "document_path",
    required=True,
    type=click.Path(exists=True),
    help="Path to a permission document.",
)
@click.option("--strict", is_flag=True, default=False, help="Reject unknown top-level keys.")
def validate_command(document_path: str, strict: bool) -> None:
    """Validate a permission document file."""
    from school_permissions.document.loader import DocumentConfigError, DocumentLoader

    try:
        document = DocumentLoader(strict=strict).load(document_path)
    except DocumentConfigError as exc:
        err_console.print(f"[red]Invalid document:[/red] {exc}")
        sys.exit(1)

    schedule = document.restrictions.access_schedule
    console.print(f"[green]Valid[/green] permission document: [bold]{document_path}[/bold]")
    console.print(f"  Audit level: [cyan]{document.special_config.audit_level.value}[/cyan]")
    console.print(f"  Schedule active: [cyan]{schedule.active}[/cyan]")


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------


@cli.command(name="init")
@click.option(
    "--template",
    "-t",
    "template_name",
    default="profesor",
    show_default=True,
    help="Preset to write: admin_global, bibliotecario, coordinador, profesor or secretaria.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default="permissions.json",
    show_default=True,
    help="Output document path (.json, .yaml or .yml).",
)
def init_command(template_name: str, output: str) -> None:
    """Write a preset permission document."""
    from school_permissions.templates.role_templates import list_templates, write_template

    try:
        written = write_template(template_name, output)
    except KeyError:
        err_console.print(
            f"[red]Unknown template:[/red] {template_name}. "
            f"Available: {', '.join(list_templates())}"
        )
        sys.exit(1)

    console.print(f"[green]Initialised[/green] permission document: [bold]{written}[/bold]")
    console.print(f"  Template: [cyan]{template_name}[/cyan]")


if __name__ == "__main__":
    cli()
