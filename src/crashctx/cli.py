# src/crashctx/cli.py
"""
crashctx Command Line Interface (CLI).

Developer tooling for looking at crash-context snapshots pulled off a device
or out of a crash report, built with `typer` and `rich`.

Features
--------
- **Inspect**: decode a snapshot file and render its four slots.
- **Normalize**: decode and re-encode a snapshot into its canonical bytes
  (sorted keys, compact separators), useful before diffing two snapshots.

Usage
-----
    $ crashctx inspect artifacts/crash/context.json
    $ crashctx normalize context.json --output canonical.json
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from crashctx.core.context import CrashContext
from crashctx.core.errors import DecodeError, format_path
from crashctx.core.snapshot import restore_snapshot
from crashctx.core.values import SelfDescribingValue, unwrap

load_dotenv()

app = typer.Typer(
    help="crashctx: inspect and normalize crash-context snapshots.",
    rich_markup_mode="markdown",
)
console = Console()


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _restore_or_exit(path: Path) -> CrashContext:
    """Decode ``path`` or print a red error panel and exit with code 1."""
    result = restore_snapshot(path.read_bytes())
    if result.is_err():
        error: DecodeError = result.unwrap_err()
        console.print(
            Panel(
                f"{type(error).__name__}: {escape(error.message)}\n"
                f"at [bold]{escape(format_path(error.path))}[/bold]",
                title="Decode Error",
                border_style="red",
            )
        )
        raise typer.Exit(code=1)
    return result.unwrap()


def _attributes_table(title: str, attributes: dict[str, SelfDescribingValue]) -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("Attribute", style="cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Value")
    for name, value in sorted(attributes.items()):
        table.add_row(escape(name), value.kind.value, escape(repr(unwrap(value))))
    return table


def _render_context(context: CrashContext) -> None:
    console.print(f"Tracking consent: [bold]{context.last_tracking_consent.value}[/bold]")

    view = context.view_event
    if view is None:
        console.print("Last view event: [dim]none[/dim]")
    else:
        model = view.model
        console.print(
            f"Last view event: [bold]{model.view.name or model.view.url}[/bold] "
            f"(session {model.session.id}, document v{model.dd.document_version})"
        )
        console.print(_attributes_table("View attributes", view.attributes))
        console.print(_attributes_table("User attributes on view", view.user_info_attributes))

    user = context.last_user_info
    if user is None:
        console.print("Last user info: [dim]none[/dim]")
    else:
        console.print(f"Last user info: id={user.id!r} name={user.name!r} email={user.email!r}")
        if context.user_info is not None:
            console.print(_attributes_table("User extra info", context.user_info.extra_info))

    network = context.last_network_connection_info
    if network is None:
        console.print("Last network info: [dim]none[/dim]")
    else:
        console.print(
            f"Last network info: reachability={network.reachability.value} "
            f"interfaces={escape(str(network.available_interfaces))} "
            f"ipv4={network.supports_ipv4} ipv6={network.supports_ipv6} "
            f"expensive={network.is_expensive} constrained={network.is_constrained}"
        )


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def inspect(
    snapshot: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Path to an encoded crash-context snapshot.",
        ),
    ],
) -> None:
    """Decode a snapshot and print what the app looked like."""
    console.print(
        Panel.fit(
            f"[bold cyan]crashctx inspect[/bold cyan]\nLoading: [u]{snapshot.name}[/u]",
            border_style="cyan",
        )
    )
    _render_context(_restore_or_exit(snapshot))


@app.command()  # type: ignore[misc]
def normalize(
    snapshot: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Path to an encoded crash-context snapshot.",
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write canonical bytes here instead of stdout."),
    ] = None,
) -> None:
    """Re-encode a snapshot into its canonical byte form."""
    data = _restore_or_exit(snapshot).to_bytes()
    if output is None:
        typer.echo(data.decode("utf-8"))
        return
    output.write_bytes(data)
    console.print(f"[dim]Canonical snapshot written to: {output}[/dim]")


if __name__ == "__main__":
    app()
