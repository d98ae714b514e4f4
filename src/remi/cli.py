"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.console import Console
from rich.table import Table

from remi.di import Container, create_container
from remi.domain.models import Nook
from remi.errors import RemiError
from remi.gui.services.hotkey_service import HotkeyService
from remi.gui.utils.console_logger import VERBOSE_FORMAT, ensure_console_logger
from remi.gui.viewmodels.nook_list_viewmodel import NookListViewModel

app = typer.Typer(help="Keep a sorted list of nooks and jump between them")
console = Console()


class _Session:
    """Per-invocation wiring: the container plus errors reported by the view model."""

    def __init__(self, container: Container) -> None:
        self.container = container
        self.errors: list[str] = []
        self._view_model: Optional[NookListViewModel] = None

    @property
    def view_model(self) -> NookListViewModel:
        if self._view_model is None:
            self._view_model = self.container.resolve(NookListViewModel)
            self._view_model.error_occurred.connect(self.errors.append)
        return self._view_model

    def fail(self, fallback: str) -> None:
        message = self.errors[-1] if self.errors else fallback
        typer.echo(f"Error: {message}", err=True)
        raise typer.Exit(1)


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except RemiError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _session(ctx: typer.Context) -> _Session:
    return ctx.obj


def _find_by_name(view_model: NookListViewModel, name: str) -> Nook:
    folded = name.casefold()
    for nook in view_model.nooks:
        if nook.name.casefold() == folded:
            return nook
    typer.echo(f"Error: No nook named '{name}'", err=True)
    raise typer.Exit(1)


def _describe(nook: Optional[Nook]) -> str:
    return nook.name if nook is not None else "nothing"


@app.callback()
def main(
    ctx: typer.Context,
    db: Optional[Path] = typer.Option(None, "--db", help="Nook database file"),
    settings: Optional[Path] = typer.Option(None, "--settings", help="Settings JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log to stderr"),
) -> None:
    if verbose:
        ensure_console_logger(
            logging.getLogger("remi"), "remi-cli", level=logging.DEBUG, fmt=VERBOSE_FORMAT
        )
    ctx.obj = _Session(create_container(db_path=db, settings_path=settings))


@app.command("list")
@_handle_errors
def list_nooks(
    ctx: typer.Context,
    filter_text: str = typer.Option("", "--filter", "-f", help="Only show names containing this text"),
) -> None:
    """List nooks in name order; the selected one is starred."""

    view_model = _session(ctx).view_model
    view_model.set_filter_text(filter_text)
    visible = view_model.visible_nooks()
    if not visible:
        print("[yellow]No nooks" + (f" matching '{filter_text}'" if filter_text else ""))
        return

    selected_index = view_model.selected_index()
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("")
    table.add_column("Name")
    table.add_column("URL", style="dim")
    for position, nook in enumerate(visible):
        marker = "*" if position == selected_index else ""
        table.add_row(str(position + 1), marker, nook.name, nook.url)
    console.print(table)


@app.command()
@_handle_errors
def create(ctx: typer.Context, name: str) -> None:
    """Create a nook, or select the existing one with the same name."""

    session = _session(ctx)
    view_model = session.view_model
    count_before = len(view_model.nooks)
    nook = view_model.create(name)
    if nook is None:
        session.fail(f"Could not create nook '{name}'")
    if len(view_model.nooks) == count_before:
        print(f"[yellow]Nook '{nook.name}' already exists; selected it")
    else:
        print(f"[green]Created nook '{nook.name}'")


@app.command()
@_handle_errors
def rename(ctx: typer.Context, name: str, new_name: str) -> None:
    """Rename a nook."""

    session = _session(ctx)
    nook = _find_by_name(session.view_model, name)
    renamed = session.view_model.rename(nook, new_name)
    if renamed is None:
        session.fail(f"Could not rename nook '{name}'")
    print(f"[green]Renamed '{nook.name}' to '{renamed.name}'")


@app.command()
@_handle_errors
def delete(ctx: typer.Context, name: str) -> None:
    """Delete a nook."""

    session = _session(ctx)
    nook = _find_by_name(session.view_model, name)
    if not session.view_model.delete(nook):
        session.fail(f"Could not delete nook '{name}'")
    print(f"[green]Deleted nook '{nook.name}'")


@app.command()
@_handle_errors
def select(
    ctx: typer.Context,
    position: int = typer.Argument(..., help="1-based position in the (filtered) list"),
    filter_text: str = typer.Option("", "--filter", "-f"),
) -> None:
    """Select the nook at a list position, like the index hotkeys do."""

    view_model = _session(ctx).view_model
    view_model.set_filter_text(filter_text)
    if not view_model.select_by_index(position - 1):
        typer.echo(f"Error: No nook at position {position}", err=True)
        raise typer.Exit(1)
    print(f"[green]Selected '{_describe(view_model.selected)}'")


@app.command("next")
@_handle_errors
def select_next(
    ctx: typer.Context,
    filter_text: str = typer.Option("", "--filter", "-f"),
) -> None:
    """Select the following nook, wrapping around at the end."""

    view_model = _session(ctx).view_model
    view_model.set_filter_text(filter_text)
    view_model.select_next()
    print(f"Selected '{_describe(view_model.selected)}'")


@app.command("previous")
@_handle_errors
def select_previous(
    ctx: typer.Context,
    filter_text: str = typer.Option("", "--filter", "-f"),
) -> None:
    """Select the preceding nook, wrapping around at the start."""

    view_model = _session(ctx).view_model
    view_model.set_filter_text(filter_text)
    view_model.select_previous()
    print(f"Selected '{_describe(view_model.selected)}'")


@app.command()
@_handle_errors
def current(ctx: typer.Context) -> None:
    """Show the last viewed nook."""

    selected = _session(ctx).view_model.selected
    if selected is None:
        print("No nook selected")
        return
    print(f"{selected.name}  [dim]{selected.url}")


@app.command()
@_handle_errors
def hotkeys(ctx: typer.Context) -> None:
    """Show the configured hotkeys."""

    service = _session(ctx).container.resolve(HotkeyService)
    table = Table(show_header=True, header_style="bold")
    table.add_column("Hotkey")
    table.add_column("Action")
    for sequence, binding in service.bindings.items():
        action = f"select #{binding.index + 1}" if binding.index is not None else binding.action
        table.add_row(sequence, action)
    console.print(table)


if __name__ == "__main__":  # pragma: no cover
    app()
