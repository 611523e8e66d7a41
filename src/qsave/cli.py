"""qsave CLI: named text snippets in a local SQLite file.

Commands:
    qsave add NAME         write a new query in $EDITOR and save it
    qsave edit NAME        edit an existing query in $EDITOR
    qsave show NAME        print a query and copy it to the clipboard
    qsave search TERM      print queries whose body contains TERM
    qsave list             list saved query names
    qsave delete NAME      delete a query
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from qsave import clipboard, editor
from qsave.clipboard import ClipboardError
from qsave.config import QSaveConfig, load_config
from qsave.editor import EditorError
from qsave.models import is_blank
from qsave.store import QueryStore, QueryStoreError, open_store

logger = logging.getLogger("qsave.cli")

USAGE = "Usage: qsave [add|edit|show|list|search|delete] [args]"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _QSaveGroup(click.Group):
    """Group that answers an unknown subcommand with the usage line and exit 0."""

    def resolve_command(self, ctx: click.Context, args: list[str]):
        if args and self.get_command(ctx, args[0]) is None and not args[0].startswith("-"):
            click.echo(USAGE)
            ctx.exit(0)
        return super().resolve_command(ctx, args)


def _store(ctx: click.Context) -> QueryStore:
    return ctx.find_object(QueryStore)


def _config(ctx: click.Context) -> QSaveConfig:
    return ctx.find_root().meta["qsave.config"]


def _required(value: str | None, hint: str) -> str:
    if value is None:
        raise click.UsageError(hint)
    return value


def _edit_text(ctx: click.Context, initial: str) -> str:
    try:
        return editor.edit(initial, editor=_config(ctx).editor)
    except EditorError as exc:
        raise click.ClickException(f"Could not edit query, error: {exc}") from exc


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group(cls=_QSaveGroup, invoke_without_command=True)
@click.version_option(package_name="qsave")
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Database file (default: $QSAVE_DB or ~/qsave.db)",
)
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr")
@click.pass_context
def cli(ctx: click.Context, db_path: Path | None, verbose: bool) -> None:
    """qsave: save and recall named queries."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(message)s")

    if ctx.invoked_subcommand is None:
        click.echo(USAGE)
        return

    try:
        cfg = load_config()
    except (ValueError, RuntimeError) as exc:
        raise click.ClickException(str(exc)) from exc
    if db_path is not None:
        cfg.db_path = db_path
    logger.debug("config: %s, db: %s", cfg.source or "defaults", cfg.db_path)
    ctx.meta["qsave.config"] = cfg

    try:
        ctx.obj = ctx.with_resource(open_store(cfg.db_path))
    except QueryStoreError as exc:
        raise click.ClickException(str(exc)) from exc


# ---------------------------------------------------------------------------
# qsave add / edit
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("name", required=False)
@click.pass_context
def add(ctx: click.Context, name: str | None) -> None:
    """Write a new query in the editor and save it as NAME."""
    name = _required(name, "Please provide a name for the query")
    store = _store(ctx)

    body = _edit_text(ctx, "")
    if is_blank(body):
        click.echo("Editor was empty, please type a query to save it")
        return

    try:
        store.insert(name, body)
    except QueryStoreError as exc:
        raise click.ClickException(f"could not execute insert: {exc}") from exc
    click.echo("Query saved successfully!")


@cli.command("edit")
@click.argument("name", required=False)
@click.pass_context
def edit_cmd(ctx: click.Context, name: str | None) -> None:
    """Open query NAME in the editor and save the changes."""
    name = _required(name, "Please provide a name for the query to edit")
    store = _store(ctx)

    try:
        query = store.require(name)
    except QueryStoreError as exc:
        raise click.ClickException(str(exc)) from exc

    body = _edit_text(ctx, query.body)
    if is_blank(body):
        click.echo("Query body was empty, if you want to delete a query use the delete command")
        return

    try:
        store.update_body(name, body)
    except QueryStoreError as exc:
        raise click.ClickException(f"could not update query: {exc}") from exc
    click.echo("Query updated successfully!")


# ---------------------------------------------------------------------------
# qsave show / search / list
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("name", required=False)
@click.pass_context
def show(ctx: click.Context, name: str | None) -> None:
    """Print query NAME and copy its body to the clipboard."""
    name = _required(name, "Please provide a name for the query to show")

    try:
        query = _store(ctx).require(name)
    except QueryStoreError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(query.render())

    try:
        clipboard.copy(query.body)
    except ClipboardError as exc:
        click.echo(f"Warning: failed to copy to clipboard: {exc}", err=True)
        return
    click.echo("Query copied to clipboard!")


@cli.command()
@click.argument("term", required=False)
@click.pass_context
def search(ctx: click.Context, term: str | None) -> None:
    """Print every query whose body contains TERM."""
    term = _required(term, "Please provide a search term")
    for query in _store(ctx).search(term):
        click.echo(query.render())


@cli.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """List saved query names."""
    click.echo("Saved Queries:")
    for name in _store(ctx).list_names():
        click.echo(f"  - {name}")


# ---------------------------------------------------------------------------
# qsave delete
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("name", required=False)
@click.pass_context
def delete(ctx: click.Context, name: str | None) -> None:
    """Delete query NAME."""
    name = _required(name, "Please provide a name for the query to delete")
    _store(ctx).delete(name)
    click.echo("Query deleted successfully!")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
