"""Legosigno CLI entry point."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

import click

from legosigno import __version__
from legosigno.errors import LegosignoError
from legosigno.operations import (
    RunContext,
    Session,
    bookmark_current,
    list_folders,
    open_store,
    record_visit,
    remove_by_index_or_name,
    resolve_target,
    save_store,
)
from legosigno.selector import BOOKMARK, VISIT, Row

ROW_COLORS = ("blue", "cyan")

HELP_EPILOG = """\
Two kinds of folders are remembered: folders bookmarked by hand and folders
visited from the shell. Visits are recorded through PROMPT_COMMAND in bash.
`legosigno install` writes into ~/.bashrc:

\b
  cdb   with an index, jump to that folder; without one, bookmark the cwd
  cdl   list bookmarks and visited folders
  cdr   remove a bookmark by index or folder name
"""


@contextmanager
def _fatal_on_error(run: RunContext) -> Iterator[None]:
    try:
        yield
    except LegosignoError as e:
        run.log.error("%s", e)
        raise SystemExit(1) from e


def _current_folder(run: RunContext, folder: str | None) -> str:
    if folder:
        return os.path.abspath(folder)
    try:
        return os.getcwd()
    except OSError as e:
        run.log.error("Unable to get working directory: %s", e)
        raise SystemExit(1) from e


def _echo_listing(rows: list[Row], err: bool = False) -> None:
    sections = (
        ("Bookmarks:", [r for r in rows if r.section == BOOKMARK]),
        ("Visited often:", [r for r in rows if r.section == VISIT]),
    )
    for title, section_rows in sections:
        click.echo(err=err)
        click.echo(title, err=err)
        click.echo("-" * len(title), err=err)
        for n, row in enumerate(section_rows):
            line = f" {row.index}) {click.format_filename(row.path)}"
            click.echo(click.style(line, fg=ROW_COLORS[n % 2]), err=err)
    click.echo(err=err)


def _chooser(run: RunContext, session: Session, action: str) -> Callable[[], str]:
    def choose() -> str:
        _echo_listing(list_folders(run, session), err=True)
        return click.prompt(
            f"which folder do you want to {action}?", err=True, prompt_suffix="\n"
        )

    return choose


def _confirm_removal(folder: str) -> bool:
    shown = click.format_filename(folder)
    return click.confirm(
        f'Are you sure you want to remove "{shown}" from bookmarks?', default=None
    )


@click.group(epilog=HELP_EPILOG)
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(), default=None, help="Config file path")
@click.option(
    "--verbose",
    "-v",
    type=click.IntRange(-1, 3),
    default=None,
    help="Verbosity 0 to 3 (-1 is accepted as 0). Logs always go to stderr.",
)
@click.option("--json-logs", is_flag=True, help="JSON log output")
@click.pass_context
def main(
    ctx: click.Context,
    config: str | None,
    verbose: int | None,
    json_logs: bool,
) -> None:
    """Legosigno - bookmarks and recently visited folders for the shell."""
    from legosigno.config.loader import load_config
    from legosigno.logging_config import setup_logging, verbosity_to_level

    try:
        cfg = load_config(config)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    level = cfg.log_level if verbose is None else verbosity_to_level(verbose)
    log = setup_logging(level=level, json_output=json_logs)
    ctx.obj = RunContext(config=cfg, log=log)


@main.command()
@click.argument("folder", required=False)
@click.pass_obj
def visit(run: RunContext, folder: str | None) -> None:
    """Record a visit to the current folder (called from PROMPT_COMMAND)."""
    current = _current_folder(run, folder)
    with _fatal_on_error(run):
        record_visit(run, current)


@main.command()
@click.argument("folder", required=False)
@click.pass_obj
def bookmark(run: RunContext, folder: str | None) -> None:
    """Bookmark the current folder."""
    current = _current_folder(run, folder)
    with _fatal_on_error(run):
        session = open_store(run)
        entry = bookmark_current(session, current)
        save_store(run, session)
    run.log.info("Bookmarked %s (score %d)", entry.path, entry.score)


@main.command("list")
@click.pass_obj
def list_command(run: RunContext) -> None:
    """Show bookmarks and the most recently visited folders."""
    with _fatal_on_error(run):
        session = open_store(run)
        _echo_listing(list_folders(run, session))
        save_store(run, session)


@main.command(context_settings={"ignore_unknown_options": True})
@click.argument("token")
@click.pass_obj
def remove(run: RunContext, token: str) -> None:
    """Remove a folder by index or path. Use "?" to pick from the list."""
    with _fatal_on_error(run):
        session = open_store(run)
        removed = remove_by_index_or_name(
            run, session, token, _confirm_removal, _chooser(run, session, "remove")
        )
        save_store(run, session)
    if removed is not None:
        click.echo(f"Removed {click.format_filename(removed.path)}")


@main.command("cd", context_settings={"ignore_unknown_options": True})
@click.argument("token")
@click.pass_obj
def cd_command(run: RunContext, token: str) -> None:
    """Print the folder at an index, for `cd "$(legosigno cd N)"`.

    A negative index -k picks the k-th most recently visited folder. Use "?"
    to pick from the list.
    """
    with _fatal_on_error(run):
        session = open_store(run)
        save_store(run, session)
        target = resolve_target(run, session, token, _chooser(run, session, "change to"))
    # Raw bytes, so folder names that are not UTF-8 reach `cd` intact
    click.echo(os.fsencode(target))


@main.command()
@click.option(
    "--rc-file",
    type=click.Path(path_type=Path),
    default=Path("~/.bashrc"),
    help="Shell rc file to write into",
)
@click.pass_obj
def install(run: RunContext, rc_file: Path) -> None:
    """Install PROMPT_COMMAND and the cdb/cdl/cdr shortcuts."""
    from legosigno.installer import ShellInstaller

    installer = ShellInstaller(rc_file.expanduser())
    with _fatal_on_error(run):
        installed = installer.install(os.environ.get("PROMPT_COMMAND"))
    if installed:
        click.echo(f"legosigno installed in {installer.rc_path}")
        click.echo(f'Do "source {installer.rc_path}" to reload it')
    else:
        click.echo("Nothing to do. Seems like PROMPT_COMMAND already calls legosigno")


@main.command()
@click.option(
    "--rc-file",
    type=click.Path(path_type=Path),
    default=Path("~/.bashrc"),
    help="Shell rc file to clean up",
)
@click.pass_obj
def uninstall(run: RunContext, rc_file: Path) -> None:
    """Remove the shell integration block."""
    from legosigno.installer import ShellInstaller

    installer = ShellInstaller(rc_file.expanduser())
    with _fatal_on_error(run):
        removed = installer.uninstall()
    if removed:
        click.echo(f"legosigno removed from {installer.rc_path}")
    else:
        click.echo(f"No legosigno block found in {installer.rc_path}")
