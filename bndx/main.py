"""
bnd eXplorer — CLI entrypoint.

Explore relationships between projects in a bnd workspace and their
counterparts in an Eclipse workspace.

Usage:
    python -m bndx.main --help
    python -m bndx.main deps com.example.api
    python -m bndx.main uses core
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from bndx import __version__
from bndx.core.observability.logging_config import resolve_level, setup_from_env


class AbbreviatingGroup(click.Group):
    """A group that also accepts any unambiguous prefix of a command name."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        cmd = super().get_command(ctx, cmd_name)
        if cmd is not None:
            return cmd
        matches = {
            name: self.commands[name]
            for name in self.list_commands(ctx)
            if name.startswith(cmd_name)
        }
        unique = {id(c): c for c in matches.values()}
        if not unique:
            return None
        if len(unique) == 1:
            return next(iter(unique.values()))
        ctx.fail(f"Ambiguous command '{cmd_name}': {', '.join(sorted(matches))}")

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        _, cmd, args = super().resolve_command(ctx, args)
        return (cmd.name if cmd else None), cmd, args


@click.group(cls=AbbreviatingGroup)
@click.version_option(version=__version__, prog_name="bndx")
@click.option(
    "--bnd-workspace",
    "-b",
    type=click.Path(path_type=Path),
    default=None,
    help="Location of the bnd workspace (default=.)",
)
@click.option(
    "--eclipse-workspace",
    "-e",
    type=click.Path(path_type=Path),
    default=None,
    help="Location of the eclipse workspace (default=../../eclipse)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="Path to bndx.yml (default: auto-detect).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(
    ctx: click.Context,
    bnd_workspace: Path | None,
    eclipse_workspace: Path | None,
    config_path: Path | None,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """bnd eXplorer — explore relationships between projects in a bnd workspace
    and their corresponding projects in an Eclipse workspace."""
    ctx.ensure_object(dict)
    ctx.obj["bnd_workspace"] = bnd_workspace
    ctx.obj["eclipse_workspace"] = eclipse_workspace
    ctx.obj["config_path"] = config_path

    setup_from_env(resolve_level(debug=debug, verbose=verbose, quiet=quiet))


def _config(ctx: click.Context, as_json: bool = False):
    """Load bndx.yml and apply the workspace flags on top of it."""
    from bndx.core.config.loader import ConfigError, load_config

    try:
        config = load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        _fail(str(e), as_json)

    overrides = {
        key: ctx.obj[key]
        for key in ("bnd_workspace", "eclipse_workspace")
        if ctx.obj.get(key) is not None
    }
    return config.model_copy(update=overrides) if overrides else config


def _fail(error: str, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps({"error": error}, indent=2))
    else:
        click.secho(f"❌ {error}", fg="red", err=True)
    sys.exit(1)


def _emit(result, as_json: bool) -> bool:
    """Handle errors and JSON output. True when nothing is left to print."""
    if result.error:
        _fail(result.error, as_json)
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return True
    return False


@cli.command()
@click.option("--show-all", "-a", is_flag=True, help="Includes projects already in the Eclipse workspace.")
@click.option("--print-names", "-n", is_flag=True, help="Print names of projects rather than paths.")
@click.option("--long", "-l", "long_format", is_flag=True, help="Print names and paths; known projects in brackets.")
@click.option(
    "--eclipse-ordering",
    "-e",
    is_flag=True,
    help="Use the unusual ordering of projects in eclipse's import-existing-projects dialog box.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.argument("projects", nargs=-1, required=True)
@click.pass_context
def deps(
    ctx: click.Context,
    show_all: bool,
    print_names: bool,
    long_format: bool,
    eclipse_ordering: bool,
    as_json: bool,
    projects: tuple[str, ...],
) -> None:
    """Lists specified project(s) and their transitive dependencies in dependency order.

    Full paths are displayed, for ease of pasting into Eclipse's
    Import Project... dialog.
    """
    from bndx.core.use_cases.deps import run_deps

    result = run_deps(
        list(projects),
        _config(ctx, as_json),
        show_all=show_all,
        print_names=print_names,
        eclipse_ordering=eclipse_ordering,
    )
    if _emit(result, as_json):
        return

    for entry in result.entries:
        if long_format:
            if entry.known:
                click.echo(f" [{entry.name}]")
            else:
                click.echo(f"  {entry.name} \t->\t{entry.path}")
        else:
            click.echo(entry.name if print_names else entry.path)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def gaps(ctx: click.Context, as_json: bool) -> None:
    """Lists projects needed by but missing from Eclipse.

    Full paths are displayed, for ease of pasting into Eclipse's
    Import Project... dialog.
    """
    from bndx.core.use_cases.deps import run_gaps

    result = run_gaps(_config(ctx, as_json))
    if _emit(result, as_json):
        return
    for entry in result.entries:
        click.echo(entry.path)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def known(ctx: click.Context, as_json: bool) -> None:
    """Show projects already known to Eclipse."""
    from bndx.core.use_cases.listing import run_known

    result = run_known(_config(ctx, as_json))
    if _emit(result, as_json):
        return
    for name in result.names:
        click.echo(name)


@cli.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.argument("patterns", nargs=-1)
@click.pass_context
def list_(ctx: click.Context, as_json: bool, patterns: tuple[str, ...]) -> None:
    """Lists projects matching the specified patterns (filesystem globbing).

    With no patterns, lists every project in the bnd workspace.
    """
    from bndx.core.use_cases.listing import run_list

    result = run_list(_config(ctx, as_json), list(patterns))
    if _emit(result, as_json):
        return
    for name in result.names:
        click.echo(name)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def roots(ctx: click.Context, as_json: bool) -> None:
    """Show known projects that are not required by any other projects."""
    from bndx.core.use_cases.graph import run_roots

    result = run_roots(_config(ctx, as_json))
    if _emit(result, as_json):
        return
    for name in result.names:
        click.echo(name)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.argument("projects", nargs=-1, required=True)
@click.pass_context
def uses(ctx: click.Context, as_json: bool, projects: tuple[str, ...]) -> None:
    """Lists projects that depend directly on specified project(s).

    Projects are listed by name regardless of inclusion in Eclipse workspace.
    """
    from bndx.core.use_cases.graph import run_uses

    result = run_uses(list(projects), _config(ctx, as_json))
    if _emit(result, as_json):
        return
    for name in result.dependents:
        click.echo(name)


cli.add_command(list_, "ls")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
