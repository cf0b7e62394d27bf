"""CLI adapter for ``config_sh`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose the layered configuration stack on the command line: read and write
keys, list the recognized keys, show which sources are active, and print the
repository information of the configured project.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command holding the global options.
* :func:`cli_config` – ``config [KEY] [VALUE]`` get/set plus ``--list``.
* :func:`cli_repo` – repository information for ``core.repo.path``.
* :func:`cli_sources` – active sources in precedence order.
* :func:`cli_info` – distribution metadata.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer. It builds :class:`config_sh.core.AppConfig` lazily (so
``info`` and ``config --list`` never touch the filesystem), configures logging
from ``core.log.level`` and leaves exit-code policy to ``lib_cli_exit_tools``.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import AppConfig
from .domain.keys import KnownKey
from .observability import configure_logging, reset_logging

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
_DISTRIBUTION: Final[str] = "config-sh"


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when metadata is unavailable."""

    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Layered machine / directory / project configuration",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="config-sh",
    message="config-sh version %(version)s",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    metavar="FILE",
    help="Machine config file (defaults to ~/.config-sh.json)",
)
@click.option("-t", "--verbose", is_flag=True, default=False, help="Verbose output")
@click.option(
    "--env/--no-env",
    "use_env",
    default=True,
    show_default=True,
    help="Let SH_<key> environment variables override file values",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool, use_env: bool, traceback: bool) -> None:
    """Root command storing global options for the subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose
    ctx.obj["use_env"] = use_env
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


def _app_config(ctx: click.Context) -> AppConfig:
    """Build (once per invocation) the :class:`AppConfig` and wire logging to it."""

    root = ctx.find_root()
    options = root.obj
    cached = options.get("app_config")
    if cached is not None:
        return cached
    if options["verbose"]:
        configure_logging("debug")
    root.call_on_close(reset_logging)
    config = AppConfig.from_json(options["config_path"])
    if options["use_env"]:
        config.use_env()
    if not options["verbose"]:
        configure_logging(config.get(KnownKey.LOG_LEVEL, str))
    options["app_config"] = config
    return config


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        click.echo("config-sh (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', _DISTRIBUTION)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("config", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("-l", "--list", "list_known", is_flag=True, default=False, help="List known config keys")
@click.option("--json", "as_json", is_flag=True, default=False, help="Parse VALUE as JSON instead of storing a string")
@click.option(
    "--provenance/--no-provenance",
    default=False,
    help="Include the scope and file that supplied the value",
)
@click.pass_context
def cli_config(
    ctx: click.Context,
    key: Optional[str],
    value: Optional[str],
    list_known: bool,
    as_json: bool,
    provenance: bool,
) -> None:
    """Get or set a config value.

    With VALUE the value is written to the highest-precedence writable file
    and persisted; without it the resolved value is printed as JSON.
    """

    if list_known:
        for known in KnownKey.list():
            click.echo(known)
        return
    if not key:
        raise click.UsageError("KEY is required unless --list is given", ctx=ctx)

    config = _app_config(ctx)
    if value is None:
        _print_value(config, key, provenance)
    else:
        _store_value(config, key, _parse_value(value, as_json))


def _parse_value(value: str, as_json: bool) -> Any:
    if not as_json:
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint="VALUE") from exc


def _print_value(config: AppConfig, key: str, provenance: bool) -> None:
    found = config.resolver.read_raw(key)
    if found is None:
        raise click.ClickException(f"No value found for key: {key}")
    if not provenance:
        click.echo(json.dumps(found, ensure_ascii=False))
        return
    source = config.resolver.origin(key)
    path = source.path if source is not None else None
    payload = {
        "key": key,
        "value": found,
        "scope": source.scope if source is not None else None,
        "path": str(path) if path is not None else None,
    }
    click.echo(json.dumps(payload, ensure_ascii=False))


def _store_value(config: AppConfig, key: str, value: Any) -> None:
    if not config.resolver.write_raw(key, value):
        raise click.ClickException(f"No writable configuration source for key: {key}")
    failures = [outcome for outcome in config.sync() if not outcome.ok]
    for outcome in failures:
        click.echo(f"Error: [{outcome.scope}] {outcome.error}", err=True)
    if failures:
        raise click.ClickException(f"{len(failures)} configuration source(s) could not be saved")


@cli.command("repo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.pass_context
def cli_repo(ctx: click.Context) -> None:
    """Print information about the repository configured in core.repo.path."""

    info = _app_config(ctx).repo_info()
    click.echo(f"Repo path: {info.path}")
    click.echo(f"Remote: {info.remote}")
    click.echo(f"Remote URL: {info.remote_url}")
    click.echo(f"User: {info.user}")
    click.echo(f"Email: {info.email}")


@cli.command("sources", context_settings=CLICK_CONTEXT_SETTINGS)
@click.pass_context
def cli_sources(ctx: click.Context) -> None:
    """Print the active configuration sources, highest precedence first, as JSON."""

    click.echo(json.dumps(_app_config(ctx).describe(), indent=2))


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="config-sh",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
