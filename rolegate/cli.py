"""CLI entry point for rolegate."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, NoReturn

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.table import Table

from rolegate.acl import AccessTable, AuthorizationRequest
from rolegate.authorizer import Authorizer
from rolegate.config import RolegateConfig, load_config
from rolegate.config.loader import DEFAULT_CONFIG_TEMPLATE
from rolegate.errors import ConfigError
from rolegate.logs import configure_logging

app = typer.Typer(
    name="rolegate",
    help="Role-based access control decisions from a single acl.ini file.",
)

config_app = typer.Typer(help="Manage rolegate configuration.")
app.add_typer(config_app, name="config")

cache_app = typer.Typer(help="Manage the cached access table.")
app.add_typer(cache_app, name="cache")

# Global state
_config_path: str | None = None
_config: RolegateConfig | None = None


def _get_config() -> RolegateConfig:
    """Load the config on first use so commands that need none (config init) never fail on it."""
    global _config
    if _config is None:
        try:
            _config = load_config(_config_path)
        except ConfigError as e:
            _fail(e)
        configure_logging(_config.log_level, _config.log_format)
    return _config


def _fail(error: ConfigError) -> NoReturn:
    rprint(f"[red]Configuration error:[/red] {escape(str(error))}")
    raise typer.Exit(code=2)


def _parse_role(value: str) -> int | str:
    return int(value) if value.isdigit() else value


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to rolegate.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config, _config_path
    _config_path = config
    _config = None


@app.command()
def check(
    roles: Annotated[list[str], typer.Argument(help="Role ids held by the user")],
    controller: Annotated[str, typer.Option("--controller", help="Controller name")],
    action: Annotated[str, typer.Option("--action", help="Action name")],
    plugin: Annotated[str | None, typer.Option("--plugin", help="Plugin namespace")] = None,
    prefix: Annotated[str | None, typer.Option("--prefix", help="Routing prefix")] = None,
) -> None:
    """Print ALLOW or DENY for a single request (exit code 1 on DENY)."""
    request = AuthorizationRequest(
        roles=tuple(_parse_role(r) for r in roles),
        plugin=plugin,
        prefix=prefix,
        controller=controller,
        action=action,
    )
    try:
        with Authorizer.from_config(_get_config()) as authorizer:
            allowed = authorizer.authorize(request)
    except ConfigError as e:
        _fail(e)

    if allowed:
        rprint("[green]ALLOW[/green]")
        return
    rprint("[red]DENY[/red]")
    raise typer.Exit(code=1)


def _display_table(table: AccessTable) -> None:
    out = Table(title=f"Access table ({len(table)} resources)")
    out.add_column("Resource", style="cyan")
    out.add_column("Action", style="green")
    out.add_column("Role ids", style="yellow")
    for key in sorted(table.keys()):
        rules = table.get(key)
        if not rules.actions:
            out.add_row(key, "-", "-")
            continue
        for action, role_ids in sorted(rules.actions.items()):
            out.add_row(key, action, ", ".join(sorted(str(r) for r in role_ids)) or "-")
    rprint(out)


@app.command("compile")
def compile_cmd(
    refresh: Annotated[
        bool, typer.Option("--refresh", help="Ignore the cached table and recompile")
    ] = False,
) -> None:
    """Compile acl.ini (or read it from cache) and show the result."""
    try:
        with Authorizer.from_config(_get_config()) as authorizer:
            if refresh:
                authorizer.clear_cache()
            table = authorizer.access_table()
    except ConfigError as e:
        _fail(e)
    _display_table(table)


@cache_app.command("clear")
def cache_clear() -> None:
    """Delete the cached access table."""
    try:
        with Authorizer.from_config(_get_config()) as authorizer:
            authorizer.clear_cache()
    except ConfigError as e:
        _fail(e)
    rprint("[green]Access table cache cleared.[/green]")


@config_app.command("init")
def config_init(
    path: Annotated[str, typer.Option("--path", help="Where to write the file")] = "rolegate.yaml",
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing file")] = False,
) -> None:
    """Write a commented default rolegate.yaml."""
    dest = Path(path)
    if dest.exists() and not force:
        rprint(f"[yellow]{dest} already exists (use --force to overwrite)[/yellow]")
        raise typer.Exit(code=1)
    dest.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Wrote {dest}[/green]")


@config_app.command("show")
def config_show() -> None:
    """Print the effective configuration as YAML."""
    typer.echo(yaml.safe_dump(_get_config().model_dump(mode="json"), sort_keys=False))


if __name__ == "__main__":
    app()
