"""
swayframe command-line interface.

Usage:
    swayframe socket
    swayframe tree [--json]
    swayframe windows [--visible] [--focused] [--json]
    swayframe focus <con_id>
    swayframe kill <con_id>
    swayframe msg <command> [--noerror]
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from ..core.config import SwayFrameConfig, load_config
from ..core.containers import ContainerController
from ..core.ipc_client import IPCClient, NoErrorMode
from ..core.socket_locator import SocketLocator
from ..core.tree import TreeFetcher, list_windows
from ..errors import SwayFrameError
from .formatters import build_tree, build_windows_table
from .logging_config import setup_logging


console = Console()
err_console = Console(stderr=True)


def _client(ctx: click.Context) -> IPCClient:
    config: SwayFrameConfig = ctx.obj["config"]
    return IPCClient(config=config, locator=SocketLocator.default(config.socket_path))


def _fail(error: SwayFrameError) -> None:
    err_console.print(f"[red]Error:[/red] {error.message}", highlight=False)
    if error.suggestion:
        err_console.print(f"[dim]{error.suggestion}[/dim]")
    sys.exit(1)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Verbose logging')
@click.option('--debug', is_flag=True, help='Debug logging (includes subprocess calls)')
@click.option('--config', 'config_path', type=click.Path(path_type=Path), default=None,
              help='Config file (default: ~/.config/sway-frame-manager/config.json)')
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool, config_path: Optional[Path]):
    """Inspect and control sway containers over IPC."""
    try:
        config = load_config(config_path)
    except SwayFrameError as e:
        _fail(e)
    setup_logging(verbose=verbose, debug=debug, level=config.log_level)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@cli.command()
@click.pass_context
def socket(ctx: click.Context):
    """Print the sway IPC socket that would be used."""
    config: SwayFrameConfig = ctx.obj["config"]
    path = SocketLocator.default(config.socket_path).resolve()
    if not path:
        err_console.print("[red]Error:[/red] Cannot find the sway IPC socket")
        sys.exit(1)
    click.echo(path)


@cli.command()
@click.option('--json', 'output_json', is_flag=True, help='Output raw JSON')
@click.pass_context
def tree(ctx: click.Context, output_json: bool):
    """Show the sway container tree."""
    try:
        root = TreeFetcher(_client(ctx)).fetch_tree()
    except SwayFrameError as e:
        _fail(e)

    if output_json:
        click.echo(json.dumps(root.model_dump(mode="json"), indent=2))
    else:
        console.print(build_tree(root))


@cli.command()
@click.option('--visible', 'visible_only', is_flag=True, help='Only visible windows')
@click.option('--focused', 'focused_only', is_flag=True, help='Only the focused window')
@click.option('--json', 'output_json', is_flag=True, help='Output JSON')
@click.pass_context
def windows(ctx: click.Context, visible_only: bool, focused_only: bool, output_json: bool):
    """List content containers (empty workspaces excluded)."""
    try:
        root = TreeFetcher(_client(ctx)).fetch_tree()
    except SwayFrameError as e:
        _fail(e)

    found = list_windows(root, visible_only=visible_only, focused_only=focused_only)

    if output_json:
        data = [
            node.model_dump(mode="json", include={"id", "type", "window", "name", "app_id", "visible", "focused"})
            for node in found
        ]
        click.echo(json.dumps(data, indent=2))
    else:
        console.print(build_windows_table(found))


@cli.command()
@click.argument('con_id', type=int)
@click.pass_context
def focus(ctx: click.Context, con_id: int):
    """Focus the container with id CON_ID."""
    try:
        ContainerController(_client(ctx)).focus(con_id)
    except SwayFrameError as e:
        _fail(e)


@cli.command()
@click.argument('con_id', type=int)
@click.pass_context
def kill(ctx: click.Context, con_id: int):
    """Close the container with id CON_ID."""
    try:
        ContainerController(_client(ctx)).kill(con_id)
    except SwayFrameError as e:
        _fail(e)


@cli.command()
@click.argument('command')
@click.option('--noerror', is_flag=True, help='Log failed sub-commands instead of failing')
@click.pass_context
def msg(ctx: click.Context, command: str, noerror: bool):
    """Run COMMAND (sub-commands separated by ';')."""
    try:
        _client(ctx).query(command, noerror=NoErrorMode.LOG if noerror else None)
    except SwayFrameError as e:
        _fail(e)


def main() -> int:
    """Console script entry point."""
    cli(obj={})
    return 0
