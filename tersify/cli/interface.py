# tersify/cli/interface.py
import importlib
import sys
from typing import Any

import click
from click_option_group import optgroup
from rich.console import Console as RichConsole
from rich.pretty import Pretty
from rich.table import Table
import structlog

from tersify import __version__ as app_version
from tersify.config import load_config
from tersify.engine import Tersifier
from tersify.exceptions import TersifyError
from tersify.logging_setup import configure_logging
from tersify.plugins.discovery import discover_plugins
from tersify.plugins.registry import PluginRegistry

log = structlog.get_logger(__name__)

def _import_target(target: str) -> Any:
    # resolves "package.module:attr.path" to the value it names.
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise click.BadParameter(f"'{target}' is not of the form 'module:attribute'", param_hint="TARGET")
    try:
        value = importlib.import_module(module_name)
        for attr in attr_path.split("."):
            value = getattr(value, attr)
    except (ImportError, AttributeError) as e:
        raise click.BadParameter(f"could not import '{target}': {e}", param_hint="TARGET")
    return value


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@optgroup.group("Plugin Sources", help="Override which plugin sources the configuration enables.")
@optgroup.option("--no-builtins", "no_builtins", is_flag=True, default=False, help="Skip the built-in standard-library plugins.")
@optgroup.option("--no-entry-points", "no_entry_points", is_flag=True, default=False, help="Skip plugins installed under the 'tersify.plugins' entry point group.")
@optgroup.group("Application Behavior", help="Logging.")
@optgroup.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@optgroup.option("--json-logs", "json_logs", is_flag=True, default=False, help="Emit log events as JSON lines.")
@click.version_option(version=app_version, package_name="tersify", prog_name="tersify", help="Show version and exit.")
@click.pass_context
def main_cli_group(ctx: click.Context, no_builtins: bool, no_entry_points: bool, verbosity_level: int, json_logs: bool):
    """tersify: inspect Python values with verbose objects summarized."""
    try:
        config = load_config()
    except TersifyError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    log_level = config.log_level
    if verbosity_level == 1: log_level = "info"
    elif verbosity_level >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, json_logs=json_logs)

    if no_builtins: config.builtin_plugins = False
    if no_entry_points: config.entry_points = False
    log.debug("cli_command_invoked", config=config)

    ctx.obj = PluginRegistry(discover=lambda: discover_plugins(config))


@main_cli_group.command("plugins")
@click.pass_obj
def list_plugins(registry: PluginRegistry):
    """List the registered type names and the plugin handling each."""
    try:
        handled = registry.handled_types()
    except TersifyError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    console = RichConsole()
    if not handled:
        click.echo("No plugins registered.", err=True)
        return
    table = Table(title="Registered plugins")
    table.add_column("Type", style="cyan")
    table.add_column("Plugin", style="green")
    for type_name, plugin in handled.items():
        plugin_cls = type(plugin)
        table.add_row(type_name, f"{plugin_cls.__module__}.{plugin_cls.__qualname__}")
    console.print(table)


@main_cli_group.command("show")
@click.argument("target")
@click.option("--raw", "raw", is_flag=True, default=False, help="Print the value without tersifying it.")
@click.pass_obj
def show_value(registry: PluginRegistry, target: str, raw: bool):
    """Import TARGET (module:attribute) and pretty-print its terse form."""
    value = _import_target(target)
    try:
        output = value if raw else Tersifier(registry).tersify(value)
    except TersifyError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    RichConsole().print(Pretty(output))
