"""CLI commands for botdouble."""

from __future__ import annotations

import json
import logging
from typing import Any, Union, get_args, get_origin

import click
from rich.console import Console
from rich.table import Table

from botdouble import types as bot_types
from botdouble.client import BotApi, to_camel, union_members
from botdouble.config import BotConfig, load_config
from botdouble.testing import TypeFaker
from botdouble.types import TelegramObject

_BUILTINS: dict[str, type] = {"bool": bool, "int": int, "float": float, "str": str}


def setup_logging(level: str) -> None:
    """Configure logging for the CLI."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def resolve_type(name: str) -> Any:
    """Find a Bot API type (or builtin) by name."""
    if name in _BUILTINS:
        return _BUILTINS[name]
    tp = getattr(bot_types, name, None)
    if not (isinstance(tp, type) and issubclass(tp, TelegramObject)):
        raise click.BadParameter(f"Unknown type '{name}'")
    return tp


def format_type(tp: Any) -> str:
    """Render an annotation the way it is written in source."""
    if get_origin(tp) is list:
        return f"list[{format_type(get_args(tp)[0])}]"
    members = union_members(tp)
    if len(members) > 1 or get_origin(tp) is Union:
        return " | ".join(format_type(member) for member in members)
    return getattr(tp, "__name__", str(tp))


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """botdouble - Bot API client and test double."""
    ctx.ensure_object(dict)

    config_obj = load_config(config)
    ctx.obj["config"] = config_obj
    ctx.obj["console"] = Console()

    setup_logging("DEBUG" if verbose else config_obj.log_level)


@cli.command()
@click.argument("type_name")
@click.option("--partial", "-p", default=None, help="JSON object of attributes to keep")
@click.option("--seed", type=int, default=None, help="Seed for reproducible values")
@click.pass_context
def fake(ctx: click.Context, type_name: str, partial: str | None, seed: int | None) -> None:
    """Print a faked Bot API object, e.g. ``botdouble fake Message -p '{"text": "hi"}'``."""
    config: BotConfig = ctx.obj["config"]
    tp = resolve_type(type_name)

    try:
        attributes = json.loads(partial) if partial else None
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"--partial is not valid JSON: {e}") from e

    faker = TypeFaker(seed=seed if seed is not None else config.fake_seed)
    ctx.obj["console"].print_json(data=faker.fake_data_for(tp, attributes))


@cli.command()
@click.option("--returning", "-r", default=None, help="Only methods returning this type")
@click.pass_context
def methods(ctx: click.Context, returning: str | None) -> None:
    """List Bot API methods and what they return."""
    registry = BotApi.api_methods()
    endpoints = sorted(registry)
    if returning:
        wanted = {to_camel(name) for name in BotApi.methods_returning(resolve_type(returning))}
        endpoints = [endpoint for endpoint in endpoints if endpoint in wanted]

    table = Table("Endpoint", "Returns")
    for endpoint in endpoints:
        table.add_row(endpoint, format_type(registry[endpoint]))
    ctx.obj["console"].print(table)
