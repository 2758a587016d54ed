"""CLI entry point: one sub-command per procedure."""

from __future__ import annotations

import asyncio
import json
import sys
from enum import Enum
from typing import Any, Iterable

import click

from fsproc.errors import FsProcError, ValidationFailure
from fsproc.procedures import Procedure, fs_procedures
from fsproc_rpc.config import HostConfig, configure_logging


@click.group()
@click.option("--log-level", default=None, help="Log level (default: FSPROC_LOG_LEVEL or WARNING)")
@click.pass_context
def main(ctx: click.Context, log_level: str | None):
    """fsproc: filesystem procedures from the command line."""
    config = HostConfig.from_env()
    if log_level:
        config.log_level = log_level.upper()
    configure_logging(config.log_level)
    ctx.obj = config


def _procedure_params(procedure: Procedure) -> list[click.Parameter]:
    """Bind positional args and short flags from procedure metadata."""
    by_wire = {(f.alias or n): (n, f) for n, f in procedure.input_model.model_fields.items()}
    params: list[click.Parameter] = []

    for wire in procedure.args:
        name, _ = by_wire[wire]
        params.append(click.Argument([name]))

    for wire, (name, f) in by_wire.items():
        if wire in procedure.args:
            continue
        long_flag = "--" + name.replace("_", "-")
        short = procedure.shorts.get(wire)
        shorts = [f"-{short}"] if short else []
        default = None if f.is_required() else f.default
        annotation = f.annotation

        if annotation is bool:
            decls = [f"{long_flag}/--no-{long_flag[2:]}", *shorts, name]
            params.append(click.Option(decls, default=default, show_default=True, help=f.description))
        elif isinstance(annotation, type) and issubclass(annotation, Enum):
            decls = [long_flag, *shorts, name]
            params.append(click.Option(
                decls,
                type=click.Choice([m.value for m in annotation]),
                default=default.value if isinstance(default, Enum) else default,
                show_default=True,
                help=f.description,
            ))
        else:
            decls = [long_flag, *shorts, name]
            params.append(click.Option(
                decls, default=default, required=f.is_required(), help=f.description
            ))
    return params


def _run(procedure: Procedure, raw: dict[str, Any]) -> None:
    try:
        result = asyncio.run(procedure.call(raw))
    except ValidationFailure as e:
        click.echo(f"Invalid input for {procedure.name}:", err=True)
        for v in e.violations:
            click.echo(f"  {v.location}: {v.message}", err=True)
        sys.exit(2)
    except FsProcError as e:
        click.echo(f"{e.code}: {e.message}", err=True)
        sys.exit(1)
    click.echo(json.dumps(result, indent=2, ensure_ascii=False, default=str))


def build_command(procedure: Procedure) -> click.Command:
    """Build a click command bound to a procedure's metadata."""

    def callback(**kwargs: Any) -> None:
        raw = {k: v for k, v in kwargs.items() if v is not None}
        _run(procedure, raw)

    return click.Command(
        name=procedure.name,
        params=_procedure_params(procedure),
        callback=callback,
        help=procedure.description,
        short_help=procedure.description,
    )


def add_procedure_commands(group: click.Group, procedures: Iterable[Procedure]) -> None:
    for procedure in procedures:
        group.add_command(build_command(procedure))


@main.command("list")
def list_cmd():
    """List available procedures."""
    for procedure in fs_procedures():
        args = " ".join(a.upper() for a in procedure.args)
        click.echo(f"{procedure.name:<14} {args:<12} {procedure.description}")


@main.command()
@click.option("--host", default=None, help="Host to bind (default: FSPROC_HOST or 127.0.0.1)")
@click.option("--port", default=None, type=int, help="Port to bind (default: FSPROC_PORT or 8000)")
@click.pass_obj
def serve(config: HostConfig, host: str | None, port: int | None):
    """Start the HTTP RPC server."""
    import uvicorn

    from fsproc_rpc.server import app

    uvicorn.run(
        app,
        host=host or config.host,
        port=port or config.port,
        log_level=config.log_level.lower(),
    )


add_procedure_commands(main, fs_procedures())


if __name__ == "__main__":
    main()
