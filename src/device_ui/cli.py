"""CLI for running and inspecting device UI layouts."""

import json
from pathlib import Path
from typing import NoReturn, Optional

import typer
from jsonschema import validate as json_validate
from jsonschema.exceptions import ValidationError as JsonSchemaValidationError
from typing_extensions import Annotated

from device_ui.config import (
    build_registry,
    layout_json_schema,
    load_device_config,
    read_layout,
)
from device_ui.errors import DeviceUIError
from device_ui.observability.logging import setup_logging
from device_ui.protocol.handler import ProtocolHandler
from device_ui.runtime.device import Device


app = typer.Typer(help="Device UI runtime")

LayoutArg = Annotated[Path, typer.Argument(help="Path to layout YAML file")]


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


@app.command("serve")
def serve(
    layout: LayoutArg,
    interval: Annotated[
        Optional[float], typer.Option(help="Seconds between snapshots")
    ] = None,
    max_bytes: Annotated[
        Optional[int], typer.Option(help="Outbound buffer size in bytes")
    ] = None,
    report_unknown_ids: Annotated[
        Optional[bool],
        typer.Option(
            "--report-unknown-ids/--drop-unknown-ids",
            help="Answer updates to unknown ids with an error line",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str], typer.Option(help="Log level override")
    ] = None,
):
    """Serves a layout over stdin/stdout."""
    try:
        config = load_device_config(
            layout,
            snapshot_interval=interval,
            max_message_bytes=max_bytes,
            report_unknown_ids=report_unknown_ids,
            log_level=log_level,
        )
        setup_logging(config.runtime.log_level)
        device = Device.from_config(config)
    except DeviceUIError as e:
        _fail(e.detail)

    try:
        device.run()
    except KeyboardInterrupt:
        pass


@app.command("render")
def render(layout: LayoutArg):
    """Prints one snapshot of a layout's initial state."""
    try:
        config = load_device_config(layout)
        handler = ProtocolHandler(build_registry(config), config=config.runtime)
        typer.echo(handler.build_snapshot())
    except DeviceUIError as e:
        _fail(e.detail)


@app.command("validate")
def validate(layout: LayoutArg):
    """Validates a layout file against the layout schema."""
    try:
        data = read_layout(layout)
    except DeviceUIError as e:
        _fail(e.detail)

    try:
        json_validate(instance=data, schema=layout_json_schema())
    except JsonSchemaValidationError as e:
        typer.echo(f"Validation Error: {e.message}", err=True)
        if e.path:
            typer.echo(f"Path: {'.'.join(str(p) for p in e.path)}", err=True)
        raise typer.Exit(code=1)

    # Cross-field rules (bounds, geometry, unique ids) are not in the schema.
    try:
        config = load_device_config(layout, environ={})
        registry = build_registry(config)
    except DeviceUIError as e:
        _fail(e.detail)

    typer.echo(f"Layout {layout} is valid ({len(registry)} components).")


@app.command("schema")
def schema():
    """Prints the JSON schema of layout files."""
    typer.echo(json.dumps(layout_json_schema(), indent=2))


def main():
    app()


if __name__ == "__main__":
    main()
