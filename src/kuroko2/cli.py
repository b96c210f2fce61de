#!/usr/bin/env python3
"""
kuroko2ctl - Drive job definition lifecycle operations from the shell.

Reads provider settings from KUROKO2_* environment variables and declared
configuration from YAML/JSON files.
"""

import asyncio
import json

import click
import yaml
from tabulate import tabulate

from kuroko2.config import LoggingConfig, configure_logging, get_config
from kuroko2.provider import Kuroko2Provider
from kuroko2.resources.base import ResourceResult

JOB_DEFINITION = "kuroko2_job_definition"


def _load_file(filename: str) -> dict:
    """Read declared configuration from a YAML or JSON file."""
    with open(filename, "r") as f:
        try:
            if filename.endswith(".yaml") or filename.endswith(".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise click.BadParameter(
                f"could not parse {filename}: {e}", param_hint="FILENAME"
            )

    if not isinstance(data, dict):
        raise click.BadParameter(
            "file must contain a mapping of attributes", param_hint="FILENAME"
        )
    return data


def _build_provider() -> Kuroko2Provider:
    try:
        config = get_config()
    except ValueError as e:
        raise click.ClickException(str(e))

    provider = Kuroko2Provider()
    provider.configure_with(config.provider)
    return provider


def _job_definitions():
    return _build_provider().resource(JOB_DEFINITION)


def _finish(result: ResourceResult, output: str = "table") -> None:
    """Print diagnostics and state; exit non-zero on error."""
    for diagnostic in result.diagnostics:
        click.echo(f"{diagnostic.severity.value}: {diagnostic}", err=True)

    if result.has_error:
        raise SystemExit(1)

    if result.state is None:
        return

    if output == "json":
        click.echo(json.dumps(result.state, indent=2))
    elif output == "yaml":
        click.echo(yaml.dump(result.state, default_flow_style=False))
    else:
        rows = []
        for key, value in result.state.items():
            if isinstance(value, list):
                value = ", ".join(str(v) for v in value)
            elif value is None:
                value = "-"
            rows.append([key, value])
        click.echo(tabulate(rows, headers=["Attribute", "Value"], tablefmt="grid"))


output_option = click.option(
    "--output", "-o", type=click.Choice(["table", "json", "yaml"]), default="table"
)


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL")
def cli(log_level):
    """kuroko2ctl - manage Kuroko2 job definitions"""
    logging_config = LoggingConfig.from_env()
    if log_level:
        logging_config.level = log_level.upper()
    configure_logging(logging_config)


@cli.command()
@click.argument("definition_id", type=int)
@output_option
def get(definition_id, output):
    """Show a job definition"""
    resource = _job_definitions()
    result = asyncio.run(resource.read({"id": definition_id}))
    _finish(result, output)


@cli.command()
@click.argument("filename", type=click.Path(exists=True))
@output_option
def create(filename, output):
    """Create a job definition from a YAML/JSON file"""
    config = _load_file(filename)
    resource = _job_definitions()
    result = asyncio.run(resource.create(config))
    _finish(result, output)


@cli.command()
@click.argument("definition_id", type=int)
@click.argument("filename", type=click.Path(exists=True))
@output_option
def update(definition_id, filename, output):
    """Replace a job definition from a YAML/JSON file"""
    config = _load_file(filename)
    resource = _job_definitions()
    result = asyncio.run(resource.update(config, {"id": definition_id}))
    _finish(result, output)


@cli.command()
@click.argument("definition_id", type=int)
@click.confirmation_option(
    prompt="Are you sure you want to delete this job definition?"
)
def delete(definition_id):
    """Delete a job definition"""
    resource = _job_definitions()
    result = asyncio.run(resource.delete({"id": definition_id}))
    _finish(result)
    click.echo(f"Job definition {definition_id} deleted")


@cli.command("import")
@click.argument("import_id")
@output_option
def import_(import_id, output):
    """Import an existing job definition and show its state"""
    resource = _job_definitions()

    async def _import_and_read() -> ResourceResult:
        imported = await resource.import_state(import_id)
        if imported.has_error:
            return imported
        return await resource.read(imported.state)

    _finish(asyncio.run(_import_and_read()), output)


if __name__ == "__main__":
    cli()
