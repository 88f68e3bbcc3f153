"""CLI entry point for openapi-entities."""

import logging
from pathlib import Path

import click

from openapi_entities.config import ConvertConfig
from openapi_entities.errors import OpenApiEntitiesError
from openapi_entities.generator.emitter import STDOUT, build_envelope, render_envelope, write_output
from openapi_entities.parser.loader import load_document
from openapi_entities.parser.walker import walk_document


def convert_document(schema_path: Path) -> str:
    """Load a document and render its entity envelope as JSON text."""
    document = load_document(schema_path)
    tables, meta = walk_document(document)
    click.echo(f"Found {len(tables)} entities.", err=True)
    return render_envelope(build_envelope(tables, meta))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def main(verbose: bool):
    """openapi-entities: normalize an OpenAPI document into generator-ready entities."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("schema_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, help="Output file path, or '-' for stdout. Defaults to the input path with a .json suffix.")
def convert(schema_path: Path, output: str | None):
    """Convert an OpenAPI document into a sorted JSON entity envelope."""
    config = ConvertConfig(schema_path=schema_path, output=output)
    try:
        destination = config.destination()
        click.echo(f"Parsing {schema_path}...", err=True)
        text = convert_document(config.schema_path)
        write_output(text, destination)
    except OpenApiEntitiesError as e:
        raise click.ClickException(str(e)) from e

    if destination != STDOUT:
        click.echo(f"Entities saved to {destination}", err=True)
