"""Command-line interface for Objockey."""

import json
import logging
import sys
import click
from pathlib import Path
from typing import Any, Optional
from .json_value import JsonValue
from .parser import JSONParser
from .types import ObjockeyError, Visitor


def _load(input_file: Path) -> JsonValue:
    """Read a JSON document into a JsonValue that prints to stdout."""
    return JsonValue(input_file.read_text(encoding='utf-8'), sink=click.echo)


def _parse_literal(text: str) -> Any:
    """Interpret an option value as JSON, falling back to the raw string."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _selector(document: JsonValue, field: Optional[str]) -> Visitor:
    """Build a visitor returning an element's field, or the element itself."""
    def select(first, second, payload):
        element = first if document.is_sequence() else second
        if field is None:
            return element
        return element.get(field) if isinstance(element, dict) else None
    return select


# Every command reports these as "Error: ..." with exit status 1.
_REPORTED_ERRORS = (ObjockeyError, OSError, ValueError, TypeError)


def _fail(error: Exception):
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version="1.0.0")
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def main(verbose: bool):
    """Objockey - Read and manipulate JSON arrays and objects."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--key', '-k', help='Index or key of a single element to show')
def show(input_file: Path, key: Optional[str]):
    """Print a JSON document, or one element of it."""
    try:
        document = _load(input_file)
        if key is None:
            click.echo(document.to_text())
            return

        # Position 0 is falsy and prints the whole document.
        document.set_sink(lambda value: click.echo(JSONParser.dumps(value)))
        document.print(int(key) if document.is_sequence() else key)
    except _REPORTED_ERRORS as e:
        _fail(e)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--field', '-f', help='Field of each element to compare')
@click.option('--equals', '-e', 'expected', required=True, help='Value to match (parsed as JSON when possible)')
def find(input_file: Path, field: Optional[str], expected: str):
    """Print the positions or keys of matching elements."""
    try:
        document = _load(input_file)
        select = _selector(document, field)
        value = _parse_literal(expected)
        indexes = document.find_all_indexes(lambda *args: select(*args) == value)
        click.echo(JSONParser.dumps(indexes))
    except _REPORTED_ERRORS as e:
        _fail(e)


@main.command(name='filter')
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--field', '-f', help='Field of each element to compare')
@click.option('--equals', '-e', 'expected', required=True, help='Value to match (parsed as JSON when possible)')
@click.option('--output', '-o', help='Output JSON file path')
def filter_command(input_file: Path, field: Optional[str], expected: str, output: Optional[str]):
    """Keep only the matching elements of a JSON document."""
    try:
        document = _load(input_file)
        select = _selector(document, field)
        value = _parse_literal(expected)
        document.set(document.filter(lambda *args: select(*args) == value))

        if output:
            output_path = Path(output)
            output_path.write_text(document.to_text(), encoding='utf-8')
            click.echo(f"Wrote filtered JSON to {output_path}")
        else:
            click.echo(document.to_text())
    except _REPORTED_ERRORS as e:
        _fail(e)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--field', '-f', help='Numeric field of each element')
def stats(input_file: Path, field: Optional[str]):
    """Print the average and median of a numeric field."""
    try:
        document = _load(input_file)
        select = _selector(document, field)
        click.echo(f"average: {document.average(select)}")
        click.echo(f"median: {JSONParser.dumps(document.median(select))}")
    except _REPORTED_ERRORS as e:
        _fail(e)


if __name__ == '__main__':
    main()
