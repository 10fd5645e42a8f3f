"""Element inspection commands."""

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from typer.models import OptionInfo

from ..encode import EncodedElement, Parameters, join, load_descriptors

logger = logging.getLogger(__name__)


def _normalize_option_value(value):
    """Support calling the Typer command functions directly in tests."""
    return value.default if isinstance(value, OptionInfo) else value


def _element_record(element: EncodedElement) -> dict:
    record = element.to_dict()
    record["roles"] = element.roles()
    record["inlinable"] = element.is_inlinable
    record["one_liner"] = join(element.one_liner)
    return record


def _format_element_line(element: EncodedElement) -> str:
    roles = ", ".join(element.roles()) or "-"
    line = f"  • {element.name:<20} {roles}"
    if element.one_liner:
        line += f"  ⇒ {join(element.one_liner)}"
    return line


def _print_summary(path: Path, elements: List[EncodedElement]) -> None:
    typer.echo(f"\nElements in {path}")
    for element in elements:
        typer.echo(_format_element_line(element))
    inlinable = sum(1 for e in elements if e.is_inlinable)
    typer.echo(f"\n  Total      : {len(elements)}")
    typer.echo(f"  Inlinable  : {inlinable}")
    ambiguous = [e.name for e in elements if len(e.roles()) > 1]
    if ambiguous:
        typer.echo(f"  Ambiguous  : {', '.join(ambiguous)}")


def inspect_command(
    path: str = typer.Argument(..., help="YAML descriptor file with an 'elements' list"),
    as_json: bool = typer.Option(False, "--json", help="Emit a JSON list instead of a summary"),
    type_vars: Optional[List[str]] = typer.Option(None, "--type-var", "-t", help="Type variable in the ambient scope (repeatable)"),
):
    """Classify described elements by role and show their inline form."""
    as_json = _normalize_option_value(as_json)
    type_vars = _normalize_option_value(type_vars)

    descriptor_path = Path(path)
    try:
        parameters = Parameters.of(*(type_vars or []))
        elements = load_descriptors(descriptor_path, parameters=parameters)
    except FileNotFoundError:
        typer.echo(f"Error: descriptor file not found: {descriptor_path}", err=True)
        raise typer.Exit(1)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    logger.info(f"Inspecting {len(elements)} elements from {descriptor_path}")

    if as_json:
        typer.echo(json.dumps([_element_record(e) for e in elements], indent=2))
    else:
        _print_summary(descriptor_path, elements)
