"""CLI entry point for openapi-tool-schema."""

import json
import logging
from pathlib import Path

import click

from openapi_tool_schema.converter.params import aggregate
from openapi_tool_schema.converter.tool import build_tool, build_tools
from openapi_tool_schema.errors import ToolSchemaError
from openapi_tool_schema.llm import LlmClient
from openapi_tool_schema.parser.document import OpenApiDocument

SELECT_TOOL_PROMPT = (
    "You operate the {title} HTTP API through the tools provided. "
    "Pick the one operation that answers the user's request and fill in its arguments."
)


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _load(doc_path: Path) -> OpenApiDocument:
    try:
        return OpenApiDocument.from_file(doc_path)
    except ToolSchemaError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """OpenAPI Tool Schema — describe API operations as JSON Schema tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("path")
@click.argument("method")
def params(doc_path: Path, path: str, method: str):
    """Print the JSON Schema of one operation's parameters."""
    document = _load(doc_path)
    try:
        schema = aggregate(document.get_parameters_for_operation(path, method))
    except ToolSchemaError as e:
        raise click.ClickException(str(e)) from e
    _echo_json(schema.to_dict())


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("path")
@click.argument("method")
def tool(doc_path: Path, path: str, method: str):
    """Print the tool definition of one operation."""
    document = _load(doc_path)
    try:
        definition = build_tool(document.get_operation(path, method))
    except ToolSchemaError as e:
        raise click.ClickException(str(e)) from e
    _echo_json(definition.to_openai())


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def tools(doc_path: Path):
    """Print the tool definitions of every operation in the document."""
    document = _load(doc_path)
    try:
        definitions = build_tools(document)
    except ToolSchemaError as e:
        raise click.ClickException(str(e)) from e
    _echo_json([d.to_openai() for d in definitions])


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("question")
@click.option("--model", default=None, envvar="OPENAPI_TOOL_SCHEMA_MODEL", help="LLM model to use.")
def ask(doc_path: Path, question: str, model: str | None):
    """Ask the LLM which operation answers QUESTION, and with what arguments."""
    document = _load(doc_path)
    try:
        definitions = build_tools(document)
        call = LlmClient(model=model).select_tool(
            SELECT_TOOL_PROMPT.format(title=document.title or "target"), question, definitions
        )
    except ToolSchemaError as e:
        raise click.ClickException(str(e)) from e

    if call is None:
        click.echo("The model did not select a tool.")
        return
    _echo_json(call.model_dump())
