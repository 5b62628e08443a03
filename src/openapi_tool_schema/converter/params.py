"""Merge an operation's parameters into one JSON Schema object."""

from openapi_tool_schema.converter.schema import JsonTypedSchema, translate
from openapi_tool_schema.errors import ParamSchemaMissing
from openapi_tool_schema.parser.base import Parameter


def aggregate(params: list[Parameter]) -> JsonTypedSchema:
    """Build an object schema with one property per parameter.

    A parameter's description is attached to its translated schema unless
    the schema already has its own. Required parameters are listed in
    ``required``. Parameters sharing a name overwrite each other, last one
    wins.

    Raises:
        ParamSchemaMissing: a parameter has no schema. Nothing is returned
            for the parameters translated before it.
    """
    properties = {}
    required: list[str] = []

    for param in params:
        if param.schema_ is None:
            raise ParamSchemaMissing(param.name)

        schema = translate(param.schema_)
        if param.description and schema.description is None:
            schema = schema.model_copy(update={"description": param.description})

        properties[param.name] = schema
        if param.required and param.name not in required:
            required.append(param.name)

    return JsonTypedSchema(type="object", properties=properties, required=required)
