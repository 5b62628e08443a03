"""Package OpenAPI operations as function-calling tool definitions."""

import logging
import re

from pydantic import BaseModel

from openapi_tool_schema.converter.params import aggregate
from openapi_tool_schema.converter.schema import JsonTypedSchema, translate
from openapi_tool_schema.parser.base import Operation, Parameter
from openapi_tool_schema.parser.document import OpenApiDocument

logger = logging.getLogger(__name__)

# parameter location -> property name in the tool's arguments
LOCATION_GROUPS = {
    "query": "params",
    "path": "path_params",
    "header": "headers",
    "cookie": "cookies",
}

BODY_PROPERTY = "data"

MAX_NAME_LENGTH = 64


class ToolDefinition(BaseModel):
    """A callable tool: name, description and an object schema for its arguments."""

    name: str
    description: str
    parameters: JsonTypedSchema

    def to_openai(self) -> dict:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters.to_dict(),
            },
        }


def clean_tool_name(raw: str) -> str:
    """Reduce ``raw`` to the characters tool names allow: ``[a-zA-Z0-9_-]``."""
    name = re.sub(r"[^a-zA-Z0-9_-]+", "_", raw)
    name = re.sub(r"_+", "_", name).strip("_")
    return name[:MAX_NAME_LENGTH]


def build_tool(operation: Operation) -> ToolDefinition:
    """Build the tool definition for one operation.

    Parameters are grouped by location, each group an object schema of its
    own. A group is required when any of its parameters is. The request
    body, if any, goes under ``data`` and is always required.
    """
    grouped: dict[str, list[Parameter]] = {}
    for param in operation.parameters:
        grouped.setdefault(param.location, []).append(param)

    properties = {}
    required = []
    for location, group_name in LOCATION_GROUPS.items():
        params = grouped.get(location)
        if not params:
            continue
        properties[group_name] = aggregate(params)
        if any(p.required for p in params):
            required.append(group_name)

    if operation.request_body is not None:
        properties[BODY_PROPERTY] = translate(operation.request_body)
        required.append(BODY_PROPERTY)

    fallback = f"{operation.method}_{operation.path}"
    name = clean_tool_name(operation.operation_id or fallback) or clean_tool_name(fallback)
    logger.debug("Built tool %s for %s %s", name, operation.method.upper(), operation.path)

    return ToolDefinition(
        name=name,
        description=operation.description or operation.summary,
        parameters=JsonTypedSchema(type="object", properties=properties, required=required),
    )


def build_tools(document: OpenApiDocument) -> list[ToolDefinition]:
    """Build one tool per operation in the document."""
    return [build_tool(operation) for operation in document.operations()]
