"""Data models for OpenAPI schema nodes, parameters and operations.

Schema nodes are a tagged union: a node either carries a ``type``
(``TypedSchema``) or an ``anyOf`` list (``UnionSchema``). Keywords outside
this model (``format``, ``minimum``, ``$schema`` ...) are dropped on input.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter, ValidationError

from openapi_tool_schema.errors import InvalidSchema


def node_kind(value: Any) -> str:
    """Pick the union member for a raw mapping or an already built node."""
    if isinstance(value, dict):
        return "union" if "anyOf" in value or "any_of" in value else "typed"
    return "union" if hasattr(value, "any_of") else "typed"


class TypedSchema(BaseModel):
    """A schema node with an explicit ``type``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str | list[str]  # string / number / integer / boolean / object / array, or a 3.1 list
    description: str | None = None
    enum: list[Any] | None = None
    properties: dict[str, "SchemaNode"] | None = None
    required: list[str] | None = None
    items: "SchemaNode | None" = None


class UnionSchema(BaseModel):
    """A schema node matching any one of ``anyOf`` (order is significant)."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    any_of: list["SchemaNode"] = Field(alias="anyOf")
    description: str | None = None


SchemaNode = Annotated[
    Union[Annotated[TypedSchema, Tag("typed")], Annotated[UnionSchema, Tag("union")]],
    Discriminator(node_kind),
]

TypedSchema.model_rebuild()
UnionSchema.model_rebuild()

_schema_adapter = TypeAdapter(SchemaNode)


def parse_schema(data: dict) -> TypedSchema | UnionSchema:
    """Validate a raw OpenAPI schema mapping into a schema node."""
    try:
        return _schema_adapter.validate_python(data)
    except ValidationError as e:
        raise InvalidSchema(f"Invalid schema: {e}") from e


class Parameter(BaseModel):
    """A single operation parameter (query, path, header, or cookie)."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str
    location: Literal["query", "path", "header", "cookie"] = Field(default="query", alias="in")
    required: bool = False
    description: str | None = None
    schema_: SchemaNode | None = Field(default=None, alias="schema")


class Operation(BaseModel):
    """An operation addressed by path and HTTP method."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    path: str  # /widgets/{id}
    method: str  # lower case: get / post / ...
    operation_id: str | None = Field(default=None, alias="operationId")
    summary: str = ""
    description: str = ""
    parameters: list[Parameter] = []
    request_body: SchemaNode | None = None
