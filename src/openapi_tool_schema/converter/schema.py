"""OpenAPI schema node -> JSON Schema node translation."""

from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

from openapi_tool_schema.errors import SchemaMissing
from openapi_tool_schema.parser.base import TypedSchema, UnionSchema, node_kind, parse_schema


class JsonTypedSchema(BaseModel):
    """A JSON Schema node with an explicit ``type``."""

    model_config = ConfigDict(frozen=True)

    type: str | list[str]
    description: str | None = None
    enum: list[Any] | None = None
    properties: dict[str, "JsonSchemaNode"] | None = None
    required: list[str] | None = None
    items: "JsonSchemaNode | None" = None

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class JsonUnionSchema(BaseModel):
    """A JSON Schema ``anyOf`` node."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    any_of: list["JsonSchemaNode"] = Field(alias="anyOf")
    description: str | None = None

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


JsonSchemaNode = Annotated[
    Union[Annotated[JsonTypedSchema, Tag("typed")], Annotated[JsonUnionSchema, Tag("union")]],
    Discriminator(node_kind),
]

JsonTypedSchema.model_rebuild()
JsonUnionSchema.model_rebuild()


def translate(node: TypedSchema | UnionSchema | dict | None) -> JsonTypedSchema | JsonUnionSchema:
    """Translate an OpenAPI schema node into a JSON Schema node.

    ``properties``, ``items`` and ``anyOf`` members are translated
    recursively; ``enum``, ``required`` and ``description`` are copied. An
    object always gets a ``properties`` mapping. A ``type`` this module does
    not know, including a 3.1 list such as ``["string", "null"]``, is passed
    through unchanged instead of failing.

    Raises:
        SchemaMissing: ``node`` is None.
        InvalidSchema: ``node`` is a mapping that is not a valid schema.
    """
    if node is None:
        raise SchemaMissing("No schema to translate")
    if isinstance(node, dict):
        node = parse_schema(node)

    if isinstance(node, UnionSchema):
        return JsonUnionSchema(
            any_of=[translate(member) for member in node.any_of],
            description=node.description,
        )

    if node.type == "object":
        properties = node.properties or {}
    else:
        properties = node.properties

    return JsonTypedSchema(
        type=node.type,
        description=node.description,
        enum=list(node.enum) if node.enum is not None else None,
        properties={name: translate(prop) for name, prop in properties.items()} if properties is not None else None,
        required=list(node.required) if node.required is not None else None,
        items=translate(node.items) if node.items is not None else None,
    )
