"""Exceptions raised while loading documents and converting schemas.

Nothing here is recovered internally: every error propagates to the caller,
which is expected to report it as a problem in the source document.
"""


class ToolSchemaError(Exception):
    """Base class for all openapi-tool-schema errors."""


class SchemaMissing(ToolSchemaError):
    """A schema was expected but none was supplied."""


class ParamSchemaMissing(SchemaMissing):
    """An operation parameter has no ``schema``."""

    def __init__(self, param_name: str):
        super().__init__(f"Parameter '{param_name}' has no schema")
        self.param_name = param_name


class InvalidSchema(ToolSchemaError):
    """A schema mapping is neither a typed node nor an ``anyOf`` union."""


class InvalidDocument(ToolSchemaError):
    """The input is not a usable OpenAPI document."""


class OperationNotFound(ToolSchemaError):
    def __init__(self, path: str, method: str):
        super().__init__(f"No operation {method.upper()} {path}")
        self.path = path
        self.method = method


class UnresolvedReference(ToolSchemaError):
    """A ``$ref`` was found where a resolved definition is required."""

    def __init__(self, ref: str):
        super().__init__(f"Unresolved reference: {ref}")
        self.ref = ref


class ToolCallError(ToolSchemaError):
    """The model returned a tool call whose arguments cannot be decoded."""
