"""OpenAPI 3.x document access.

Loads a document and looks up operations and their parameters. References
are not resolved: a ``$ref`` where a parameter, schema or request body is
expected raises UnresolvedReference.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import yaml
from pydantic import ValidationError

from openapi_tool_schema.errors import InvalidDocument, OperationNotFound, UnresolvedReference
from openapi_tool_schema.parser.base import Operation, Parameter, parse_schema

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


class OpenApiDocument:
    """A parsed OpenAPI document."""

    def __init__(self, data: dict):
        if not isinstance(data, dict) or "openapi" not in data:
            raise InvalidDocument("Not an OpenAPI 3.x document: missing 'openapi' field")
        self.data = data

    @classmethod
    def from_file(cls, file_path: Path) -> "OpenApiDocument":
        """Load an OpenAPI document from a YAML or JSON file."""
        text = file_path.read_text(encoding="utf-8")
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise InvalidDocument(f"Cannot parse {file_path}: {e}") from e
        logger.debug("Loaded %s", file_path)
        return cls(data)

    @property
    def title(self) -> str:
        return (self.data.get("info") or {}).get("title") or ""

    def operations(self) -> Iterator[Operation]:
        """Yield every operation in document order."""
        for path, path_item in self._paths().items():
            if not path_item:
                continue
            _check_path_item(path, path_item)
            for method, operation in path_item.items():
                if method.lower() in HTTP_METHODS and operation is not None:
                    yield self.get_operation(path, method)

    def get_operation(self, path: str, method: str) -> Operation:
        """Return the operation at ``path`` for ``method`` (case-insensitive)."""
        path_item, operation = self._find(path, method)
        logger.debug("Found operation %s %s", method.upper(), path)

        try:
            return Operation(
                path=path,
                method=method.lower(),
                operation_id=operation.get("operationId"),
                summary=operation.get("summary") or "",
                description=operation.get("description") or "",
                parameters=self._merge_parameters(path_item, operation),
                request_body=self._parse_request_body(operation.get("requestBody")),
            )
        except ValidationError as e:
            raise InvalidDocument(f"Invalid operation {method.upper()} {path}: {e}") from e

    def get_parameters_for_operation(self, path: str, method: str) -> list[Parameter]:
        """Return path-level then operation-level parameters for an operation.

        An operation parameter with the same name and location as a
        path-level one replaces it in place.
        """
        path_item, operation = self._find(path, method)
        try:
            return self._merge_parameters(path_item, operation)
        except ValidationError as e:
            raise InvalidDocument(f"Invalid parameter in {method.upper()} {path}: {e}") from e

    def _find(self, path: str, method: str) -> tuple[dict, dict]:
        path_item = self._paths().get(path)
        if not path_item:
            raise OperationNotFound(path, method)
        _check_path_item(path, path_item)

        methods = {key.lower(): value for key, value in path_item.items() if key.lower() in HTTP_METHODS}
        operation = methods.get(method.lower())
        if operation is None:
            raise OperationNotFound(path, method)
        if not isinstance(operation, dict):
            raise InvalidDocument(f"Operation {method.upper()} {path} is not a mapping")
        return path_item, operation

    def _paths(self) -> dict:
        paths = self.data.get("paths") or {}
        if not isinstance(paths, dict):
            raise InvalidDocument("'paths' is not a mapping")
        return paths

    def _merge_parameters(self, path_item: dict, operation: dict) -> list[Parameter]:
        merged: dict[tuple[str, str], dict] = {}
        for raw in [*(path_item.get("parameters") or []), *(operation.get("parameters") or [])]:
            if not isinstance(raw, dict):
                raise InvalidDocument(f"Parameter is not a mapping: {raw!r}")
            _check_ref(raw)
            if "schema" in raw:
                _check_ref_tree(raw["schema"])
            merged[(raw.get("name"), raw.get("in", "query"))] = raw
        return [Parameter.model_validate(raw) for raw in merged.values()]

    def _parse_request_body(self, body: dict | None):
        if not body:
            return None
        _check_ref(body)

        content = body.get("content") or {}
        media = content.get("application/json")
        if media is None or "schema" not in media:
            # Fallback: first media type with a schema
            media = next((m for m in content.values() if m and "schema" in m), None)
        if media is None:
            return None

        _check_ref_tree(media["schema"])
        return parse_schema(media["schema"])


def _check_path_item(path: str, path_item) -> None:
    if not isinstance(path_item, dict):
        raise InvalidDocument(f"Path item {path} is not a mapping")
    _check_ref(path_item)


def _check_ref(node: dict) -> None:
    if isinstance(node, dict) and "$ref" in node:
        raise UnresolvedReference(node["$ref"])


def _check_ref_tree(node) -> None:
    if isinstance(node, dict):
        _check_ref(node)
        for value in node.values():
            _check_ref_tree(value)
    elif isinstance(node, list):
        for value in node:
            _check_ref_tree(value)
