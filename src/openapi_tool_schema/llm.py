"""LLM client wrapper around litellm.

Offers tool definitions to any model supported by litellm and decodes the
tool call it picks.
"""

import json

from litellm import completion
from pydantic import BaseModel

from openapi_tool_schema.converter.tool import ToolDefinition
from openapi_tool_schema.errors import ToolCallError

DEFAULT_MODEL = "claude-sonnet-4-20250514"


class ToolCall(BaseModel):
    """A tool the model chose and the arguments it filled in."""

    name: str
    arguments: dict


class LlmClient:
    """Wrapper for LLM API calls via litellm."""

    def __init__(self, model: str | None = None):
        self.model = model or DEFAULT_MODEL

    def select_tool(self, system: str, user: str, tools: list[ToolDefinition]) -> ToolCall | None:
        """Offer ``tools`` to the LLM and return the first tool call it makes.

        Returns None when the model answers without calling a tool.
        """
        response = completion(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            tools=[tool.to_openai() for tool in tools],
        )
        tool_calls = response.choices[0].message.tool_calls
        if not tool_calls:
            return None

        function = tool_calls[0].function
        try:
            arguments = json.loads(function.arguments or "{}")
        except json.JSONDecodeError as e:
            raise ToolCallError(f"Tool '{function.name}' called with invalid arguments: {e}") from e
        if not isinstance(arguments, dict):
            raise ToolCallError(f"Tool '{function.name}' arguments are not a JSON object")
        return ToolCall(name=function.name, arguments=arguments)
