from pathlib import Path

import pytest

from openapi_tool_schema.converter.tool import build_tool, build_tools, clean_tool_name
from openapi_tool_schema.errors import ParamSchemaMissing
from openapi_tool_schema.parser.base import Operation, Parameter
from openapi_tool_schema.parser.document import OpenApiDocument

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def widgets():
    return OpenApiDocument.from_file(FIXTURES / "widgets.yaml")


class TestCleanToolName:
    def test_keeps_valid_name(self):
        assert clean_tool_name("createWidget") == "createWidget"

    def test_replaces_invalid_characters(self):
        assert clean_tool_name("get_/widgets/{widgetId}") == "get_widgets_widgetId"

    def test_truncates_long_names(self):
        assert len(clean_tool_name("a" * 100)) == 64


class TestBuildTool:
    def test_name_and_description(self, widgets):
        tool = build_tool(widgets.get_operation("/widgets", "post"))
        assert tool.name == "createWidget"
        assert tool.description == "Create a widget"

    def test_name_from_method_and_path(self, widgets):
        tool = build_tool(widgets.get_operation("/widgets/{widgetId}", "get"))
        assert tool.name == "get_widgets_widgetId"
        assert tool.description == "Get a widget"

    def test_query_params_grouped(self, widgets):
        tool = build_tool(widgets.get_operation("/widgets", "get"))
        params = tool.parameters.properties["params"]
        assert set(params.properties) == {"limit", "status"}
        assert params.properties["status"].enum == ["active", "retired"]
        assert params.properties["limit"].description == "Maximum number of widgets to return"
        assert tool.parameters.required == []

    def test_groups_by_location(self, widgets):
        tool = build_tool(widgets.get_operation("/widgets/{widgetId}", "get"))
        props = tool.parameters.properties
        assert list(props) == ["params", "path_params", "headers"]
        assert props["path_params"].required == ["widgetId"]
        assert props["params"].required == ["verbose"]
        assert props["headers"].required == []
        assert tool.parameters.required == ["params", "path_params"]

    def test_request_body_under_data(self, widgets):
        tool = build_tool(widgets.get_operation("/widgets", "post"))
        data = tool.parameters.properties["data"]
        assert data.to_dict() == {
            "type": "object",
            "properties": {"name": {"type": "string"}},
            "required": ["name"],
        }
        assert "data" in tool.parameters.required
        assert "params" in tool.parameters.required

    def test_unusable_operation_id_falls_back(self):
        tool = build_tool(Operation(path="/", method="get", operation_id="\u00fc"))
        assert tool.name == "get"

    def test_unusable_operation_id_uses_path(self):
        tool = build_tool(Operation(path="/gr\u00fc\u00dfe/{id}", method="post", operation_id="\u00fc\u00df"))
        assert tool.name == "post_gr_e_id"

    def test_no_parameters(self):
        tool = build_tool(Operation(path="/ping", method="get", summary="Ping"))
        assert tool.parameters.to_dict() == {"type": "object", "properties": {}, "required": []}

    def test_missing_param_schema(self):
        op = Operation(path="/ping", method="get", parameters=[Parameter(name="q")])
        with pytest.raises(ParamSchemaMissing):
            build_tool(op)

    def test_to_openai(self, widgets):
        payload = build_tool(widgets.get_operation("/widgets/{widgetId}", "delete")).to_openai()
        assert payload["type"] == "function"
        fn = payload["function"]
        assert fn["name"] == "deleteWidget"
        assert fn["description"] == "Delete a widget"
        assert fn["parameters"]["properties"]["path_params"]["properties"]["widgetId"] == {
            "type": "string",
            "description": "Widget identifier",
        }

    def test_any_of_rendered_in_payload(self, widgets):
        payload = build_tool(widgets.get_operation("/widgets", "post")).to_openai()
        any_of = payload["function"]["parameters"]["properties"]["params"]["properties"]["paramWithAnyOf"]
        assert any_of == {"anyOf": [{"type": "string"}, {"type": "number"}]}


class TestBuildTools:
    def test_one_tool_per_operation(self, widgets):
        names = [t.name for t in build_tools(widgets)]
        assert names == ["listWidgets", "createWidget", "get_widgets_widgetId", "deleteWidget"]
