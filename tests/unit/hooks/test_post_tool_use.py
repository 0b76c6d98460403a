"""Unit tests for the PostToolUse executor."""

import json

import pytest

from noodlbox_hooks.hooks.post_tool_use import PostToolUseExecutor, response_text

TOOL = "mcp__noodlbox__query_with_context"


def _event(tool_response, tool_input=None, tool_name=TOOL):
    return {
        "hook_event_name": "PostToolUse",
        "tool_name": tool_name,
        "tool_input": tool_input if tool_input is not None else {"q": "auth flow"},
        "tool_response": tool_response,
    }


class TestResponseText:
    def test_string(self):
        assert response_text("plain") == "plain"

    def test_result_string(self):
        assert response_text({"result": "inner"}) == "inner"

    def test_result_object(self):
        assert json.loads(response_text({"result": {"results": []}})) == {"results": []}

    def test_other_object(self):
        assert json.loads(response_text({"content": [1]})) == {"content": [1]}


class TestPostToolUseExecutor:
    """Tests for PostToolUseExecutor.execute."""

    @pytest.fixture
    def executor(self):
        return PostToolUseExecutor()

    def test_other_tools_ignored(self, executor, structured_result):
        assert executor.execute(_event(structured_result, tool_name="Grep")) is None

    def test_summary_for_structured_response(self, executor, structured_result):
        output = executor.execute(_event(structured_result)).to_dict()

        specific = output["hookSpecificOutput"]
        assert specific["hookEventName"] == "PostToolUse"
        assert "permissionDecision" not in specific
        assert specific["additionalContext"].startswith('Noodlbox search for "auth flow":\n')
        assert "  handleAuth (match)" in specific["additionalContext"]
        assert "→ validate → respond" in output["systemMessage"]

    def test_nested_result_payload(self, executor, structured_result):
        output = executor.execute(_event({"result": json.loads(structured_result)}))

        assert output is not None
        assert "handleAuth" in output.additional_context

    def test_query_key_fallbacks(self, executor, structured_result):
        by_query = executor.execute(_event(structured_result, {"query": "login"}))
        no_input = executor.execute(_event(structured_result, {}))

        assert by_query.additional_context.startswith('Noodlbox search for "login"')
        assert no_input.additional_context.startswith('Noodlbox search for "query"')

    def test_no_entry_points(self, executor):
        assert executor.execute(_event("nothing useful here")) is None
        assert executor.execute(_event({"result": None})) is None
