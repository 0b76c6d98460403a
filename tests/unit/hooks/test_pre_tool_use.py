"""Unit tests for the PreToolUse executor."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from noodlbox_hooks.hooks.pre_tool_use import PreToolUseExecutor
from noodlbox_hooks.search.client import NoodlClient, SearchOutcome
from noodlbox_hooks.storage.repo_cache import RepositoryCacheReader

APP = {"id": "r1", "full_name": "me/app", "source_path": "/work/app", "indexed": True}
DOCS = {"id": "r2", "full_name": "me/docs", "source_path": "/work/docs", "indexed": False}


@pytest.fixture
def client(structured_result):
    client = MagicMock(spec=NoodlClient)
    client.search.return_value = SearchOutcome.succeeded(structured_result, 42)
    return client


@pytest.fixture
def resolve_name():
    return MagicMock(return_value="git/name")


@pytest.fixture
def executor(hook_config, client, resolve_name):
    return PreToolUseExecutor(
        hook_config,
        client,
        RepositoryCacheReader(hook_config.cache_file),
        resolve_name=resolve_name,
    )


def _event(tool_name, tool_input, cwd="/work/app"):
    return {
        "hook_event_name": "PreToolUse",
        "tool_name": tool_name,
        "tool_input": tool_input,
        "cwd": cwd,
    }


class TestPreToolUseExecutor:
    """Tests for PreToolUseExecutor.evaluate and execute."""

    def test_non_search_tool(self, executor, client):
        decision = executor.evaluate(_event("Read", {"file_path": "/work/app/x.py"}))

        assert decision.reason == "not a search tool"
        assert decision.lookup is None
        client.search.assert_not_called()

    def test_not_indexed_skips_search(self, executor, client, write_repo_cache):
        """A known-unindexed directory never spawns noodl."""
        write_repo_cache([APP, DOCS])

        output = executor.execute(_event("Grep", {"pattern": "handleAuth"}, cwd="/work/docs"))

        assert output is None
        client.search.assert_not_called()

    def test_unknown_cache_still_searches(self, executor, client, resolve_name):
        """A missing cache does not block the search."""
        decision = executor.evaluate(_event("Grep", {"pattern": "handleAuth"}))

        assert decision.lookup.is_unknown
        client.search.assert_called_once_with("handleAuth", "/work/app")
        assert decision.repository_name == "git/name"
        resolve_name.assert_called_once_with("/work/app")

    def test_indexed_uses_cached_name(self, executor, write_repo_cache, resolve_name):
        write_repo_cache([APP])

        decision = executor.evaluate(_event("Grep", {"pattern": "handleAuth"}))

        assert decision.repository_name == "me/app"
        resolve_name.assert_not_called()

    def test_no_query(self, executor, client, write_repo_cache):
        write_repo_cache([APP])

        decision = executor.evaluate(_event("Glob", {"pattern": "**/*.py"}))

        assert decision.reason == "no meaningful query"
        client.search.assert_not_called()

    def test_search_failure_gives_no_output(self, executor, client, write_repo_cache):
        write_repo_cache([APP])
        client.search.return_value = SearchOutcome.failed(not_indexed=True)

        decision = executor.evaluate(_event("Bash", {"command": "rg handleAuth"}))

        assert decision.reason == "noodl reports repository not indexed"
        assert decision.to_output() is None

    def test_success_output(self, executor, write_repo_cache, structured_result):
        write_repo_cache([APP])

        output = executor.execute(_event("Grep", {"pattern": "handleAuth"})).to_dict()

        specific = output["hookSpecificOutput"]
        assert specific["hookEventName"] == "PreToolUse"
        assert specific["permissionDecision"] == "allow"
        assert specific["additionalContext"] == (
            f'Noodlbox search for "handleAuth" in me/app:\n{structured_result}'
        )
        assert 'Semantic search "handleAuth" (42ms)' in output["systemMessage"]
        assert "handleAuth (match)" in output["systemMessage"]
        assert "→ validate → respond" in output["systemMessage"]

    def test_success_without_repository_name(self, executor, resolve_name):
        resolve_name.return_value = None

        output = executor.execute(_event("Grep", {"pattern": "handleAuth"}))

        assert output.additional_context.startswith('Noodlbox search for "handleAuth":\n')

    def test_bash_length_guard_from_config(self, hook_config, client, resolve_name):
        config = hook_config.model_copy(update={"max_command_length": 20})
        executor = PreToolUseExecutor(
            config, client, RepositoryCacheReader(config.cache_file), resolve_name=resolve_name
        )

        output = executor.execute(_event("Bash", {"command": "grep handleAuth src/ lib/ test/"}))

        assert output is None
        client.search.assert_not_called()

    def test_missing_cwd_uses_process_directory(self, executor, client, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)

        executor.evaluate({"tool_name": "Grep", "tool_input": {"pattern": "handleAuth"}})

        client.search.assert_called_once_with("handleAuth", str(Path.cwd()))

    def test_slow_search_skips_name_lookup(self, executor, client, resolve_name, structured_result):
        """Past half the search timeout there is no time left for git."""
        client.search.return_value = SearchOutcome.succeeded(structured_result, 3000)

        decision = executor.evaluate(_event("Grep", {"pattern": "handleAuth"}))

        assert decision.reason == "search succeeded"
        assert decision.repository_name is None
        resolve_name.assert_not_called()

    def test_search_at_half_timeout_still_resolves(
        self, executor, client, resolve_name, structured_result
    ):
        client.search.return_value = SearchOutcome.succeeded(structured_result, 2500)

        decision = executor.evaluate(_event("Grep", {"pattern": "handleAuth"}))

        assert decision.repository_name == "git/name"
