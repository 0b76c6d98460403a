"""Unit tests for the repository cache reader."""

import json

import pytest

from noodlbox_hooks.errors import CacheFormatError
from noodlbox_hooks.storage.repo_cache import (
    CACHE_TTL_MS,
    RepoLookupResult,
    RepoLookupStatus,
    RepositoryCacheReader,
)

APP = {"id": "r1", "full_name": "me/app", "source_path": "/work/app", "indexed": True}
DOCS = {"id": "r2", "full_name": "me/docs", "source_path": "/work/docs", "indexed": False}


class TestRepoLookupResult:
    """Tests for the tri-state lookup result."""

    def test_indexed(self):
        result = RepoLookupResult.indexed("r1", "me/app")

        assert result.status is RepoLookupStatus.INDEXED
        assert result.is_indexed
        assert result.repository_id == "r1"
        assert result.repository_name == "me/app"

    def test_not_indexed_and_unknown(self):
        assert RepoLookupResult.not_indexed().is_not_indexed
        assert RepoLookupResult.unknown().is_unknown
        assert not RepoLookupResult.unknown().is_not_indexed


class TestRepositoryCacheReader:
    """Tests for RepositoryCacheReader.lookup."""

    @pytest.fixture
    def reader(self, cache_file):
        return RepositoryCacheReader(cache_file)

    def test_missing_file_is_unknown(self, reader):
        assert reader.lookup("/work/app").is_unknown

    def test_exact_match_indexed(self, reader, write_repo_cache):
        write_repo_cache([APP, DOCS])

        result = reader.lookup("/work/app")

        assert result == RepoLookupResult.indexed("r1", "me/app")

    def test_exact_match_not_indexed(self, reader, write_repo_cache):
        write_repo_cache([APP, DOCS])

        assert reader.lookup("/work/docs").is_not_indexed

    def test_trailing_separator_ignored(self, reader, write_repo_cache):
        write_repo_cache([APP])

        assert reader.lookup("/work/app/").is_indexed

    def test_prefix_match(self, reader, write_repo_cache):
        write_repo_cache([{**APP, "source_path": "/repo"}])

        result = reader.lookup("/repo/sub/dir")

        assert result.is_indexed
        assert result.repository_name == "me/app"

    def test_prefix_requires_separator(self, reader, write_repo_cache):
        """/repository-other is not inside /repo."""
        write_repo_cache([{**APP, "source_path": "/repo"}])

        assert reader.lookup("/repository-other").is_not_indexed

    def test_prefix_match_not_indexed(self, reader, write_repo_cache):
        write_repo_cache([DOCS])

        assert reader.lookup("/work/docs/guide").is_not_indexed

    def test_longest_prefix_wins(self, reader, write_repo_cache):
        """Nested repositories resolve to the innermost one."""
        outer = {"id": "r1", "full_name": "me/mono", "source_path": "/work/mono", "indexed": False}
        inner = {
            "id": "r2",
            "full_name": "me/service",
            "source_path": "/work/mono/packages/service",
            "indexed": True,
        }
        write_repo_cache([outer, inner])

        result = reader.lookup("/work/mono/packages/service/src")

        assert result == RepoLookupResult.indexed("r2", "me/service")

    def test_no_match_is_not_indexed(self, reader, write_repo_cache):
        write_repo_cache([APP])

        assert reader.lookup("/tmp/scratch").is_not_indexed

    def test_stale_cache_is_unknown(self, reader, write_repo_cache):
        """A stale cache never yields NOT_INDEXED."""
        write_repo_cache([DOCS], cached_at=0)

        assert reader.lookup("/work/docs").is_unknown
        assert reader.lookup("/elsewhere").is_unknown

    def test_ttl_boundary(self, cache_file, write_repo_cache):
        write_repo_cache([APP], cached_at=1_000_000)

        at_ttl = RepositoryCacheReader(cache_file, clock=lambda: 1_000_000 + CACHE_TTL_MS)
        past_ttl = RepositoryCacheReader(cache_file, clock=lambda: 1_000_001 + CACHE_TTL_MS)

        assert at_ttl.lookup("/work/app").is_indexed
        assert past_ttl.lookup("/work/app").is_unknown

    def test_invalid_json_is_unknown(self, reader, cache_file):
        cache_file.parent.mkdir(parents=True)
        cache_file.write_text("{not json")

        assert reader.lookup("/work/app").is_unknown

    def test_missing_path_index_is_unknown(self, reader, cache_file, write_repo_cache):
        write_repo_cache([APP])
        payload = json.loads(cache_file.read_text())
        del payload["data"]["path_index"]
        cache_file.write_text(json.dumps(payload))

        assert reader.lookup("/work/app").is_unknown

    def test_missing_cached_at_is_unknown(self, reader, cache_file):
        cache_file.parent.mkdir(parents=True)
        cache_file.write_text(json.dumps({"data": {"repositories": [], "path_index": {}}}))

        assert reader.lookup("/work/app").is_unknown

    def test_dangling_index_is_unknown(self, reader, write_repo_cache):
        write_repo_cache([APP], path_index={"/work/app": 5})

        assert reader.lookup("/work/app").is_unknown

    def test_id_index_optional(self, reader, cache_file, write_repo_cache):
        write_repo_cache([APP])
        payload = json.loads(cache_file.read_text())
        del payload["data"]["id_index"]
        cache_file.write_text(json.dumps(payload))

        assert reader.lookup("/work/app").is_indexed

    def test_lookup_is_idempotent(self, reader, write_repo_cache):
        write_repo_cache([APP, DOCS])

        first = reader.lookup("/work/app/src")
        second = reader.lookup("/work/app/src")

        assert first == second

    def test_load_raises_cache_format_error(self, reader):
        with pytest.raises(CacheFormatError) as exc_info:
            reader.load()

        assert "does not exist" in exc_info.value.message
