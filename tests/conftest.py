"""
Shared fixtures for the noodlbox hooks test suite.

Provides test fixtures for:
- Repository cache files with controllable freshness
- Hook configuration pointing at temporary paths
- Fake noodl subprocess results
"""

import json
import subprocess
import time
from collections.abc import Callable
from pathlib import Path

import pytest

from noodlbox_hooks.config import HookConfig


def now_ms() -> int:
    return int(time.time() * 1000)


@pytest.fixture()
def cache_file(tmp_path: Path) -> Path:
    """Location of the repository cache inside the test directory."""
    return tmp_path / "cache" / "repositories.json"


@pytest.fixture()
def write_repo_cache(cache_file: Path) -> Callable[..., Path]:
    """Factory writing a repository cache file.

    Usage:
        write_repo_cache([{"id": "r1", "full_name": "me/app",
                           "source_path": "/work/app", "indexed": True}])
    """

    def _write(repositories: list[dict], cached_at: int | None = None, **extra) -> Path:
        data = {
            "repositories": repositories,
            "path_index": {repo["source_path"]: i for i, repo in enumerate(repositories)},
            "id_index": {repo["id"]: i for i, repo in enumerate(repositories)},
        }
        data.update(extra)
        payload = {
            "data": data,
            "cached_at": now_ms() if cached_at is None else cached_at,
        }
        cache_file.parent.mkdir(parents=True, exist_ok=True)
        cache_file.write_text(json.dumps(payload))
        return cache_file

    return _write


@pytest.fixture()
def hook_config(cache_file: Path) -> HookConfig:
    """Hook configuration isolated from the user's home directory."""
    return HookConfig(cache_file=cache_file, auto_update=False)


@pytest.fixture()
def completed() -> Callable[..., subprocess.CompletedProcess]:
    """Factory for fake subprocess.run results."""

    def _completed(
        stdout: str = "", returncode: int = 0, stderr: str = ""
    ) -> subprocess.CompletedProcess:
        return subprocess.CompletedProcess(
            args=["noodl"], returncode=returncode, stdout=stdout, stderr=stderr
        )

    return _completed


@pytest.fixture()
def structured_result() -> str:
    """noodl JSON output with one entry point and its flow."""
    return json.dumps(
        {
            "results": [
                {
                    "symbols": [
                        {"name": "respond", "step_index": 2},
                        {"name": "handleAuth", "step_index": 0, "is_fts_match": True},
                        {"name": "validate", "step_index": 1},
                    ]
                }
            ]
        }
    )
