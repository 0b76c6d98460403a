"""Read-only view of the indexed repository cache.

The noodl indexer keeps a JSON snapshot of known repositories at
~/.noodlbox/cache/repositories.json:

    {
      "cached_at": 1718000000000,
      "data": {
        "repositories": [{"id": "r1", "full_name": "me/app",
                          "source_path": "/work/app", "indexed": true}],
        "path_index": {"/work/app": 0},
        "id_index": {"r1": 0}
      }
    }

The hooks only use it to skip spawning noodl for directories that are known
not to be indexed. Anything doubtful (missing, stale or malformed file)
resolves to UNKNOWN so the caller asks noodl instead.
"""

import json
import os
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, model_validator

from ..errors import CacheFormatError
from ..hook_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.CACHE)

CACHE_TTL_MS = 600_000  # 10 minutes


class RepositoryCacheEntry(BaseModel):
    """One repository known to the indexer."""

    id: str
    full_name: str
    source_path: str
    indexed: bool = False


class RepositoryCache(BaseModel):
    """Cached repository list with lookup indexes."""

    repositories: list[RepositoryCacheEntry]
    path_index: dict[str, int]
    id_index: dict[str, int] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_indexes(self) -> "RepositoryCache":
        size = len(self.repositories)
        for name, index in (("path_index", self.path_index), ("id_index", self.id_index)):
            for key, position in index.items():
                if not 0 <= position < size:
                    raise ValueError(f"{name}[{key!r}] = {position} is out of range")
        return self


class RepositoryCacheFile(BaseModel):
    """On-disk envelope: payload plus write time in ms since epoch."""

    data: RepositoryCache
    cached_at: float


class RepoLookupStatus(Enum):
    """Indexed state of a working directory."""

    INDEXED = "indexed"
    NOT_INDEXED = "not_indexed"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RepoLookupResult:
    """Result of resolving a working directory against the cache."""

    status: RepoLookupStatus
    repository_id: str | None = None
    repository_name: str | None = None

    @classmethod
    def indexed(cls, repository_id: str, repository_name: str) -> "RepoLookupResult":
        return cls(RepoLookupStatus.INDEXED, repository_id, repository_name)

    @classmethod
    def not_indexed(cls) -> "RepoLookupResult":
        return cls(RepoLookupStatus.NOT_INDEXED)

    @classmethod
    def unknown(cls) -> "RepoLookupResult":
        return cls(RepoLookupStatus.UNKNOWN)

    @property
    def is_indexed(self) -> bool:
        return self.status is RepoLookupStatus.INDEXED

    @property
    def is_not_indexed(self) -> bool:
        return self.status is RepoLookupStatus.NOT_INDEXED

    @property
    def is_unknown(self) -> bool:
        return self.status is RepoLookupStatus.UNKNOWN


def _now_ms() -> int:
    return int(time.time() * 1000)


def _normalize_path(path: str) -> str:
    stripped = path.rstrip("/\\")
    return stripped or path


class RepositoryCacheReader:
    """Resolve working directories against the repository cache file.

    Example usage:
        reader = RepositoryCacheReader(Path.home() / ".noodlbox/cache/repositories.json")
        result = reader.lookup("/work/app/src")
        if result.is_not_indexed:
            return  # no need to call noodl
    """

    def __init__(
        self,
        cache_file: Path,
        ttl_ms: int = CACHE_TTL_MS,
        clock: Callable[[], int] = _now_ms,
    ):
        """Initialize the reader.

        Args:
            cache_file: Path of the indexer's repository cache.
            ttl_ms: Age after which the cache is not trusted.
            clock: Returns the current time in ms since epoch.
        """
        self.cache_file = Path(cache_file)
        self.ttl_ms = ttl_ms
        self._clock = clock

    def load(self) -> RepositoryCache:
        """Load and validate a fresh cache.

        Raises:
            CacheFormatError: If the file is missing, stale or malformed.
        """
        if not self.cache_file.exists():
            raise CacheFormatError("Cache file does not exist", str(self.cache_file))

        try:
            with open(self.cache_file, encoding="utf-8") as f:
                raw = json.load(f)
            entry = RepositoryCacheFile.model_validate(raw)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise CacheFormatError(f"Invalid cache format: {e}", str(self.cache_file)) from e

        age_ms = self._clock() - entry.cached_at
        if age_ms > self.ttl_ms:
            raise CacheFormatError(
                f"Cache is stale ({age_ms // 1000}s old)", str(self.cache_file)
            )

        return entry.data

    def lookup(self, cwd: str) -> RepoLookupResult:
        """Resolve whether ``cwd`` is inside an indexed repository.

        Returns:
            INDEXED or NOT_INDEXED when the cache answers it, UNKNOWN when
            the cache is missing, stale or malformed.
        """
        try:
            cache = self.load()
        except CacheFormatError as e:
            logger.debug(e.message)
            return RepoLookupResult.unknown()

        path = _normalize_path(cwd)

        if path in cache.path_index:
            repo = cache.repositories[cache.path_index[path]]
            logger.debug(
                f"Found repo in cache (exact match): {repo.source_path} indexed={repo.indexed}"
            )
            return self._resolve(repo)

        # Longest prefix wins for nested repositories
        best: str | None = None
        best_length = -1
        for source_path in cache.path_index:
            root = _normalize_path(source_path)
            if path.startswith(root + os.sep) and len(root) > best_length:
                best, best_length = source_path, len(root)

        if best is not None:
            repo = cache.repositories[cache.path_index[best]]
            logger.debug(
                f"Found repo in cache (prefix match): {repo.source_path} indexed={repo.indexed}"
            )
            return self._resolve(repo)

        logger.debug(f"{path} is not in any cached repository")
        return RepoLookupResult.not_indexed()

    @staticmethod
    def _resolve(repo: RepositoryCacheEntry) -> RepoLookupResult:
        if repo.indexed:
            return RepoLookupResult.indexed(repo.id, repo.full_name)
        return RepoLookupResult.not_indexed()
