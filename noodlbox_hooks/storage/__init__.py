"""Storage: repository cache reader and search result caches."""

from .repo_cache import (
    CACHE_TTL_MS,
    RepoLookupResult,
    RepoLookupStatus,
    RepositoryCache,
    RepositoryCacheEntry,
    RepositoryCacheReader,
)
from .search_cache import (
    MemorySearchCache,
    NullSearchCache,
    SearchResultCache,
    search_cache_key,
)

__all__ = [
    "CACHE_TTL_MS",
    "RepoLookupResult",
    "RepoLookupStatus",
    "RepositoryCache",
    "RepositoryCacheEntry",
    "RepositoryCacheReader",
    "SearchResultCache",
    "NullSearchCache",
    "MemorySearchCache",
    "search_cache_key",
]
