"""Disk-based cache for route manifests fetched over HTTP.

Uses :mod:`diskcache` to keep remote manifests on the filesystem with a
configurable time-to-live (TTL), so repeated ``routedoc inspect`` calls
against a running application do not refetch the route list every time.

Reads are suppressed while a collection is being compiled
(:func:`~routedoc.generator.state.is_compiling`): an export always works
from a freshly fetched manifest, and refreshes the cached copy on the way.

Cache keys are SHA-256 hashes of the manifest URL.

See Also:
    :class:`~routedoc.models.CacheConfig` -- the Pydantic model that
    controls ``enabled`` and ``ttl_seconds``.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Any, Optional

import diskcache

from routedoc.generator.state import is_compiling
from routedoc.models import CacheConfig


class ManifestCache:
    """Disk-backed cache for remote route manifests.

    Args:
        cache_dir: Root directory for the cache. A ``manifests/``
            subdirectory is created inside it.
        config: Cache configuration (``enabled`` flag and ``ttl_seconds``).

    Example::

        from routedoc.cache import ManifestCache
        from routedoc.models import CacheConfig

        cache = ManifestCache("/tmp/routedoc-cache", CacheConfig())
        cache.set("https://app.test/_routes", {"routes": []})
        hit = cache.get("https://app.test/_routes")
    """

    def __init__(self, cache_dir: str | Path, config: CacheConfig) -> None:
        self._config = config
        self._cache: Optional[diskcache.Cache] = None
        self._cache_dir = Path(cache_dir)
        if config.enabled:
            self._cache = diskcache.Cache(str(self._cache_dir / "manifests"))

    def get(self, url: str) -> Optional[dict[str, Any]]:
        """Look up a cached manifest.

        Returns:
            The cached manifest dict, or ``None`` on a miss, when caching
            is disabled, or while a compilation is in progress.
        """
        if self._cache is None or is_compiling():
            return None
        return self._cache.get(self._make_key(url))

    def set(self, url: str, manifest: dict[str, Any]) -> None:
        """Store a manifest under *url* for :attr:`CacheConfig.ttl_seconds`."""
        if self._cache is None:
            return
        self._cache.set(self._make_key(url), manifest, expire=self._config.ttl_seconds)

    def invalidate(self, url: str) -> None:
        """Remove the entry for *url*."""
        if self._cache is not None:
            self._cache.delete(self._make_key(url))

    def clear(self) -> None:
        """Remove all entries from the cache."""
        if self._cache is not None:
            self._cache.clear()

    def stats(self) -> dict[str, Any]:
        """Return cache statistics.

        Returns:
            A ``dict`` with ``enabled`` (bool), and when enabled:
            ``size``, ``directory`` and ``ttl_seconds``.
        """
        if self._cache is None:
            return {"enabled": False}
        return {
            "enabled": True,
            "size": len(self._cache),
            "directory": str(self._cache_dir / "manifests"),
            "ttl_seconds": self._config.ttl_seconds,
        }

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache`."""
        if self._cache is not None:
            self._cache.close()

    def _make_key(self, url: str) -> str:
        return hashlib.sha256(url.encode()).hexdigest()
