"""Disk-based caching of remote route manifests.

This package provides :class:`ManifestCache`, which stores manifests
fetched by :func:`~routedoc.parser.loader.load_manifest` under a
configurable TTL. It is controlled by the ``cache`` section of the export
configuration (:class:`~routedoc.models.CacheConfig`).
"""

from routedoc.cache.cache import ManifestCache

__all__ = ["ManifestCache"]
