"""Compile a route manifest into a Postman collection and write it out.

:class:`CollectionExporter` wires the pipeline together::

    manifest ──> RouteTable ──> (route, method) pairs ──> RequestItem ──> tree
      loader      extractor        path_rules            request_item    collection_tree

Sample factories are loaded once before the first route is processed, the
root document is created once per run, and every item passes through the
plugin hooks before it is filed. The whole run executes inside
:func:`~routedoc.generator.state.compilation`, so the flag is always reset
and collaborators can tell an export from an ad-hoc lookup.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from routedoc.auth import AuthManager, create_default_manager
from routedoc.cache import ManifestCache
from routedoc.config import atomic_write, get_cache_dir, resolve_credential
from routedoc.exceptions import ExportWriteError, InvalidUsageError
from routedoc.factories import FactoryRegistry
from routedoc.generator import (
    build_tree,
    compilation,
    filter_routes,
    initialize_document,
    make_request,
    route_segments,
)
from routedoc.models import ExportConfig, RootDocument
from routedoc.parser import RouteTable, extract_routes, load_manifest
from routedoc.plugins import HookRunner, PluginManager

logger = logging.getLogger(__name__)


class CollectionExporter:
    """Build :class:`~routedoc.models.RootDocument` objects from routes.

    Args:
        config: Effective export configuration.
        factories: Sample factory registry; a fresh one is created (and
            filled from ``config.factories_path``) when omitted.
        auth_manager: Auth block builders; defaults to the built-in set.
        plugins: Loaded plugin manager whose hooks run during compilation.
        cache: Manifest cache for URL sources. When omitted one is opened
            under the user cache directory if ``config.cache.enabled``.

    Example::

        with CollectionExporter(config) as exporter:
            document = exporter.compile()
        export_collection(document, config.output_path())
    """

    def __init__(
        self,
        config: ExportConfig,
        *,
        factories: Optional[FactoryRegistry] = None,
        auth_manager: Optional[AuthManager] = None,
        plugins: Optional[PluginManager] = None,
        cache: Optional[ManifestCache] = None,
    ) -> None:
        self._config = config
        self._factories = factories if factories is not None else FactoryRegistry()
        self._factories_loaded = factories is not None
        self._auth = auth_manager or create_default_manager()
        self._plugins = plugins
        self._owns_cache = cache is None and config.cache.enabled
        self._cache = cache
        if self._owns_cache:
            self._cache = ManifestCache(get_cache_dir(), config.cache)

    @property
    def config(self) -> ExportConfig:
        return self._config

    @property
    def factories(self) -> FactoryRegistry:
        return self._factories

    def __enter__(self) -> CollectionExporter:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the manifest cache if this exporter opened it."""
        if self._owns_cache and self._cache is not None:
            self._cache.close()
            self._cache = None

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def load_routes(self) -> RouteTable:
        """Load and validate the manifest named by ``config.routes``.

        Raises:
            InvalidUsageError: If no manifest source is configured.
        """
        if not self._config.routes:
            raise InvalidUsageError(
                "No route manifest configured. Pass --routes or run 'routedoc init'."
            )
        return extract_routes(load_manifest(self._config.routes, cache=self._cache))

    def load_factories(self) -> list[str]:
        """Load sample factories from ``config.factories_path`` once."""
        if self._factories_loaded or not self._config.factories_path:
            return []
        self._factories_loaded = True
        return self._factories.load(self._config.factories_path)

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def compile(
        self,
        routes: Optional[RouteTable] = None,
        *,
        bearer: Optional[str] = None,
        file_name: Optional[str] = None,
    ) -> RootDocument:
        """Compile *routes* (or the configured manifest) into a document.

        Args:
            routes: Pre-loaded routes; loaded from ``config.routes`` inside
                the compilation scope when omitted.
            bearer: Personal bearer token. Resolved from
                ``config.bearer_source`` when omitted.
            file_name: Collection name; defaults to ``config.collection_name``.

        Raises:
            RoutedocError: Any collaborator failure (manifest, factory,
                auth) propagates after the plugins' ``on_error`` hooks ran.
        """
        hooks = self._plugins.get_hook_runner() if self._plugins else HookRunner([])
        config = self._config

        try:
            with compilation():
                if config.enable_formdata:
                    self.load_factories()
                table = routes if routes is not None else self.load_routes()
                if bearer is None and config.bearer_source:
                    bearer = resolve_credential(config.bearer_source)

                document = initialize_document(config, file_name=file_name, routes=table)
                exported = 0
                for route, method in filter_routes(
                    table, config.include_prefix, config.skip_methods
                ):
                    segments = route_segments(route)
                    if not segments:
                        logger.warning(
                            "Skipping %s %s: no folder segments", method.value, route.uri or "/"
                        )
                        continue

                    fields = (
                        self._factories.get_form_data(route, method.value)
                        if config.enable_formdata
                        else None
                    )
                    item = make_request(
                        route,
                        method,
                        config.headers,
                        fields,
                        bearer,
                        auth_manager=self._auth,
                        auth_middleware=config.auth_middleware,
                    )
                    item = hooks.run_request_item(route, method, item)
                    build_tree(document, segments, item)
                    exported += 1
                    logger.debug("Filed %s %s under %s", method.value, route.uri, "/".join(segments))

                document = hooks.run_document(document)
        except Exception as exc:
            hooks.run_error(exc)
            raise

        logger.info("Compiled %d requests from %d routes", exported, len(table))
        return document


def render_collection(document: RootDocument) -> str:
    """Serialise *document* as pretty-printed Postman JSON."""
    return json.dumps(document.to_dict(), indent=4, ensure_ascii=False) + "\n"


def export_collection(document: RootDocument, output: str) -> Optional[Path]:
    """Write *document* to *output*, or to stdout when *output* is ``'-'``.

    Returns:
        The written path, or ``None`` for stdout.

    Raises:
        ExportWriteError: If the file cannot be written.
    """
    text = render_collection(document)
    if output == "-":
        sys.stdout.write(text)
        sys.stdout.flush()
        return None

    path = Path(output)
    try:
        atomic_write(path, text)
    except OSError as exc:
        raise ExportWriteError(f"Cannot write collection to {path}: {exc}") from exc
    logger.info("Wrote collection to %s", path)
    return path
