"""Sample-value factory registry.

Exported requests carry example payloads so that a collection is usable
straight away. Payloads come from *factories*: plain functions keyed by
the input shape they fill (for example ``"CreateOrderRequest"``). A route
selects its shape through :attr:`~routedoc.models.RouteDescriptor.form`.

Factories live in ordinary Python files under the configured
``factories_path`` and mark themselves with :func:`sample_factory`::

    from routedoc.factories import sample_factory

    @sample_factory("CreateOrderRequest")
    def create_order(route, method):
        return {"product_id": 42, "quantity": 2}

:meth:`FactoryRegistry.load` imports those files once, before any route is
processed, and registers every decorated callable. Lookup at export time
is a plain dict access by shape name.
"""

from __future__ import annotations

import importlib.util
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Optional

from routedoc.exceptions import FactoryError
from routedoc.factories.inference import infer_fields
from routedoc.models import RouteDescriptor

logger = logging.getLogger(__name__)

SampleFactory = Callable[[RouteDescriptor, str], Mapping[str, Any]]
"""Signature of a factory: ``(route, method) -> sample fields``."""

_SHAPE_ATTR = "__routedoc_shape__"


def sample_factory(shape: str) -> Callable[[SampleFactory], SampleFactory]:
    """Mark a function as the sample factory for *shape*.

    The function is returned unchanged; :meth:`FactoryRegistry.load` picks
    it up by the marker attribute.
    """

    def decorator(func: SampleFactory) -> SampleFactory:
        setattr(func, _SHAPE_ATTR, shape)
        return func

    return decorator


class FactoryRegistry:
    """Maps input shape identifiers to sample factories.

    Example::

        registry = FactoryRegistry()
        registry.load("tests/factories")
        fields = registry.get_form_data(route, "POST")
    """

    def __init__(self) -> None:
        self._factories: dict[str, SampleFactory] = {}

    def register(self, shape: str, factory: SampleFactory) -> None:
        """Register *factory* for *shape*, replacing any previous one."""
        if shape in self._factories:
            logger.debug("Replacing sample factory for shape '%s'", shape)
        self._factories[shape] = factory

    def has(self, shape: str) -> bool:
        return shape in self._factories

    def shapes(self) -> list[str]:
        """Return the registered shape identifiers, sorted."""
        return sorted(self._factories)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, path: str | Path) -> list[str]:
        """Import factory modules from *path* and register their factories.

        Args:
            path: A directory (every ``*.py`` not starting with ``_`` is
                imported, in name order) or a single Python file.

        Returns:
            The shapes registered by this call, in discovery order.

        Raises:
            FactoryError: If *path* does not exist or a module fails to
                import.
        """
        root = Path(path)
        if root.is_dir():
            files = sorted(p for p in root.glob("*.py") if not p.name.startswith("_"))
        elif root.is_file():
            files = [root]
        else:
            raise FactoryError(f"Factories path not found: {root}")

        registered: list[str] = []
        for file in files:
            for shape, factory in self._import_factories(file):
                self.register(shape, factory)
                registered.append(shape)

        logger.info("Loaded %d sample factories from %s", len(registered), root)
        return registered

    def _import_factories(self, file: Path) -> list[tuple[str, SampleFactory]]:
        module_name = f"routedoc_factories.{file.stem}"
        spec = importlib.util.spec_from_file_location(module_name, file)
        if spec is None or spec.loader is None:
            raise FactoryError(f"Cannot import factory module {file}")
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            raise FactoryError(f"Failed to load factory module {file}: {exc}") from exc

        found: list[tuple[str, SampleFactory]] = []
        for value in vars(module).values():
            shape = getattr(value, _SHAPE_ATTR, None)
            if callable(value) and isinstance(shape, str):
                found.append((shape, value))
        return found

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_form_data(
        self, route: RouteDescriptor, method: str, shape: Optional[str] = None
    ) -> dict[str, Any]:
        """Return sample fields for *route* called with *method*.

        Resolution order: the factory for *shape* (defaulting to
        ``route.form``), then inference from ``route.fields``, then an
        empty dict.

        Raises:
            FactoryError: If a shape is requested but no factory is
                registered for it, or the factory returns a non-mapping.
        """
        shape = shape if shape is not None else route.form
        if shape:
            factory = self._factories.get(shape)
            if factory is None:
                raise FactoryError(
                    f"No sample factory registered for shape '{shape}' "
                    f"(route {route.display_name()})"
                )
            result = factory(route, method.upper())
            if not isinstance(result, Mapping):
                raise FactoryError(
                    f"Sample factory for '{shape}' returned {type(result).__name__}, "
                    "expected a mapping"
                )
            return dict(result)

        if route.fields:
            return infer_fields(route.fields)
        return {}
