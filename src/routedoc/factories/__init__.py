"""Sample payloads for exported requests.

* :class:`FactoryRegistry` -- shape name to factory function registry,
  loaded from ``factories_path``.
* :func:`sample_factory` -- decorator marking a factory in a factory module.
* :func:`infer_fields` -- deterministic samples from inline field shapes.
"""

from routedoc.factories.inference import infer_fields
from routedoc.factories.registry import FactoryRegistry, SampleFactory, sample_factory

__all__ = ["FactoryRegistry", "SampleFactory", "infer_fields", "sample_factory"]
