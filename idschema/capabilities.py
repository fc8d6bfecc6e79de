"""Capabilities descriptor reported by every mapper backend."""

from pydantic import BaseModel, Field

from idschema.namespace import Namespace


class MapperCapabilities(BaseModel):
    """What a mapper can do, as reported at the time of the call.

    Backends build a fresh descriptor on every ``get_capabilities()`` call
    because the supported namespaces may depend on live connection state.

    Attributes:
        source_namespaces: Namespaces accepted as mapping input
        target_namespaces: Namespaces the mapper can produce
        free_search_supported: Whether free-text search is available
        properties: Free-form backend metadata (schema version, build date, ...)
    """

    model_config = {"frozen": True}

    source_namespaces: frozenset[Namespace] = Field(default_factory=frozenset)
    target_namespaces: frozenset[Namespace] = Field(default_factory=frozenset)
    free_search_supported: bool = False
    properties: dict[str, str] = Field(default_factory=dict)

    def is_mapping_supported(self, source: Namespace, target: Namespace) -> bool:
        """True if identifiers in ``source`` can be mapped to ``target``."""
        return source in self.source_namespaces and target in self.target_namespaces
