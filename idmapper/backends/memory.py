"""In-memory mapper backend for testing and development.

Keeps the whole mapping table in Python containers. Suitable for unit
tests, small curated mapping sets and prototyping; not for production
data sets, since every search is a linear scan.

Data model (shared with the SQLite backend):

- **Datanodes**: identifiers the backend knows about.
- **Links**: ``(left, right)`` pairs. A link puts ``right`` into the
  mapping group keyed by ``left``. Every left is also a member of its own
  group through an implicit self link.
- **Attributes**: ``(xref, name, value)`` triples, e.g. the gene symbol.

Mapping an identifier returns every other member of every group it
belongs to, in link insertion order.
"""

from typing import Optional

from idschema.capabilities import MapperCapabilities
from idschema.namespace import Namespace
from idschema.xref import Xref
from idmapper.interfaces import IDMapperInterface
from idmapper.logging import setup_logging


class InMemoryIDMapper(IDMapperInterface):
    """Dictionary-backed mapper.

    Thread safety: Not thread-safe. Populate it before sharing, or guard it
    externally.

    Example:
        ```python
        mapper = InMemoryIDMapper(name="test genes")
        mapper.add_link(entrez_insr, ensembl_insr)
        mapper.map_to(entrez_insr)  # [ensembl_insr]
        ```
    """

    def __init__(self, name: str = "memory", info: Optional[dict[str, str]] = None) -> None:
        self._name = name
        self._info = dict(info or {})
        self._connected = True
        # dicts used as insertion-ordered sets
        self._datanodes: dict[Xref, None] = {}
        self._links: list[tuple[Xref, Xref]] = []
        self._link_set: set[tuple[Xref, Xref]] = set()
        self._attributes: dict[Xref, dict[str, dict[str, None]]] = {}
        self.logger = setup_logging()

    # --- population -------------------------------------------------------

    def add_datanode(self, xref: Xref) -> None:
        self._datanodes.setdefault(xref, None)

    def add_link(self, left: Xref, right: Xref) -> None:
        """Put ``right`` into the group keyed by ``left``. Duplicate links are ignored."""
        self.add_datanode(left)
        self.add_datanode(right)
        self._append_link(left, left)
        self._append_link(left, right)

    def _append_link(self, left: Xref, right: Xref) -> None:
        if (left, right) not in self._link_set:
            self._link_set.add((left, right))
            self._links.append((left, right))

    def add_attribute(self, xref: Xref, name: str, value: str) -> None:
        self.add_datanode(xref)
        self._attributes.setdefault(xref, {}).setdefault(name, {})[value] = None

    # --- contract ---------------------------------------------------------

    def is_connected(self) -> bool:
        return self._connected

    def get_name(self) -> str:
        return self._name

    def close(self) -> None:
        if not self._connected:
            self.logger.debug({"message": "Mapper already closed", "mapper": self._name})
        self._connected = False

    def exists(self, xref: Xref) -> bool:
        self._ensure_connected()
        return xref in self._datanodes

    def map_to(self, xref: Xref, target: Optional[Namespace] = None) -> list[Xref]:
        self._ensure_connected()
        groups = {left for left, right in self._links if right == xref}
        result: dict[Xref, None] = {}
        for left, right in self._links:
            if left not in groups or right == xref:
                continue
            if target is not None and right.namespace != target:
                continue
            result.setdefault(right, None)
        return list(result)

    def free_text_search(self, query: str, limit: int) -> set[Xref]:
        self._ensure_connected()
        needle = query.lower()
        result: set[Xref] = set()
        for xref in self._datanodes:
            if len(result) >= limit:
                break
            if needle in xref.id.lower():
                result.add(xref)
        return result

    def get_attributes(self, xref: Xref, attribute: str) -> set[str]:
        self._ensure_connected()
        return set(self._attributes.get(xref, {}).get(attribute, {}))

    def free_attribute_search(self, query: str, attribute: str, limit: int) -> set[Xref]:
        self._ensure_connected()
        needle = query.lower()
        result: set[Xref] = set()
        for xref, attributes in self._attributes.items():
            if len(result) >= limit:
                break
            if any(needle in value.lower() for value in attributes.get(attribute, {})):
                result.add(xref)
        return result

    def get_capabilities(self) -> MapperCapabilities:
        self._ensure_connected()
        namespaces = frozenset(xref.namespace for xref in self._datanodes)
        return MapperCapabilities(
            source_namespaces=namespaces,
            target_namespaces=namespaces,
            free_search_supported=True,
            properties={"backend": "memory", **self._info},
        )
