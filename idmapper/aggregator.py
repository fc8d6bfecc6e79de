"""Two-backend composition behind the mapper contract.

``DoubleMapper`` holds two backends, slot A and slot B, and answers every
contract operation by consulting whichever of them is connected. By
convention slot A holds the preferred backend (typically a gene database)
and slot B the secondary one (typically a metabolite database); nothing
enforces this.

Merge policy per operation:

- ``is_connected``: true if any slot is connected
- ``exists``: true if any slot says so; stops at the first true
- ``map_to``: slot A's results followed by slot B's, duplicates kept
- ``get_name``: connected names joined with " and "
- ``free_text_search``: union, stops consulting slots once ``limit`` is
  reached, never trimmed back to ``limit``
- ``get_attributes`` / ``free_attribute_search``: union over all slots
- ``get_capabilities``: union of namespaces, OR of the free-search flag; a
  slot whose probe fails contributes nothing
- ``close``: closes every slot even if one of them fails

Errors from list, set and existence operations propagate immediately.
Capability probes and closes are best effort: failures are logged and
swallowed. A close failure of any kind, not only ``IDMapperError``, is
swallowed and the next slot is still closed.
"""

import threading
from typing import Optional

from idschema.capabilities import MapperCapabilities
from idschema.namespace import Namespace
from idschema.xref import Xref
from idmapper.exceptions import IDMapperError
from idmapper.interfaces import IDMapperInterface
from idmapper.logging import setup_logging

NAME_SEPARATOR = " and "


class DoubleMapper(IDMapperInterface):
    """Stacks two mappers, A before B, behind a single mapper interface.

    The children are held by reference; ``DoubleMapper`` takes ownership in
    the sense that replacing a slot or closing the aggregate closes them.

    Thread safety: slot assignment and the slot snapshot taken by each
    operation share a lock, so swapping a slot while another thread reads
    is safe. The children themselves are not protected.

    Example:
        ```python
        mapper = DoubleMapper(gene_db, metabolite_db)
        xrefs = mapper.map_to(Xref(id="3643", namespace=entrez))
        mapper.close()
        ```
    """

    def __init__(
        self,
        slot_a: Optional[IDMapperInterface] = None,
        slot_b: Optional[IDMapperInterface] = None,
    ) -> None:
        self._slots: list[Optional[IDMapperInterface]] = [slot_a, slot_b]
        self._lock = threading.RLock()
        self.logger = setup_logging()

    @property
    def slot_a(self) -> Optional[IDMapperInterface]:
        return self._slots[0]

    @property
    def slot_b(self) -> Optional[IDMapperInterface]:
        return self._slots[1]

    def set_slot_a(self, mapper: Optional[IDMapperInterface]) -> None:
        """Replace the slot A mapper, closing the previous one. Pass None to empty the slot."""
        self._set_slot(0, mapper)

    def set_slot_b(self, mapper: Optional[IDMapperInterface]) -> None:
        """Replace the slot B mapper, closing the previous one. Pass None to empty the slot."""
        self._set_slot(1, mapper)

    def _set_slot(self, index: int, mapper: Optional[IDMapperInterface]) -> None:
        with self._lock:
            previous = self._slots[index]
            if previous is mapper:
                return
            if previous is not None:
                try:
                    previous.close()
                except Exception as e:  # pylint: disable=broad-except
                    self.logger.warning(
                        {
                            "message": "Problem closing replaced mapper",
                            "slot": "AB"[index],
                            "mapper": type(previous).__name__,
                            "error": str(e),
                        }
                    )
            self._slots[index] = mapper

    def _connected(self) -> list[IDMapperInterface]:
        """Snapshot of the non-null, connected children in slot order."""
        with self._lock:
            slots = list(self._slots)
        return [child for child in slots if child is not None and child.is_connected()]

    def is_connected(self) -> bool:
        return bool(self._connected())

    def get_name(self) -> str:
        return NAME_SEPARATOR.join(child.get_name() for child in self._connected())

    def close(self) -> None:
        """Close every child, continuing past children that fail to close."""
        with self._lock:
            slots = list(self._slots)
        for index, child in enumerate(slots):
            if child is None:
                continue
            try:
                child.close()
            except Exception as e:  # pylint: disable=broad-except
                self.logger.warning(
                    {
                        "message": "Problem closing mapper",
                        "slot": "AB"[index],
                        "mapper": type(child).__name__,
                        "error": str(e),
                    }
                )

    def exists(self, xref: Xref) -> bool:
        return any(child.exists(xref) for child in self._connected())

    def map_to(self, xref: Xref, target: Optional[Namespace] = None) -> list[Xref]:
        result: list[Xref] = []
        for child in self._connected():
            result.extend(child.map_to(xref, target))
        return result

    def free_text_search(self, query: str, limit: int) -> set[Xref]:
        result: set[Xref] = set()
        for child in self._connected():
            result |= child.free_text_search(query, limit)
            if len(result) >= limit:
                break
        return result

    def get_attributes(self, xref: Xref, attribute: str) -> set[str]:
        result: set[str] = set()
        for child in self._connected():
            result |= child.get_attributes(xref, attribute)
        return result

    def free_attribute_search(self, query: str, attribute: str, limit: int) -> set[Xref]:
        result: set[Xref] = set()
        for child in self._connected():
            result |= child.free_attribute_search(query, attribute, limit)
        return result

    def get_capabilities(self) -> MapperCapabilities:
        sources: set[Namespace] = set()
        targets: set[Namespace] = set()
        free_search = False
        properties: dict[str, str] = {}
        # Reversed so that slot A's properties win on key clashes
        for child in reversed(self._connected()):
            try:
                caps = child.get_capabilities()
            except IDMapperError as e:
                self.logger.warning(
                    {
                        "message": "Capability probe failed; ignoring mapper",
                        "mapper": child.get_name(),
                        "error": str(e),
                    }
                )
                continue
            sources |= caps.source_namespaces
            targets |= caps.target_namespaces
            free_search = free_search or caps.free_search_supported
            properties.update(caps.properties)
        return MapperCapabilities(
            source_namespaces=frozenset(sources),
            target_namespaces=frozenset(targets),
            free_search_supported=free_search,
            properties=properties,
        )
