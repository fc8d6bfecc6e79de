"""The mapper contract every backend implements.

A backend is anything that can answer identifier questions: a local
database, a remote web service, an in-memory table used in tests, or the
``DoubleMapper`` that stacks two other backends. Callers only ever see
this interface, so backends can be swapped or combined freely.

All operations are synchronous. Once ``close()`` has been called, every
other operation of a storage backend raises ``NotConnectedError``. The
``DoubleMapper`` is the exception: it only consults connected children,
so with none left it answers with empty results (and an empty name)
instead of raising. "No result" is always an empty collection, never an
exception.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from idschema.capabilities import MapperCapabilities
from idschema.namespace import Namespace
from idschema.xref import Xref
from idmapper.exceptions import NotConnectedError


class IDMapperInterface(ABC):
    """Abstract interface for identifier mapping backends."""

    @abstractmethod
    def is_connected(self) -> bool:
        """True while the backend can serve requests."""

    @abstractmethod
    def get_name(self) -> str:
        """Human-readable name of the backend (e.g. the database name)."""

    @abstractmethod
    def close(self) -> None:
        """Release the backend's resources.

        Closing an already-closed backend must not crash; implementations
        may treat it as a no-op.
        """

    @abstractmethod
    def exists(self, xref: Xref) -> bool:
        """Check whether the backend knows the identifier.

        Raises:
            BackendUnavailableError: If the backend is not connected.
        """

    @abstractmethod
    def map_to(self, xref: Xref, target: Optional[Namespace] = None) -> list[Xref]:
        """Get the cross-references of an identifier.

        Args:
            xref: The identifier to map
            target: Restrict results to this namespace; None means every
                namespace the backend can map to

        Returns:
            Cross-references in a backend-defined order that is stable across
            calls on unchanged data. Empty when there is no mapping.
        """

    def map_many(self, sources: Iterable[Xref], targets: Iterable[Namespace]) -> dict[Xref, set[Xref]]:
        """Map a batch of identifiers at once.

        Calls ``map_to`` once per source and keeps only results in one of the
        ``targets`` namespaces. A source is present in the result only if at
        least one cross-reference survived the filter; unknown sources are
        silently left out.

        Backends may override this with something more efficient as long as
        the result is the same.
        """
        wanted = set(targets)
        result: dict[Xref, set[Xref]] = {}
        for source in sources:
            refs = {dest for dest in self.map_to(source) if dest.namespace in wanted}
            if refs:
                result[source] = refs
        return result

    @abstractmethod
    def free_text_search(self, query: str, limit: int) -> set[Xref]:
        """Find identifiers matching free text, returning at most ``limit`` of them."""

    @abstractmethod
    def get_attributes(self, xref: Xref, attribute: str) -> set[str]:
        """Get the values of one attribute (Symbol, Description, ...) of an identifier."""

    @abstractmethod
    def free_attribute_search(self, query: str, attribute: str, limit: int) -> set[Xref]:
        """Find identifiers whose ``attribute`` value matches the query."""

    @abstractmethod
    def get_capabilities(self) -> MapperCapabilities:
        """Describe what the backend supports right now."""

    def _ensure_connected(self) -> None:
        if not self.is_connected():
            raise NotConnectedError(f"{type(self).__name__} {self.get_name()!r} is not connected")

    def __enter__(self) -> "IDMapperInterface":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
