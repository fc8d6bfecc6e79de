"""Identifier (cross-reference) model."""

from typing import Optional

from pydantic import BaseModel, Field

from idschema.namespace import Namespace


class Xref(BaseModel):
    """An identifier string drawn from a particular namespace.

    Xrefs are used as dict keys and set members throughout the mapper
    layer, so equality and hashing are defined over the (id, namespace)
    pair. The same string in two namespaces gives two distinct Xrefs.

    Attributes:
        id: The raw identifier (e.g. "3643", "P06213", "CHEBI:17234")
        namespace: The namespace the identifier belongs to
    """

    model_config = {"frozen": True}

    id: str = Field(description="Raw identifier string")
    namespace: Namespace = Field(description="Namespace the identifier is drawn from")

    @property
    def url(self) -> Optional[str]:
        """Link to this identifier, if the namespace has a URL pattern."""
        return self.namespace.url_for(self.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Xref):
            return NotImplemented
        return self.id == other.id and self.namespace == other.namespace

    def __hash__(self) -> int:
        return hash((self.id, self.namespace.code))

    def __str__(self) -> str:
        return f"{self.namespace.code}:{self.id}"

    def __repr__(self) -> str:
        return f"Xref(id={self.id!r}, namespace={self.namespace.code!r})"
