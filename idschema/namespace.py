"""Namespace model for identifier systems.

A namespace is a named identifier system (Entrez Gene, UniProt, ChEBI, ...)
identified by a short code. Namespaces are created by a
``NamespaceRegistry`` and live as long as the registry that owns them.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ID_PLACEHOLDER = "$id"


class Namespace(BaseModel):
    """An identifier system with a unique short code.

    The code and display name are fixed once the namespace is created. The
    remaining metadata is optional and is filled in afterwards by
    ``NamespaceRegistry.decorate``.

    Equality and hashing use the code only, so a namespace stays usable as
    a set member or dict key while its metadata is being decorated.

    Attributes:
        code: Short system code, unique per registry (e.g. "L", "S", "Ce")
        name: Display name (e.g. "Entrez Gene")
        main_url: Home page of the identifier system
        url_pattern: Link template for one identifier; "$id" is replaced
        example: An example identifier
        type: Category tag such as "gene", "protein" or "metabolite"
        organism: Organism the system is specific to, if any
        primary: Marks the preferred namespace among synonyms for a concept
    """

    model_config = ConfigDict(validate_assignment=True)

    code: str = Field(frozen=True, description="Short system code, unique per registry")
    name: str = Field(frozen=True, description="Display name of the identifier system")
    main_url: Optional[str] = Field(default=None, description="Home page of the identifier system")
    url_pattern: Optional[str] = Field(
        default=None,
        description="Link template for a single identifier, with '$id' as placeholder",
    )
    example: Optional[str] = Field(default=None, description="Example identifier")
    type: Optional[str] = Field(default=None, description="Category tag (gene, protein, metabolite, ...)")
    organism: Optional[str] = Field(default=None, description="Organism name, if organism-specific")
    primary: Optional[bool] = Field(default=None, description="Preferred among synonymous namespaces")

    def url_for(self, identifier: str) -> Optional[str]:
        """Expand the identifier-URL template, or None if there is none."""
        if not self.url_pattern:
            return None
        return self.url_pattern.replace(ID_PLACEHOLDER, identifier)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Namespace):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Namespace(code={self.code!r}, name={self.name!r})"
