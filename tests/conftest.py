"""Test fixtures and a scriptable mapper double.

This module provides:
- A small namespace registry (Entrez Gene, Ensembl Human, UniProt, ChEBI, HMDB)
- A ``make_xref`` factory fixture for building identifiers by code
- ``StubMapper``, a mapper whose answers, failures and connection state are
  set directly by the test, and which records every call it receives
- A populated in-memory mapper modelling the insulin receptor gene group
"""

from typing import Callable, Optional

import pytest

from idschema.capabilities import MapperCapabilities
from idschema.namespace import Namespace
from idschema.xref import Xref
from idmapper.backends.memory import InMemoryIDMapper
from idmapper.interfaces import IDMapperInterface
from idmapper.registry import NamespaceRegistry

CONFIG_VARIABLES = (
    "IDMAPPER_COLLISION_POLICY",
    "IDMAPPER_SQL_QUERY_TIMEOUT",
    "IDMAPPER_SQL_ECHO",
    "IDMAPPER_LOG_LEVEL",
)

TEST_NAMESPACES = {
    "L": "Entrez Gene",
    "EnHs": "Ensembl Human",
    "S": "Uniprot/TrEMBL",
    "Ce": "ChEBI",
    "Ch": "HMDB",
}


class StubMapper(IDMapperInterface):
    """Mapper double with canned answers.

    Every contract call is appended to ``calls`` as ``(operation, args)``.
    Setting ``failures[operation]`` to an exception makes that operation
    raise it. Answers are looked up in plain dicts keyed by the xref (or
    the query string for searches); missing keys give empty results.
    """

    def __init__(
        self,
        name: str = "stub",
        mappings: Optional[dict[Xref, list[Xref]]] = None,
        search_results: Optional[dict[str, set[Xref]]] = None,
        attributes: Optional[dict[tuple[Xref, str], set[str]]] = None,
        attribute_results: Optional[dict[tuple[str, str], set[Xref]]] = None,
        known: Optional[set[Xref]] = None,
        capabilities: Optional[MapperCapabilities] = None,
        connected: bool = True,
    ) -> None:
        self.name = name
        self.mappings = mappings or {}
        self.search_results = search_results or {}
        self.attributes = attributes or {}
        self.attribute_results = attribute_results or {}
        self.known = known or set()
        self.capabilities = capabilities or MapperCapabilities()
        self.connected = connected
        self.failures: dict[str, Exception] = {}
        self.calls: list[tuple[str, tuple]] = []

    def _record(self, operation: str, *args) -> None:
        self.calls.append((operation, args))
        if operation in self.failures:
            raise self.failures[operation]

    def called(self, operation: str) -> int:
        return sum(1 for op, _ in self.calls if op == operation)

    def is_connected(self) -> bool:
        return self.connected

    def get_name(self) -> str:
        return self.name

    def close(self) -> None:
        self._record("close")
        self.connected = False

    def exists(self, xref: Xref) -> bool:
        self._record("exists", xref)
        return xref in self.known

    def map_to(self, xref: Xref, target: Optional[Namespace] = None) -> list[Xref]:
        self._record("map_to", xref, target)
        result = list(self.mappings.get(xref, []))
        if target is not None:
            result = [ref for ref in result if ref.namespace == target]
        return result

    def free_text_search(self, query: str, limit: int) -> set[Xref]:
        self._record("free_text_search", query, limit)
        return set(self.search_results.get(query, set()))

    def get_attributes(self, xref: Xref, attribute: str) -> set[str]:
        self._record("get_attributes", xref, attribute)
        return set(self.attributes.get((xref, attribute), set()))

    def free_attribute_search(self, query: str, attribute: str, limit: int) -> set[Xref]:
        self._record("free_attribute_search", query, attribute, limit)
        return set(self.attribute_results.get((query, attribute), set()))

    def get_capabilities(self) -> MapperCapabilities:
        self._record("get_capabilities")
        return self.capabilities


@pytest.fixture(autouse=True)
def clean_config_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep IDMAPPER_* variables from the outer environment out of every test."""
    for name in CONFIG_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def registry() -> NamespaceRegistry:
    """A registry holding the test namespaces."""
    registry = NamespaceRegistry()
    for code, name in TEST_NAMESPACES.items():
        registry.register(code, name)
    return registry


@pytest.fixture
def make_xref(registry: NamespaceRegistry) -> Callable[[str, str], Xref]:
    """Factory: ``make_xref("L", "3643")`` builds an Entrez Gene identifier."""

    def _make(code: str, identifier: str) -> Xref:
        return Xref(id=identifier, namespace=registry.lookup_by_code(code))

    return _make


@pytest.fixture
def insulin_receptor(make_xref) -> dict[str, Xref]:
    """Identifiers of the insulin receptor gene and a few unrelated ones."""
    return {
        "entrez": make_xref("L", "3643"),
        "ensembl": make_xref("EnHs", "ENSG00000171105"),
        "uniprot": make_xref("S", "P06213"),
        "uniprot_iso": make_xref("S", "P06213-2"),
        "glucose": make_xref("Ce", "CHEBI:17234"),
        "glucose_hmdb": make_xref("Ch", "HMDB00122"),
    }


@pytest.fixture
def gene_mapper(insulin_receptor) -> InMemoryIDMapper:
    """In-memory mapper with the insulin receptor group keyed by its Entrez id."""
    mapper = InMemoryIDMapper(name="GeneDB", info={"SCHEMAVERSION": "3"})
    entrez = insulin_receptor["entrez"]
    mapper.add_link(entrez, insulin_receptor["ensembl"])
    mapper.add_link(entrez, insulin_receptor["uniprot"])
    mapper.add_link(entrez, insulin_receptor["uniprot_iso"])
    mapper.add_attribute(entrez, "Symbol", "INSR")
    mapper.add_attribute(entrez, "Description", "insulin receptor")
    mapper.add_attribute(entrez, "Chromosome", "19")
    return mapper


@pytest.fixture
def metabolite_mapper(insulin_receptor) -> InMemoryIDMapper:
    """In-memory mapper linking glucose in ChEBI and HMDB."""
    mapper = InMemoryIDMapper(name="MetDB")
    mapper.add_link(insulin_receptor["glucose"], insulin_receptor["glucose_hmdb"])
    mapper.add_attribute(insulin_receptor["glucose"], "Symbol", "D-glucose")
    return mapper
