"""Tests for the Namespace and Xref value types.

This module verifies:
- Xref equality and hashing over the (id, namespace) pair
- Xrefs work as independent dict keys and set members
- Immutability of Xref
- String and URL rendering
- MapperCapabilities helpers
"""

import pytest

from idschema.capabilities import MapperCapabilities
from idschema.xref import Xref


class TestXref:
    def test_equal_when_id_and_namespace_equal(self, make_xref) -> None:
        assert make_xref("L", "3643") == make_xref("L", "3643")
        assert hash(make_xref("L", "3643")) == hash(make_xref("L", "3643"))

    def test_same_id_different_namespace_unequal(self, make_xref) -> None:
        """The same string in two namespaces names two different things."""
        assert make_xref("L", "3643") != make_xref("Ch", "3643")

    def test_independent_dict_keys(self, make_xref) -> None:
        mapping = {make_xref("L", "3643"): "gene", make_xref("Ch", "3643"): "metabolite"}

        assert len(mapping) == 2
        assert mapping[make_xref("L", "3643")] == "gene"
        assert mapping[make_xref("Ch", "3643")] == "metabolite"

    def test_set_deduplicates(self, make_xref) -> None:
        refs = {make_xref("S", "P06213"), make_xref("S", "P06213"), make_xref("S", "P06214")}
        assert len(refs) == 2

    def test_frozen(self, make_xref) -> None:
        xref = make_xref("L", "3643")
        with pytest.raises(Exception):
            xref.id = "3644"  # type: ignore[misc]

    def test_keeps_namespace_reference(self, registry) -> None:
        """An Xref refers to the registry's namespace object, so decoration shows through."""
        entrez = registry.lookup_by_code("L")
        xref = Xref(id="3643", namespace=entrez)
        registry.decorate(entrez, url_pattern="http://www.ncbi.nlm.nih.gov/gene/$id")

        assert xref.namespace is entrez
        assert xref.url == "http://www.ncbi.nlm.nih.gov/gene/3643"

    def test_url_without_pattern(self, make_xref) -> None:
        assert make_xref("L", "3643").url is None

    def test_str(self, make_xref) -> None:
        assert str(make_xref("EnHs", "ENSG00000171105")) == "EnHs:ENSG00000171105"


class TestNamespace:
    def test_equality_by_code(self, registry) -> None:
        entrez = registry.lookup_by_code("L")
        registry.decorate(entrez, type="gene")

        assert entrez == registry.lookup_by_code("L")
        assert entrez != registry.lookup_by_code("Ch")
        assert len({entrez, registry.lookup_by_code("L")}) == 1

    def test_str_is_display_name(self, registry) -> None:
        assert str(registry.lookup_by_code("Ce")) == "ChEBI"


class TestMapperCapabilities:
    def test_defaults(self) -> None:
        caps = MapperCapabilities()
        assert caps.source_namespaces == frozenset()
        assert caps.target_namespaces == frozenset()
        assert caps.free_search_supported is False
        assert caps.properties == {}

    def test_is_mapping_supported(self, registry) -> None:
        entrez = registry.lookup_by_code("L")
        ensembl = registry.lookup_by_code("EnHs")
        chebi = registry.lookup_by_code("Ce")
        caps = MapperCapabilities(source_namespaces={entrez, ensembl}, target_namespaces={ensembl})

        assert caps.is_mapping_supported(entrez, ensembl)
        assert not caps.is_mapping_supported(entrez, chebi)
        assert not caps.is_mapping_supported(chebi, ensembl)
