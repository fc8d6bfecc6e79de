"""Bundled catalog of common biological namespaces.

The table in ``data/datasources.tsv`` is a small sample of gene, protein
and metabolite identifier systems. It contains the two namespaces that
historically share the code "Gp" (Gramene Pathway and GenPept), so
loading it always exercises the collision policy: with the default WARN
policy, Gramene Pathway keeps the code and GenPept is skipped.
"""

import re
from pathlib import Path
from typing import Optional

from idschema.namespace import Namespace
from idmapper.config import CollisionPolicy, IDMapperConfig
from idmapper.patterns import PatternValidator
from idmapper.registry import NamespaceRegistry, load_namespace_table

DATASOURCES_TABLE = Path(__file__).parent / "data" / "datasources.tsv"

# Identifier syntax per system code. Several systems share generic rules.
BIO_PATTERNS: dict[str, str] = {
    "D": r"S\d{9}",
    "F": r"(C[RG]\d{4,5}|FBgn\d{7})",
    "I": r"IPR\d{6}",
    "L": r"\d+",
    "M": r"MGI:\d+",
    "Q": r"\w{2}_\d+",
    "S": r"([A-N,R-Z][0-9][A-Z][A-Z,0-9][A-Z,0-9][0-9])|([O,P,Q][0-9][A-Z,0-9][A-Z,0-9][A-Z,0-9][0-9])",
    "T": r"GO:\d+",
    "W": r"WBGene\d{8}",
    "X": r".+_at",
    "EnHs": r"ENSG\d{11}",
    "EnMm": r"ENSMUSG\d{11}",
    "H": r"\d+",
    "Om": r"\d{6}(\.\d{4})?",
    "Pd": r"\d[A-Z\d]{3}",
    "Pf": r"(PF\d{5})|(PB\d{6})",
    "Ch": r"HMDB\d{5}",
    "Ca": r"\d+-\d+-\d+",
    "E": r"(\d+\.){3}\d+",
    "Ce": r"CHEBI:\d+",
    "Ck": r"C\d+",
}


def load_bio_namespaces(
    registry: NamespaceRegistry,
    validator: Optional[PatternValidator] = None,
    policy: Optional[CollisionPolicy] = None,
    config: Optional[IDMapperConfig] = None,
) -> list[Namespace]:
    """Load the bundled namespace table and, if given a validator, its patterns.

    The collision policy comes from ``policy``, then ``config``, then the
    environment, as in ``load_namespace_table``. Namespaces that share a
    rule share the compiled pattern object.
    """
    namespaces = load_namespace_table(registry, DATASOURCES_TABLE, policy=policy, config=config)
    if validator is not None:
        compiled: dict[str, re.Pattern[str]] = {}
        for code, rule in BIO_PATTERNS.items():
            if code not in registry:
                continue
            if rule not in compiled:
                compiled[rule] = re.compile(rule)
            validator.register_pattern(registry.lookup_by_code(code), compiled[rule])
    return namespaces
