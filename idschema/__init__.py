"""Data model for identifier mapping.

Value types shared by the registry, the mapper contract and every backend:

- Namespace: an identifier system with a unique short code
- Xref: an identifier string paired with its namespace
- MapperCapabilities: supported source/target namespaces and features
"""

from idschema.capabilities import MapperCapabilities
from idschema.namespace import Namespace
from idschema.xref import Xref

__all__ = [
    "MapperCapabilities",
    "Namespace",
    "Xref",
]
