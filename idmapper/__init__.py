"""
Identifier mapping across biological naming systems.

Resolves gene, protein and metabolite identifiers between namespaces by
consulting pluggable backends that all implement one mapper contract, and
stacks two backends behind that same contract with ``DoubleMapper``.

This module uses lazy imports so that the SQLite backend (and with it
SQLAlchemy) is only loaded when it is actually used:

    # This does NOT import sqlmodel:
    from idmapper import DoubleMapper, NamespaceRegistry

    # This DOES import sqlmodel (when the symbol is accessed):
    from idmapper import SqlIDMapper
"""

from typing import TYPE_CHECKING

from idschema import MapperCapabilities, Namespace, Xref
from idmapper.aggregator import DoubleMapper
from idmapper.backends.memory import InMemoryIDMapper
from idmapper.config import CollisionPolicy, IDMapperConfig, SqlConfig
from idmapper.drivers import DriverRegistry, default_drivers
from idmapper.exceptions import (
    BackendUnavailableError,
    IDMapperError,
    NamespaceCollisionError,
    NamespaceNotFoundError,
    NamespaceTableError,
    NotConnectedError,
    QueryFailureError,
    UnknownSchemeError,
)
from idmapper.interfaces import IDMapperInterface
from idmapper.logging import configure_logging
from idmapper.patterns import PatternValidator, ValidationResult
from idmapper.registry import NamespaceRegistry, load_namespace_table

if TYPE_CHECKING:
    from idmapper.backends.sql import SqlIDMapper

__all__ = [
    "BackendUnavailableError",
    "CollisionPolicy",
    "DoubleMapper",
    "DriverRegistry",
    "IDMapperConfig",
    "IDMapperError",
    "IDMapperInterface",
    "InMemoryIDMapper",
    "MapperCapabilities",
    "Namespace",
    "NamespaceCollisionError",
    "NamespaceNotFoundError",
    "NamespaceRegistry",
    "NamespaceTableError",
    "NotConnectedError",
    "PatternValidator",
    "QueryFailureError",
    "SqlConfig",
    "SqlIDMapper",
    "UnknownSchemeError",
    "ValidationResult",
    "Xref",
    "configure_logging",
    "default_drivers",
    "load_namespace_table",
]

__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy import for the SQLite backend to avoid loading SQLAlchemy on light imports."""
    if name == "SqlIDMapper":
        from idmapper.backends.sql import SqlIDMapper

        return SqlIDMapper
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
