"""Connection-string driver registry.

A connection string has the form ``<scheme>:<location>``. The scheme picks
a factory registered with ``DriverRegistry.register``; the location is
passed to that factory untouched and means whatever the factory decides (a
file path, a database name, a service URL, ...).

Example:
    ```python
    drivers = default_drivers(registry)
    mapper = drivers.connect("idmapper-sqlite:/data/Hs_Derby.sqlite")
    ```
"""

import threading
from typing import Callable, Optional

from idmapper.config import IDMapperConfig
from idmapper.exceptions import UnknownSchemeError
from idmapper.interfaces import IDMapperInterface
from idmapper.logging import setup_logging
from idmapper.registry import NamespaceRegistry

SCHEME_DELIMITER = ":"

MapperFactory = Callable[[str], IDMapperInterface]

logger = setup_logging()


class DriverRegistry:
    """Maps connection-string schemes to backend factories."""

    def __init__(self) -> None:
        self._factories: dict[str, MapperFactory] = {}
        self._lock = threading.RLock()

    def register(self, scheme: str, factory: MapperFactory) -> None:
        """Register ``factory`` for ``scheme``, replacing any earlier factory."""
        with self._lock:
            self._factories[scheme] = factory
        logger.debug({"message": "Registered mapper driver", "scheme": scheme})

    def unregister(self, scheme: str) -> None:
        with self._lock:
            if self._factories.pop(scheme, None) is None:
                raise UnknownSchemeError(scheme)

    def schemes(self) -> list[str]:
        with self._lock:
            return sorted(self._factories)

    def __contains__(self, scheme: object) -> bool:
        with self._lock:
            return scheme in self._factories

    def connect(self, connection_string: str) -> IDMapperInterface:
        """Build a mapper from ``<scheme>:<location>``.

        Raises:
            UnknownSchemeError: If the string has no scheme or no factory is
                registered for it.
            Whatever the factory raises, typically BackendUnavailableError.
        """
        scheme, delimiter, location = connection_string.partition(SCHEME_DELIMITER)
        if not delimiter:
            raise UnknownSchemeError(connection_string)
        with self._lock:
            factory = self._factories.get(scheme)
        if factory is None:
            raise UnknownSchemeError(scheme)
        logger.debug({"message": "Connecting mapper", "scheme": scheme, "location": location})
        return factory(location)


def default_drivers(registry: NamespaceRegistry, config: Optional[IDMapperConfig] = None) -> DriverRegistry:
    """A driver registry with the bundled backends registered.

    - ``idmapper-mem:<name>``: an empty in-memory mapper called ``name``
    - ``idmapper-sqlite:<path>``: an existing SQLite mapping database

    Without ``config`` the settings are read from the environment.
    """
    from idmapper.backends.memory import InMemoryIDMapper

    config = config or IDMapperConfig.from_env()
    drivers = DriverRegistry()
    drivers.register("idmapper-mem", lambda location: InMemoryIDMapper(name=location))

    def connect_sqlite(location: str) -> IDMapperInterface:
        # sqlmodel is only imported when a SQLite mapper is actually requested
        from idmapper.backends.sql import SqlIDMapper

        return SqlIDMapper(location, registry, config=config.sql)

    drivers.register("idmapper-sqlite", connect_sqlite)
    return drivers
