"""Namespace registry and bootstrap-table loader.

The registry is an explicit object owned by the application: build one at
startup, load the namespace table into it, and pass it to every component
that needs to resolve codes. There is no module-level default registry.

Example:
    ```python
    registry = NamespaceRegistry()
    entrez = registry.register("L", "Entrez Gene")
    registry.decorate(entrez, type="gene", primary=True)
    assert registry.lookup_by_code("L") is entrez
    ```
"""

import logging
import threading
from pathlib import Path
from typing import Iterable, Iterator, Optional

from idschema.namespace import Namespace
from idmapper.config import CollisionPolicy, IDMapperConfig
from idmapper.exceptions import (
    NamespaceCollisionError,
    NamespaceNotFoundError,
    NamespaceTableError,
)

logger = logging.getLogger(__name__)

_UNSET = object()

# Column order of the bootstrap table
TABLE_FIELDS = ("name", "code", "main_url", "url_pattern", "example", "type", "organism", "primary")


class NamespaceRegistry:
    """Table of namespaces keyed by their short code.

    Registration is idempotent by code: registering a code a second time
    returns the namespace created the first time, whatever name is passed.
    All access goes through one coarse lock, so registering after startup
    is safe, if slower than it needs to be.
    """

    def __init__(self) -> None:
        self._by_code: dict[str, Namespace] = {}
        self._lock = threading.RLock()

    def register(self, code: str, name: str) -> Namespace:
        """Return the namespace for ``code``, creating it with ``name`` if new."""
        with self._lock:
            existing = self._by_code.get(code)
            if existing is not None:
                return existing
            namespace = Namespace(code=code, name=name)
            self._by_code[code] = namespace
            logger.debug("Registered namespace %s (%s)", code, name)
            return namespace

    def lookup_by_code(self, code: str) -> Namespace:
        with self._lock:
            try:
                return self._by_code[code]
            except KeyError:
                raise NamespaceNotFoundError(code) from None

    def lookup_by_name(self, name: str) -> Namespace:
        """Return the first registered namespace with the given display name."""
        with self._lock:
            for namespace in self._by_code.values():
                if namespace.name == name:
                    return namespace
        raise NamespaceNotFoundError(name)

    def decorate(
        self,
        namespace: Namespace,
        *,
        main_url: Optional[str] = _UNSET,  # type: ignore[assignment]
        url_pattern: Optional[str] = _UNSET,  # type: ignore[assignment]
        example: Optional[str] = _UNSET,  # type: ignore[assignment]
        type: Optional[str] = _UNSET,  # type: ignore[assignment]
        organism: Optional[str] = _UNSET,  # type: ignore[assignment]
        primary: Optional[bool] = _UNSET,  # type: ignore[assignment]
    ) -> Namespace:
        """Fill in optional metadata on a registered namespace.

        Only the keyword arguments actually passed are written; passing None
        clears a field. Returns the (same) namespace for chaining.
        """
        updates = {
            "main_url": main_url,
            "url_pattern": url_pattern,
            "example": example,
            "type": type,
            "organism": organism,
            "primary": primary,
        }
        with self._lock:
            registered = self._by_code.get(namespace.code)
            if registered is None:
                raise NamespaceNotFoundError(namespace.code)
            for field, value in updates.items():
                if value is not _UNSET:
                    setattr(registered, field, value)
            return registered

    def namespaces(self) -> list[Namespace]:
        """All namespaces in registration order."""
        with self._lock:
            return list(self._by_code.values())

    def filter(
        self,
        primary: Optional[bool] = None,
        type: Optional[str] = None,
        organism: Optional[str] = None,
    ) -> list[Namespace]:
        """Namespaces matching every criterion given; None means "don't care"."""
        result = []
        for namespace in self.namespaces():
            if primary is not None and bool(namespace.primary) != primary:
                continue
            if type is not None and namespace.type != type:
                continue
            if organism is not None and namespace.organism != organism:
                continue
            result.append(namespace)
        return result

    def __contains__(self, code: object) -> bool:
        with self._lock:
            return code in self._by_code

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_code)

    def __iter__(self) -> Iterator[Namespace]:
        return iter(self.namespaces())


def _read_lines(source: str | Path | Iterable[str]) -> Iterable[str]:
    if isinstance(source, (str, Path)):
        return Path(source).read_text(encoding="utf-8").splitlines()
    return source


def load_namespace_table(
    registry: NamespaceRegistry,
    source: str | Path | Iterable[str],
    policy: Optional[CollisionPolicy] = None,
    config: Optional[IDMapperConfig] = None,
) -> list[Namespace]:
    """Register every namespace listed in a tab-separated table.

    Each record is: display name, code, main URL, identifier-URL pattern,
    example, type, organism, primary flag ("1" means true). Trailing fields
    may be missing and empty fields are "not set".

    A record whose code is already registered under another display name is
    a collision and is handled according to the collision policy (default
    WARN: the first namespace is kept untouched).

    Args:
        registry: Registry to populate
        source: Path to the table, or an iterable of lines
        policy: Collision policy; overrides the one in ``config``
        config: Configuration supplying the collision policy; when omitted
            it is read from the environment (IDMAPPER_COLLISION_POLICY)

    Returns:
        The namespaces named by the table, in table order, collisions excluded.
    """
    if policy is None:
        policy = (config or IDMapperConfig.from_env()).collision_policy
    loaded: list[Namespace] = []
    for lineno, line in enumerate(_read_lines(source), start=1):
        line = line.rstrip("\r\n")
        if not line.strip() or line.startswith("#"):
            continue
        fields = line.split("\t")
        if len(fields) < 2 or not fields[0] or not fields[1]:
            raise NamespaceTableError(f"line {lineno}: expected at least a name and a code, got {line!r}")
        record = dict(zip(TABLE_FIELDS, fields))
        name, code = record["name"], record["code"]

        if code in registry:
            existing = registry.lookup_by_code(code)
            if existing.name != name:
                if policy == CollisionPolicy.REJECT:
                    raise NamespaceCollisionError(
                        f"line {lineno}: code {code!r} is already registered to {existing.name!r}, not {name!r}"
                    )
                logger.warning(
                    "Namespace code %r on line %d is already registered to %r; ignoring %r",
                    code,
                    lineno,
                    existing.name,
                    name,
                )
                continue

        namespace = registry.register(code, name)
        metadata = {key: record[key] for key in TABLE_FIELDS[2:7] if record.get(key)}
        if "primary" in record:
            metadata["primary"] = record["primary"].strip() == "1"
        if metadata:
            registry.decorate(namespace, **metadata)
        loaded.append(namespace)
    return loaded
