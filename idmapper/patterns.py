"""Identifier syntax rules per namespace.

Each namespace may have one regular expression describing what its
identifiers look like. Validation is whole-string and has three outcomes:
an identifier can match, fail to match, or belong to a namespace that has
no rule at all. The last case is reported as ``ValidationResult.UNKNOWN``
and must not be read as "valid".
"""

import re
import threading
from enum import Enum
from typing import Optional

from idschema.namespace import Namespace
from idschema.xref import Xref


class ValidationResult(str, Enum):
    """Outcome of checking an identifier against its namespace's rule."""

    VALID = "valid"
    INVALID = "invalid"

    UNKNOWN = "unknown"
    """No rule is registered for the namespace."""

    @property
    def is_valid(self) -> bool:
        return self is ValidationResult.VALID


class PatternValidator:
    """Maps namespaces to compiled identifier patterns.

    The same compiled pattern may be shared by several namespaces whose
    identifiers have identical syntax (e.g. plain integers).
    """

    def __init__(self) -> None:
        self._patterns: dict[Namespace, re.Pattern[str]] = {}
        self._lock = threading.RLock()

    def register_pattern(self, namespace: Namespace, rule: str | re.Pattern[str]) -> re.Pattern[str]:
        """Set the rule for ``namespace``, replacing any previous one."""
        pattern = re.compile(rule) if isinstance(rule, str) else rule
        with self._lock:
            self._patterns[namespace] = pattern
        return pattern

    def get_pattern(self, namespace: Namespace) -> Optional[re.Pattern[str]]:
        with self._lock:
            return self._patterns.get(namespace)

    def has_pattern(self, namespace: Namespace) -> bool:
        return self.get_pattern(namespace) is not None

    def validate_id(self, identifier: str, namespace: Namespace) -> ValidationResult:
        pattern = self.get_pattern(namespace)
        if pattern is None:
            return ValidationResult.UNKNOWN
        if pattern.fullmatch(identifier):
            return ValidationResult.VALID
        return ValidationResult.INVALID

    def validate(self, xref: Xref) -> ValidationResult:
        return self.validate_id(xref.id, xref.namespace)

    def matching_namespaces(self, identifier: str) -> set[Namespace]:
        """Every namespace whose rule matches ``identifier``.

        Useful for guessing where a bare identifier comes from. Generic rules
        (such as all-digits) make the answer ambiguous, so expect more than
        one namespace for many inputs.
        """
        with self._lock:
            items = list(self._patterns.items())
        return {namespace for namespace, pattern in items if pattern.fullmatch(identifier)}
