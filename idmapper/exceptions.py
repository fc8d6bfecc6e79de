"""Exceptions raised by the registry, the drivers and the mapper backends."""


class IDMapperError(Exception):
    """Base exception for identifier mapping."""


class NamespaceNotFoundError(IDMapperError, KeyError):
    """Raised when a namespace code (or display name) is not registered."""

    def __init__(self, code: str):
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return f"No namespace registered for {self.code!r}"


class NamespaceCollisionError(IDMapperError):
    """Raised when bootstrap data assigns one code to two different namespaces."""


class NamespaceTableError(IDMapperError):
    """Raised when a namespace table record cannot be parsed."""


class BackendUnavailableError(IDMapperError):
    """Raised when a backend cannot be reached or opened."""


class NotConnectedError(BackendUnavailableError):
    """Raised when an operation is issued on a closed or never-opened backend."""


class QueryFailureError(IDMapperError):
    """Raised when a backend call fails after the connection was established."""


class UnknownSchemeError(IDMapperError, KeyError):
    """Raised when no driver is registered for a connection-string scheme."""

    def __init__(self, scheme: str):
        super().__init__(scheme)
        self.scheme = scheme

    def __str__(self) -> str:
        return f"No driver registered for scheme {self.scheme!r}"
