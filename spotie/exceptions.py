"""Exception hierarchy shared by the catalog, storage and web layers."""

from __future__ import annotations

from typing import Optional


class SpotieError(Exception):
    """Base class for application errors."""


class CatalogError(SpotieError):
    """The catalog provider failed or rejected a request."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class DocumentStoreError(SpotieError):
    """The document store failed or rejected a request."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class DocumentNotFound(DocumentStoreError):
    pass


class DocumentConflict(DocumentStoreError):
    """Raised when a write carries a stale revision."""


class MissingParameterError(SpotieError):
    """A required path or query parameter was not provided."""

    def __init__(self, parameter: str) -> None:
        super().__init__(f"No {parameter} provided")
        self.parameter = parameter


class PlaylistAccessDenied(SpotieError):
    pass


class InvitationError(SpotieError):
    """An invitation request that cannot be honoured (self-invite, duplicate)."""


__all__ = [
    "SpotieError",
    "CatalogError",
    "DocumentStoreError",
    "DocumentNotFound",
    "DocumentConflict",
    "MissingParameterError",
    "PlaylistAccessDenied",
    "InvitationError",
]
