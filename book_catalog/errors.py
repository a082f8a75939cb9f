"""
Error types shared by the catalog store, the HTTP layer and the client.

Every server-side failure derives from ``CatalogError`` and knows the
HTTP status it maps to, so the exception handlers in ``main`` only need
to call ``to_dict()``. ``TransportError`` is client-side only: the
request never reached the server.
"""

from typing import Any, Dict


class CatalogError(Exception):
    """Base class for failures reported with the ``{error, message}`` shape."""

    error = "Internal Server Error"
    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message}


class ValidationError(CatalogError):
    error = "Validation Error"
    status_code = 400


class NotFoundError(CatalogError):
    error = "Not Found"
    status_code = 404

    @classmethod
    def for_book(cls, book_id: Any) -> "NotFoundError":
        return cls(f"Book with ID {book_id} not found")


class InternalError(CatalogError):
    """Wraps an unexpected exception raised while handling a request."""


class TransportError(Exception):
    """The client could not reach the API server at all."""
