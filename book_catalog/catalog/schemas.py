"""
Pydantic envelopes for the catalogue endpoints.

Every successful response is wrapped as ``{success, data}`` with an
optional ``message`` (mutations) or ``count`` (listing). Failures use
``ErrorResponse`` instead. Routes serialise with
``response_model_exclude_none`` so unset optional keys are omitted
rather than sent as ``null``.
"""

from typing import List, Optional

from pydantic import BaseModel

from ..models import Book


class BookResponse(BaseModel):
    """A single book, optionally with a human-readable status message."""

    success: bool = True
    message: Optional[str] = None
    data: Book


class BookListResponse(BaseModel):
    """The full catalogue in insertion order, with its size."""

    success: bool = True
    count: int
    data: List[Book]


class ErrorResponse(BaseModel):
    error: str
    message: str
