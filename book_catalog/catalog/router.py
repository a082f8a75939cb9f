"""
Route definitions for the catalogue API.

Endpoints:
- GET    /books       : list every book
- GET    /books/{id}  : get one book
- POST   /books       : create a book
- PUT    /books/{id}  : update a book
- DELETE /books/{id}  : delete a book

Payload checks run in ``book_payload`` before the store is touched, so
a rejected request never mutates the catalogue.
"""

from __future__ import annotations

import re
from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from pydantic import ValidationError as PydanticValidationError

from ..errors import NotFoundError, ValidationError
from ..models import BookPayload
from ..storage import CatalogStore
from .schemas import BookListResponse, BookResponse, ErrorResponse

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

router = APIRouter(tags=["books"])


def get_store(request: Request) -> CatalogStore:
    """Return the store owned by the running application."""
    return request.app.state.store


def _parse_book_id(raw: str) -> int:
    """Parse the leading integer of a path segment.

    ``"12abc"`` reads as 12. Anything without a leading integer can never
    name a book, so it is reported as not found rather than malformed.
    """
    match = _LEADING_INT.match(raw)
    if match is None:
        raise NotFoundError.for_book(raw)
    return int(match.group(1))


def _is_blank(value: Any) -> bool:
    """True for JSON values that count as absent: null, false, 0 and "".

    Empty lists and objects are present values, just not strings.
    """
    return value is None or value is False or value == "" or (
        isinstance(value, (int, float)) and value == 0
    )


def book_payload(body: Any = Body(default=None)) -> BookPayload:
    """Validate a create/update body and return it trimmed.

    Parameters
    ----------
    body : Any
        The decoded JSON body, whatever its shape.

    Returns
    -------
    BookPayload
        Title and author stripped of surrounding whitespace; year is None
        when absent or falsy.
    """
    if body is None:
        body = {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    title = body.get("title")
    author = body.get("author")
    if _is_blank(title) or _is_blank(author):
        raise ValidationError("Title and author are required fields")
    if not isinstance(title, str) or not isinstance(author, str):
        raise ValidationError("Title and author must be strings")
    if not title.strip() or not author.strip():
        raise ValidationError("Title and author are required fields")

    year = body.get("year")
    if _is_blank(year):
        year = None
    elif isinstance(year, bool):
        raise ValidationError("Year must be an integer")
    try:
        return BookPayload(title=title.strip(), author=author.strip(), year=year)
    except PydanticValidationError:
        raise ValidationError("Year must be an integer")


_NOT_FOUND = {404: {"model": ErrorResponse}}
_INVALID = {400: {"model": ErrorResponse}}


@router.api_route("/books", methods=["GET", "HEAD"], response_model=BookListResponse)
def list_books(store: CatalogStore = Depends(get_store)) -> BookListResponse:
    books = store.list()
    return BookListResponse(count=len(books), data=books)


@router.api_route(
    "/books/{book_id}",
    methods=["GET", "HEAD"],
    response_model=BookResponse,
    response_model_exclude_none=True,
    responses=_NOT_FOUND,
)
def get_book(book_id: str, store: CatalogStore = Depends(get_store)) -> BookResponse:
    return BookResponse(data=store.get(_parse_book_id(book_id)))


@router.post(
    "/books",
    status_code=201,
    response_model=BookResponse,
    response_model_exclude_none=True,
    responses=_INVALID,
)
def create_book(
    payload: BookPayload = Depends(book_payload),
    store: CatalogStore = Depends(get_store),
) -> BookResponse:
    book = store.create(payload.title, payload.author, payload.year)
    return BookResponse(message="Book created successfully", data=book)


@router.put(
    "/books/{book_id}",
    response_model=BookResponse,
    response_model_exclude_none=True,
    responses={**_INVALID, **_NOT_FOUND},
)
def update_book(
    book_id: str,
    payload: BookPayload = Depends(book_payload),
    store: CatalogStore = Depends(get_store),
) -> BookResponse:
    book = store.update(_parse_book_id(book_id), payload.title, payload.author, payload.year)
    return BookResponse(message="Book updated successfully", data=book)


@router.delete(
    "/books/{book_id}",
    response_model=BookResponse,
    response_model_exclude_none=True,
    responses=_NOT_FOUND,
)
def delete_book(book_id: str, store: CatalogStore = Depends(get_store)) -> BookResponse:
    book = store.delete(_parse_book_id(book_id))
    return BookResponse(message="Book deleted successfully", data=book)
