"""
Python counterpart of the browser page's sync controller.

``CatalogController`` keeps a local view of the catalogue and a form in
step with the API. It is either idle (submitting creates a book) or
editing one book (submitting updates it). After every successful
mutation the whole list is fetched again; nothing is patched locally.
Failures never raise to the caller: they become a notification that
expires after ``message_timeout`` seconds, and a connection failure
while loading also swaps the list for a retry view.
"""

from __future__ import annotations

import html
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import httpx
from typing_extensions import Literal

from .config import settings
from .errors import TransportError


logger = logging.getLogger(__name__)

NoticeKind = Literal["success", "error"]


class ApiResponseError(Exception):
    """The server answered, but not with a success envelope."""


@dataclass
class Notice:
    text: str
    kind: NoticeKind
    expires_at: float


def _empty_form() -> Dict[str, str]:
    return {"title": "", "author": "", "year": ""}


class CatalogController:
    def __init__(
        self,
        http: httpx.Client,
        message_timeout: float = settings.message_timeout,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.http = http
        self.message_timeout = message_timeout
        self.clock = clock
        self.books: List[Dict[str, Any]] = []
        self.form: Dict[str, str] = _empty_form()
        self.editing_id: Optional[int] = None
        self.busy = False
        self.unreachable = False
        self._notice: Optional[Notice] = None

    @classmethod
    def connect(cls, base_url: str = settings.base_url, **kwargs: Any) -> "CatalogController":
        return cls(httpx.Client(base_url=base_url, timeout=10.0), **kwargs)

    # -- state --------------------------------------------------------------

    @property
    def state(self) -> str:
        return "idle" if self.editing_id is None else "editing"

    @property
    def submit_label(self) -> str:
        return "Update Book" if self.editing_id is not None else "Add Book"

    @property
    def notice(self) -> Optional[Notice]:
        if self._notice is not None and self.clock() >= self._notice.expires_at:
            self._notice = None
        return self._notice

    def show_message(self, text: str, kind: NoticeKind = "success") -> None:
        if kind == "error":
            logger.warning(text)
        self._notice = Notice(text, kind, self.clock() + self.message_timeout)

    # -- transport ----------------------------------------------------------

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> Dict[str, Any]:
        try:
            response = self.http.request(method, path, json=payload)
        except httpx.TransportError as exc:
            raise TransportError(str(exc)) from exc
        try:
            result = response.json()
        except ValueError:
            result = {}
        if not isinstance(result, dict):
            result = {}
        if response.is_error or not result.get("success"):
            detail = result.get("message") or response.reason_phrase or "Request failed"
            raise ApiResponseError(f"HTTP {response.status_code}: {detail}")
        return result

    # -- operations ---------------------------------------------------------

    def load_books(self) -> bool:
        """Replace the local list with the server's; False on failure."""
        try:
            result = self._request("GET", "/books")
        except TransportError:
            self.unreachable = True
            self.show_message(
                "Error loading books: Cannot connect to server. "
                f"Make sure the server is running on {self.http.base_url}",
                "error",
            )
            return False
        except ApiResponseError as exc:
            self.show_message(f"Error loading books: {exc}", "error")
            return False
        self.unreachable = False
        self.books = result["data"]
        return True

    def submit(self, title: str, author: str, year: Optional[int] = None) -> bool:
        """Create a book when idle, update the edited one otherwise."""
        self.form = {
            "title": title,
            "author": author,
            "year": "" if year is None else str(year),
        }
        payload: Dict[str, Any] = {"title": title.strip(), "author": author.strip()}
        if year is not None:
            payload["year"] = year
        if not payload["title"] or not payload["author"]:
            self.show_message("Please fill in all required fields", "error")
            return False

        if self.editing_id is not None:
            method, path = "PUT", f"/books/{self.editing_id}"
        else:
            method, path = "POST", "/books"
        self.busy = True
        try:
            result = self._request(method, path, payload)
        except TransportError:
            self.show_message("Error: Cannot connect to server. Make sure the server is running.", "error")
            return False
        except ApiResponseError as exc:
            self.show_message(f"Error: {exc}", "error")
            return False
        finally:
            self.busy = False

        self.show_message(result.get("message", ""))
        self._reset_form()
        self.load_books()
        return True

    def edit(self, book_id: int) -> bool:
        """Enter editing mode for ``book_id`` with the form pre-filled."""
        try:
            book = self._request("GET", f"/books/{book_id}")["data"]
        except (TransportError, ApiResponseError) as exc:
            self.show_message(f"Error loading book: {exc}", "error")
            return False
        self.form = {
            "title": book["title"],
            "author": book["author"],
            "year": str(book["year"]) if book.get("year") else "",
        }
        self.editing_id = book_id
        self.show_message("Editing mode: Update the book details")
        return True

    def cancel(self) -> None:
        self._reset_form()
        self.show_message("Edit cancelled")

    def handle_key(self, key: str) -> None:
        if key == "Escape" and self.editing_id is not None:
            self.cancel()

    def delete(self, book_id: int, confirm: Callable[[], bool] = lambda: True) -> bool:
        if not confirm():
            return False
        try:
            result = self._request("DELETE", f"/books/{book_id}")
        except (TransportError, ApiResponseError) as exc:
            self.show_message(f"Error deleting book: {exc}", "error")
            return False
        self.show_message(result.get("message", ""))
        self.load_books()
        return True

    def _reset_form(self) -> None:
        self.form = _empty_form()
        self.editing_id = None

    # -- rendering ----------------------------------------------------------

    def render(self) -> str:
        """Render the list view as HTML with every text field escaped."""
        if self.unreachable:
            return (
                '<div class="empty-state">'
                "<h3>Connection Error</h3>"
                "<p>Cannot connect to the API server.</p>"
                '<button class="btn btn-primary" data-action="retry">Try Again</button>'
                "</div>"
            )
        if not self.books:
            return (
                '<div class="empty-state">'
                "<h3>No books found</h3>"
                "<p>Add your first book using the form above!</p>"
                "</div>"
            )
        cards = []
        for book in self.books:
            year = html.escape(str(book.get("year") or "Unknown"))
            cards.append(
                '<div class="book-card">'
                f'<div class="book-title">{html.escape(book["title"])}</div>'
                f'<div class="book-author">by {html.escape(book["author"])}</div>'
                f'<div class="book-year">{year}</div>'
                '<div class="book-actions">'
                f'<button class="btn btn-update" data-action="edit" data-id="{int(book["id"])}">Edit</button>'
                f'<button class="btn btn-delete" data-action="delete" data-id="{int(book["id"])}">Delete</button>'
                "</div></div>"
            )
        return "".join(cards)
