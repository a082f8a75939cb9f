# book_catalog/storage.py
import logging
import threading
from datetime import date
from typing import Iterable, List, Optional

from .errors import NotFoundError
from .models import Book


logger = logging.getLogger(__name__)

SEED_BOOKS = [
    {"title": "The Great Gatsby", "author": "F. Scott Fitzgerald", "year": 1925},
    {"title": "To Kill a Mockingbird", "author": "Harper Lee", "year": 1960},
    {"title": "1984", "author": "George Orwell", "year": 1949},
]


class CatalogStore:
    """In-memory, insertion-ordered collection of books.

    Ids come from a monotonic counter and are never handed out twice,
    even after the book that held one is deleted. Each mutation runs
    under a lock so the append and the counter bump happen together.
    """

    def __init__(self, books: Optional[Iterable[dict]] = None) -> None:
        self._books: List[Book] = []
        self._next_book_id = 1
        self._lock = threading.Lock()
        for entry in books or []:
            self.create(entry["title"], entry["author"], entry.get("year"))

    @classmethod
    def seeded(cls) -> "CatalogStore":
        return cls(SEED_BOOKS)

    @property
    def next_id(self) -> int:
        return self._next_book_id

    def __len__(self) -> int:
        return len(self._books)

    def list(self) -> List[Book]:
        return list(self._books)

    def get(self, book_id: int) -> Book:
        book = next((b for b in self._books if b.id == book_id), None)
        if book is None:
            raise NotFoundError.for_book(book_id)
        return book

    def create(self, title: str, author: str, year: Optional[int] = None) -> Book:
        with self._lock:
            book = Book(
                id=self._next_book_id,
                title=title.strip(),
                author=author.strip(),
                year=year or date.today().year,
            )
            self._next_book_id += 1
            self._books.append(book)
        logger.debug("Created book %s (%r)", book.id, book.title)
        return book

    def update(self, book_id: int, title: str, author: str, year: Optional[int] = None) -> Book:
        with self._lock:
            book = self.get(book_id)
            book.title = title.strip()
            book.author = author.strip()
            # A falsy year (omitted, None or 0) keeps the stored one.
            book.year = year or book.year
        logger.debug("Updated book %s", book_id)
        return book

    def delete(self, book_id: int) -> Book:
        with self._lock:
            for index, book in enumerate(self._books):
                if book.id == book_id:
                    del self._books[index]
                    break
            else:
                raise NotFoundError.for_book(book_id)
        logger.debug("Deleted book %s", book_id)
        return book
