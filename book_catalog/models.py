# book_catalog/models.py
from typing import Optional

from pydantic import BaseModel


class BookPayload(BaseModel):
    # Already validated and trimmed by the router before it gets here.
    title: str
    author: str
    year: Optional[int] = None


class Book(BaseModel):
    id: int
    title: str
    author: str
    year: Optional[int] = None
