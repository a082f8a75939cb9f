from datetime import date

import pytest

from book_catalog.errors import NotFoundError
from book_catalog.storage import CatalogStore


def test_seeded_store_has_three_books_in_order(store):
    books = store.list()
    assert [b.id for b in books] == [1, 2, 3]
    assert books[1].author == "Harper Lee"
    assert store.next_id == 4


def test_empty_store_starts_at_one():
    store = CatalogStore()
    assert store.list() == []
    assert store.create("A", "B").id == 1


def test_create_assigns_increasing_ids_and_trims(store):
    first = store.create("  Dune ", " Frank Herbert  ", 1965)
    second = store.create("Emma", "Jane Austen", 1815)
    assert (first.id, second.id) == (4, 5)
    assert first.title == "Dune"
    assert first.author == "Frank Herbert"
    assert store.list()[-1] is second


def test_create_defaults_year_to_current_year(store):
    assert store.create("A", "B").year == date.today().year
    assert store.create("A", "B", 0).year == date.today().year


def test_deleted_ids_are_never_reused(store):
    book = store.create("A", "B", 2001)
    store.delete(book.id)
    assert store.create("C", "D").id == book.id + 1


def test_get_round_trip(store):
    created = store.create("A", "B", 2001)
    fetched = store.get(created.id)
    assert (fetched.title, fetched.author, fetched.year) == ("A", "B", 2001)


def test_get_unknown_raises(store):
    with pytest.raises(NotFoundError) as excinfo:
        store.get(99)
    assert excinfo.value.message == "Book with ID 99 not found"


def test_update_replaces_fields_and_keeps_id(store):
    book = store.update(2, " Go Set a Watchman ", "Harper Lee", 2015)
    assert book.id == 2
    assert book.title == "Go Set a Watchman"
    assert book.year == 2015
    assert store.get(2).title == "Go Set a Watchman"


@pytest.mark.parametrize("year", [None, 0])
def test_update_with_falsy_year_keeps_old_year(store, year):
    book = store.update(1, "Gatsby", "Fitzgerald", year)
    assert book.year == 1925


def test_update_unknown_leaves_collection_unchanged(store):
    before = [b.model_copy() for b in store.list()]
    with pytest.raises(NotFoundError):
        store.update(42, "X", "Y", 2000)
    assert store.list() == before


def test_delete_returns_removed_book(store):
    removed = store.delete(2)
    assert removed.author == "Harper Lee"
    assert len(store) == 2
    assert [b.id for b in store.list()] == [1, 3]


def test_delete_unknown_leaves_collection_unchanged(store):
    with pytest.raises(NotFoundError):
        store.delete(42)
    assert len(store) == 3
