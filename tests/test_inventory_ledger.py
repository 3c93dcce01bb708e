# tests/test_inventory_ledger.py
import pytest

from library_ledger.errors import InsufficientInventoryError
from library_ledger.extensions import db
from library_ledger.models.book import Book
from library_ledger.services.inventory_ledger import (
    decrement_statement,
    ensure_can_borrow,
    is_available,
    recompute_availability,
)
from library_ledger.utils.clock import utcnow


def _book(copies, available=True):
    return Book(title="T", author="A", genre="SCIENCE", isbn="x", copies=copies, available=available)


@pytest.mark.parametrize("copies, expected", [(0, False), (1, True), (12, True)])
def test_recompute_availability_follows_copies(copies, expected):
    book = recompute_availability(_book(copies, available=not expected))
    assert book.available is expected


def test_is_available_on_plain_int():
    assert is_available(3)
    assert not is_available(0)


def test_ensure_can_borrow_rejects_more_than_copies():
    with pytest.raises(InsufficientInventoryError):
        ensure_can_borrow(_book(2), 3)


def test_ensure_can_borrow_rejects_unavailable_book():
    with pytest.raises(InsufficientInventoryError):
        ensure_can_borrow(_book(2, available=False), 1)


def test_ensure_can_borrow_accepts_exact_quantity():
    ensure_can_borrow(_book(2), 2)


def test_decrement_statement_takes_copies_and_recomputes(make_book, fresh):
    book = make_book(copies=2)

    result = db.session.execute(decrement_statement(book.id, 2, utcnow()))
    db.session.commit()

    assert result.rowcount == 1
    stored = fresh(book.id)
    assert stored.copies == 0
    assert stored.available is False


def test_decrement_statement_matches_nothing_when_short(make_book, fresh):
    book = make_book(copies=1)

    result = db.session.execute(decrement_statement(book.id, 2, utcnow()))
    db.session.commit()

    assert result.rowcount == 0
    assert fresh(book.id).copies == 1


def test_decrement_statement_matches_nothing_for_missing_book(app):
    result = db.session.execute(decrement_statement(4242, 1, utcnow()))
    db.session.rollback()
    assert result.rowcount == 0


def test_column_defaults_agree_with_availability_rule(app, fresh):
    book = Book(title="Blank", author="A", genre="HISTORY", isbn="isbn-defaults")
    db.session.add(book)
    db.session.commit()

    stored = fresh(book.id)
    assert stored.copies == 0
    assert stored.available is False
