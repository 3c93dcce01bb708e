from sqlalchemy import update

from library_ledger.errors import InsufficientInventoryError
from library_ledger.models.book import Book


def is_available(copies):
    """Availability rule. Works on an int and on a SQL column expression."""
    return copies > 0


def recompute_availability(book: Book) -> Book:
    """
    Must run on every code path that changes `book.copies`, before the
    change is flushed.
    """
    book.available = bool(is_available(book.copies))
    return book


def ensure_can_borrow(book: Book, quantity: int):
    if not book.available or book.copies < quantity:
        raise InsufficientInventoryError("Requested quantity not available")


def decrement_statement(book_id: int, quantity: int, now):
    """
    Conditional UPDATE taking `quantity` copies off a book and recomputing
    availability in the same statement. Matches no row unless the book
    exists, is available and holds at least `quantity` copies, so a zero
    rowcount means the borrow must be refused.
    """
    remaining = Book.copies - quantity
    return (
        update(Book)
        .where(
            Book.id == book_id,
            Book.available.is_(True),
            Book.copies >= quantity,
        )
        .values(copies=remaining, available=is_available(remaining), updated_at=now)
        .execution_options(synchronize_session=False)
    )
