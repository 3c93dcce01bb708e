from datetime import datetime

from flask import current_app

from library_ledger.errors import (
    InsufficientInventoryError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from library_ledger.models.book import MAX_ID
from library_ledger.models.borrow import Borrow
from library_ledger.services.inventory_ledger import decrement_statement, ensure_can_borrow
from library_ledger.unit_of_work import UnitOfWork
from library_ledger.utils.clock import utcnow


class BorrowService:
    """
    Runs a borrow as one unit of work: decrement the book's copies and record
    the borrow, or change nothing.

    The decrement is a single conditional UPDATE issued before anything else
    in the transaction. Concurrent borrows of the same book therefore queue
    on the row (or on the SQLite write lock) and each one re-evaluates
    `available AND copies >= quantity` against the committed state, so the
    last copies can only be handed out once.
    """

    def __init__(self, uow_factory=UnitOfWork):
        self._uow_factory = uow_factory

    def borrow(self, book_id: int, quantity: int, due_date: datetime) -> Borrow:
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")
        if not 1 <= book_id <= MAX_ID:
            raise NotFoundError("Book not found")

        log = current_app.logger
        try:
            with self._uow_factory() as uow:
                now = utcnow()
                result = uow.books.execute(decrement_statement(book_id, quantity, now))

                if result.rowcount != 1:
                    book = uow.books.get(book_id)
                    if book is None:
                        raise NotFoundError("Book not found")
                    ensure_can_borrow(book, quantity)
                    # the row passed the checks on re-read, so it changed under us
                    raise PersistenceError("Book inventory changed during borrow", retryable=True)

                borrow = uow.borrows.add(
                    Borrow(
                        book_id=book_id,
                        quantity=quantity,
                        due_date=due_date,
                        created_at=now,
                        updated_at=now,
                    )
                )
                uow.commit()
        except PersistenceError as e:
            log.error(f"[borrow] book={book_id} quantity={quantity} aborted: {e.message}", exc_info=e)
            raise
        except (NotFoundError, InsufficientInventoryError) as e:
            log.info(f"[borrow] book={book_id} quantity={quantity} refused: {e.message}")
            raise

        log.info(f"[borrow] book={book_id} quantity={quantity} borrow_id={borrow.id} ok")
        return borrow
