from sqlalchemy import func, select

from library_ledger.models.book import Book
from library_ledger.models.borrow import Borrow


class BorrowRepo:
    def __init__(self, session):
        self.session = session

    def get(self, borrow_id: int):
        return self.session.get(Borrow, borrow_id)

    def list_all(self):
        return self.session.scalars(select(Borrow).order_by(Borrow.id)).all()

    def count(self) -> int:
        return self.session.scalar(select(func.count(Borrow.id)))

    def add(self, borrow: Borrow):
        self.session.add(borrow)
        self.session.flush()
        return borrow

    def total_quantity_by_book(self):
        """
        Rows of (title, isbn, total_quantity), one per book with borrows.
        The inner join drops groups whose book no longer exists.
        """
        totals = (
            select(Borrow.book_id, func.sum(Borrow.quantity).label("total_quantity"))
            .group_by(Borrow.book_id)
            .subquery()
        )
        stmt = select(Book.title, Book.isbn, totals.c.total_quantity).join(
            totals, totals.c.book_id == Book.id
        )
        return self.session.execute(stmt).all()
