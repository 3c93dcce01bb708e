from sqlalchemy import select

from library_ledger.models.book import Book


class BookRepo:
    def __init__(self, session):
        self.session = session

    def list(self, genre: str | None = None, order_by=None, limit: int = 10):
        stmt = select(Book)
        if genre:
            stmt = stmt.where(Book.genre == genre)
        if order_by is not None:
            stmt = stmt.order_by(order_by, Book.id)
        return self.session.scalars(stmt.limit(limit)).all()

    def get(self, book_id: int):
        return self.session.get(Book, book_id)

    def get_by_isbn(self, isbn: str):
        return self.session.scalars(select(Book).where(Book.isbn == isbn)).first()

    def add(self, book: Book):
        self.session.add(book)
        self.session.flush()
        return book

    def execute(self, stmt):
        """Run a bulk statement (see inventory_ledger.decrement_statement)."""
        return self.session.execute(stmt)

    def delete(self, book: Book):
        self.session.delete(book)
        self.session.flush()
