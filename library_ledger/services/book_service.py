from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from library_ledger.errors import NotFoundError, ValidationError
from library_ledger.extensions import db
from library_ledger.models.book import GENRES, MAX_ID, Book
from library_ledger.repositories.book_repo import BookRepo
from library_ledger.services.inventory_ledger import recompute_availability
from library_ledger.unit_of_work import to_persistence_error

SORT_FIELDS = {
    "title": Book.title,
    "author": Book.author,
    "genre": Book.genre,
    "isbn": Book.isbn,
    "copies": Book.copies,
    "createdAt": Book.created_at,
    "created_at": Book.created_at,
    "updatedAt": Book.updated_at,
    "updated_at": Book.updated_at,
}


class BookService:
    """Catalog CRUD on the request-scoped Flask-SQLAlchemy session."""

    @staticmethod
    def _repo():
        return BookRepo(db.session)

    @staticmethod
    def _commit():
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            raise ValidationError("ISBN already exists") from e
        except SQLAlchemyError as e:
            db.session.rollback()
            raise to_persistence_error(e) from e

    @staticmethod
    def _ensure_unique_isbn(isbn: str, book_id: int | None = None):
        try:
            existing = BookService._repo().get_by_isbn(isbn)
        except SQLAlchemyError as e:
            raise to_persistence_error(e) from e
        if existing is not None and existing.id != book_id:
            raise ValidationError("ISBN already exists")

    @staticmethod
    def list_books(genre=None, sort_by="createdAt", sort="desc", limit=None):
        cfg = current_app.config
        try:
            limit = int(limit)
        except (TypeError, ValueError):
            limit = cfg["BOOK_LIST_DEFAULT_LIMIT"]
        if limit < 1:
            limit = cfg["BOOK_LIST_DEFAULT_LIMIT"]
        limit = min(limit, cfg["BOOK_LIST_MAX_LIMIT"])

        # unknown genres are ignored rather than rejected
        genre = genre.upper() if isinstance(genre, str) else None
        if genre not in GENRES:
            genre = None

        column = SORT_FIELDS.get(sort_by, Book.created_at)
        order_by = column.asc() if sort == "asc" else column.desc()

        try:
            return BookService._repo().list(genre=genre, order_by=order_by, limit=limit)
        except SQLAlchemyError as e:
            raise to_persistence_error(e) from e

    @staticmethod
    def get_book(book_id: int):
        # ids past the integer column range cannot exist
        if not 1 <= book_id <= MAX_ID:
            raise NotFoundError("Book not found")
        try:
            book = BookService._repo().get(book_id)
        except SQLAlchemyError as e:
            raise to_persistence_error(e) from e
        if not book:
            raise NotFoundError("Book not found")
        return book

    @staticmethod
    def create_book(data: dict):
        BookService._ensure_unique_isbn(data["isbn"])
        book = Book(
            title=data["title"],
            author=data["author"],
            genre=data["genre"],
            isbn=data["isbn"],
            description=data.get("description"),
            copies=int(data["copies"]),
        )
        recompute_availability(book)
        db.session.add(book)
        BookService._commit()
        current_app.logger.info(f"[catalog] book={book.id} created copies={book.copies}")
        return book

    @staticmethod
    def update_book(book_id: int, data: dict):
        book = BookService.get_book(book_id)
        if "isbn" in data:
            BookService._ensure_unique_isbn(data["isbn"], book_id=book.id)

        for k in ["title", "author", "genre", "isbn", "description"]:
            if k in data:
                setattr(book, k, data[k])

        if "copies" in data:
            book.copies = int(data["copies"])
        recompute_availability(book)

        BookService._commit()
        return book

    @staticmethod
    def delete_book(book_id: int):
        book = BookService.get_book(book_id)
        db.session.delete(book)
        BookService._commit()
        current_app.logger.info(f"[catalog] book={book_id} deleted")
