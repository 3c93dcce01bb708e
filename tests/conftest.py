# tests/conftest.py
import pytest

from library_ledger import create_app
from library_ledger.config import Config, sqlalchemy_engine_options
from library_ledger.extensions import db
from library_ledger.models.book import Book
from library_ledger.models.borrow import Borrow
from library_ledger.services.inventory_ledger import recompute_availability


@pytest.fixture
def app(tmp_path):
    """App on a fresh SQLite file per test (a file, so threads get real connections)"""
    db_uri = f"sqlite:///{tmp_path / 'library_test.db'}"

    class TestConfig(Config):
        TESTING = True
        SQLALCHEMY_DATABASE_URI = db_uri
        SQLALCHEMY_ENGINE_OPTIONS = sqlalchemy_engine_options(db_uri, 30)
        AUTO_CREATE_TABLES = True
        BOOK_LIST_MAX_LIMIT = 5

    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_book(app):
    """Factory persisting a book with a unique isbn"""
    counter = {"n": 0}

    def _make(copies=3, title=None, genre="FICTION", **kwargs):
        counter["n"] += 1
        n = counter["n"]
        book = Book(
            title=title or f"Book {n}",
            author=kwargs.pop("author", f"Author {n}"),
            genre=genre,
            isbn=kwargs.pop("isbn", f"978-0-00-{n:06d}"),
            copies=copies,
            **kwargs,
        )
        recompute_availability(book)
        db.session.add(book)
        db.session.commit()
        return book

    return _make


@pytest.fixture
def fresh(app):
    """Re-read a book from the database, bypassing the session identity map"""

    def _fresh(book_id):
        db.session.expire_all()
        return db.session.get(Book, book_id)

    return _fresh


@pytest.fixture
def borrow_count(app):
    def _count():
        return db.session.query(Borrow).count()

    return _count
