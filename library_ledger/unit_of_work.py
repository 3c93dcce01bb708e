from flask import current_app
from sqlalchemy.exc import OperationalError, SQLAlchemyError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import sessionmaker

from library_ledger.errors import PersistenceError
from library_ledger.extensions import db
from library_ledger.repositories.book_repo import BookRepo
from library_ledger.repositories.borrow_repo import BorrowRepo


def to_persistence_error(exc: SQLAlchemyError) -> PersistenceError:
    retryable = isinstance(exc, (OperationalError, PoolTimeoutError))
    return PersistenceError(f"Database error: {exc.__class__.__name__}", retryable=retryable)


def session_factory():
    """Per-app sessionmaker bound to the Flask-SQLAlchemy engine."""
    factory = current_app.extensions.get("library_ledger.sessionmaker")
    if factory is None:
        factory = sessionmaker(bind=db.engine, expire_on_commit=False)
        current_app.extensions["library_ledger.sessionmaker"] = factory
    return factory


class UnitOfWork:
    """
    One session, one transaction. Leaving the block without `commit()`,
    or through an exception, rolls everything back; the session is always
    closed. SQLAlchemy errors leave the block as PersistenceError.
    """

    def __init__(self, factory=None):
        self._factory = factory
        self.session = None
        self.books = None
        self.borrows = None
        self._committed = False

    def __enter__(self):
        factory = self._factory or session_factory()
        self.session = factory()
        self.books = BookRepo(self.session)
        self.borrows = BorrowRepo(self.session)
        self._committed = False
        return self

    def __exit__(self, exc_type, exc, tb):
        rollback_error = None
        try:
            if exc_type is not None or not self._committed:
                self.session.rollback()
        except SQLAlchemyError as e:
            rollback_error = e
        finally:
            self.session.close()

        if isinstance(exc, SQLAlchemyError):
            raise to_persistence_error(exc) from exc
        if rollback_error is not None:
            if exc is None:
                raise to_persistence_error(rollback_error) from rollback_error
            # the error that aborted the block is the one the caller sees
            current_app.logger.warning(f"[uow] rollback failed after {exc_type.__name__}: {rollback_error}")
        return False

    def commit(self):
        self.session.commit()
        self._committed = True

    def rollback(self):
        self.session.rollback()
