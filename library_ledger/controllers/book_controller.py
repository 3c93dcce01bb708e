# library_ledger/controllers/book_controller.py

from flask import Blueprint, request

from library_ledger.errors import NotFoundError, PersistenceError, ValidationError
from library_ledger.services.book_service import BookService
from library_ledger.utils.responses import json_error, json_ok, persistence_error
from library_ledger.validators.book_schema import validate_book_input

book_bp = Blueprint("books", __name__)


def book_to_dict(b):
    return {
        "id": b.id,
        "title": b.title,
        "author": b.author,
        "genre": b.genre,
        "isbn": b.isbn,
        "description": b.description,
        "copies": b.copies,
        "available": b.available,
        "createdAt": b.created_at.isoformat(),
        "updatedAt": b.updated_at.isoformat(),
    }


def _validation_error(message, e: ValidationError):
    return json_error(message, 400, e.details if e.details is not None else e.message)


@book_bp.post("/")
def create_book():
    data = request.get_json(silent=True)
    try:
        b = BookService.create_book(validate_book_input(data))
        return json_ok("Book created successfully", book_to_dict(b), 201)
    except ValidationError as e:
        return _validation_error("Error creating book", e)
    except PersistenceError as e:
        return persistence_error("Error creating book", e)


@book_bp.get("/")
def list_books():
    args = request.args
    try:
        books = BookService.list_books(
            genre=args.get("filter"),
            sort_by=args.get("sortBy", "createdAt"),
            sort=args.get("sort", "desc"),
            limit=args.get("limit"),
        )
        return json_ok("Books retrieved successfully", [book_to_dict(b) for b in books])
    except PersistenceError as e:
        return persistence_error("Error fetching books", e)


@book_bp.get("/<int:book_id>")
def get_book(book_id: int):
    try:
        b = BookService.get_book(book_id)
        return json_ok("Book retrieved successfully", book_to_dict(b))
    except NotFoundError as e:
        return json_error(e.message, 404)
    except PersistenceError as e:
        return persistence_error("Error fetching book", e)


@book_bp.put("/<int:book_id>")
def update_book(book_id: int):
    data = request.get_json(silent=True)
    try:
        b = BookService.update_book(book_id, validate_book_input(data, partial=True))
        return json_ok("Book updated successfully", book_to_dict(b))
    except NotFoundError as e:
        return json_error(e.message, 404)
    except ValidationError as e:
        return _validation_error("Error updating book", e)
    except PersistenceError as e:
        return persistence_error("Error updating book", e)


@book_bp.delete("/<int:book_id>")
def delete_book(book_id: int):
    try:
        BookService.delete_book(book_id)
        return json_ok("Book deleted successfully", None)
    except NotFoundError as e:
        return json_error(e.message, 404)
    except PersistenceError as e:
        return persistence_error("Error deleting book", e)
