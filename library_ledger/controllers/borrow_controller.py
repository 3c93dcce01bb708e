from flask import Blueprint, request

from library_ledger.errors import (
    InsufficientInventoryError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from library_ledger.services.borrow_service import BorrowService
from library_ledger.services.borrow_summary_service import BorrowSummaryService
from library_ledger.utils.responses import json_error, json_ok, persistence_error
from library_ledger.validators.borrow_schema import validate_borrow_input

borrow_bp = Blueprint("borrow", __name__)


def borrow_to_dict(b):
    return {
        "id": b.id,
        "book": b.book_id,
        "quantity": b.quantity,
        "dueDate": b.due_date.isoformat(),
        "createdAt": b.created_at.isoformat(),
        "updatedAt": b.updated_at.isoformat(),
    }


@borrow_bp.post("/")
def borrow_book():
    data = request.get_json(silent=True)
    try:
        parsed = validate_borrow_input(data)
        b = BorrowService().borrow(parsed.book_id, parsed.quantity, parsed.due_date)
        return json_ok("Book borrowed successfully", borrow_to_dict(b), 201)
    except ValidationError as e:
        return json_error("Validation failed", 400, e.details if e.details is not None else e.message)
    except NotFoundError as e:
        return json_error(e.message, 404)
    except InsufficientInventoryError as e:
        return json_error(e.message, 400)
    except PersistenceError as e:
        return persistence_error("Error creating borrow record", e)


@borrow_bp.get("/")
def borrow_summary():
    try:
        summary = BorrowSummaryService().summarize()
        return json_ok("Borrowed books summary retrieved successfully", summary)
    except PersistenceError as e:
        return persistence_error("Error fetching borrow records", e)
