# tests/test_validators.py
from datetime import timedelta

import pytest

from library_ledger.errors import ValidationError
from library_ledger.utils.clock import utcnow
from library_ledger.validators.book_schema import validate_book_input
from library_ledger.validators.borrow_schema import validate_borrow_input


def _future(days=7):
    return (utcnow() + timedelta(days=days)).isoformat() + "Z"


def test_borrow_input_parses_aliases_and_normalizes_due_date():
    parsed = validate_borrow_input({"book": "12", "quantity": 2, "dueDate": _future()})

    assert parsed.book_id == 12
    assert parsed.quantity == 2
    assert parsed.due_date.tzinfo is None
    assert parsed.due_date > utcnow()


def test_borrow_input_rejects_past_due_date():
    with pytest.raises(ValidationError) as exc_info:
        validate_borrow_input({"book": 1, "quantity": 1, "dueDate": "2000-01-01T00:00:00Z"})

    error = exc_info.value.details["errors"]["dueDate"]
    assert error["message"] == "Due date must be in the future"
    assert error["value"] == "2000-01-01T00:00:00Z"


def test_borrow_input_reports_quantity_minimum():
    with pytest.raises(ValidationError) as exc_info:
        validate_borrow_input({"book": 1, "quantity": 0, "dueDate": _future()})

    error = exc_info.value.details["errors"]["quantity"]
    assert error["kind"] == "too_small"
    assert error["properties"]["min"] == 1
    assert error["value"] == 0


def test_borrow_input_reports_every_missing_field():
    with pytest.raises(ValidationError) as exc_info:
        validate_borrow_input({})

    details = exc_info.value.details
    assert details["name"] == "ValidationError"
    assert set(details["errors"]) == {"book", "quantity", "dueDate"}
    assert details["errors"]["book"]["value"] is None


def test_borrow_input_must_be_an_object():
    with pytest.raises(ValidationError):
        validate_borrow_input(["book", 1])


def test_book_input_strips_and_drops_available():
    data = validate_book_input({
        "title": "  Cosmos ",
        "author": "Carl Sagan",
        "genre": "SCIENCE",
        "isbn": " 978-0345539434 ",
        "copies": 0,
        "available": True,
    })

    assert data["title"] == "Cosmos"
    assert data["isbn"] == "978-0345539434"
    assert data["description"] is None
    assert "available" not in data


def test_book_input_rejects_unknown_genre_and_negative_copies():
    with pytest.raises(ValidationError) as exc_info:
        validate_book_input({
            "title": "X", "author": "Y", "genre": "POETRY", "isbn": "1", "copies": -1,
        })

    assert set(exc_info.value.details["errors"]) == {"genre", "copies"}


def test_partial_book_input_keeps_only_sent_fields():
    assert validate_book_input({"copies": 4}, partial=True) == {"copies": 4}


def test_partial_book_input_rejects_null_required_field():
    with pytest.raises(ValidationError) as exc_info:
        validate_book_input({"title": None}, partial=True)

    assert "title" in exc_info.value.details["errors"]


def test_borrow_input_rejects_boolean_values():
    with pytest.raises(ValidationError) as exc_info:
        validate_borrow_input({"book": True, "quantity": True, "dueDate": _future()})

    assert set(exc_info.value.details["errors"]) == {"book", "quantity"}


def test_borrow_input_quantity_must_be_a_number():
    with pytest.raises(ValidationError) as exc_info:
        validate_borrow_input({"book": 1, "quantity": "2", "dueDate": _future()})

    assert "quantity" in exc_info.value.details["errors"]


def test_borrow_input_rejects_book_id_past_integer_range():
    with pytest.raises(ValidationError) as exc_info:
        validate_borrow_input({"book": 2**63, "quantity": 1, "dueDate": _future()})

    error = exc_info.value.details["errors"]["book"]
    assert error["kind"] == "too_big"
    assert error["properties"]["max"] == 2**63 - 1
