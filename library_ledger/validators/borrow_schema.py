from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from library_ledger.errors import ValidationError
from library_ledger.models.book import MAX_ID
from library_ledger.utils.clock import to_naive_utc, utcnow
from library_ledger.utils.error_formatter import format_validation_error


class BorrowInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    book_id: int = Field(alias="book")
    quantity: int = Field(strict=True)
    due_date: datetime = Field(alias="dueDate")

    @field_validator("book_id", mode="before")
    @classmethod
    def book_id_not_bool(cls, value):
        if isinstance(value, bool):
            raise PydanticCustomError("int_type", "Book ID must be an integer")
        return value

    @field_validator("book_id")
    @classmethod
    def book_id_in_range(cls, value: int) -> int:
        if value < 1:
            raise PydanticCustomError("invalid_id", "Book ID is required")
        if value > MAX_ID:
            raise PydanticCustomError("too_big", "Book ID is out of range", {"max": MAX_ID})
        return value

    @field_validator("quantity")
    @classmethod
    def quantity_at_least_one(cls, value: int) -> int:
        if value < 1:
            raise PydanticCustomError("too_small", "Quantity must be at least 1", {"min": 1})
        return value

    @field_validator("due_date")
    @classmethod
    def due_date_in_future(cls, value: datetime) -> datetime:
        value = to_naive_utc(value)
        if value <= utcnow():
            raise PydanticCustomError("invalid_date", "Due date must be in the future")
        return value


def validate_borrow_input(raw) -> BorrowInput:
    if not isinstance(raw, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return BorrowInput.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError("Validation failed", details=format_validation_error(e, raw)) from e
