from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from library_ledger.errors import ValidationError
from library_ledger.utils.error_formatter import format_validation_error

Genre = Literal["FICTION", "NON_FICTION", "SCIENCE", "HISTORY", "BIOGRAPHY", "FANTASY"]


class BookInput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1)
    author: str = Field(min_length=1)
    genre: Genre
    isbn: str = Field(min_length=1)
    description: Optional[str] = None
    copies: int = Field(ge=0)
    # accepted for compatibility, always derived from copies
    available: Optional[bool] = None


class BookUpdateInput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, min_length=1)
    author: Optional[str] = Field(default=None, min_length=1)
    genre: Optional[Genre] = None
    isbn: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    copies: Optional[int] = Field(default=None, ge=0)
    available: Optional[bool] = None

    @field_validator("title", "author", "genre", "isbn", "copies", mode="before")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise PydanticCustomError("null_value", "Field cannot be null")
        return value


def validate_book_input(raw, partial: bool = False) -> dict:
    """
    Validated book fields as a dict ready for the catalog service. With
    `partial`, only the fields present in `raw` are returned. `available`
    is never returned.
    """
    if not isinstance(raw, dict):
        raise ValidationError("Request body must be a JSON object")

    schema = BookUpdateInput if partial else BookInput
    try:
        parsed = schema.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError("Validation failed", details=format_validation_error(e, raw)) from e

    return parsed.model_dump(exclude_unset=partial, exclude={"available"})
