# app/models.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationInfo, field_validator


class Book(BaseModel):
    id: str
    title: str
    author: str
    description: Optional[str] = None
    published_year: Optional[int] = None


class BookSubmission(BaseModel):
    """Payload accepted by ``POST /books``.

    ``title`` and ``author`` must not be blank and ``published_year`` must be
    a JSON integer between 1 and the current calendar year. Anything else is
    rejected before the local store is touched.
    """

    title: str
    author: str
    description: Optional[str] = None
    published_year: StrictInt

    @field_validator("title", "author")
    @classmethod
    def _not_blank(cls, value: str, info: ValidationInfo) -> str:
        # Checked on a stripped copy; the stored value is kept as submitted.
        if not value.strip():
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return value

    @field_validator("published_year")
    @classmethod
    def _year_in_range(cls, value: int) -> int:
        current_year = datetime.now().year
        if value <= 0 or value > current_year:
            raise ValueError(
                f"Year must be between 1 and the current year {current_year}"
            )
        return value

    def to_book(self, book_id: str) -> Book:
        return Book(
            id=book_id,
            title=self.title,
            author=self.author,
            description=self.description,
            published_year=self.published_year,
        )


class ApiErrorResponse(BaseModel):
    # Envelope keys are camelCase on the wire.
    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(alias="statusCode")
    message: str
    details: Optional[str] = None
