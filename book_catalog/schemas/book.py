"""
Book Request Schemas

Shapes of the data a request carries into the handler.

These schemas only normalize SHAPE (missing fields become empty strings,
the method is uppercased). Domain rules such as "title is at most 255
characters" live on the Book entity, so a bad value reaches the entity
setter and comes back as a ValidationError outcome with a readable message.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

SUBMISSION_METHOD = "POST"


class BookForm(BaseModel):
    """
    Submitted book fields, as typed by the user.

    Example form body:
        title=Dune&author=Frank+Herbert&type=Fantasy&description=Desert+planet
    """

    title: str = Field(default="", description="Book title")
    author: str = Field(default="", description="Author name")
    type: str = Field(
        default="",
        description="Book type",
        examples=["Adventure", "Crime", "Fantasy", "Horror"],
    )
    description: str = Field(default="", description="Free-text description")

    model_config = ConfigDict(frozen=True)

    @field_validator("title", "author", "type", "description", mode="before")
    @classmethod
    def none_to_empty(cls, v: str | None) -> str:
        """Treat missing fields as empty strings."""
        return "" if v is None else v


class BookRequest(BaseModel):
    """
    Everything the handler may read about one request.

    - method: HTTP method; create/update only act on POST
    - book_id: Raw id parameter (validated by the handler)
    - form: Submitted fields for create/update
    - search: Raw search term
    """

    method: str = Field(default="GET", description="HTTP method")
    book_id: str | None = Field(default=None, description="Raw book id parameter")
    form: BookForm | None = Field(default=None, description="Submitted book fields")
    search: str | None = Field(default=None, description="Search term")

    model_config = ConfigDict(frozen=True)

    @field_validator("method")
    @classmethod
    def uppercase_method(cls, v: str) -> str:
        return v.upper()

    @property
    def is_submission(self) -> bool:
        """True if the request used the form submission method."""
        return self.method == SUBMISSION_METHOD
