"""
API models and schemas for the FastAPI application.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BookFields(BaseModel):
    """
    Writable fields of a book record.

    Every field is optional. Unknown keys in a request body are dropped
    rather than rejected, and ``id``/``_id`` are never accepted from clients.
    """
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(None, description="Book title")
    author: Optional[str] = Field(None, description="Book author")
    publishedDate: Optional[str] = Field(None, description="Publication date, stored as provided")
    genre: Optional[str] = Field(None, description="Book genre")

    @field_validator("title", "author", "publishedDate", "genre", mode="before")
    @classmethod
    def scalars_to_text(cls, v):
        """Store numbers and booleans as their JSON text; lists and objects still fail."""
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        if isinstance(v, (int, float)):
            return str(v)
        return v


class BookResponse(BookFields):
    """Book record as returned by the API."""
    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Unique book identifier")


class MessageResponse(BaseModel):
    """Message payload used for deletions and every error."""
    message: str = Field(..., description="Human-readable outcome")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    database_status: str = Field(..., description="Database connection status")
