"""
Book record service.

Runs each book operation against the database service and turns the outcome
into a status code and JSON body. Failures never propagate past this layer.
"""

from typing import Any, Dict, NamedTuple, Optional

import structlog
from fastapi import status

from api.database import BookDatabaseService
from api.models import BookFields

logger = structlog.get_logger(__name__)


class ServiceResponse(NamedTuple):
    """Status code and JSON-ready body of an operation."""
    status_code: int
    content: Any


def not_found(book_id: str) -> ServiceResponse:
    return ServiceResponse(
        status.HTTP_404_NOT_FOUND,
        {"message": f"Book with {book_id} not found"}
    )


def store_failure(error: Exception) -> ServiceResponse:
    return ServiceResponse(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {"message": str(error)}
    )


def parse_fields(payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Keep only the supplied book fields of a request body."""
    return BookFields.model_validate(payload or {}).model_dump(exclude_unset=True)


class BookService:
    """Book record operations bound to one database service."""

    def __init__(self, db_service: BookDatabaseService):
        self.db_service = db_service

    async def list_books(self) -> ServiceResponse:
        try:
            books = await self.db_service.list_books()
            return ServiceResponse(status.HTTP_200_OK, books)
        except Exception as e:
            logger.error("Failed to get books", error=str(e))
            return store_failure(e)

    async def get_book_by_id(self, book_id: str) -> ServiceResponse:
        try:
            book = await self.db_service.get_book_by_id(book_id)
            if book is None:
                return not_found(book_id)
            return ServiceResponse(status.HTTP_200_OK, book)
        except Exception as e:
            logger.error("Failed to get book", book_id=book_id, error=str(e))
            return store_failure(e)

    async def create_book(self, payload: Optional[Dict[str, Any]]) -> ServiceResponse:
        try:
            book = await self.db_service.create_book(parse_fields(payload))
            logger.info("Book created", book_id=book["id"])
            return ServiceResponse(status.HTTP_201_CREATED, book)
        except Exception as e:
            logger.error("Failed to create book", error=str(e))
            return store_failure(e)

    async def update_book_by_id(
        self,
        book_id: str,
        payload: Optional[Dict[str, Any]]
    ) -> ServiceResponse:
        """
        Update a book.

        A successful update answers 201 rather than 200.
        """
        try:
            book = await self.db_service.update_book_by_id(book_id, parse_fields(payload))
            if book is None:
                return not_found(book_id)
            logger.info("Book updated", book_id=book_id)
            return ServiceResponse(status.HTTP_201_CREATED, book)
        except Exception as e:
            logger.error("Failed to update book", book_id=book_id, error=str(e))
            return store_failure(e)

    async def delete_book_by_id(self, book_id: str) -> ServiceResponse:
        try:
            deleted = await self.db_service.delete_book_by_id(book_id)
            if not deleted:
                return not_found(book_id)
            logger.info("Book deleted", book_id=book_id)
            return ServiceResponse(
                status.HTTP_200_OK,
                {"message": f"Book with id: {book_id} successfully deleted!"}
            )
        except Exception as e:
            logger.error("Failed to delete book", book_id=book_id, error=str(e))
            return store_failure(e)
