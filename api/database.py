"""
Database service layer for the FastAPI application.
Wraps the MongoDB books collection and converts stored documents to records.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

import structlog
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

logger = structlog.get_logger(__name__)


def document_to_record(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a stored book document into a JSON-ready record.

    The ObjectId under ``_id`` becomes a string ``id``; date values are
    rendered in ISO format.
    """
    record = dict(document)
    record["id"] = str(record.pop("_id"))
    for key, value in record.items():
        if isinstance(value, (datetime, date)):
            record[key] = value.isoformat()
        elif isinstance(value, ObjectId):
            record[key] = str(value)
    return record


class BookDatabaseService:
    """Database service for book record operations."""

    def __init__(self, database: AsyncIOMotorDatabase, collection_name: str = "books"):
        self.database = database
        self.books_collection = database[collection_name]

    async def list_books(self) -> List[Dict[str, Any]]:
        """
        Get every book in the collection, in natural store order.

        Returns:
            List of book records
        """
        try:
            cursor = self.books_collection.find({})
            books_docs = await cursor.to_list(length=None)
            return [document_to_record(book_doc) for book_doc in books_docs]

        except Exception as e:
            logger.error("Failed to list books", error=str(e))
            raise

    async def get_book_by_id(self, book_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a single book by ID.

        Args:
            book_id: Book identifier (MongoDB ObjectId as hex string)

        Returns:
            Book record if found, None otherwise

        Raises:
            bson.errors.InvalidId: if ``book_id`` is not a valid ObjectId
        """
        try:
            book_doc = await self.books_collection.find_one({"_id": ObjectId(book_id)})
            if book_doc is None:
                return None
            return document_to_record(book_doc)

        except Exception as e:
            logger.error("Failed to get book by ID", book_id=book_id, error=str(e))
            raise

    async def create_book(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a new book; the store assigns its ID.

        Args:
            fields: Book fields to persist

        Returns:
            The stored book record including its ID
        """
        try:
            book_doc = dict(fields)
            result = await self.books_collection.insert_one(book_doc)
            book_doc["_id"] = result.inserted_id
            logger.debug("Book created", book_id=str(result.inserted_id))
            return document_to_record(book_doc)

        except Exception as e:
            logger.error("Failed to create book", error=str(e))
            raise

    async def update_book_by_id(
        self,
        book_id: str,
        fields: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Replace the supplied fields of a book and return it after the update.

        Fields that are not supplied are left untouched. With no fields the
        book is returned unchanged.

        Args:
            book_id: Book identifier
            fields: Fields to set

        Returns:
            Updated book record if found, None otherwise
        """
        try:
            object_id = ObjectId(book_id)

            # MongoDB rejects an empty $set
            if not fields:
                book_doc = await self.books_collection.find_one({"_id": object_id})
            else:
                book_doc = await self.books_collection.find_one_and_update(
                    {"_id": object_id},
                    {"$set": dict(fields)},
                    return_document=ReturnDocument.AFTER
                )

            if book_doc is None:
                return None
            logger.debug("Book updated", book_id=book_id, fields=sorted(fields))
            return document_to_record(book_doc)

        except Exception as e:
            logger.error("Failed to update book", book_id=book_id, error=str(e))
            raise

    async def delete_book_by_id(self, book_id: str) -> bool:
        """
        Permanently remove a book.

        Returns:
            True if a book was deleted, False if none matched
        """
        try:
            book_doc = await self.books_collection.find_one_and_delete({"_id": ObjectId(book_id)})
            if book_doc is None:
                return False
            logger.debug("Book deleted", book_id=book_id)
            return True

        except Exception as e:
            logger.error("Failed to delete book", book_id=book_id, error=str(e))
            raise

    async def health_check(self) -> Dict:
        """
        Perform database health check.

        Returns:
            Dictionary with health status
        """
        try:
            await self.database.command("ping")
            books_count = await self.books_collection.count_documents({})

            return {
                "status": "healthy",
                "books_collection": "accessible",
                "books_count": books_count
            }
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return {
                "status": "unhealthy",
                "error": str(e)
            }
