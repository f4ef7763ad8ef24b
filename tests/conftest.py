"""
Pytest configuration and shared fixtures.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from pymongo.results import InsertOneResult


@pytest.fixture
def sample_book_data():
    """Create sample book data for testing."""
    return {
        "title": "The Alchemist",
        "author": "Paulo Coelho",
        "publishedDate": "1988-01-01",
        "genre": "Adventure",
    }


@pytest.fixture
def mock_books_collection():
    """Create a mock Motor collection for testing."""
    collection = AsyncMock()
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    collection.find_one.return_value = None
    collection.find_one_and_update.return_value = None
    collection.find_one_and_delete.return_value = None
    return collection


@pytest.fixture
def mock_database(mock_books_collection):
    """Create a mock Motor database whose books collection is mocked."""
    database = MagicMock()
    database.__getitem__.return_value = mock_books_collection
    database.command = AsyncMock(return_value={"ok": 1.0})
    return database


@pytest.fixture
def in_memory_collection():
    """
    Mock Motor collection backed by a dict, for end-to-end request tests.

    Documents keep insertion order, which stands in for natural store order.
    """
    documents = {}

    def insert_one(document):
        document.setdefault("_id", ObjectId())
        documents[document["_id"]] = dict(document)
        return InsertOneResult(document["_id"], acknowledged=True)

    def find_one(query):
        document = documents.get(query["_id"])
        return dict(document) if document is not None else None

    def find_one_and_update(query, update, return_document=None):
        document = documents.get(query["_id"])
        if document is None:
            return None
        document.update(update["$set"])
        return dict(document)

    def find_one_and_delete(query):
        return documents.pop(query["_id"], None)

    def find(query=None):
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[dict(d) for d in documents.values()])
        return cursor

    collection = MagicMock()
    collection.documents = documents
    collection.insert_one = AsyncMock(side_effect=insert_one)
    collection.find_one = AsyncMock(side_effect=find_one)
    collection.find_one_and_update = AsyncMock(side_effect=find_one_and_update)
    collection.find_one_and_delete = AsyncMock(side_effect=find_one_and_delete)
    collection.find = MagicMock(side_effect=find)
    collection.count_documents = AsyncMock(side_effect=lambda query: len(documents))
    return collection
