"""
Tests for application startup and shutdown.
The Motor client is patched; the lifespan itself runs for real.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock, patch
from pymongo.errors import ServerSelectionTimeoutError

from api.config import APIConfig
from api.database import BookDatabaseService
from api.main import create_app
from api.service import BookService


@pytest.fixture
def mock_motor_client(mock_database):
    """Patch the Motor client class used by the lifespan."""
    with patch('api.main.AsyncIOMotorClient') as client_class:
        client_class.return_value.__getitem__.return_value = mock_database
        yield client_class


@pytest.fixture
def settings():
    return APIConfig(
        _env_file=None,
        mongodb_url="mongodb://db.example:27017",
        mongodb_database="library",
        mongodb_collection="catalogue"
    )


@pytest.fixture(autouse=True)
def skip_logging_setup():
    """Keep global logging configuration untouched."""
    with patch('api.main.setup_logging') as setup:
        yield setup


def test_startup_connects_and_wires_services(mock_motor_client, mock_database, settings):
    app = create_app(settings)

    with TestClient(app) as client:
        mock_motor_client.assert_called_once_with("mongodb://db.example:27017")
        mock_motor_client.return_value.__getitem__.assert_called_with("library")
        mock_database.command.assert_awaited_with("ping")
        mock_database.__getitem__.assert_called_with("catalogue")

        assert isinstance(app.state.db_service, BookDatabaseService)
        assert isinstance(app.state.book_service, BookService)
        assert client.get("/api/books").status_code == 200
        mock_motor_client.return_value.close.assert_not_called()

    mock_motor_client.return_value.close.assert_called_once()


def test_startup_configures_logging(mock_motor_client, settings, skip_logging_setup):
    with TestClient(create_app(settings)):
        pass

    skip_logging_setup.assert_called_once_with(
        log_level=settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        debug=settings.debug
    )


def test_startup_fails_when_database_unreachable(mock_motor_client, mock_database, settings):
    mock_database.command = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers available"))
    app = create_app(settings)

    with pytest.raises(ServerSelectionTimeoutError):
        with TestClient(app):
            pass

    mock_motor_client.return_value.close.assert_called_once()
    assert not hasattr(app.state, "book_service")
