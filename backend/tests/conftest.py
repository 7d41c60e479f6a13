"""
Inventory API: Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each API test gets its own app built by create_app() against a fresh
       SQLite file and upload directory under tmp_path, so tests never share
       rows or photos.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session for service unit tests
    ├── app_settings:    Settings pointing at tmp_path
    ├── app:             FastAPI app with tables created
    ├── client:          HTTPX AsyncClient talking to `app`
    ├── auth_headers:    Bearer header for a freshly registered user
    ├── sample_image_bytes / sample_png_bytes: upload payloads
    └── temp_storage:    Temporary directory for FileService tests
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Set before any app import: app.main builds a module-level app from the
# environment, so it must never see a real database or secret.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="inventory_test_"), "import.db"
)
os.environ["JWT_SECRET"] = "test-secret-not-for-production-use"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="inventory_uploads_")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.main import create_app

TEST_SECRET = "test-secret-not-for-production-use"
# Small enough that the oversize tests stay cheap
TEST_MAX_FILE_SIZE = 64 * 1024


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_category(mock_db_session):
            mock_db_session.get.return_value = None
            with pytest.raises(NotFoundError):
                await category_service.get_category(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def temp_storage(tmp_path):
    storage_dir = tmp_path / "storage"
    storage_dir.mkdir()
    return str(storage_dir)


@pytest.fixture
def sample_image_bytes():
    """
    Minimal JPEG: Start of Image (FFD8) + JFIF marker + End of Image (FFD9).
    Not a real photograph; uploads are checked by extension, type and size.
    """
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def sample_png_bytes():
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def app_settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}",
        jwt_secret=TEST_SECRET,
        upload_dir=str(tmp_path / "uploads"),
        max_file_size=TEST_MAX_FILE_SIZE,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(app_settings):
    """
    A fresh application with its tables created.

    ASGITransport does not run the lifespan, so tables are created here and
    the engine is disposed on teardown.
    """
    application = create_app(app_settings)
    await application.state.database.create_all()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def client(app):
    """
    HTTPX AsyncClient routed straight into the app (no server).

    Usage:
        async def test_health(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest_asyncio.fixture
async def auth_headers(client):
    """Registers and logs in a user, returning the Authorization header."""
    await client.post(
        "/api/auth/register",
        json={"nama_user": "Admin Gudang", "email": "admin@example.com", "password": "rahasia123"},
    )
    response = await client.post(
        "/api/auth/login",
        json={"email": "admin@example.com", "password": "rahasia123"},
    )
    token = response.json()["token"]
    return {"Authorization": f"Bearer {token}"}
