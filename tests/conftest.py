import asyncio
import os
import shutil
import tempfile

# Point the app at a throw-away database/upload dir before it is imported
_TMP = tempfile.mkdtemp(prefix="pizzeria-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "uploads")
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin123"

import pytest
from fastapi.testclient import TestClient

from pizzeria.core.config import settings
from pizzeria.core.constants import DEFAULT_SIZES, DEFAULT_TOPPINGS
from pizzeria.crud.admin_user import ensure_default_admin
from pizzeria.crud.category import seed_reference_data
from pizzeria.db import async_session, create_db_and_tables, drop_db_and_tables
from pizzeria.main import app

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


async def _reset_database():
    await drop_db_and_tables()
    await create_db_and_tables()
    async with async_session() as db:
        await seed_reference_data(db, DEFAULT_SIZES, DEFAULT_TOPPINGS)
        await ensure_default_admin(db, settings.admin_username, settings.admin_password)


@pytest.fixture
def upload_dir():
    shutil.rmtree(settings.upload_dir, ignore_errors=True)
    os.makedirs(settings.upload_dir, exist_ok=True)
    return settings.upload_dir


@pytest.fixture
def db_reset(upload_dir):
    asyncio.run(_reset_database())


@pytest.fixture
def client(db_reset):
    # No context manager: tables are prepared by db_reset, not by startup
    return TestClient(app)


def uploaded_path(url: str) -> str:
    return os.path.join(settings.upload_dir, url.rsplit("/", 1)[-1])


@pytest.fixture
def make_menu_item(client):
    def _make(**overrides):
        payload = {
            "name": "Margherita",
            "description": "Tomato, mozzarella, basil",
            "price": 10.0,
            "category": "Classics",
            "availableSizes": ["Small", "Medium", "Large"],
            "availableToppings": ["Mushrooms", "Olives"],
        }
        payload.update(overrides)
        response = client.post("/api/menu-items", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
