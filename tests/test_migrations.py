import asyncio
import os

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine

import pizzeria.models  # noqa: F401
from pizzeria.core.config import settings
from pizzeria.models.base import Base

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _table_names(url):
    async def _inspect():
        engine = create_async_engine(url)
        async with engine.connect() as conn:
            names = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        await engine.dispose()
        return set(names)

    return asyncio.run(_inspect())


def test_upgrade_creates_every_model_table_and_downgrade_drops_them(tmp_path, monkeypatch):
    url = f"sqlite+aiosqlite:///{tmp_path / 'migrated.db'}"
    monkeypatch.setattr(settings, "database_url", url)
    cfg = Config()
    cfg.set_main_option("script_location", os.path.join(ROOT, "alembic"))

    command.upgrade(cfg, "head")
    assert set(Base.metadata.tables) <= _table_names(url)

    command.downgrade(cfg, "base")
    assert _table_names(url) <= {"alembic_version"}
