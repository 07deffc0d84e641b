import logging
import os
import platform
import sys
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pizzeria.core.config import settings
from pizzeria.core.constants import UPLOAD_URL_PREFIX
from pizzeria.db import get_db
from pizzeria.utils.uploads import list_uploads

log = logging.getLogger(__name__)

router = APIRouter()


def _upload_dir_info() -> dict:
    path = os.path.abspath(settings.upload_dir)
    exists = os.path.isdir(path)
    return {
        "uploadPath": path,
        "urlPrefix": UPLOAD_URL_PREFIX,
        "exists": exists,
        "writable": exists and os.access(path, os.W_OK),
    }


@router.get("/health")
async def health():
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat()}


@router.get("/diagnostic")
async def diagnostic(db: AsyncSession = Depends(get_db)):
    database = {"connected": False, "dialect": db.bind.dialect.name if db.bind else None}
    try:
        await db.execute(text("SELECT 1"))
        database["connected"] = True
    except SQLAlchemyError as e:
        # Reported, not raised: this endpoint exists to describe a broken setup
        log.error("diagnostic database check failed: %s", e)
        if not settings.is_production:
            database["error"] = str(e)

    uploads = _upload_dir_info()
    uploads["fileCount"] = len(list_uploads())

    return {
        "environment": settings.environment,
        "timestamp": datetime.utcnow().isoformat(),
        "server": {
            "python": sys.version.split()[0],
            "platform": platform.platform(),
            "port": settings.port,
        },
        "database": database,
        "uploads": uploads,
        "cors": {
            "origins": settings.cors_origin_list,
            "allowCredentials": settings.cors_credentials_enabled,
        },
    }


@router.get("/upload-path")
async def upload_path():
    info = _upload_dir_info()
    info["files"] = list_uploads()
    return info
