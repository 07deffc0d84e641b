import logging
import os

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from pizzeria.api import router as api_router
from pizzeria.core.config import settings
from pizzeria.core.constants import DEFAULT_SIZES, DEFAULT_TOPPINGS
from pizzeria.crud.admin_user import ensure_default_admin
from pizzeria.crud.category import seed_reference_data
from pizzeria.db import async_session, create_db_and_tables

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

# Uploaded images are served straight from disk
os.makedirs(settings.upload_dir, exist_ok=True)

# Create the FastAPI app
app = FastAPI(
    title="Pizzeria API",
    version="1.0.0",
    description="Storefront and admin API: menu, offers, orders, feedback.",
)

# ✅ CORS: credentials are only enabled together with an explicit origin list
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=settings.cors_credentials_enabled,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ Mount uploaded images
app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    log.info("rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    log.exception("unhandled error on %s %s", request.method, request.url.path)
    content = {"detail": "Internal server error"}
    if not settings.is_production:
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)


@app.on_event("startup")
async def on_startup():
    log.info("🔧 Starting DB setup...")
    await create_db_and_tables()

    async with async_session() as db:
        await seed_reference_data(db, DEFAULT_SIZES, DEFAULT_TOPPINGS)
        if await ensure_default_admin(db, settings.admin_username, settings.admin_password):
            log.info("👤 No admin found. Created default admin %r", settings.admin_username)
    log.info("✅ DB ready, uploads in %s", os.path.abspath(settings.upload_dir))


app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("pizzeria.main:app", host="0.0.0.0", port=settings.port)
