import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from pizzeria.models.user import AdminUser
from pizzeria.utils.security import get_password_hash, verify_password

log = logging.getLogger(__name__)


async def get_admin_by_username(db: AsyncSession, username: str):
    result = await db.execute(select(AdminUser).where(AdminUser.username == username))
    return result.scalar_one_or_none()


async def authenticate_admin(db: AsyncSession, username: str, password: str):
    """Returns the admin (with last_login stamped) or None on any mismatch"""
    admin = await get_admin_by_username(db, username)
    if not admin or not verify_password(password, admin.password_hash):
        log.warning("failed admin login for username=%r", username)
        return None

    admin.last_login = datetime.utcnow()
    await db.commit()
    await db.refresh(admin)
    log.info("admin %r logged in", username)
    return admin


async def create_admin_user(db: AsyncSession, username: str, password: str) -> AdminUser:
    admin = AdminUser(username=username, password_hash=get_password_hash(password))
    db.add(admin)
    await db.commit()
    await db.refresh(admin)
    return admin


async def set_admin_password(db: AsyncSession, username: str, password: str):
    admin = await get_admin_by_username(db, username)
    if not admin:
        return None
    admin.password_hash = get_password_hash(password)
    await db.commit()
    return admin


async def ensure_default_admin(db: AsyncSession, username: str, password: str) -> bool:
    """Create the configured admin when no admin exists yet. Returns True if one was created."""
    result = await db.execute(select(AdminUser).limit(1))
    if result.scalars().first():
        return False
    await create_admin_user(db, username, password)
    return True
