from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from pizzeria.crud import admin_user
from pizzeria.db import get_db
from pizzeria.schemas.user import AdminUserRead, LoginRequest

router = APIRouter()


@router.post("/login", response_model=AdminUserRead)
async def login(credentials: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Credential check only; the response never carries the password hash"""
    admin = await admin_user.authenticate_admin(db, credentials.username, credentials.password)
    if not admin:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    return admin
