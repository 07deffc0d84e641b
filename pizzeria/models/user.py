from sqlalchemy import Column, String, Integer, DateTime
from pizzeria.models.base import Base


class AdminUser(Base):
    __tablename__ = "admin_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    last_login = Column(DateTime, nullable=True)
