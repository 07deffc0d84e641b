# scripts/manage_users.py

import asyncio
import argparse
import getpass

from sqlalchemy.future import select

from pizzeria.crud import admin_user
from pizzeria.db import async_session
from pizzeria.models.user import AdminUser


async def create_admin(username: str, password: str):
    async with async_session() as session:
        if await admin_user.get_admin_by_username(session, username):
            print(f"⚠️  Admin '{username}' already exists. Skipping.")
            return
        await admin_user.create_admin_user(session, username, password)
        print(f"✅ Created admin: {username}")


async def reset_password(username: str, password: str):
    async with async_session() as session:
        admin = await admin_user.set_admin_password(session, username, password)
        if admin:
            print(f"🔐 Password updated for: {username}")
        else:
            print(f"⚠️  No admin found with username: {username}")


async def delete_admin(username: str):
    async with async_session() as session:
        admin = await admin_user.get_admin_by_username(session, username)
        if not admin:
            print(f"⚠️  No admin found with username: {username}")
            return
        await session.delete(admin)
        await session.commit()
        print(f"🗑️  Deleted admin: {username}")


async def list_admins():
    async with async_session() as session:
        result = await session.execute(select(AdminUser).order_by(AdminUser.username))
        for admin in result.scalars().all():
            print(f"- {admin.username} (last login: {admin.last_login or 'never'})")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Manage pizzeria admin users")
    parser.add_argument("--create", action="store_true", help="Create an admin")
    parser.add_argument("--reset-password", action="store_true", help="Set a new password")
    parser.add_argument("--delete", action="store_true", help="Delete an admin")
    parser.add_argument("--list", action="store_true", help="List admins")
    parser.add_argument("--username", type=str, help="Admin username")

    args = parser.parse_args()

    if args.list:
        asyncio.run(list_admins())
    elif args.username and args.create:
        asyncio.run(create_admin(args.username, getpass.getpass("Password: ")))
    elif args.username and args.reset_password:
        asyncio.run(reset_password(args.username, getpass.getpass("New password: ")))
    elif args.username and args.delete:
        asyncio.run(delete_admin(args.username))
    else:
        print("❗ Usage:")
        print("  python -m scripts.manage_users --list")
        print("  python -m scripts.manage_users --create --username admin")
        print("  python -m scripts.manage_users --reset-password --username admin")
        print("  python -m scripts.manage_users --delete --username admin")
