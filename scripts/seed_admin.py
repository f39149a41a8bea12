"""
Seed Admin User

Creates the initial administrator account. Administrators cannot
self-register, so run this once per deployment.

Credentials are read from the environment:
    ADMIN_USERNAME, ADMIN_EMAIL, ADMIN_PASSWORD (required)
    ADMIN_FIRST_NAME, ADMIN_LAST_NAME (optional)

Usage:
    ADMIN_USERNAME=admin ADMIN_EMAIL=admin@school.test ADMIN_PASSWORD=... \\
        python scripts/seed_admin.py
"""

import asyncio
import os
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from app.core.database import async_session_maker, close_db
from app.core.security import hash_password
from app.modules.users.models import UserRole
from app.modules.users.repository import UserRepository

REQUIRED_VARS = ("ADMIN_USERNAME", "ADMIN_EMAIL", "ADMIN_PASSWORD")


async def seed_admin() -> int:
    """Create the admin user if it doesn't exist. Returns the exit code."""
    missing = [name for name in REQUIRED_VARS if not os.environ.get(name)]
    if missing:
        print(f"Missing environment variables: {', '.join(missing)}")
        return 1

    username = os.environ["ADMIN_USERNAME"].strip()
    email = os.environ["ADMIN_EMAIL"].strip()
    password = os.environ["ADMIN_PASSWORD"]
    first_name = os.environ.get("ADMIN_FIRST_NAME", "School")
    last_name = os.environ.get("ADMIN_LAST_NAME", "Admin")

    async with async_session_maker() as db:
        if await UserRepository.username_or_email_exists(db, username, email):
            print(f"Admin already exists: {username} / {email}")
            return 0

        admin_user = await UserRepository.create(
            db,
            username=username,
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            role=UserRole.ADMIN,
        )
        await db.commit()

        print("Admin created successfully!")
        print(f"  Username: {username}")
        print(f"  Email: {email}")
        print(f"  ID: {admin_user.id}")

    await close_db()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(seed_admin()))
