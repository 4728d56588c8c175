"""
Seed Admin User

Creates the initial admin account for the VARK Learning API.
Run this script once to set up the admin account.

Credentials come from the environment:
    SEED_ADMIN_EMAIL, SEED_ADMIN_PASSWORD,
    SEED_ADMIN_FIRST_NAME (default "System"), SEED_ADMIN_LAST_NAME (default "Admin")

Usage:
    cd apps/api
    SEED_ADMIN_EMAIL=admin@example.com SEED_ADMIN_PASSWORD=... python scripts/seed_admin.py
"""

import asyncio
import os
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from app.core.database import async_session_maker, engine
from app.core.security import create_access_token, hash_password
from app.models import UserRole
from app.modules.users.helpers import build_full_name
from app.modules.users.repository import UserRepository


def _print_token(user) -> None:
    token = create_access_token(
        str(user.id),
        additional_claims={"email": user.email, "role": user.role.value},
    )
    print(f"  Access token: {token}")


async def seed_admin() -> None:
    """Create the admin user if it doesn't exist."""
    email = os.environ.get("SEED_ADMIN_EMAIL", "").strip().lower()
    password = os.environ.get("SEED_ADMIN_PASSWORD", "")
    first_name = os.environ.get("SEED_ADMIN_FIRST_NAME", "System")
    last_name = os.environ.get("SEED_ADMIN_LAST_NAME", "Admin")

    if not email or not password:
        print("SEED_ADMIN_EMAIL and SEED_ADMIN_PASSWORD must be set")
        sys.exit(1)

    async with async_session_maker() as db:
        existing_user = await UserRepository.get_by_email(db, email)
        if existing_user:
            print(f"Admin already exists: {email}")
            print(f"  ID: {existing_user.id}")
            print(f"  Role: {existing_user.role.value}")
            _print_token(existing_user)
            await engine.dispose()
            return

        admin_user = await UserRepository.create(
            db,
            email=email,
            password_hash=hash_password(password),
            role=UserRole.ADMIN,
            email_verified=True,
            profile={
                "first_name": first_name,
                "last_name": last_name,
                "full_name": build_full_name(first_name, None, last_name),
                "onboarding_completed": True,
            },
        )
        await db.commit()

        print("Admin created successfully!")
        print(f"  Email: {email}")
        print(f"  Name: {admin_user.profile.full_name}")
        print(f"  ID: {admin_user.id}")
        _print_token(admin_user)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed_admin())
