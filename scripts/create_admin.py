#!/usr/bin/env python3
"""
Create (or promote) an admin account
====================================
Admins cannot sign up through the API; use this script to bootstrap one.

Usage:
    python scripts/create_admin.py --email admin@example.com --name "Site Admin" --password secret123
"""

import argparse
import asyncio
import os
import sys

from dotenv import load_dotenv
from sqlalchemy import select

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

load_dotenv()

from app.core.security import Role, get_password_hash  # noqa: E402
from app.db.session import AsyncSessionLocal, engine  # noqa: E402
from app.models import AdminSettings, User  # noqa: E402
from app.utils.helpers import normalize_email  # noqa: E402


async def create_admin(email: str, full_name: str, password: str) -> None:
    email = normalize_email(email)
    async with AsyncSessionLocal() as db:
        user = (await db.execute(select(User).where(User.email == email))).scalar_one_or_none()
        if user:
            user.role = Role.ADMIN.value
            user.password_hash = get_password_hash(password)
            print(f"✅ Promoted existing user {email} to Admin")
        else:
            user = User(
                email=email,
                full_name=full_name,
                role=Role.ADMIN.value,
                password_hash=get_password_hash(password),
            )
            db.add(user)
            await db.flush()
            db.add(AdminSettings(user_id=user.id))
            print(f"✅ Created admin {email}")
        await db.commit()
    await engine.dispose()


def main():
    parser = argparse.ArgumentParser(description="Create an admin account")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", default="Admin")
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    if len(args.password) < 6:
        print("❌ Password must be at least 6 characters")
        sys.exit(1)

    asyncio.run(create_admin(args.email, args.name, args.password))


if __name__ == "__main__":
    main()
