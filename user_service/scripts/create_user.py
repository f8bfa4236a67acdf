"""Create a user account with a profile.

Usage:
    python -m user_service.scripts.create_user --email alice@example.com --name Alice
"""

from __future__ import annotations

import argparse
import sys
import uuid

from user_service.db.session import SessionLocal
from user_service.models.user import User
from user_service.models.user_profile import UserProfile
from user_service.store import user_profiles, users


def create_user(db, email: str, name: str, provider: str = "google") -> User:
    """Insert User + UserProfile and commit."""
    user = User(user_id=uuid.uuid4(), email=email, provider=provider, is_active=True)
    users.save(db, user)
    db.flush()
    user_profiles.save(db, UserProfile(user_id=user.user_id, name=name, email=email))
    db.commit()
    db.refresh(user)
    return user


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Create a user-service account")
    parser.add_argument("--email", required=True, help="Email for the new user")
    parser.add_argument("--name", required=True, help="Display name (max 50 chars)")
    parser.add_argument("--provider", default="google", help="Identity provider label")
    args = parser.parse_args(argv)

    if len(args.name) > 50:
        print("Name must be at most 50 characters.")
        sys.exit(1)

    db = SessionLocal()
    try:
        if users.exists_by_email(db, args.email):
            print(f"User '{args.email}' already exists.")
            sys.exit(1)

        user = create_user(db, args.email, args.name, args.provider)
        print(f"User '{user.email}' created successfully (user_id={user.user_id}).")
    finally:
        db.close()


if __name__ == "__main__":
    main()
