#!/usr/bin/env python3
"""
Create Admin Script

Creates an approved admin account, or promotes an existing account to admin.
The admin role can only be granted here or by another admin.

Usage: python scripts/create_admin.py admin@yourorg.com [--name "Site Admin"]
"""
import argparse
import getpass
import sys
sys.path.insert(0, '.')

from member_network.core.auth import hash_password
from member_network.core.logging_config import configure_logging
from member_network.repositories import get_storage
from member_network.schemas.schemas import ApprovalStatus, Role
from member_network.services.roles import active_roles


def create_or_promote(storage, email: str, password: str = None, name: str = None) -> dict:
    """Return the admin user, creating it when the email is unknown."""
    user = storage.get_user_by_email(email)
    if user is None:
        if not password:
            raise ValueError("A password is required to create a new account")
        user = storage.create_user(email=email, password_hash=hash_password(password), display_name=name)

    roles = list(active_roles(user["roles"]))
    if Role.admin not in roles:
        roles.append(Role.admin)
    return storage.update_user(
        user["id"],
        roles=roles,
        approval_status=ApprovalStatus.approved,
        profile_completed=True,
        is_active=True,
        full_name=user.get("full_name") or name or email,
    )


def main():
    parser = argparse.ArgumentParser(description="Create or promote an admin account")
    parser.add_argument("email")
    parser.add_argument("--name", default=None, help="Display name for a new account")
    args = parser.parse_args()

    configure_logging()
    storage = get_storage()
    storage.init()

    password = None
    if storage.get_user_by_email(args.email) is None:
        password = getpass.getpass("Password for the new admin: ")
        if len(password) < 8:
            print("❌ Password must be at least 8 characters")
            return 1

    user = create_or_promote(storage, args.email, password=password, name=args.name)
    print(f"✅ {user['email']} is now an approved admin (id: {user['id']})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
