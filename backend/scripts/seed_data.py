"""Seed the configured store.

Loads reference data (and demo accounts outside production) into the store
selected by the environment, optionally creating an admin account.

Typical usage:
  python backend/scripts/seed_data.py
  USE_MONGO=1 python backend/scripts/seed_data.py --admin-username admin --admin-email admin@example.com
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from nyayasetu.config import get_settings
from nyayasetu.database import init_storage
from nyayasetu.services.user_service import user_service
from nyayasetu.utils.logging_config import setup_logging


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Seed reference data, demo accounts and an admin")
    p.add_argument(
        "--demo",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Load demo advocates and clients (default: SEED_DEMO_DATA)",
    )
    p.add_argument("--admin-username", help="Create this admin account if missing")
    p.add_argument("--admin-email", help="Email of the admin account")
    p.add_argument(
        "--admin-password",
        default=os.environ.get("ADMIN_PASSWORD"),
        help="Admin password (default: ADMIN_PASSWORD, else prompt)",
    )
    return p.parse_args()


async def main() -> int:
    args = _parse_args()
    settings = get_settings()
    if args.demo is not None:
        settings = settings.model_copy(update={"seed_demo_data": args.demo})
    setup_logging(settings.log_level, settings.log_dir)

    storage = await init_storage(settings)
    try:
        print(f"Storage: {storage.backend_name}")
        print(f"  practice areas: {len(await storage.get_all_practice_areas())}")
        print(f"  locations: {len(await storage.get_all_locations())}")
        print(f"  users: {await storage.count_users()}")

        if args.admin_username:
            if not args.admin_email:
                print("--admin-email is required with --admin-username", file=sys.stderr)
                return 2
            password = args.admin_password or getpass.getpass("Admin password: ")
            try:
                user, created = await user_service.ensure_admin(
                    storage,
                    username=args.admin_username,
                    email=args.admin_email,
                    password=password,
                )
            except ValueError as e:
                print(str(e), file=sys.stderr)
                return 1
            print(f"Admin {user.username}: {'created' if created else 'already present'}")
    finally:
        await storage.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
