#!/usr/bin/env python3
"""
Register an account directly in the configured store.

Usage:
  python scripts/add_user.py --username alice --password secret [--variant themed]
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from saas.core.config import get_settings  # noqa: E402
from saas.domain.errors import AppError  # noqa: E402
from saas.repositories import get_store  # noqa: E402
from saas.services.directory_service import AccountDirectory  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Register an account in the store")
    ap.add_argument("--username", required=True, help="Unique username")
    ap.add_argument("--password", required=True, help="Account password")
    ap.add_argument("--variant", choices=["minimal", "themed"], help="Key set to write (default: APP_VARIANT)")
    args = ap.parse_args(argv)

    if args.variant:
        os.environ["APP_VARIANT"] = args.variant
        get_settings.cache_clear()
    settings = get_settings()

    directory = AccountDirectory(get_store(settings), settings.users_key)
    directory.load()
    try:
        account = directory.register(args.username, args.password, args.password)
    except AppError as exc:
        sys.stderr.write(f"Error: {exc.message}\n")
        return 1
    print("OK: account registered")
    print(f"  Username: {account.username}")
    print(f"  Key: {settings.users_key}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
