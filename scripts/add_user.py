#!/usr/bin/env python3
"""
Create a user credential document directly in the store root.

Usage:
  python scripts/add_user.py --username alice [--password secret] [--data-dir ./database]
"""
from __future__ import annotations

import argparse
import getpass
import sys
from pathlib import Path

from audiocity.core.config import get_settings
from audiocity.core.security import CredentialHasher
from audiocity.repositories.errors import ConflictError, ValidationError
from audiocity.repositories.user_repository import UserCredentialStore


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Create an AudioCity user")
    ap.add_argument("--username", required=True, help="Username (used as the document name)")
    ap.add_argument("--password", help="Password (prompted when omitted)")
    ap.add_argument("--data-dir", default=str(settings.data_dir), help="Store root (default: AUDIOCITY_DATA_DIR)")
    args = ap.parse_args()

    username = (args.username or "").strip()
    password = args.password or getpass.getpass("Password: ")
    store = UserCredentialStore(Path(args.data_dir), hasher=CredentialHasher(settings.password_scheme))
    try:
        store.create(username, password)
    except ConflictError:
        raise SystemExit(f"User '{username}' already exists")
    except ValidationError as exc:
        raise SystemExit(exc.message)
    print("OK: user created")
    print(f"  Username: {username}")
    print(f"  Store: {args.data_dir}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
