# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Provision (or re-seed) the single administrative credential."""

from __future__ import annotations

import argparse
import getpass
import sys

from course_archive.infrastructure.admin_setup import AdminSetupError
from course_archive.infrastructure.container import container
from course_archive.infrastructure.db import init_db
from course_archive.shared.logging import setup_logging


def _read_password() -> str:
    first = getpass.getpass("Admin password: ")
    second = getpass.getpass("Repeat password: ")
    if first != second:
        raise AdminSetupError("Passwords do not match")
    return first


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Provision the admin credential")
    parser.add_argument(
        "--password",
        type=str,
        default=None,
        help="Password to set (prompted for when omitted)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an already provisioned credential",
    )
    args = parser.parse_args(argv)

    setup_logging()
    init_db()

    try:
        password = args.password if args.password is not None else _read_password()
        credential = container.admin_setup.seed(password, force=args.force)
    except AdminSetupError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Admin credential ready (id={credential.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
