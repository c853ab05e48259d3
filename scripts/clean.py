# scripts/clean.py
from __future__ import annotations

import argparse
import os

from sqlalchemy import delete
from sqlalchemy.orm import Session

from app.db import get_db
from app.models.student import Student


def get_session() -> Session:
    gen = get_db()
    return next(gen)  # type: ignore


def purge_students(db: Session, *, inactive_only: bool = False) -> int:
    """Permanently deletes students; with inactive_only, only deactivated ones."""
    stmt = delete(Student)
    if inactive_only:
        stmt = stmt.where(Student.status == False)  # noqa: E712
    result = db.execute(stmt)
    db.commit()
    return result.rowcount or 0


def main():
    parser = argparse.ArgumentParser(
        description="Remove students from the database (DEV/HML). Keeps alembic_version."
    )
    parser.add_argument(
        "--inactive-only",
        action="store_true",
        help="Delete only students with status=false (soft-deleted).",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Skip the confirmation prompt (useful for CI). Or set ALLOW_CLEAN=1.",
    )
    args = parser.parse_args()

    require_confirm = not (args.yes or os.getenv("ALLOW_CLEAN") == "1")
    if require_confirm:
        scope = "inactive" if args.inactive_only else "ALL"
        print(f"WARNING: this will permanently DELETE {scope} students.")
        resp = input("Type 'CLEAN' to confirm: ").strip()
        if resp != "CLEAN":
            print("[clean] Cancelled by user.")
            return

    db = get_session()
    try:
        removed = purge_students(db, inactive_only=args.inactive_only)
    finally:
        db.close()
    print(f"[clean] Done. {removed} students removed.")


if __name__ == "__main__":
    main()
