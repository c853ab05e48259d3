# scripts/seed.py
from __future__ import annotations

import os

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from app.core.errors import ConflictError
from app.db import get_db
from app.repositories.students import StudentRepository
from app.services.students import create_student

SEED_YEAR = int(os.getenv("SEED_YEAR", "2024"))

STUDENTS_DATA = [
    ("Asha Verma", "10A", 5, "9876543210"),
    ("Bruno Alves", "10A", 7, "9123456780"),
    ("Clara Dias", "10B", 1, "9988776655"),
    ("Diego Nogueira", "9A", 12, "9012345678"),
    ("Eduarda Pires", "9A", 3, "9345612780"),
]


def get_session() -> Session:
    gen = get_db()
    return next(gen)  # type: ignore


def check_tables_exist(db: Session) -> bool:
    return inspect(db.get_bind()).has_table("students")


def ensure_students(db: Session) -> int:
    repo = StudentRepository(db)
    created = 0
    for seq, (name, class_name, roll_no, contact) in enumerate(STUDENTS_DATA, start=1):
        reg_no = f"REG-{SEED_YEAR}-{seq:04d}"
        try:
            create_student(
                repo,
                {
                    "registrationNo": reg_no,
                    "name": name,
                    "class": class_name,
                    "rollNo": roll_no,
                    "contactNumber": contact,
                },
            )
        except ConflictError as exc:
            print(f"[Seed] Skipped {reg_no}: {exc.message}")
            continue
        created += 1
        print(f"[Seed] Student created: {reg_no} {name} ({class_name}/{roll_no})")
    return created


def main():
    print("[Seed] Seeding database...")
    db = get_session()
    try:
        if not check_tables_exist(db):
            print("[Seed] Error: table 'students' does not exist yet.")
            print("  Run the migrations first: alembic upgrade head")
            return
        total = ensure_students(db)
        print(f"[Seed] Done! {total} students created.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
