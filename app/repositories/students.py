from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.models.student import Student


class StudentRepository:
    """Persistence for Student rows over a single SQLAlchemy session.

    Writes commit immediately. A unique-constraint violation is rolled back
    and reported as ConflictError, so concurrent check-then-write races still
    end in a 409.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_unique(self, registration_no: str) -> Student | None:
        return self.db.scalars(
            select(Student).where(Student.registration_no == registration_no)
        ).first()

    def find_first(
        self,
        class_name: str,
        roll_no: int,
        exclude_registration_no: str | None = None,
    ) -> Student | None:
        stmt = select(Student).where(
            Student.class_name == class_name, Student.roll_no == roll_no
        )
        if exclude_registration_no is not None:
            stmt = stmt.where(Student.registration_no != exclude_registration_no)
        return self.db.scalars(stmt).first()

    def count(self, status: bool | None = None) -> int:
        stmt = select(func.count()).select_from(Student)
        if status is not None:
            stmt = stmt.where(Student.status == status)
        return self.db.scalar(stmt) or 0

    def find_many(
        self, status: bool | None = None, skip: int = 0, take: int = 10
    ) -> list[Student]:
        stmt = select(Student)
        if status is not None:
            stmt = stmt.where(Student.status == status)
        stmt = stmt.order_by(Student.name.asc(), Student.id.asc()).offset(skip).limit(take)
        return list(self.db.scalars(stmt))

    def create(self, **fields: Any) -> Student:
        st = Student(**fields)
        self.db.add(st)
        self._commit()
        self.db.refresh(st)
        return st

    def update(self, registration_no: str, **fields: Any) -> Student:
        st = self.find_unique(registration_no)
        if st is None:
            raise NotFoundError("Student not found")
        for key, value in fields.items():
            setattr(st, key, value)
        self._commit()
        self.db.refresh(st)
        return st

    def delete(self, registration_no: str) -> None:
        st = self.find_unique(registration_no)
        if st is None:
            raise NotFoundError("Student not found")
        self.db.delete(st)
        self._commit()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError(
                "Student conflicts with an existing registration or roll number"
            ) from exc
