from __future__ import annotations

import datetime as dt

from sqlalchemy import Boolean, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base_class import Base


class Student(Base):
    __tablename__ = "students"
    __table_args__ = (
        UniqueConstraint("class", "roll_no", name="uq_students_class_roll_no"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    registration_no: Mapped[str] = mapped_column(
        String(13), unique=True, index=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(120), index=True, nullable=False)
    # "class" is reserved in Python, the column keeps the public name
    class_name: Mapped[str] = mapped_column("class", String(30), nullable=False)
    roll_no: Mapped[int] = mapped_column(Integer, nullable=False)
    contact_number: Mapped[str] = mapped_column(String(10), nullable=False)
    status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: dt.datetime.now(tz=dt.UTC),
        nullable=False,
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: dt.datetime.now(tz=dt.UTC),
        onupdate=lambda: dt.datetime.now(tz=dt.UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Student {self.registration_no} {self.class_name}/{self.roll_no}>"
