from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.core.logging import get_logger
from app.models.student import Student
from app.repositories.students import StudentRepository
from app.services.validation import parse_roll_no

_TRUE_STRINGS = {"true", "1"}


def parse_status_filter(value: str) -> bool:
    return value in _TRUE_STRINGS


def coerce_status(value: Any) -> bool:
    """JavaScript-style truthiness: any non-empty string (even "false") and
    any array or object is true; null, 0 and "" are false.
    """
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def _roll_conflict(class_name: str, roll_no: int) -> ConflictError:
    get_logger().info("student.conflict", class_name=class_name, roll_no=roll_no)
    return ConflictError(
        f"Roll number {roll_no} is already assigned in class {class_name}"
    )


def _require(repo: StudentRepository, reg_no: str) -> Student:
    st = repo.find_unique(reg_no)
    if st is None:
        raise NotFoundError("Student not found")
    return st


def create_student(repo: StudentRepository, fields: Mapping[str, Any]) -> Student:
    """Insert a new active student after the uniqueness checks.

    ``fields`` uses the public names and is expected to have passed
    create-mode validation.
    """
    reg_no = fields["registrationNo"]
    class_name = fields["class"]
    roll_no = parse_roll_no(fields["rollNo"])

    if repo.find_unique(reg_no) is not None:
        get_logger().info("student.conflict", registration_no=reg_no)
        raise ConflictError("Student with this registration number already exists")

    if repo.find_first(class_name, roll_no) is not None:
        raise _roll_conflict(class_name, roll_no)

    st = repo.create(
        registration_no=reg_no,
        name=fields["name"],
        class_name=class_name,
        roll_no=roll_no,
        contact_number=fields["contactNumber"],
        status=True,
    )
    get_logger().info("student.created", registration_no=st.registration_no)
    return st


def list_students(
    repo: StudentRepository,
    page: int = 1,
    limit: int = 10,
    status: str | None = None,
) -> tuple[list[Student], dict[str, int]]:
    if page < 1 or limit < 1:
        raise ValidationError(["Page and limit must be positive integers"])

    status_filter = parse_status_filter(status) if status is not None else None
    total = repo.count(status=status_filter)
    rows = repo.find_many(status=status_filter, skip=(page - 1) * limit, take=limit)
    meta = {
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit),
    }
    return rows, meta


def get_student(repo: StudentRepository, reg_no: str) -> Student:
    return _require(repo, reg_no)


def update_student(
    repo: StudentRepository, reg_no: str, fields: Mapping[str, Any]
) -> Student:
    """Partial update; only keys present in ``fields`` are considered.

    name, class, contactNumber and rollNo are applied only when truthy, so a
    supplied rollNo of 0 leaves the stored value alone. status is applied
    whenever it is present, including false and null.
    """
    existing = _require(repo, reg_no)

    new_class = fields.get("class") or None
    new_roll = parse_roll_no(fields.get("rollNo")) or None

    class_to_check = new_class or existing.class_name
    roll_to_check = new_roll or existing.roll_no
    if repo.find_first(class_to_check, roll_to_check, exclude_registration_no=reg_no):
        raise _roll_conflict(class_to_check, roll_to_check)

    changes: dict[str, Any] = {}
    if fields.get("name"):
        changes["name"] = fields["name"]
    if new_class:
        changes["class_name"] = new_class
    if new_roll:
        changes["roll_no"] = new_roll
    if fields.get("contactNumber"):
        changes["contact_number"] = fields["contactNumber"]
    if "status" in fields:
        changes["status"] = coerce_status(fields["status"])

    st = repo.update(reg_no, **changes)
    get_logger().info(
        "student.updated", registration_no=reg_no, fields=sorted(changes)
    )
    return st


def delete_student(
    repo: StudentRepository, reg_no: str, permanent: str | None = None
) -> str:
    _require(repo, reg_no)

    if permanent == "true":
        repo.delete(reg_no)
        get_logger().info("student.deleted", registration_no=reg_no)
        return "Student permanently deleted"

    repo.update(reg_no, status=False)
    get_logger().info("student.deactivated", registration_no=reg_no)
    return "Student deactivated successfully"
