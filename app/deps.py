from __future__ import annotations

from fastapi import Depends, Path
from sqlalchemy.orm import Session

from app.db import get_db
from app.repositories.students import StudentRepository
from app.schemas.students import StudentIn
from app.services.validation import ensure_valid_student_data, validate_reg_no_param


def get_student_repo(db: Session = Depends(get_db)) -> StudentRepository:  # noqa: B008
    return StudentRepository(db)


def valid_reg_no(regNo: str = Path(...)) -> str:  # noqa: N803
    return validate_reg_no_param(regNo)


def valid_create_payload(payload: StudentIn) -> StudentIn:
    ensure_valid_student_data(payload.supplied(), require_all=True)
    return payload


def valid_update_payload(payload: StudentIn) -> StudentIn:
    ensure_valid_student_data(payload.supplied(), require_all=False)
    return payload
