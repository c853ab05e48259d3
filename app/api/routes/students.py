# app/api/routes/students.py
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.deps import (
    get_student_repo,
    valid_create_payload,
    valid_reg_no,
    valid_update_payload,
)
from app.repositories.students import StudentRepository
from app.schemas.students import (
    MessageOut,
    PageMeta,
    StudentDetail,
    StudentEnvelope,
    StudentIn,
    StudentOut,
    StudentPage,
)
from app.services import students as service

router = APIRouter(prefix="/students", tags=["students"])

Repo = Annotated[StudentRepository, Depends(get_student_repo)]
RegNo = Annotated[str, Depends(valid_reg_no)]


@router.post("", response_model=StudentEnvelope, status_code=status.HTTP_201_CREATED)
def create_student(
    payload: Annotated[StudentIn, Depends(valid_create_payload)],
    repo: Repo,
):
    st = service.create_student(repo, payload.supplied())
    return StudentEnvelope(
        message="Student created successfully", data=StudentOut.model_validate(st)
    )


@router.get("", response_model=StudentPage)
def list_students(
    repo: Repo,
    page: int = Query(1),
    limit: int = Query(10),
    status_filter: str | None = Query(
        None, alias="status", description="true/1 for active, anything else inactive"
    ),
):
    rows, meta = service.list_students(
        repo, page=page, limit=limit, status=status_filter
    )
    return StudentPage(
        data=[StudentOut.model_validate(s) for s in rows], meta=PageMeta(**meta)
    )


@router.get("/{regNo}", response_model=StudentDetail)
def get_student(reg_no: RegNo, repo: Repo):
    st = service.get_student(repo, reg_no)
    return StudentDetail(data=StudentOut.model_validate(st))


@router.put("/{regNo}", response_model=StudentEnvelope)
def update_student(
    reg_no: RegNo,
    payload: Annotated[StudentIn, Depends(valid_update_payload)],
    repo: Repo,
):
    st = service.update_student(repo, reg_no, payload.supplied())
    return StudentEnvelope(
        message="Student updated successfully", data=StudentOut.model_validate(st)
    )


@router.delete("/{regNo}", response_model=MessageOut)
def delete_student(
    reg_no: RegNo,
    repo: Repo,
    permanent: str | None = Query(None, description="'true' erases the record"),
):
    return MessageOut(message=service.delete_student(repo, reg_no, permanent=permanent))
