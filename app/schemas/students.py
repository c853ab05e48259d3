from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StudentIn(BaseModel):
    """Body of POST and PUT /students.

    Fields accept any JSON value; presence, types and formats are all checked
    by app.services.validation so every message comes back together.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    registration_no: Any = None
    name: Any = None
    class_name: Any = Field(None, alias="class")
    roll_no: Any = None
    contact_number: Any = None
    status: Any = None

    def supplied(self) -> dict[str, Any]:
        """Fields present in the request body, keyed by their public names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class StudentOut(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    registration_no: str
    name: str
    class_name: str = Field(alias="class")
    roll_no: int
    contact_number: str
    status: bool
    created_at: dt.datetime
    updated_at: dt.datetime


class PageMeta(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int
    page: int
    limit: int
    total_pages: int


class StudentDetail(BaseModel):
    data: StudentOut


class StudentEnvelope(StudentDetail):
    message: str


class StudentPage(BaseModel):
    data: list[StudentOut]
    meta: PageMeta


class MessageOut(BaseModel):
    message: str
