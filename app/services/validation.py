"""Format checks for student payloads.

Validators collect every violation before rejecting, so a client sees all
problems with a request at once.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from app.core.errors import ValidationError

_REG_NO_REGEX = re.compile(r"^REG-[0-9]{4}-[0-9]{4}$")
_CONTACT_REGEX = re.compile(r"^[0-9]{10}$")
_INT_REGEX = re.compile(r"^[+-]?[0-9]+$")

REG_NO_REQUIRED = "Registration number is required"
REG_NO_INVALID = "Invalid registration number format. Expected: REG-YYYY-XXXX"

_REQUIRED_FIELDS = (
    ("registrationNo", REG_NO_REQUIRED),
    ("name", "Name is required"),
    ("class", "Class is required"),
    ("rollNo", "Roll number is required"),
    ("contactNumber", "Contact number is required"),
)


def is_valid_registration_no(value: Any) -> bool:
    return isinstance(value, str) and bool(_REG_NO_REGEX.fullmatch(value))


def is_valid_contact_number(value: Any) -> bool:
    return isinstance(value, str) and bool(_CONTACT_REGEX.fullmatch(value))


def parse_roll_no(value: Any) -> int | None:
    """Integer value of a roll number, or None if it is not an integer."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INT_REGEX.fullmatch(value.strip()):
        return int(value.strip())
    return None


def validate_student_data(fields: Mapping[str, Any], *, require_all: bool) -> list[str]:
    """Error messages for a create (require_all) or update payload.

    Keys are the public camelCase names. Falsy values count as missing,
    which means an update with rollNo=0 is neither checked nor applied.
    """
    errors: list[str] = []

    if require_all:
        for key, message in _REQUIRED_FIELDS:
            if not fields.get(key):
                errors.append(message)

    for key, label in (("name", "Name"), ("class", "Class")):
        value = fields.get(key)
        if value and not isinstance(value, str):
            errors.append(f"{label} must be a string")

    reg_no = fields.get("registrationNo")
    if reg_no and not is_valid_registration_no(reg_no):
        errors.append(REG_NO_INVALID)

    roll_no = fields.get("rollNo")
    if roll_no:
        parsed = parse_roll_no(roll_no)
        if parsed is None or parsed <= 0:
            errors.append("Roll number must be a positive integer")

    contact = fields.get("contactNumber")
    if contact and not is_valid_contact_number(contact):
        errors.append("Contact number must be a 10-digit number")

    return errors


def ensure_valid_student_data(fields: Mapping[str, Any], *, require_all: bool) -> None:
    errors = validate_student_data(fields, require_all=require_all)
    if errors:
        raise ValidationError(errors)


def validate_reg_no_param(value: str | None) -> str:
    if not value or not value.strip():
        raise ValidationError([REG_NO_REQUIRED])
    if not is_valid_registration_no(value):
        raise ValidationError([REG_NO_INVALID])
    return value
