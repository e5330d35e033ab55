"""
Create-time input rules.

Rules run in a fixed order and the first failure wins: callers get exactly
one message, never a list.
"""

from __future__ import annotations

from typing import Callable

from email_validator import EmailNotValidError, validate_email

from core.errors import ValidationError

from .schemas import EmployeeRequest

PHONE_NUMBER_MIN_LENGTH = 10
EMERGENCY_PHONE_NUMBER_MAX_LENGTH = 10


def is_email(value: str | None) -> bool:
    raw = value or ""
    if not raw:
        return False
    try:
        validate_email(raw, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _email(payload: EmployeeRequest) -> bool:
    return is_email(payload.email)


def _phone_number(payload: EmployeeRequest) -> bool:
    return len(payload.phone_number or "") >= PHONE_NUMBER_MIN_LENGTH


def _primary_emergency_phone_number(payload: EmployeeRequest) -> bool:
    return len(payload.primary_emergency_phone_number or "") <= EMERGENCY_PHONE_NUMBER_MAX_LENGTH


def _secondary_emergency_phone_number(payload: EmployeeRequest) -> bool:
    return len(payload.secondary_emergency_phone_number or "") <= EMERGENCY_PHONE_NUMBER_MAX_LENGTH


CREATE_RULES: list[tuple[Callable[[EmployeeRequest], bool], str]] = [
    (_email, "Invalid email"),
    (_phone_number, "Phone Number should be 10 digit long"),
    (_primary_emergency_phone_number, "primary Emergency Phone Number should be 10 digit long"),
    (_secondary_emergency_phone_number, "secondary Emergency PhoneNumber should be 10 digit long"),
]


def validate_create(payload: EmployeeRequest) -> None:
    for check, message in CREATE_RULES:
        if not check(payload):
            raise ValidationError(message)
