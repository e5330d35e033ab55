"""
Employee business logic.

This file holds what is independent of FastAPI's routing layer:
- create-time validation before anything reaches storage
- lenient parsing of ids and paging query values
- pagination arithmetic
"""

from __future__ import annotations

import math
import re
from typing import Any

from core.errors import NotFound

from . import validation
from .repository import EmployeeRepository
from .schemas import EmployeeRequest

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int_prefix(raw: str | None) -> int | None:
    """
    Read the leading integer of `raw` ("3", " 3", "3abc" -> 3).

    Returns None when there is no leading integer at all.
    """
    match = _LEADING_INT.match(raw or "")
    if match is None:
        return None
    return int(match.group(1))


def _positive_or_default(raw: str | None, default: int) -> int:
    value = parse_int_prefix(raw)
    if value is None or value < 1:
        return default
    return value


def page_params(page: str | None, page_size: str | None) -> tuple[int, int]:
    return (
        _positive_or_default(page, DEFAULT_PAGE),
        _positive_or_default(page_size, DEFAULT_PAGE_SIZE),
    )


def total_pages(total_count: int, page_size: int) -> int:
    return math.ceil(total_count / page_size)


# employees.id is a Postgres integer (int4).
MAX_EMPLOYEE_ID = 2**31 - 1

_EMPLOYEE_ID = re.compile(r"\d+", re.ASCII)


def _employee_id(raw: str) -> int | None:
    """
    Numeric path id, or None when no row could match it.
    """
    value = (raw or "").strip()
    if _EMPLOYEE_ID.fullmatch(value) is None:
        return None
    employee_id = int(value)
    if employee_id > MAX_EMPLOYEE_ID:
        return None
    return employee_id


async def create_employee(repo: EmployeeRepository, payload: EmployeeRequest) -> int:
    validation.validate_create(payload)
    return await repo.create(payload.employee(), payload.contact())


async def update_employee(repo: EmployeeRepository, raw_id: str, payload: EmployeeRequest) -> None:
    employee_id = _employee_id(raw_id)
    if employee_id is None:
        # No row can match this id.
        return None
    await repo.update(employee_id, payload.employee(), payload.contact())


async def delete_employee(repo: EmployeeRepository, raw_id: str) -> None:
    employee_id = _employee_id(raw_id)
    if employee_id is None:
        return None
    await repo.delete(employee_id)


async def list_employees(
    repo: EmployeeRepository,
    *,
    page: str | None = None,
    page_size: str | None = None,
) -> dict[str, Any]:
    page_number, size = page_params(page, page_size)
    offset = (page_number - 1) * size
    rows, total_count = await repo.list_page(limit=size, offset=offset)
    return {
        "page": page_number,
        "pageSize": size,
        "totalPages": total_pages(total_count, size),
        "totalCount": total_count,
        "data": rows,
    }


async def get_employee(repo: EmployeeRepository, raw_id: str) -> list[dict[str, Any]]:
    employee_id = _employee_id(raw_id)
    if employee_id is None:
        raise NotFound("Employee not found")
    return await repo.get_by_id(employee_id)
