"""
Employee persistence (raw SQL).

Two tables, one-to-one:
- employees:        the staff member
- contact_details:  emergency contacts, `employee_id` -> employees.id

Writes that touch both tables are plain sequential statements, not a
transaction. Parent rows are inserted before children and children deleted
before parents; a failure in between is logged and surfaced, never repaired.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import asyncpg

from core.db import Database
from core.errors import NotFound, StorageError

from .schemas import ContactFields, EmployeeFields

logger = logging.getLogger(__name__)

# Driver-side failures, including a pool that cannot reach the server and
# command_timeout expiring.
DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)

_JOINED_COLUMNS = """
    e.id,
    e.full_name,
    e.job_title,
    e.phone_number,
    e.email,
    e.address,
    e.city,
    e.state,
    c.employee_id,
    c.primary_emergency_contact,
    c.primary_emergency_phone_number,
    c.primary_emergency_relationship,
    c.secondary_emergency_contact,
    c.secondary_emergency_phone_number,
    c.secondary_emergency_relationship
"""


def _storage_error(exc: BaseException) -> StorageError:
    message = str(exc).strip() or exc.__class__.__name__
    return StorageError(message)


class EmployeeRepository:
    def __init__(self, database: Database) -> None:
        self._db = database

    async def create(self, employee: EmployeeFields, contact: ContactFields) -> int:
        """
        Insert the employee, then its contact details under the new id.

        Both inserts share one pooled connection. If the contact insert
        fails the employee row stays behind without contact details.
        """
        try:
            async with self._db.connection() as conn:
                employee_id = await conn.fetchval(
                    """
                    INSERT INTO employees (full_name, job_title, phone_number, email, address, city, state)
                    VALUES ($1, $2, $3, $4, $5, $6, $7)
                    RETURNING id
                    """,
                    employee.full_name,
                    employee.job_title,
                    employee.phone_number,
                    employee.email,
                    employee.address,
                    employee.city,
                    employee.state,
                )

                try:
                    await conn.execute(
                        """
                        INSERT INTO contact_details (
                            employee_id,
                            primary_emergency_contact,
                            primary_emergency_phone_number,
                            primary_emergency_relationship,
                            secondary_emergency_contact,
                            secondary_emergency_phone_number,
                            secondary_emergency_relationship
                        ) VALUES ($1, $2, $3, $4, $5, $6, $7)
                        """,
                        employee_id,
                        contact.primary_emergency_contact,
                        contact.primary_emergency_phone_number,
                        contact.primary_emergency_relationship,
                        contact.secondary_emergency_contact,
                        contact.secondary_emergency_phone_number,
                        contact.secondary_emergency_relationship,
                    )
                except DRIVER_ERRORS:
                    logger.error("contact_insert_failed orphaned_employee_id=%s", employee_id)
                    raise
        except DRIVER_ERRORS as exc:
            logger.exception("employee_create_failed")
            raise _storage_error(exc) from exc

        logger.info("employee_created id=%s", employee_id)
        return int(employee_id)

    async def update(self, employee_id: int, employee: EmployeeFields, contact: ContactFields) -> None:
        """
        Update both rows in one statement.

        Only an employee that has a contact row is touched. Zero matches is
        not an error. A None `secondary_emergency_relationship` keeps the
        stored value.
        """
        try:
            status = await self._db.execute(
                """
                WITH target AS (
                    UPDATE employees AS e
                    SET full_name = $1,
                        job_title = $2,
                        phone_number = $3,
                        email = $4,
                        address = $5,
                        city = $6,
                        state = $7
                    FROM contact_details AS c
                    WHERE e.id = $14
                      AND c.employee_id = e.id
                    RETURNING e.id
                )
                UPDATE contact_details AS c
                SET primary_emergency_contact = $8,
                    primary_emergency_phone_number = $9,
                    primary_emergency_relationship = $10,
                    secondary_emergency_contact = $11,
                    secondary_emergency_phone_number = $12,
                    secondary_emergency_relationship = COALESCE($13, c.secondary_emergency_relationship)
                FROM target
                WHERE c.employee_id = target.id
                """,
                employee.full_name,
                employee.job_title,
                employee.phone_number,
                employee.email,
                employee.address,
                employee.city,
                employee.state,
                contact.primary_emergency_contact,
                contact.primary_emergency_phone_number,
                contact.primary_emergency_relationship,
                contact.secondary_emergency_contact,
                contact.secondary_emergency_phone_number,
                contact.secondary_emergency_relationship,
                employee_id,
            )
        except DRIVER_ERRORS as exc:
            logger.exception("employee_update_failed id=%s", employee_id)
            raise _storage_error(exc) from exc

        logger.info("employee_updated id=%s status=%s", employee_id, status)

    async def delete(self, employee_id: int) -> None:
        """
        Delete contact details, then the employee. Zero matches is not an error.
        """
        try:
            await self._db.execute("DELETE FROM contact_details WHERE employee_id = $1", employee_id)
        except DRIVER_ERRORS as exc:
            logger.exception("contact_delete_failed employee_id=%s", employee_id)
            raise _storage_error(exc) from exc

        try:
            status = await self._db.execute("DELETE FROM employees WHERE id = $1", employee_id)
        except DRIVER_ERRORS as exc:
            # Contact rows are already gone at this point.
            logger.exception("employee_delete_failed id=%s", employee_id)
            raise _storage_error(exc) from exc

        logger.info("employee_deleted id=%s status=%s", employee_id, status)

    async def list_page(self, *, limit: int, offset: int) -> tuple[list[dict[str, Any]], int]:
        """
        One page of employees joined with their contact details, plus the
        total number of employees.
        """
        try:
            rows = await self._db.fetch_all(
                f"""
                SELECT {_JOINED_COLUMNS}
                FROM employees AS e
                JOIN contact_details AS c ON e.id = c.employee_id
                ORDER BY e.id
                LIMIT $1 OFFSET $2
                """,
                limit,
                offset,
            )
        except DRIVER_ERRORS as exc:
            logger.exception("employee_list_failed limit=%s offset=%s", limit, offset)
            raise _storage_error(exc) from exc

        try:
            total = await self._db.fetch_value("SELECT COUNT(*) AS total FROM employees")
        except DRIVER_ERRORS as exc:
            logger.exception("employee_count_failed")
            raise _storage_error(exc) from exc

        return rows, int(total or 0)

    async def get_by_id(self, employee_id: int) -> list[dict[str, Any]]:
        try:
            rows = await self._db.fetch_all(
                f"""
                SELECT {_JOINED_COLUMNS}
                FROM employees AS e
                LEFT JOIN contact_details AS c ON e.id = c.employee_id
                WHERE e.id = $1
                """,
                employee_id,
            )
        except DRIVER_ERRORS as exc:
            logger.exception("employee_get_failed id=%s", employee_id)
            raise _storage_error(exc) from exc

        if not rows:
            raise NotFound("Employee not found")
        return rows
