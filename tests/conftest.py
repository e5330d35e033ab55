"""
Pytest configuration and fixtures for the employee API tests
"""
from collections import deque
from contextlib import asynccontextmanager

import pytest
from fastapi.testclient import TestClient

from core.db import Database
from core.errors import NotFound, StorageError
from employees.dependencies import get_repository
from main import app


class RecordingPool:
    """
    Stand-in for an asyncpg pool that records every statement.

    `responses` are consumed in call order; an exception instance is raised
    instead of returned.
    """

    def __init__(self, responses=None):
        self.calls = []
        self.responses = deque(responses or [])
        self.acquired = 0
        self.released = 0

    def _next(self, method, sql, args):
        self.calls.append((method, " ".join(sql.split()), args))
        result = self.responses.popleft() if self.responses else None
        if isinstance(result, BaseException):
            raise result
        return result

    async def fetch(self, sql, *args):
        return self._next("fetch", sql, args) or []

    async def fetchval(self, sql, *args):
        return self._next("fetchval", sql, args)

    async def execute(self, sql, *args):
        return self._next("execute", sql, args) or "OK"

    @asynccontextmanager
    async def acquire(self):
        self.acquired += 1
        try:
            yield self
        finally:
            self.released += 1

    async def close(self):
        return None


class InMemoryEmployeeRepository:
    """
    Dict-backed repository with the same contract as EmployeeRepository.
    """

    def __init__(self):
        self.employees = {}
        self.contacts = {}
        self.next_id = 1
        self.fail_with = None

    def _check(self):
        if self.fail_with is not None:
            raise StorageError(self.fail_with)

    def _joined(self, employee_id, contact):
        row = {"id": employee_id, **self.employees[employee_id]}
        contact = contact or {}
        row["employee_id"] = employee_id if contact else None
        for key in (
            "primary_emergency_contact",
            "primary_emergency_phone_number",
            "primary_emergency_relationship",
            "secondary_emergency_contact",
            "secondary_emergency_phone_number",
            "secondary_emergency_relationship",
        ):
            row[key] = contact.get(key)
        return row

    async def create(self, employee, contact):
        self._check()
        employee_id = self.next_id
        self.next_id += 1
        self.employees[employee_id] = employee.model_dump()
        self.contacts[employee_id] = contact.model_dump()
        return employee_id

    async def update(self, employee_id, employee, contact):
        self._check()
        if employee_id not in self.employees or employee_id not in self.contacts:
            return None
        self.employees[employee_id] = employee.model_dump()
        updated = contact.model_dump()
        if updated["secondary_emergency_relationship"] is None:
            updated["secondary_emergency_relationship"] = self.contacts[employee_id]["secondary_emergency_relationship"]
        self.contacts[employee_id] = updated

    async def delete(self, employee_id):
        self._check()
        self.contacts.pop(employee_id, None)
        self.employees.pop(employee_id, None)

    async def list_page(self, *, limit, offset):
        self._check()
        joined = [
            self._joined(employee_id, self.contacts[employee_id])
            for employee_id in sorted(self.employees)
            if employee_id in self.contacts
        ]
        return joined[offset:offset + limit], len(self.employees)

    async def get_by_id(self, employee_id):
        self._check()
        if employee_id not in self.employees:
            raise NotFound("Employee not found")
        return [self._joined(employee_id, self.contacts.get(employee_id))]


@pytest.fixture
def recording_pool():
    return RecordingPool()


@pytest.fixture
def database(recording_pool):
    return Database(recording_pool)


@pytest.fixture
def repository():
    return InMemoryEmployeeRepository()


@pytest.fixture(scope="function")
def client(repository):
    """Create a test client backed by the in-memory repository"""
    app.dependency_overrides[get_repository] = lambda: repository
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sample_employee_data():
    """Valid create payload"""
    return {
        "fullName": "Jane Doe",
        "jobTitle": "Engineer",
        "phoneNumber": "1234567890",
        "email": "jane@x.com",
        "address": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "primaryEmergencyContact": "John Doe",
        "primaryEmergencyPhoneNumber": "1234567890",
        "primaryEmergencyRelationship": "Spouse",
        "secondaryEmergencyContact": "Mary Doe",
        "secondaryEmergencyPhoneNumber": "1234567890",
        "secondaryEmergencyRelationship": "Sister",
    }
