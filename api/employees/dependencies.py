"""
Dependencies for employee routes.
"""

from __future__ import annotations

from fastapi import Request

from core.db import Database

from .repository import EmployeeRepository


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database is not initialized. It is opened in the app lifespan.")
    return database


def get_repository(request: Request) -> EmployeeRepository:
    return EmployeeRepository(get_database(request))
