"""
Employee API endpoints (mounted under /api/v1).

Each handler turns typed errors into the response bodies clients already
depend on: create reports the driver message, every other route hides it.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from core.errors import NotFound, StorageError, ValidationError

from . import schemas, service
from .dependencies import get_repository
from .repository import EmployeeRepository

router = APIRouter(prefix="/employee")

INTERNAL_ERROR = {"error": "Internal server error"}


def _internal_error() -> JSONResponse:
    return JSONResponse(status_code=500, content=INTERNAL_ERROR)


@router.post("/create")
async def create_employee(
    request: schemas.EmployeeRequest | None = None,
    repo: EmployeeRepository = Depends(get_repository),
):
    if request is None:
        # Missing body: every field absent.
        request = schemas.EmployeeRequest()
    try:
        employee_id = await service.create_employee(repo, request)
    except ValidationError as exc:
        return JSONResponse(status_code=400, content={"errors": exc.message})
    except StorageError as exc:
        return JSONResponse(status_code=500, content={"Error Message": exc.message})
    return {"message": "Employee and contact details inserted successfully", "id": employee_id}


@router.put("/update/{employee_id}")
async def update_employee(
    employee_id: str,
    request: schemas.EmployeeRequest | None = None,
    repo: EmployeeRepository = Depends(get_repository),
):
    if request is None:
        # Missing body: every field absent.
        request = schemas.EmployeeRequest()
    try:
        await service.update_employee(repo, employee_id, request)
    except StorageError:
        return _internal_error()
    return {"message": "Employee and contact details updated successfully"}


@router.delete("/delete/{employee_id}")
async def delete_employee(
    employee_id: str,
    repo: EmployeeRepository = Depends(get_repository),
):
    try:
        await service.delete_employee(repo, employee_id)
    except StorageError:
        return _internal_error()
    return {"message": "Parent and associated child records deleted successfully"}


@router.get("/getAll")
async def list_employees(
    page: str | None = Query(default=None),
    page_size: str | None = Query(default=None, alias="pageSize"),
    repo: EmployeeRepository = Depends(get_repository),
):
    try:
        return await service.list_employees(repo, page=page, page_size=page_size)
    except StorageError:
        return _internal_error()


@router.get("/getById/{employee_id}")
async def get_employee(
    employee_id: str,
    repo: EmployeeRepository = Depends(get_repository),
):
    try:
        results = await service.get_employee(repo, employee_id)
    except NotFound as exc:
        return JSONResponse(status_code=404, content={"error": exc.message})
    except StorageError:
        return _internal_error()
    return {"results": results}
