"""
Typed API errors.

Routers decide the HTTP status and body; the error only carries a
human-readable message so storage and validation code stay free of HTTP
details.
"""

from __future__ import annotations


class EmployeeApiError(RuntimeError):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# Malformed create input; message is the first failing rule only.
class ValidationError(EmployeeApiError):
    pass


# Any database driver failure, message taken from the driver.
class StorageError(EmployeeApiError):
    pass


class NotFound(EmployeeApiError):
    pass
