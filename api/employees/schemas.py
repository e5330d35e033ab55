"""
Employee API schemas (request models).

Wire names are camelCase; Python attributes are snake_case. Every field is
optional at the schema level: missing values are stored as NULL, and the
four create-time rules live in `validation.py`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    # Numbers are stored as their text, e.g. "phoneNumber": 1234567890.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)


class EmployeeFields(_CamelModel):
    full_name: str | None = None
    job_title: str | None = None
    phone_number: str | None = None
    email: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None


class ContactFields(_CamelModel):
    primary_emergency_contact: str | None = None
    primary_emergency_phone_number: str | None = None
    primary_emergency_relationship: str | None = None
    secondary_emergency_contact: str | None = None
    secondary_emergency_phone_number: str | None = None
    secondary_emergency_relationship: str | None = None


class EmployeeRequest(EmployeeFields, ContactFields):
    """
    Body of create and update. On update, an absent
    `secondaryEmergencyRelationship` keeps the stored value.
    """

    def employee(self) -> EmployeeFields:
        return EmployeeFields.model_validate(self.model_dump(include=set(EmployeeFields.model_fields)))

    def contact(self) -> ContactFields:
        return ContactFields.model_validate(self.model_dump(include=set(ContactFields.model_fields)))
