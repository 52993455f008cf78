"""User model type definitions for database operations."""

from enum import Enum
from typing import TypedDict
from uuid import UUID


class UserRole(str, Enum):
    """Role tags understood by the authorization layer."""

    EMPLOYEE = "employee"


class ProvisioningState(str, Enum):
    """Where a single invitee email ended up during provisioning."""

    UNCHECKED = "unchecked"
    EXISTS = "exists"
    ABSENT = "absent"
    CREATED = "created"
    DONE = "done"
    LOOKUP_FAILED = "lookup_failed"
    CREATE_FAILED = "create_failed"


class User(TypedDict):
    """User table row representation."""

    id: UUID
    email: str
    company_id: UUID
    display_name: str
    role: UserRole


class UserCreate(TypedDict):
    """Data required to create a user."""

    email: str
    company_id: str
    display_name: str
    role: str
