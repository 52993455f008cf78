"""Company and project model type definitions for database operations."""

from datetime import datetime
from typing import Any, TypedDict
from uuid import UUID


class PeriodRow(TypedDict):
    """One reporting week as stored in a JSON column (ISO-8601 strings)."""

    start: str
    end: str


class DayValueRow(TypedDict):
    """A pre-seeded day assignment as stored in a JSON column."""

    date: str
    day_id: int


class DayTypeRow(TypedDict):
    """A day category as stored in a JSON column."""

    id: int
    name: str
    time: float
    color: str


class Company(TypedDict):
    """Company table row representation.

    ``template``, ``periods``, ``day_types``, ``default_values`` and
    ``available_positions`` are JSON columns.
    """

    id: UUID
    name: str
    owner_id: UUID | None
    template: dict[str, Any]
    periods: list[PeriodRow]
    day_types: list[DayTypeRow]
    default_values: list[DayValueRow]
    available_positions: list[str]
    created_at: datetime
    updated_at: datetime


class ProjectCompanyFields(TypedDict):
    """Company-owned fields copied onto every project of the company.

    Projects never edit these; the company pushes them down.
    """

    template: dict[str, Any]
    periods: list[PeriodRow]
    default_values: list[DayValueRow]
    day_types: list[DayTypeRow]
    available_positions: list[str]


class Project(ProjectCompanyFields):
    """Project table row representation (the part this service writes)."""

    id: UUID
    name: str
    company_id: UUID
    owner_id: UUID | None
