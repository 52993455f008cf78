"""Company Pydantic schemas for API request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.models.company import ProjectCompanyFields


class Period(BaseModel):
    """One timesheet reporting week."""

    model_config = ConfigDict(from_attributes=True)

    start: datetime = Field(description="First instant of the period (UTC)")
    end: datetime = Field(description="Last instant of the period (UTC)")


class DayValue(BaseModel):
    """A day-type assignment applied before anyone edits a timesheet."""

    model_config = ConfigDict(from_attributes=True)

    date: datetime = Field(description="Day the value applies to")
    day_id: int = Field(description="ID of the assigned day type")


class DayType(BaseModel):
    """A day category with its default hours and display color."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Day type identifier, unique within a company")
    name: str = Field(description="Display name")
    time: float = Field(default=0, ge=0, description="Default hours logged for this kind of day")
    color: str = Field(description="Display color (hex)")


class TimeTemplate(BaseModel):
    """Shape of a new time entry."""

    model_config = ConfigDict(from_attributes=True)

    date: str = Field(default="", description="Prefilled date")
    role: str = Field(default="", description="Prefilled role")
    time: float = Field(default=8, ge=0, description="Prefilled hours")
    comment: str = Field(default="", description="Prefilled comment")


class CompanyDefaults(BaseModel):
    """Company-scoped configuration shared with every project of the company."""

    model_config = ConfigDict(from_attributes=True)

    template: TimeTemplate = Field(description="Default time entry")
    periods: list[Period] = Field(description="Reporting periods, contiguous and ordered")
    day_types: list[DayType] = Field(description="Available day categories")
    default_values: list[DayValue] = Field(description="Pre-seeded day assignments")
    available_positions: list[str] = Field(description="Role names selectable in timesheets")


class CompanyCreate(BaseModel):
    """Schema for creating a new company."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(..., min_length=1, max_length=255, description="Company name")
    emails: list[EmailStr] | None = Field(default=None, description="Employees to provision and invite")


class CompanyUpdate(CompanyDefaults):
    """Schema for replacing a company document.

    The whole document is sent; the stored owner is always kept.
    """

    id: UUID | None = Field(default=None, description="Company ID, must match the path when given")
    name: str = Field(..., min_length=1, max_length=255, description="Company name")
    emails: list[EmailStr] | None = Field(default=None, description="Employees to provision and invite")


class CompanyResponse(CompanyDefaults):
    """Schema for company API responses."""

    id: UUID = Field(description="Company unique identifier")
    name: str = Field(description="Company name")
    owner_id: UUID | None = Field(default=None, description="User ID of the company creator")
    created_at: datetime | None = Field(default=None, description="Company creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")

    def company_fields(self) -> ProjectCompanyFields:
        """Fields pushed down to the company's projects, JSON-ready."""
        return ProjectCompanyFields(
            **self.model_dump(
                mode="json",
                include={"template", "periods", "default_values", "day_types", "available_positions"},
            )
        )
