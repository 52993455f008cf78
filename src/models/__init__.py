"""Database model type definitions."""

from src.models.company import Company, Project, ProjectCompanyFields
from src.models.user import ProvisioningState, User, UserCreate, UserRole

__all__ = [
    "Company",
    "Project",
    "ProjectCompanyFields",
    "ProvisioningState",
    "User",
    "UserCreate",
    "UserRole",
]
