"""Company business logic service."""

import logging
from typing import Any
from uuid import UUID

from starlette.concurrency import run_in_threadpool

from src.api.middleware.error_handler import (
    AuthorizationError,
    NotFoundError,
    PersistenceErrorKind,
    ValidationError,
)
from src.core.background import BackgroundTaskRunner, get_task_runner
from src.core.supabase import get_supabase_client, store_errors
from src.models.company import Company
from src.schemas.company import CompanyCreate, CompanyResponse, CompanyUpdate
from src.services.company_defaults import build_default_company
from src.services.project_service import ProjectService
from src.services.user_provisioning_service import UserProvisioningService

logger = logging.getLogger(__name__)


class CompanyService:
    """Service for creating, reading and updating companies.

    Create and update return as soon as the company row is saved. The
    default project, the project cascade and user provisioning run as
    detached background tasks and never affect the result.
    """

    def __init__(
        self,
        project_service: ProjectService | None = None,
        provisioning_service: UserProvisioningService | None = None,
        task_runner: BackgroundTaskRunner | None = None,
    ) -> None:
        """Initialize company service with Supabase client and collaborators."""
        self.client = get_supabase_client()
        self.project_service = project_service or ProjectService()
        self.provisioning_service = provisioning_service or UserProvisioningService()
        self.task_runner = task_runner or get_task_runner()

    async def get_company(self, company_id: UUID) -> CompanyResponse:
        """Get a company by ID.

        Args:
            company_id: The company's UUID.

        Returns:
            CompanyResponse: The company.

        Raises:
            NotFoundError: If no company has this ID.
            PersistenceError: If the lookup fails.
        """
        with store_errors("find company", PersistenceErrorKind.READ_FAILED):
            query = (
                self.client.table("companies")
                .select("*")
                .eq("id", str(company_id))
                .limit(1)
            )
            response = await run_in_threadpool(query.execute)

        if not response.data:
            raise NotFoundError("Company not found")

        row: Company = response.data[0]
        return CompanyResponse.model_validate(row)

    async def save_company(self, company: dict[str, Any]) -> CompanyResponse:
        """Insert or overwrite a company row.

        A row without ``id`` is inserted and the store assigns the ID. A
        row with ``id`` replaces the stored company with that ID.

        Args:
            company: JSON-ready company row.

        Returns:
            CompanyResponse: The company as stored.

        Raises:
            PersistenceError: If the write fails.
        """
        table = self.client.table("companies")

        with store_errors("save company", PersistenceErrorKind.WRITE_FAILED):
            if company.get("id"):
                query = table.upsert(company, on_conflict="id")
            else:
                row = {key: value for key, value in company.items() if key != "id"}
                query = table.insert(row)
            response = await run_in_threadpool(query.execute)

        return CompanyResponse.model_validate(response.data[0])

    async def create_company(
        self,
        data: CompanyCreate,
        owner_id: UUID | None = None,
    ) -> CompanyResponse:
        """Create a company with the default calendar, day types and roles.

        Args:
            data: Company creation data.
            owner_id: User ID of the creator, when the request is authenticated.

        Returns:
            CompanyResponse: The created company.
        """
        defaults = build_default_company()
        row = {
            "name": data.name,
            "owner_id": str(owner_id) if owner_id else None,
            **defaults.model_dump(mode="json"),
        }

        company = await self.save_company(row)
        logger.info("Company %s created", company.id)

        self.task_runner.submit(
            self.project_service.provision_default_project(company, owner_id),
            name=f"default-project:{company.id}",
        )
        self._provision_users(company, data.emails)

        return company

    async def update_company(
        self,
        company_id: UUID,
        data: CompanyUpdate,
        user_id: UUID | None = None,
    ) -> CompanyResponse:
        """Replace a company document and push shared fields to its projects.

        The stored owner is kept whatever the payload says. When the company
        has an owner, only that owner may update it.

        Args:
            company_id: The company's UUID.
            data: The full company document.
            user_id: The user making the change; None skips the owner check.

        Returns:
            CompanyResponse: The company as stored.

        Raises:
            ValidationError: If the payload ID differs from ``company_id``.
            NotFoundError: If the company does not exist.
            AuthorizationError: If ``user_id`` is not the stored owner.
        """
        if data.id is not None and data.id != company_id:
            raise ValidationError("Company ID in the body does not match the URL")

        existing = await self.get_company(company_id)
        if user_id is not None and existing.owner_id is not None and existing.owner_id != user_id:
            raise AuthorizationError("Only the company owner can update the company")

        row = data.model_dump(mode="json", exclude={"id", "emails"})
        row["id"] = str(company_id)
        row["owner_id"] = str(existing.owner_id) if existing.owner_id else None

        company = await self.save_company(row)
        logger.info("Company %s updated", company.id)

        self.task_runner.submit(
            self.project_service.propagate_company(company),
            name=f"project-sync:{company.id}",
        )
        self._provision_users(company, data.emails)

        return company

    def _provision_users(self, company: CompanyResponse, emails: list[str] | None) -> None:
        if not emails:
            return

        self.task_runner.submit(
            self.provisioning_service.provision_users(
                company.id,
                [str(email) for email in emails],
                company.name,
            ),
            name=f"provision-users:{company.id}",
        )
