"""Project-side copies of company configuration."""

import logging
from uuid import UUID

from starlette.concurrency import run_in_threadpool

from src.api.middleware.error_handler import PersistenceError, PersistenceErrorKind
from src.core.supabase import get_supabase_client, store_errors
from src.models.company import Project
from src.schemas.company import CompanyResponse

logger = logging.getLogger(__name__)


class ProjectService:
    """Service keeping projects in step with their company."""

    def __init__(self) -> None:
        """Initialize project service with Supabase client."""
        self.client = get_supabase_client()

    async def create_default_project(
        self,
        company: CompanyResponse,
        owner_id: UUID | None = None,
    ) -> Project:
        """Create the first project of a new company.

        The project is named after the company and starts with a copy of
        the company's shared configuration.

        Args:
            company: The freshly created company.
            owner_id: User ID of the company creator, if known.

        Returns:
            Project: The created project row.

        Raises:
            PersistenceError: If the insert fails.
        """
        project_data = {
            "name": company.name,
            "company_id": str(company.id),
            "owner_id": str(owner_id) if owner_id else None,
            **company.company_fields(),
        }

        with store_errors("create default project", PersistenceErrorKind.WRITE_FAILED):
            query = self.client.table("projects").insert(project_data)
            response = await run_in_threadpool(query.execute)

        project = response.data[0]
        logger.info("Default project %s created for company %s", project.get("id"), company.id)
        return project

    async def sync_company_fields(self, company: CompanyResponse) -> int:
        """Overwrite the company-owned fields on every project of the company.

        Only the five shared fields are written; everything else on the
        projects stays as it is.

        Args:
            company: The company as just saved.

        Returns:
            int: Number of projects updated.

        Raises:
            PersistenceError: If the bulk update fails. Some projects may
                already have been updated.
        """
        with store_errors("update company projects", PersistenceErrorKind.WRITE_FAILED):
            query = (
                self.client.table("projects")
                .update(company.company_fields())
                .eq("company_id", str(company.id))
            )
            response = await run_in_threadpool(query.execute)

        return len(response.data or [])

    async def propagate_company(self, company: CompanyResponse) -> None:
        """Background entry point for :meth:`sync_company_fields`.

        Failures are logged with the company id and never retried.
        """
        try:
            updated = await self.sync_company_fields(company)
        except PersistenceError as e:
            logger.error(
                "Company %s projects were not updated: %s",
                company.id,
                e.message,
                extra={"company_id": str(company.id), "kind": e.kind.value},
            )
            return

        logger.info("Company %s projects are updated (%d)", company.id, updated)

    async def provision_default_project(
        self,
        company: CompanyResponse,
        owner_id: UUID | None = None,
    ) -> None:
        """Background entry point for :meth:`create_default_project`."""
        try:
            await self.create_default_project(company, owner_id)
        except PersistenceError as e:
            logger.error(
                "Cannot create default project for company %s: %s",
                company.id,
                e.message,
                extra={"company_id": str(company.id), "kind": e.kind.value},
            )
