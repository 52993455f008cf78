"""Company API routes."""

import logging
from uuid import UUID

from fastapi import APIRouter, status

from src.api.deps import CurrentUser, OptionalUser
from src.api.middleware.error_handler import AuthorizationError
from src.schemas.auth import UserContext
from src.schemas.company import (
    CompanyCreate,
    CompanyDefaults,
    CompanyResponse,
    CompanyUpdate,
)
from src.services.company_defaults import build_default_company
from src.services.company_service import CompanyService
from src.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["companies"])


async def _check_member_access(company: CompanyResponse, user: UserContext) -> None:
    """Check that the user owns the company or is one of its employees."""
    if company.owner_id is None or company.owner_id == user.user_id:
        return
    if user.email and await UserService().find_by_example(user.email, company.id):
        return
    raise AuthorizationError("You are not a member of this company")


@router.get(
    "/defaults",
    response_model=CompanyDefaults,
    summary="Get default company configuration",
    description="Returns the configuration a company created now would start with. Nothing is saved.",
)
async def get_company_defaults() -> CompanyDefaults:
    """Return the default template, periods, day types and roles."""
    return build_default_company()


@router.get(
    "/{company_id}",
    response_model=CompanyResponse,
    summary="Get company details",
)
async def get_company(
    company_id: UUID,
    user: CurrentUser,
) -> CompanyResponse:
    """Get company details.

    Args:
        company_id: The company's UUID.
        user: The authenticated user context.

    Returns:
        CompanyResponse: The company details.

    Raises:
        NotFoundError: 404 if the company does not exist.
        AuthorizationError: 403 if the user is neither owner nor employee.
        PersistenceError: 400 if the lookup fails.
    """
    logger.debug("Find company by id. Company id: %s", company_id)
    service = CompanyService()
    company = await service.get_company(company_id)
    await _check_member_access(company, user)
    logger.debug("Found company. Company id: %s", company.id)
    return company


@router.post(
    "",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a company",
    description=(
        "Creates a company with the default calendar, day types and roles. "
        "Listed emails are provisioned as employees in the background."
    ),
)
async def create_company(
    data: CompanyCreate,
    user: OptionalUser,
) -> CompanyResponse:
    """Create a new company.

    The authenticated user, if any, becomes the owner.

    Args:
        data: Company creation data.
        user: The authenticated user context, if present.

    Returns:
        CompanyResponse: The created company.
    """
    logger.debug("Create company. Company name: %s", data.name)
    service = CompanyService()
    return await service.create_company(data, user.user_id if user else None)


@router.put(
    "/{company_id}",
    response_model=CompanyResponse,
    summary="Update a company",
    description=(
        "Replaces the company document. Shared fields are pushed to the "
        "company's projects and listed emails are provisioned in the background."
    ),
)
async def update_company(
    company_id: UUID,
    data: CompanyUpdate,
    user: CurrentUser,
) -> CompanyResponse:
    """Replace a company document.

    Args:
        company_id: The company's UUID.
        data: The full company document.
        user: The authenticated user context.

    Returns:
        CompanyResponse: The company as stored.
    """
    logger.debug("Update company. Company id: %s", company_id)
    service = CompanyService()
    return await service.update_company(company_id, data, user.user_id)
