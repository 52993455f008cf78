"""Creates employee accounts for the invitee emails listed on a company."""

import asyncio
import logging
from uuid import UUID

from src.api.middleware.error_handler import PersistenceError
from src.models.user import ProvisioningState, User, UserCreate, UserRole
from src.services.email_service import EmailService
from src.services.user_service import UserService

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


class ProvisioningError(Exception):
    """Lookup or save failure while provisioning one email.

    Never reaches an API response; ``state`` is the terminal state the
    email ended in.
    """

    def __init__(self, message: str, email: str, state: ProvisioningState) -> None:
        self.message = message
        self.email = email
        self.state = state
        super().__init__(message)


class UserProvisioningService:
    """Reconciles a company's email list against the user directory.

    Each email is handled on its own: an existing user is left alone, a
    missing one is created with the employee role and invited once.
    """

    def __init__(
        self,
        user_service: UserService | None = None,
        email_service: EmailService | None = None,
    ) -> None:
        self.user_service = user_service or UserService()
        self.email_service = email_service or EmailService()

    async def provision_users(
        self,
        company_id: UUID,
        emails: list[str],
        company_name: str | None = None,
    ) -> dict[str, ProvisioningState]:
        """Provision every email concurrently.

        One email failing does not stop the others. Repeated emails are
        handled once.

        Args:
            company_id: The company's UUID.
            emails: Invitee email addresses.
            company_name: Company name used in the invite.

        Returns:
            dict: Terminal state per email. An email that hit an unexpected
                error is logged and reported with the last state it reached.
        """
        unique_emails = list(dict.fromkeys(emails))
        progress = {email: ProvisioningState.UNCHECKED for email in unique_emails}
        outcomes = await asyncio.gather(
            *(
                self.provision_user(email, company_id, company_name, progress)
                for email in unique_emails
            ),
            return_exceptions=True,
        )

        states: dict[str, ProvisioningState] = {}
        for email, outcome in zip(unique_emails, outcomes):
            if isinstance(outcome, Exception):
                logger.error(
                    "Unexpected error provisioning %s for company %s (reached %s)",
                    email,
                    company_id,
                    progress[email].value,
                    exc_info=outcome,
                )
                states[email] = progress[email]
                continue
            states[email] = outcome

        logger.debug("Provisioning finished for company %s: %s", company_id, states)
        return states

    async def provision_user(
        self,
        email: str,
        company_id: UUID,
        company_name: str | None = None,
        progress: dict[str, ProvisioningState] | None = None,
    ) -> ProvisioningState:
        """Make sure a user exists for ``(email, company_id)``.

        ``progress`` is updated as the email moves through UNCHECKED,
        ABSENT and CREATED, so a caller still knows how far it got if the
        run is cut short by an unexpected error.

        Returns:
            ProvisioningState: EXISTS, DONE, LOOKUP_FAILED or CREATE_FAILED.
        """
        if progress is None:
            progress = {}
        progress[email] = ProvisioningState.UNCHECKED

        try:
            existing = await self._lookup(email, company_id)
        except ProvisioningError as e:
            logger.warning("Cannot find user by email for company %s: %s", company_id, e.message)
            return e.state

        if existing:
            return ProvisioningState.EXISTS

        progress[email] = ProvisioningState.ABSENT

        try:
            saved = await self._create(email, company_id)
        except ProvisioningError as e:
            logger.error("Cannot save user by email for company %s: %s", company_id, e.message)
            return e.state

        if saved is None:
            # Another request created the same user between lookup and insert.
            return ProvisioningState.EXISTS

        progress[email] = ProvisioningState.CREATED
        logger.info("User saved with e-mail %s", saved.get("email", email))

        result = await self.email_service.send_invite_email(email, company_name)
        if not result.get("success"):
            logger.warning("Invite to %s was not sent: %s", email, result.get("error"))

        return ProvisioningState.DONE

    async def _lookup(self, email: str, company_id: UUID) -> User | None:
        try:
            return await self.user_service.find_by_example(email, company_id)
        except PersistenceError as e:
            raise ProvisioningError(e.message, email, ProvisioningState.LOOKUP_FAILED) from e

    async def _create(self, email: str, company_id: UUID) -> User | None:
        user = UserCreate(
            email=email,
            company_id=str(company_id),
            display_name=email,
            role=UserRole.EMPLOYEE.value,
        )
        try:
            return await self.user_service.save_user(user)
        except PersistenceError as e:
            if e.code == UNIQUE_VIOLATION:
                return None
            raise ProvisioningError(e.message, email, ProvisioningState.CREATE_FAILED) from e
