"""User directory access."""

from uuid import UUID

from starlette.concurrency import run_in_threadpool

from src.api.middleware.error_handler import PersistenceErrorKind
from src.core.supabase import get_supabase_client, store_errors
from src.models.user import User, UserCreate


class UserService:
    """Service for looking up and creating users."""

    def __init__(self) -> None:
        """Initialize user service with Supabase client."""
        self.client = get_supabase_client()

    async def find_by_example(self, email: str, company_id: UUID) -> User | None:
        """Find the user registered with ``email`` in a company.

        Args:
            email: The user's email address.
            company_id: The company's UUID.

        Returns:
            User | None: The user row or None if there is no such user.

        Raises:
            PersistenceError: If the lookup fails.
        """
        with store_errors("look up user", PersistenceErrorKind.READ_FAILED):
            query = (
                self.client.table("users")
                .select("*")
                .eq("email", email)
                .eq("company_id", str(company_id))
                .limit(1)
            )
            response = await run_in_threadpool(query.execute)

        return response.data[0] if response.data else None

    async def save_user(self, user: UserCreate) -> User:
        """Insert a new user.

        Args:
            user: The user to create.

        Returns:
            User: The created user row.

        Raises:
            PersistenceError: If the insert fails. A duplicate
                ``(email, company_id)`` pair carries code ``23505``.
        """
        with store_errors("save user", PersistenceErrorKind.WRITE_FAILED):
            query = self.client.table("users").insert(dict(user))
            response = await run_in_threadpool(query.execute)

        return response.data[0]
