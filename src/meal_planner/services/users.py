"""User-related persistence interface."""

from typing import Protocol

from meal_planner.domain.models import UserRecord


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: int) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def get_user_by_username(self, username: str) -> UserRecord | None:
        """Return the user with the given username, if present."""

    def create_user(self, username: str, password: str) -> UserRecord:
        """Create and return a new user record."""
