"""Repositories for the User and UserSession aggregates."""

from datetime import UTC, datetime

from storefront.domain import storefront
from storefront.identity.session import UserSession
from storefront.identity.user import User
from storefront.utils.queries import fetch_all


@storefront.repository(part_of=User)
class UserRepository:
    def get_by_email(self, email: str) -> User | None:
        """Exact, case-sensitive lookup of a user by email."""
        return self._dao.query.filter(email=email).all().first

    def find(self, user_id) -> User | None:
        """Like ``get()``, but returns None when the user does not exist."""
        return self._dao.query.filter(id=user_id).all().first


@storefront.repository(part_of=UserSession)
class UserSessionRepository:
    def find_active(self, token: str | None) -> UserSession | None:
        """The session behind ``token``, or None when unknown or expired."""
        if not token:
            return None
        session = self._dao.query.filter(id=token).all().first
        if session is None or session.is_expired(datetime.now(UTC)):
            return None
        return session

    def for_user(self, user_id) -> list[UserSession]:
        return fetch_all(self._dao.query.filter(user_id=user_id), "sessions")
