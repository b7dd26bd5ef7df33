"""Credential checks for login."""

from protean.utils.globals import current_domain

from storefront.domain import logger
from storefront.identity.passwords import verify_password
from storefront.identity.user import User


def authenticate(email: str, password: str) -> User | None:
    """Return the user owning ``email`` when ``password`` matches, else None.

    Unknown emails and wrong passwords are indistinguishable to the caller.
    """
    user = current_domain.repository_for(User).get_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("login_rejected")
        return None
    return user
