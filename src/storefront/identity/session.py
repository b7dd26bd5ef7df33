"""Server-side login sessions — aggregate, commands and handler.

The browser only holds a signed cookie carrying the session token; the
association between the token and the user lives here, so logging out
revokes the session even if the cookie is replayed.
"""

import secrets
from datetime import UTC, datetime, timedelta

from protean import handle
from protean.fields import DateTime, Integer, String
from protean.utils.globals import current_domain

from storefront import config
from storefront.domain import logger, storefront


@storefront.aggregate
class UserSession:
    id: String(identifier=True, max_length=64)
    user_id: Integer(required=True)
    created_at: DateTime()
    expires_at: DateTime(required=True)

    @classmethod
    def open(cls, user_id, lifetime_seconds):
        now = datetime.now(UTC)
        return cls(
            id=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=now,
            expires_at=now + timedelta(seconds=lifetime_seconds),
        )

    def is_expired(self, now) -> bool:
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return now >= expires_at


@storefront.command(part_of="UserSession")
class StartSession:
    user_id: Integer(required=True)


@storefront.command(part_of="UserSession")
class EndSession:
    token: String(required=True, max_length=64)


@storefront.command_handler(part_of=UserSession)
class UserSessionHandler:
    @handle(StartSession)
    def start_session(self, command):
        session = UserSession.open(command.user_id, config.session_max_age())
        current_domain.repository_for(UserSession).add(session)
        logger.info("session_started", user_id=command.user_id)
        return session.id

    @handle(EndSession)
    def end_session(self, command):
        repo = current_domain.repository_for(UserSession)
        session = repo._dao.query.filter(id=command.token).all().first
        if session is None:
            return
        repo._dao.delete(session)
        logger.info("session_ended", user_id=session.user_id)
