"""Session authentication for the API.

The signed session cookie carries only the server-side session token; the
token is resolved to a user through the ``UserSession`` repository on every
request.
"""

from fastapi import HTTPException, Request
from protean.utils.globals import current_domain

from storefront.identity.session import EndSession, StartSession, UserSession
from storefront.utils.logging import add_context

SESSION_KEY = "sid"


async def current_user_id(request: Request) -> int:
    """Dependency: the authenticated user's id, or 401."""
    token = request.session.get(SESSION_KEY)
    session = current_domain.repository_for(UserSession).find_active(token)
    if session is None:
        raise HTTPException(status_code=401, detail="Authentication required")

    add_context(user_id=session.user_id)
    return session.user_id


def log_in(request: Request, user_id: int) -> None:
    """Start a fresh server-side session for ``user_id``, replacing any current one."""
    log_out(request)
    token = current_domain.process(StartSession(user_id=user_id), asynchronous=False)
    request.session[SESSION_KEY] = token


def log_out(request: Request) -> None:
    token = request.session.pop(SESSION_KEY, None)
    if token:
        current_domain.process(EndSession(token=token), asynchronous=False)
    request.session.clear()
