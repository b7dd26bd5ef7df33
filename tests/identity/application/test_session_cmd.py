"""Application tests for login session commands."""

from protean import current_domain
from storefront.identity.session import EndSession, StartSession, UserSession


class TestSessionCommands:
    def test_start_session_returns_active_token(self, user_id):
        token = current_domain.process(StartSession(user_id=user_id), asynchronous=False)
        session = current_domain.repository_for(UserSession).find_active(token)
        assert session.user_id == user_id

    def test_end_session_revokes_token(self, user_id):
        token = current_domain.process(StartSession(user_id=user_id), asynchronous=False)
        current_domain.process(EndSession(token=token), asynchronous=False)
        assert current_domain.repository_for(UserSession).find_active(token) is None

    def test_end_unknown_session_is_a_no_op(self):
        current_domain.process(EndSession(token="unknown-token"), asynchronous=False)

    def test_unknown_token_is_not_active(self):
        repo = current_domain.repository_for(UserSession)
        assert repo.find_active("unknown-token") is None
        assert repo.find_active(None) is None

    def test_sessions_are_listed_per_user(self, user_id):
        current_domain.process(StartSession(user_id=user_id), asynchronous=False)
        current_domain.process(StartSession(user_id=user_id), asynchronous=False)
        assert len(current_domain.repository_for(UserSession).for_user(user_id)) == 2
