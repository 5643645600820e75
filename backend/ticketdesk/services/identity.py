"""Current-user resolution.

A request (or any other caller) supplies a ``SessionProvider``. When it has
no session the resolver either impersonates the configured default user,
which is the seeded admin in the demo setup, or refuses with
``UnauthenticatedError`` when ``anonymous_fallback`` is off.
"""

from typing import Optional, Protocol

import structlog
from sqlmodel import SQLModel

from ticketdesk.core.config import Settings
from ticketdesk.core.errors import UnauthenticatedError
from ticketdesk.db.store import EntityStore
from ticketdesk.models.user import User

logger = structlog.get_logger()


class AuthSession(SQLModel):
    user_id: str


class SessionProvider(Protocol):
    def current_session(self) -> Optional[AuthSession]: ...


class StaticSessionProvider:
    def __init__(self, user_id: Optional[str] = None):
        self.user_id = user_id

    def current_session(self) -> Optional[AuthSession]:
        if not self.user_id:
            return None
        return AuthSession(user_id=self.user_id)


class IdentityResolver:
    def __init__(self, store: EntityStore, sessions: SessionProvider, settings: Settings):
        self.store = store
        self.sessions = sessions
        self.settings = settings

    def resolve_current_user_id(self) -> str:
        session = self.sessions.current_session()
        if session is not None:
            return session.user_id
        if not self.settings.anonymous_fallback:
            raise UnauthenticatedError("No active session")
        return self.settings.default_user_id

    def resolve_current_user(self) -> User:
        user_id = self.resolve_current_user_id()
        user = self._find(user_id)
        if user is not None:
            return user

        if not self.settings.anonymous_fallback:
            raise UnauthenticatedError(f"Session user {user_id} does not exist")

        logger.warning("Unknown session user, using default identity", user_id=user_id)
        user = self._find(self.settings.default_user_id)
        if user is None:
            with self.store.lock:
                user = self.store.users[0] if self.store.users else None
        if user is None:
            raise UnauthenticatedError("No users available to act as current user")
        return user

    def _find(self, user_id: str) -> Optional[User]:
        with self.store.lock:
            return next((u for u in self.store.users if u.id == user_id), None)
