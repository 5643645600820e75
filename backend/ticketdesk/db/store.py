import threading
from typing import Optional

from ticketdesk.core.config import settings
from ticketdesk.models.comment import Comment
from ticketdesk.models.ticket import Ticket
from ticketdesk.models.user import User


class EntityStore:
    """In-process collections backing the helpdesk service.

    Holds storage only. ``tickets`` is kept newest first, ``users`` in
    insertion order, and comments live in a side table keyed by ticket id.
    Writers must hold ``lock`` for the whole read-modify-write.
    """

    def __init__(self) -> None:
        self.tickets: list[Ticket] = []
        self.users: list[User] = []
        self.comments: dict[str, list[Comment]] = {}
        self.lock = threading.RLock()


def build_store(seed: bool = True) -> EntityStore:
    store = EntityStore()
    if seed:
        from ticketdesk.db.seed import seed_demo_data

        seed_demo_data(store)
    return store


_STORE: Optional[EntityStore] = None
_STORE_LOCK = threading.Lock()


def get_store() -> EntityStore:
    """FastAPI dependency returning the process-wide default store."""
    global _STORE
    if _STORE is None:
        with _STORE_LOCK:
            if _STORE is None:
                _STORE = build_store(seed=settings.seed_demo_data)
    return _STORE
