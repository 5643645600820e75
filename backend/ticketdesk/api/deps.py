from typing import Optional

from fastapi import Depends, Header

from ticketdesk.core.config import settings
from ticketdesk.db.store import EntityStore, get_store
from ticketdesk.services.helpdesk import HelpdeskService
from ticketdesk.services.identity import StaticSessionProvider


def get_service(
    store: EntityStore = Depends(get_store),
    x_user_id: Optional[str] = Header(default=None),
) -> HelpdeskService:
    # X-User-Id stands in for the browser session
    return HelpdeskService(store, sessions=StaticSessionProvider(x_user_id), settings=settings)
