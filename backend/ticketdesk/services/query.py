import math
from typing import Any, Callable, Iterable, Optional

from ticketdesk.core.errors import ValidationError
from ticketdesk.models.ticket import (
    PageRequest,
    SortOrder,
    Ticket,
    TicketFilters,
    TicketSort,
)

# camelCase names the web client sends
_SORT_ALIASES = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "createdBy": "created_by",
    "assignedTo": "assigned_to",
}

_SORT_KEYS: dict[str, Callable[[Ticket], Any]] = {
    "id": lambda t: t.id.lower(),
    "title": lambda t: t.title.lower(),
    "description": lambda t: t.description.lower(),
    # enums compare by lower-cased value, so CLOSED sorts before OPEN
    "status": lambda t: t.status.value.lower(),
    "priority": lambda t: t.priority.value.lower(),
    "created_at": lambda t: t.created_at,
    "updated_at": lambda t: t.updated_at,
    "created_by": lambda t: t.created_by.name.lower(),
    "assigned_to": lambda t: t.assigned_to.name.lower() if t.assigned_to else "",
}

SORT_FIELDS = tuple(_SORT_KEYS)


def filter_tickets(
    tickets: Iterable[Ticket],
    filters: TicketFilters,
    current_user_id: Optional[str] = None,
) -> list[Ticket]:
    out = list(tickets)

    if filters.search:
        needle = filters.search.lower()
        out = [t for t in out if needle in t.title.lower() or needle in t.description.lower()]

    if filters.status:
        out = [t for t in out if t.status == filters.status]

    if filters.priority:
        out = [t for t in out if t.priority == filters.priority]

    if filters.assigned_to_me:
        out = [t for t in out if t.assigned_to is not None and t.assigned_to.id == current_user_id]

    if filters.created_by_me:
        out = [t for t in out if t.created_by.id == current_user_id]

    return out


def sort_tickets(tickets: list[Ticket], sort: TicketSort) -> list[Ticket]:
    """Stable sort; with no sort field the incoming order is kept."""
    if not sort.sort_by:
        return list(tickets)

    field = _SORT_ALIASES.get(sort.sort_by, sort.sort_by)
    key = _SORT_KEYS.get(field)
    if key is None:
        raise ValidationError(
            f"Cannot sort by '{sort.sort_by}', expected one of: {', '.join(SORT_FIELDS)}"
        )
    # reverse=True keeps equal elements in their original order
    return sorted(tickets, key=key, reverse=sort.sort_order == SortOrder.DESC)


def paginate(tickets: list[Ticket], page: PageRequest) -> tuple[list[Ticket], int, int]:
    total = len(tickets)
    start = (page.page - 1) * page.limit
    total_pages = math.ceil(total / page.limit)
    return tickets[start : start + page.limit], total, total_pages
