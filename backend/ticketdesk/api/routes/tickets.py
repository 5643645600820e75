from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from ticketdesk.api.deps import get_service
from ticketdesk.core.errors import NotFoundError
from ticketdesk.metrics.prometheus import (
    comments_added_total,
    tickets_created_total,
    tickets_deleted_total,
    tickets_updated_total,
)
from ticketdesk.models.comment import CommentCreate
from ticketdesk.models.ticket import (
    PageRequest,
    SortOrder,
    TicketCreate,
    TicketFilters,
    TicketPriority,
    TicketSort,
    TicketStatus,
    TicketUpdate,
)
from ticketdesk.services.helpdesk import HelpdeskService

router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.get("")
def list_tickets(
    service: HelpdeskService = Depends(get_service),
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
    sort_by: Optional[str] = Query(default=None),
    sort_order: SortOrder = Query(default=SortOrder.DESC),
    search: Optional[str] = Query(default=None),
    status: Optional[TicketStatus] = Query(default=None),
    priority: Optional[TicketPriority] = Query(default=None),
    assigned_to_me: bool = Query(default=False),
    created_by_me: bool = Query(default=False),
):
    result = service.list_tickets(
        filters=TicketFilters(
            search=search,
            status=status,
            priority=priority,
            assigned_to_me=assigned_to_me,
            created_by_me=created_by_me,
        ),
        sort=TicketSort(sort_by=sort_by, sort_order=sort_order),
        page=PageRequest(page=page, limit=limit or service.settings.default_page_size),
    )
    return result.model_dump(mode="json")


@router.get("/stats")
def ticket_stats(service: HelpdeskService = Depends(get_service)):
    return service.ticket_stats().model_dump(mode="json")


@router.post("", status_code=201)
def create_ticket(body: TicketCreate, service: HelpdeskService = Depends(get_service)):
    ticket = service.create_ticket(body)
    tickets_created_total.labels(priority=ticket.priority.value).inc()
    return ticket.model_dump(mode="json")


@router.get("/{ticket_id}")
def get_ticket(ticket_id: str, service: HelpdeskService = Depends(get_service)):
    ticket = service.get_ticket_by_id(ticket_id)
    if not ticket:
        raise NotFoundError(f"Ticket {ticket_id} not found")
    return ticket.model_dump(mode="json")


@router.patch("/{ticket_id}")
def update_ticket(ticket_id: str, body: TicketUpdate, service: HelpdeskService = Depends(get_service)):
    ticket = service.update_ticket(ticket_id, body)
    tickets_updated_total.labels(status=ticket.status.value).inc()
    return ticket.model_dump(mode="json")


@router.delete("/{ticket_id}", status_code=204)
def delete_ticket(ticket_id: str, service: HelpdeskService = Depends(get_service)):
    service.delete_ticket(ticket_id)
    tickets_deleted_total.inc()
    return Response(status_code=204)


@router.get("/{ticket_id}/comments")
def list_comments(ticket_id: str, service: HelpdeskService = Depends(get_service)):
    return [c.model_dump(mode="json") for c in service.get_comments(ticket_id)]


@router.post("/{ticket_id}/comments", status_code=201)
def add_comment(ticket_id: str, body: CommentCreate, service: HelpdeskService = Depends(get_service)):
    comment = service.add_comment(ticket_id, body.content)
    comments_added_total.inc()
    return comment.model_dump(mode="json")
