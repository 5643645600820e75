import enum
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

from ticketdesk.models.attachment import Attachment
from ticketdesk.models.comment import Comment
from ticketdesk.models.user import UserRef


class TicketStatus(str, enum.Enum):
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"


class TicketPriority(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


class Ticket(SQLModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    title: str
    description: str
    status: TicketStatus = TicketStatus.OPEN
    priority: TicketPriority = TicketPriority.MEDIUM

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    created_by: UserRef
    assigned_to: Optional[UserRef] = None

    # comments live in the store's side table and are attached on read
    comments: list[Comment] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)


class TicketCreate(SQLModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    priority: Optional[TicketPriority] = None
    assigned_to_id: Optional[str] = None


class TicketUpdate(SQLModel):
    """Partial update.

    ``assigned_to_id`` is not a regular patch field: leaving it out (or
    sending null) clears the current assignee. Clients that only want to
    change, say, the status must resend the assignee id to keep it.
    """

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None
    assigned_to_id: Optional[str] = None


class TicketFilters(SQLModel):
    search: Optional[str] = None
    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None
    assigned_to_me: bool = False
    created_by_me: bool = False


class TicketSort(SQLModel):
    sort_by: Optional[str] = None  # None keeps store order, newest first
    sort_order: SortOrder = SortOrder.DESC


class PageRequest(SQLModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)


class TicketPage(SQLModel):
    tickets: list[Ticket]
    total: int
    page: int
    limit: int
    total_pages: int


class TicketStats(SQLModel):
    total: int
    open: int
    in_progress: int
    resolved: int
    closed: int
    by_status: dict[str, int]
    by_priority: dict[str, int]
    latest: list[Ticket]
