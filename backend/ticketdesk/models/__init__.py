from ticketdesk.models.attachment import Attachment
from ticketdesk.models.comment import Comment, CommentCreate
from ticketdesk.models.ticket import (
    PageRequest,
    SortOrder,
    Ticket,
    TicketCreate,
    TicketFilters,
    TicketPage,
    TicketPriority,
    TicketSort,
    TicketStats,
    TicketStatus,
    TicketUpdate,
)
from ticketdesk.models.user import AuthResult, LoginInput, RegisterInput, User, UserRef, UserRole

__all__ = [
    "Attachment",
    "AuthResult",
    "Comment",
    "CommentCreate",
    "LoginInput",
    "PageRequest",
    "RegisterInput",
    "SortOrder",
    "Ticket",
    "TicketCreate",
    "TicketFilters",
    "TicketPage",
    "TicketPriority",
    "TicketSort",
    "TicketStats",
    "TicketStatus",
    "TicketUpdate",
    "User",
    "UserRef",
    "UserRole",
]
