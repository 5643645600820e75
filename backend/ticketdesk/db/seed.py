from datetime import datetime, timezone

from ticketdesk.db.store import EntityStore
from ticketdesk.models.comment import Comment
from ticketdesk.models.ticket import Ticket, TicketPriority, TicketStatus
from ticketdesk.models.user import User, UserRole


def _ts(s: str) -> datetime:
    return datetime.fromisoformat(s).replace(tzinfo=timezone.utc)


def seed_demo_data(store: EntityStore) -> None:
    john = User(id="1", name="John Doe", email="john@example.com", role=UserRole.ADMIN)
    jane = User(id="2", name="Jane Smith", email="jane@example.com", role=UserRole.AGENT)
    bob = User(id="3", name="Bob Johnson", email="bob@example.com", role=UserRole.USER)

    t1_created = _ts("2023-08-01T10:00:00")
    t2_created = _ts("2023-08-05T14:00:00")

    tickets = [
        Ticket(
            id="1",
            title="Ticket 1",
            description="This is the first ticket",
            status=TicketStatus.OPEN,
            priority=TicketPriority.HIGH,
            created_at=t1_created,
            updated_at=t1_created,
            created_by=john.ref(),
            assigned_to=jane.ref(),
        ),
        Ticket(
            id="2",
            title="Ticket 2",
            description="This is the second ticket",
            status=TicketStatus.IN_PROGRESS,
            priority=TicketPriority.MEDIUM,
            created_at=t2_created,
            updated_at=t2_created,
            created_by=jane.ref(),
            assigned_to=bob.ref(),
        ),
    ]

    c1_at = _ts("2023-08-01T11:30:00")
    c2_at = _ts("2023-08-05T15:45:00")
    comments = {
        "1": [
            Comment(
                id="c1",
                content="Have you tried resetting your password?",
                author=jane.ref(),
                ticket_id="1",
                created_at=c1_at,
                updated_at=c1_at,
            )
        ],
        "2": [
            Comment(
                id="c2",
                content="What is the file size of the image you are trying to upload?",
                author=jane.ref(),
                ticket_id="2",
                created_at=c2_at,
                updated_at=c2_at,
            )
        ],
    }

    with store.lock:
        store.users.extend([john, jane, bob])
        store.tickets.extend(tickets)
        for ticket_id, items in comments.items():
            store.comments.setdefault(ticket_id, []).extend(items)
