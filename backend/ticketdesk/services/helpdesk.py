import time
from datetime import datetime, timezone
from typing import Optional

import structlog

from ticketdesk.core.config import Settings
from ticketdesk.core.config import settings as default_settings
from ticketdesk.core.errors import InvalidCredentialsError, NotFoundError, ValidationError
from ticketdesk.db.store import EntityStore
from ticketdesk.models.comment import Comment
from ticketdesk.models.ticket import (
    PageRequest,
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
from ticketdesk.models.user import AuthResult, RegisterInput, User, UserRef
from ticketdesk.services.identity import IdentityResolver, SessionProvider, StaticSessionProvider
from ticketdesk.services.query import filter_tickets, paginate, sort_tickets

logger = structlog.get_logger()

LATEST_TICKETS = 5


def _now() -> datetime:
    return datetime.now(timezone.utc)


class HelpdeskService:
    """Ticket, comment and user operations over an ``EntityStore``.

    Every returned entity is a copy; mutating it does not touch the store.
    Mutations hold the store lock for their whole read-modify-write, reads
    snapshot the collections under the lock and compute outside it.
    """

    def __init__(
        self,
        store: EntityStore,
        sessions: Optional[SessionProvider] = None,
        settings: Optional[Settings] = None,
    ):
        self.store = store
        self.settings = settings or default_settings
        self.identity = IdentityResolver(store, sessions or StaticSessionProvider(), self.settings)

    def _simulate_latency(self) -> None:
        if self.settings.simulated_latency_ms > 0:
            time.sleep(self.settings.simulated_latency_ms / 1000.0)

    # ---- queries ----

    def list_tickets(
        self,
        filters: Optional[TicketFilters] = None,
        sort: Optional[TicketSort] = None,
        page: Optional[PageRequest] = None,
    ) -> TicketPage:
        self._simulate_latency()
        filters = filters or TicketFilters()
        sort = sort or TicketSort()
        page = page or PageRequest(limit=self.settings.default_page_size)
        if page.limit > self.settings.max_page_size:
            raise ValidationError(f"limit must be at most {self.settings.max_page_size}")

        current_user_id = None
        if filters.assigned_to_me or filters.created_by_me:
            current_user_id = self.identity.resolve_current_user_id()

        with self.store.lock:
            snapshot = list(self.store.tickets)

        matched = sort_tickets(filter_tickets(snapshot, filters, current_user_id), sort)
        items, total, total_pages = paginate(matched, page)
        return TicketPage(
            tickets=[t.model_copy(deep=True) for t in items],
            total=total,
            page=page.page,
            limit=page.limit,
            total_pages=total_pages,
        )

    def get_ticket_by_id(self, ticket_id: str) -> Optional[Ticket]:
        self._simulate_latency()
        with self.store.lock:
            ticket = self._find_ticket(ticket_id)
            if ticket is None:
                return None
            comments = list(self.store.comments.get(ticket_id, []))
            return ticket.model_copy(deep=True, update={"comments": [c.model_copy(deep=True) for c in comments]})

    def get_comments(self, ticket_id: str) -> list[Comment]:
        self._simulate_latency()
        with self.store.lock:
            return [c.model_copy(deep=True) for c in self.store.comments.get(ticket_id, [])]

    def ticket_stats(self) -> TicketStats:
        self._simulate_latency()
        with self.store.lock:
            snapshot = list(self.store.tickets)

        by_status = {s.value: 0 for s in TicketStatus}
        by_priority = {p.value: 0 for p in TicketPriority}
        for t in snapshot:
            by_status[t.status.value] += 1
            by_priority[t.priority.value] += 1

        latest = sorted(snapshot, key=lambda t: t.created_at, reverse=True)[:LATEST_TICKETS]

        return TicketStats(
            total=len(snapshot),
            open=by_status[TicketStatus.OPEN.value],
            in_progress=by_status[TicketStatus.IN_PROGRESS.value],
            resolved=by_status[TicketStatus.RESOLVED.value],
            closed=by_status[TicketStatus.CLOSED.value],
            by_status=by_status,
            by_priority=by_priority,
            latest=[t.model_copy(deep=True) for t in latest],
        )

    # ---- mutations ----

    def create_ticket(self, data: TicketCreate) -> Ticket:
        self._simulate_latency()
        author = self.identity.resolve_current_user()
        now = _now()

        with self.store.lock:
            ticket = Ticket(
                title=data.title,
                description=data.description,
                status=TicketStatus.OPEN,
                priority=data.priority or TicketPriority.MEDIUM,
                created_at=now,
                updated_at=now,
                created_by=author.ref(),
                assigned_to=self._user_ref(data.assigned_to_id),
            )
            self.store.tickets.insert(0, ticket)

        logger.info(
            "Ticket created",
            ticket_id=ticket.id,
            created_by=author.id,
            priority=ticket.priority.value,
            assigned_to=ticket.assigned_to.id if ticket.assigned_to else None,
        )
        return ticket.model_copy(deep=True)

    def update_ticket(self, ticket_id: str, patch: TicketUpdate) -> Ticket:
        """Merge ``patch`` into the ticket.

        The assignee is always recomputed from ``patch.assigned_to_id``, so
        an update without it leaves the ticket unassigned.
        """
        self._simulate_latency()
        with self.store.lock:
            idx = self._ticket_index(ticket_id)
            if idx is None:
                raise NotFoundError(f"Ticket {ticket_id} not found")

            changes = patch.model_dump(exclude_unset=True, exclude={"assigned_to_id"})
            changes = {k: v for k, v in changes.items() if v is not None}
            changes["assigned_to"] = self._user_ref(patch.assigned_to_id)
            changes["updated_at"] = _now()

            updated = self.store.tickets[idx].model_copy(update=changes)
            self.store.tickets[idx] = updated

        logger.info(
            "Ticket updated",
            ticket_id=ticket_id,
            fields=sorted(k for k in changes if k != "updated_at"),
            assigned_to=updated.assigned_to.id if updated.assigned_to else None,
        )
        return updated.model_copy(deep=True)

    def delete_ticket(self, ticket_id: str) -> None:
        self._simulate_latency()
        with self.store.lock:
            before = len(self.store.tickets)
            self.store.tickets = [t for t in self.store.tickets if t.id != ticket_id]
            removed = before - len(self.store.tickets)

        if removed:
            # comments stay in the side table
            logger.info("Ticket deleted", ticket_id=ticket_id)
        else:
            logger.info("Delete of unknown ticket ignored", ticket_id=ticket_id)

    def add_comment(self, ticket_id: str, content: str) -> Comment:
        self._simulate_latency()
        author = self.identity.resolve_current_user()
        now = _now()

        with self.store.lock:
            if self._find_ticket(ticket_id) is None:
                logger.warning("Comment added to unknown ticket", ticket_id=ticket_id)
            comment = Comment(
                content=content,
                author=author.ref(),
                ticket_id=ticket_id,
                created_at=now,
                updated_at=now,
            )
            self.store.comments.setdefault(ticket_id, []).append(comment)

        logger.info("Comment added", ticket_id=ticket_id, comment_id=comment.id, author=author.id)
        return comment.model_copy(deep=True)

    # ---- users / auth ----

    def get_users(self) -> list[User]:
        self._simulate_latency()
        with self.store.lock:
            return [u.model_copy(deep=True) for u in self.store.users]

    def get_user(self, user_id: str) -> User:
        self._simulate_latency()
        with self.store.lock:
            user = next((u for u in self.store.users if u.id == user_id), None)
            if user is None:
                raise NotFoundError(f"User {user_id} not found")
            return user.model_copy(deep=True)

    def current_user(self) -> User:
        return self.identity.resolve_current_user().model_copy(deep=True)

    def login(self, email: str, password: str) -> AuthResult:
        # Mock auth: only the email is looked up, the password is never checked.
        self._simulate_latency()
        with self.store.lock:
            user = next((u for u in self.store.users if u.email == email), None)
        if user is None:
            logger.info("Login rejected", email=email)
            raise InvalidCredentialsError("Invalid credentials")

        logger.info("Login", user_id=user.id)
        return AuthResult(user=user.model_copy(deep=True), token=self.settings.auth_token)

    def register(self, data: RegisterInput) -> AuthResult:
        self._simulate_latency()
        now = _now()
        with self.store.lock:
            duplicate = any(u.email == data.email for u in self.store.users)
            user = User(name=data.name, email=data.email, role=data.role, created_at=now, updated_at=now)
            self.store.users.append(user)

        if duplicate:
            logger.warning("Registered user shares an existing email", email=data.email, user_id=user.id)
        logger.info("User registered", user_id=user.id, role=user.role.value)
        return AuthResult(user=user.model_copy(deep=True), token=self.settings.auth_token)

    # ---- helpers (callers hold the store lock) ----

    def _find_ticket(self, ticket_id: str) -> Optional[Ticket]:
        return next((t for t in self.store.tickets if t.id == ticket_id), None)

    def _ticket_index(self, ticket_id: str) -> Optional[int]:
        return next((i for i, t in enumerate(self.store.tickets) if t.id == ticket_id), None)

    def _user_ref(self, user_id: Optional[str]) -> Optional[UserRef]:
        if not user_id:
            return None
        user = next((u for u in self.store.users if u.id == user_id), None)
        if user is None:
            logger.warning("Assignee not found, leaving ticket unassigned", user_id=user_id)
            return None
        return user.ref()
