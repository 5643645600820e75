import uuid
from datetime import datetime, timezone

from sqlmodel import Field, SQLModel

from ticketdesk.models.user import UserRef


class Comment(SQLModel):
    id: str = Field(default_factory=lambda: f"c{uuid.uuid4().hex}")
    content: str
    author: UserRef
    ticket_id: str

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CommentCreate(SQLModel):
    content: str = Field(min_length=1)
