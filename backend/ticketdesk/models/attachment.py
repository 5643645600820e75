import uuid
from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


class Attachment(SQLModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    url: str
    size: int = Field(default=0, ge=0)
    type: str = ""  # mime type
    uploaded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
