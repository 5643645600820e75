import enum
import uuid
from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


class UserRole(str, enum.Enum):
    USER = "USER"
    AGENT = "AGENT"
    ADMIN = "ADMIN"


class UserRef(SQLModel):
    """Embedded reference to a user, as carried on tickets and comments."""

    id: str
    name: str
    email: str = ""
    avatar: str = ""


class User(SQLModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    email: str
    role: UserRole = UserRole.USER
    avatar: str = ""

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def ref(self) -> UserRef:
        return UserRef(id=self.id, name=self.name, email=self.email, avatar=self.avatar)


class RegisterInput(SQLModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str
    role: UserRole = UserRole.USER


class LoginInput(SQLModel):
    email: str
    password: str


class AuthResult(SQLModel):
    user: User
    token: str
