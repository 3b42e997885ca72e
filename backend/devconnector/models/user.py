"""
DevConnector Backend — User SQLAlchemy Model
==============================================

What:  ORM model for the `users` table: registered accounts and their credentials.
Who:   Read by the Auth Gate (via AuthService), the login handler, and post/comment
       creation (name and avatar are snapshot-stamped onto new records).
When:  Created on registration; deleted together with the owner's profile.

The password column holds a bcrypt hash, never the plain password, and is never
part of any response schema.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from devconnector.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Unique index doubles as the lookup path for login
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the user's password",
    )

    avatar: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Gravatar URL derived from the email at registration",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
