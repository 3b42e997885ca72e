"""
DevConnector Backend — Profile SQLAlchemy Model
=================================================

What:  ORM model for the `profiles` table: one developer profile per user.
Who:   Used by ProfileRepository and ProfileService.

`skills` is a JSON list of strings; `social` is a JSON object keyed by network
(youtube, twitter, facebook, linkedin, instagram). The owner's name and avatar
are not copied here; they are joined from `users` when a profile is read.
"""

import uuid
from datetime import datetime, timezone
from typing import Dict, List

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from devconnector.database import Base
from devconnector.models.user import User


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(100), nullable=False)
    skills: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    githubusername: Mapped[str | None] = mapped_column(String(100), nullable=True)
    social: Mapped[Dict[str, str]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Owner, loaded eagerly for the name/avatar shown with each profile
    user: Mapped[User] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, user_id={self.user_id})>"
