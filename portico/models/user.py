"""
Portico Backend — User SQLAlchemy Model
=========================================

What:  ORM model representing the `users` table.
Who:   Used by UserRepository for lookups and by Alembic for schema management.

Table notes:
    - id: BIGINT identity; also the JWT `sub` claim
    - username / email: unique, lookups accept either
    - password: PBKDF2 hash (see portico.security.passwords), never plain text
    - status: ACTIVATED | DEACTIVATED; only activated users may sign in
    - roles: JSON list of role names, e.g. ["USER", "ADMIN"]
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import JSON, BigInteger, DateTime, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from portico.database import Base

STATUS_ACTIVATED = "ACTIVATED"
STATUS_DEACTIVATED = "DEACTIVATED"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """An account that can obtain access tokens."""

    __tablename__ = "users"

    # Integer variant keeps SQLite autoincrement working in tests
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=STATUS_ACTIVATED,
        server_default=text(f"'{STATUS_ACTIVATED}'"),
    )
    roles: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    @property
    def is_activated(self) -> bool:
        return self.status == STATUS_ACTIVATED

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}', status='{self.status}')>"
