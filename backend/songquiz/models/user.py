"""User ORM — local directory of identities seen from the identity provider.

Invariants:
    - id is the identity provider's stable user id (opaque string)
    - name is the latest display name the provider sent

Design Decisions:
    - Mirror table, not an account store: credentials live with the provider;
      this table exists so display names can be batch-resolved with one query
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from songquiz.db.base import Base


class User(Base):
    """Known user — id and display name."""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
