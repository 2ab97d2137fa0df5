"""User Directory — identity collaborator backed by the local users table.

Invariants:
    - Display names resolved in ONE query per call, whatever the number of ids
    - remember() is one INSERT .. ON CONFLICT: the newest display name from the
      identity provider wins, and concurrent first requests by one user never
      collide on users.id
    - Unknown ids are simply absent from the result (callers fall back to the id)

Design Decisions:
    - Identity is an explicit value passed into every handler, never ambient
      request state: handlers stay callable from tests without a request
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from songquiz.core.domain_types import UserId
from songquiz.core.errors import ResourceNotFoundError
from songquiz.models.user import User
from songquiz.services.conflict_insert import conflict_insert


@dataclass(frozen=True)
class Identity:
    """Already-authenticated acting user, as supplied by the identity provider."""
    user_id: UserId
    display_name: str | None = None


class UserDirectory:
    """Resolves and records display names. Implements DisplayNameResolver."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve_display_names(
        self, user_ids: Iterable[UserId],
    ) -> Mapping[UserId, str]:
        ids = set(user_ids)
        if not ids:
            return {}
        result = await self.db.execute(select(User).where(User.id.in_(ids)))
        return {UserId(u.id): u.name for u in result.scalars().all()}

    async def remember(self, identity: Identity) -> User:
        """Insert or refresh the user row. Caller commits."""
        stmt = conflict_insert(self.db, User.__table__).values(
            id=identity.user_id,
            name=identity.display_name or identity.user_id,
            updated_at=datetime.now(timezone.utc),
        )
        if identity.display_name:
            stmt = stmt.on_conflict_do_update(
                index_elements=["id"],
                set_={
                    "name": stmt.excluded.name,
                    "updated_at": stmt.excluded.updated_at,
                },
            )
        else:
            # No name from the provider: keep whatever we already know
            stmt = stmt.on_conflict_do_nothing(index_elements=["id"])
        await self.db.execute(stmt)
        return await self.db.get(User, identity.user_id, populate_existing=True)

    async def require(self, user_id: UserId) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise ResourceNotFoundError("User", user_id)
        return user
