"""Shared repository plumbing.

Repositories read and stage writes; commit and rollback belong to services.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.teamkick.schemas.pagination import decode_cursor, encode_cursor

type Page[M] = tuple[list[M], str | None, bool]


class BaseRepository[ModelType: SQLModel]:
    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def _id(self) -> Any:
        return self.model.id  # type: ignore[attr-defined]

    async def get_by_id(self, id: int) -> ModelType | None:
        result = await self.session.execute(select(self.model).where(self._id == id))
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Stage an insert or update (no flush/commit)."""
        self.session.add(entity)

    async def paginate(self, query: Any, cursor: str | None, limit: int) -> Page[ModelType]:
        """Run ``query`` one page at a time, highest id first.

        An unreadable cursor restarts from the first page.

        Returns:
            (items, next_cursor, has_more)
        """
        if cursor:
            try:
                query = query.where(self._id < decode_cursor(cursor))
            except ValueError:
                pass

        result = await self.session.execute(query.order_by(self._id.desc()).limit(limit + 1))
        rows = list(result.scalars().all())

        has_more = len(rows) > limit
        items = rows[:limit]
        next_cursor = encode_cursor(items[-1].id) if has_more else None  # type: ignore[attr-defined]
        return items, next_cursor, has_more
