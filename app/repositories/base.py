"""Generic async repository with pagination and change-feed publishing."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.change_feed import ChangeFeed, ChangeType, change_feed, publish_on_commit
from app.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


def snapshot(instance: Base) -> dict[str, Any]:
    """Column values of a row as a JSON-friendly dict (dates as ISO strings)."""
    record: dict[str, Any] = {}
    for column in instance.__table__.columns:
        value = getattr(instance, column.key)
        if isinstance(value, (date, datetime)):
            value = value.isoformat()
        record[column.key] = value
    return record


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository.

    Every write queues an INSERT, UPDATE or DELETE on ``model.__tablename__``
    for the change feed; it goes out when the session commits.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession, feed: ChangeFeed | None = None):
        self._session = session
        self._feed = feed or change_feed

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _base_query(self):
        return select(self.model)

    def _publish(self, event_type: ChangeType, record: dict[str, Any]) -> None:
        publish_on_commit(
            self._session.sync_session, self._feed, self.model.__tablename__, event_type, record
        )

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: str) -> ModelT | None:
        result = await self._session.execute(
            self._base_query()
            .where(self.model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    def _filtered(self, filters: dict[str, Any] | None):
        """Base query narrowed by column equality; None values and unknown columns are ignored."""
        q = self._base_query()
        for column, value in (filters or {}).items():
            if value is not None and hasattr(self.model, column):
                q = q.where(getattr(self.model, column) == value)
        return q

    async def list(
        self,
        *,
        offset: int = 0,
        limit: int = 50,
        order_by: str = "name",
        order: str = "asc",
        filters: dict[str, Any] | None = None,
    ) -> tuple[list[ModelT], int]:
        """One page of rows plus the total row count matching the filters."""
        q = self._filtered(filters)
        total = (
            await self._session.execute(select(func.count()).select_from(q.subquery()))
        ).scalar_one()

        column = getattr(self.model, order_by, None)
        if column is None:
            column = self.model.created_at
        q = q.order_by(column.desc() if order == "desc" else column.asc(), self.model.id)
        page = await self._session.execute(q.offset(offset).limit(limit))
        return list(page.scalars().all()), total

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> ModelT:
        instance = self.model(**kwargs)
        self._session.add(instance)
        await self._session.flush()  # populate id and server defaults
        await self._session.refresh(instance)
        self._publish(ChangeType.INSERT, snapshot(instance))
        return instance

    async def update(self, entity_id: str, **kwargs: Any) -> ModelT | None:
        kwargs.pop("id", None)
        if "updated_at" not in kwargs and hasattr(self.model, "updated_at"):
            kwargs["updated_at"] = datetime.now(timezone.utc)

        await self._session.execute(
            update(self.model).where(self.model.id == entity_id).values(**kwargs)
        )
        await self._session.flush()
        instance = await self.get_by_id(entity_id)
        if instance is not None:
            self._publish(ChangeType.UPDATE, snapshot(instance))
        return instance

    async def delete(self, entity_id: str) -> bool:
        result = await self._session.execute(
            delete(self.model).where(self.model.id == entity_id)
        )
        await self._session.flush()
        deleted = result.rowcount > 0
        if deleted:
            self._publish(ChangeType.DELETE, {"id": entity_id})
        return deleted
