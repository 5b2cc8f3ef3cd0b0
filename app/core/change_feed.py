"""In-process change feed — row-level INSERT/UPDATE/DELETE events for live dashboards.

Repositories queue an event on the session for every write. The events are
published once the session commits and dropped if it rolls back, so
subscribers only see changes that reached the database, in order. Each event carries the notification text the dashboard shows
for it (``message``), or ``None`` when the change is silent.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import Field
from sqlalchemy import event
from sqlalchemy.orm import Session

from app.schemas.common import CamelModel

logger = logging.getLogger(__name__)


class ChangeType(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class ChangeEvent(CamelModel):
    table: str
    event_type: ChangeType
    record: dict[str, Any] = Field(default_factory=dict)
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def describe_change(table: str, event_type: ChangeType, record: dict[str, Any]) -> Optional[str]:
    """Return the notification text for a change, or None for silent changes."""
    if table == "vendors":
        if event_type is ChangeType.INSERT:
            return f'New vendor "{record.get("name")}" added'
        if event_type is ChangeType.UPDATE:
            return f'Vendor "{record.get("name")}" updated'
        return "Vendor removed"
    if table == "vendor_categories":
        if event_type is ChangeType.UPDATE and record.get("selected_vendor_id"):
            return f"Vendor selected for {record.get('name')}"
        return None
    if table == "ai_actions":
        if event_type is ChangeType.INSERT and record.get("requires_human_input"):
            return f"Action required: {record.get('description')}"
    return None


class ChangeFeed:
    """Fan-out of change events to any number of subscriber queues."""

    def __init__(self, max_queue_size: int = 100) -> None:
        self._subscribers: set[asyncio.Queue[ChangeEvent]] = set()
        self._max_queue_size = max_queue_size

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @asynccontextmanager
    async def subscribe(self) -> AsyncIterator[asyncio.Queue[ChangeEvent]]:
        queue: asyncio.Queue[ChangeEvent] = asyncio.Queue(maxsize=self._max_queue_size)
        self._subscribers.add(queue)
        try:
            yield queue
        finally:
            self._subscribers.discard(queue)

    def publish(self, table: str, event_type: ChangeType, record: dict[str, Any]) -> ChangeEvent:
        event = ChangeEvent(
            table=table,
            event_type=event_type,
            record=record,
            message=describe_change(table, event_type, record),
        )
        logger.debug("Change detected: %s %s", event_type.value, table)
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                logger.warning("Dropping change event for a slow subscriber (%s)", table)
        return event


# Process-wide feed shared by repositories and the WebSocket router
change_feed = ChangeFeed()


# ---------------------------------------------------------------------------
# Transactional publishing
# ---------------------------------------------------------------------------

_PENDING_KEY = "pending_changes"


def publish_on_commit(
    session: Session,
    feed: ChangeFeed,
    table: str,
    event_type: ChangeType,
    record: dict[str, Any],
) -> None:
    """Hold a change on the session until its transaction commits."""
    session.info.setdefault(_PENDING_KEY, []).append((feed, table, event_type, record))


@event.listens_for(Session, "after_commit")
def _publish_committed(session: Session) -> None:
    for feed, table, event_type, record in session.info.pop(_PENDING_KEY, []):
        feed.publish(table, event_type, record)


@event.listens_for(Session, "after_rollback")
def _discard_rolled_back(session: Session) -> None:
    dropped = session.info.pop(_PENDING_KEY, [])
    if dropped:
        logger.debug("Discarding %d change events from a rolled-back transaction", len(dropped))
