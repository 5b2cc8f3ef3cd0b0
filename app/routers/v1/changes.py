"""Live change feed over WebSocket.

Clients connect to ``/api/v1/changes/ws`` and receive one JSON message per
database change (vendors, categories, actions, conversations), each with the
notification text to show, if any. Clients may send ``{"type": "ping"}`` as a
keep-alive and get ``{"type": "pong"}`` back; other frames are ignored.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.core.change_feed import ChangeEvent, change_feed

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/changes", tags=["Changes"])


async def _forward(websocket: WebSocket, queue: asyncio.Queue[ChangeEvent]) -> None:
    while True:
        event = await queue.get()
        await websocket.send_json(
            {"type": "change", **event.model_dump(mode="json", by_alias=True)}
        )


@router.websocket("/ws")
async def change_stream(websocket: WebSocket):
    await websocket.accept()
    async with change_feed.subscribe() as queue:
        logger.info("Change feed subscriber connected (%d total)", change_feed.subscriber_count)
        await websocket.send_json({"type": "connected"})
        forwarder = asyncio.create_task(_forward(websocket, queue))
        try:
            while True:
                data = _parse(await websocket.receive_text())
                if isinstance(data, dict) and data.get("type") == "ping":
                    await websocket.send_json({"type": "pong"})
        except WebSocketDisconnect:
            logger.info("Change feed subscriber disconnected")
        finally:
            forwarder.cancel()
            (outcome,) = await asyncio.gather(forwarder, return_exceptions=True)
            if isinstance(outcome, Exception):
                logger.warning("Change feed forwarding stopped: %s", outcome)


def _parse(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        logger.debug("Ignoring non-JSON frame on change feed")
        return None
