"""
WebSocket endpoint for the live stream page.

Text and binary frames are both relayed; binary payloads are decoded as
UTF-8 with invalid bytes replaced.
"""

import logging
from typing import Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..config import Config
from ..services.live_relay import get_live_relay

logger = logging.getLogger(__name__)
router = APIRouter()


def frame_text(message: dict) -> Optional[str]:
    """Payload of a ``websocket.receive`` message as text, or None if empty."""
    if message.get("text") is not None:
        return message["text"]
    if message.get("bytes") is not None:
        return message["bytes"].decode("utf-8", "replace")
    return None


@router.websocket(Config.RELAY_PATH)
async def live_relay(websocket: WebSocket):
    relay = get_live_relay()
    await relay.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = frame_text(message)
            if raw is None:
                logger.warning("Dropping empty relay frame")
                continue
            await relay.handle_message(websocket, raw)
    except WebSocketDisconnect:
        pass
    finally:
        await relay.disconnect(websocket)
