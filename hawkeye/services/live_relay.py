"""
Live relay for the stream page chat and viewer count.

Stateless fan-out over WebSockets: every inbound chat message is
rebroadcast to all open connections (sender included), and every
connect/disconnect broadcasts the current viewer count.

The connection set is only touched from the event loop, and no await
happens between reading and mutating it. Broadcasts iterate over a
snapshot. Delivery is best-effort with no ordering or persistence.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from ..config import Config
from ..models.enums import RelayMessageType

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class LiveRelay:
    """Tracks open relay connections and fans messages out to them."""

    def __init__(self):
        self._connections: set[WebSocket] = set()

    @property
    def viewer_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        """Accept a connection, announce the new count, greet the newcomer."""
        await websocket.accept()
        self._connections.add(websocket)
        logger.info(f"Relay client connected ({self.viewer_count} open)")

        await self.broadcast_viewer_count()
        await self._send(websocket, {
            "type": RelayMessageType.INFO.value,
            "message": Config.RELAY_WELCOME_MESSAGE,
            "timestamp": _timestamp(),
        })

    async def disconnect(self, websocket: WebSocket) -> None:
        """Forget a connection and announce the new count."""
        self._connections.discard(websocket)
        logger.info(f"Relay client disconnected ({self.viewer_count} open)")
        await self.broadcast_viewer_count()

    async def handle_message(self, websocket: WebSocket, raw: str) -> None:
        """Rebroadcast a chat message to everyone, the sender included."""
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Dropping unparseable relay message: {e}")
            return
        if not isinstance(data, dict):
            logger.warning("Dropping relay message that is not a JSON object")
            return

        await self.broadcast({
            "type": data.get("type") or RelayMessageType.MESSAGE.value,
            "sender": data.get("sender") or "Anonymous",
            "content": data.get("content"),
            "timestamp": _timestamp(),
        })

    async def broadcast_viewer_count(self) -> None:
        await self.broadcast({
            "type": RelayMessageType.VIEWERS.value,
            "count": self.viewer_count,
            "timestamp": _timestamp(),
        })

    async def broadcast(self, payload: dict[str, Any]) -> int:
        """
        Send a payload to every open connection.

        Connections that are no longer open, or whose send fails, are
        skipped and dropped from the set.

        Returns:
            Number of connections the payload was sent to
        """
        delivered = 0
        for websocket in list(self._connections):
            if websocket.client_state != WebSocketState.CONNECTED:
                self._connections.discard(websocket)
                continue
            if await self._send(websocket, payload):
                delivered += 1
            else:
                self._connections.discard(websocket)
        return delivered

    async def _send(self, websocket: WebSocket, payload: dict[str, Any]) -> bool:
        try:
            await websocket.send_json(payload)
            return True
        except Exception as e:
            logger.warning(f"Relay send failed, dropping connection: {e}")
            return False


# Singleton relay instance
_relay: Optional[LiveRelay] = None


def get_live_relay() -> LiveRelay:
    """Get or create the live relay singleton."""
    global _relay
    if _relay is None:
        _relay = LiveRelay()
    return _relay
