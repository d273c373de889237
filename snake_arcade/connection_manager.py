"""WebSocket connection management and state serialization."""

import json
import logging

from fastapi import WebSocket

from .models import Snapshot, SpeedTier

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        self.connections: set[WebSocket] = set()

    async def connect(self, ws: WebSocket):
        await ws.accept()
        self.connections.add(ws)
        logger.info("client connected (%d open)", len(self.connections))

    def disconnect(self, ws: WebSocket):
        self.connections.discard(ws)
        logger.info("client disconnected (%d open)", len(self.connections))

    async def broadcast(self, message: str):
        disconnected = []
        for ws in list(self.connections):
            try:
                await ws.send_text(message)
            except Exception:
                logger.warning("dropping unreachable client", exc_info=True)
                disconnected.append(ws)
        for ws in disconnected:
            self.connections.discard(ws)

    async def send_personal(self, ws: WebSocket, message: str):
        await ws.send_text(message)


def build_state_msg(snapshot: Snapshot) -> str:
    return json.dumps({"type": "state", **snapshot.to_dict()})


def build_error_msg(detail: str) -> str:
    return json.dumps({"type": "error", "detail": detail})


def speeds_table() -> list[dict]:
    return [
        {"tier": t.value, "name": t.display_name, "interval_ms": t.interval_ms}
        for t in SpeedTier
    ]
