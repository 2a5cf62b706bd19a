# =============================================================================
# app/revalidation/manager.py - Renderer WebSocket Connections
# =============================================================================
# Tracks the renderer processes subscribed to revalidation events and fans
# each event out to all of them.
# =============================================================================

import logging
from typing import Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class RendererConnectionManager:
    """
    Manages WebSocket connections from page renderers.

    Every renderer receives every event; there is no per-entity routing.
    """

    def __init__(self):
        self.connections: Set[WebSocket] = set()

    async def connect(self, websocket: WebSocket) -> None:
        """Accept a renderer connection and track it."""
        await websocket.accept()
        self.connections.add(websocket)
        logger.info(f"Renderer connected. Total renderers: {len(self.connections)}")

    def disconnect(self, websocket: WebSocket) -> None:
        """Stop tracking a renderer connection."""
        self.connections.discard(websocket)
        logger.info(f"Renderer disconnected. Total renderers: {len(self.connections)}")

    async def broadcast(self, message: dict) -> int:
        """
        Send a message to all connected renderers.

        Returns:
            int: Number of renderers the message was sent to
        """
        dead_connections: Set[WebSocket] = set()
        sent_count = 0

        for websocket in self.connections:
            try:
                await websocket.send_json(message)
                sent_count += 1
            except Exception as e:
                logger.warning(f"Failed to send to renderer: {e}")
                dead_connections.add(websocket)

        # Clean up any dead connections
        for ws in dead_connections:
            self.connections.discard(ws)

        if dead_connections:
            logger.info(f"Cleaned up {len(dead_connections)} dead renderer connections")

        logger.debug(f"Broadcast {message.get('type')} to {sent_count} renderers")
        return sent_count

    def get_connection_count(self) -> int:
        return len(self.connections)


# Process-wide registry of renderer sockets
renderer_manager = RendererConnectionManager()
