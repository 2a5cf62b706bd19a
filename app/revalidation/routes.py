# =============================================================================
# app/revalidation/routes.py - Renderer Subscription Endpoint
# =============================================================================
# Connect: ws://host/ws/revalidate?token={REVALIDATION_TOKEN}
#
# Events:
#   - {"type": "connected"}
#   - {"type": "revalidate", "paths": ["/galeri", "/"]}
# =============================================================================

import hmac
import logging

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect

from app.config import Settings, get_settings
from app.revalidation.manager import renderer_manager

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws/revalidate")
async def revalidate_websocket(
    websocket: WebSocket,
    token: str = Query(default="", description="Renderer subscription token"),
    settings: Settings = Depends(get_settings),
):
    """
    WebSocket endpoint renderers use to learn which views to rebuild.

    When REVALIDATION_TOKEN is configured the `token` query parameter
    must match it.
    """
    expected = settings.REVALIDATION_TOKEN
    if expected and not hmac.compare_digest(token, expected):
        logger.warning("Renderer subscription rejected: bad token")
        await websocket.close(code=4001, reason="Invalid token")
        return

    await renderer_manager.connect(websocket)

    try:
        await websocket.send_json({"type": "connected"})

        # Keep connection alive and handle keepalive pings
        while True:
            data = await websocket.receive_text()
            if data == "ping":
                await websocket.send_text("pong")
            else:
                logger.debug(f"Renderer sent: {data[:100]}")

    except WebSocketDisconnect:
        logger.info("Renderer disconnected")
    finally:
        renderer_manager.disconnect(websocket)


@router.get("/ws/status")
async def revalidation_status():
    """Number of renderers currently subscribed."""
    return {"renderers": renderer_manager.get_connection_count()}
