"""WebSocket router for the live incident feed."""

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from civicalert.websocket.manager import manager
from civicalert.websocket.schemas import ErrorMessage, PongMessage, SubscribeMessage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws/incidents")
async def websocket_incidents(websocket: WebSocket):
    """
    WebSocket endpoint for live incident feed updates.

    Protocol:
    - Client connects and receives every created or updated incident
    - Client may send a subscribe message to narrow by viewport and type
    - Server sends pong in response to ping for keep-alive

    Message formats:
    Client -> Server:
        {"type": "subscribe", "viewport": {"min_lat": 37.7, "max_lat": 37.8, "min_lng": -122.5, "max_lng": -122.4}, "types": ["fire", "medical"]}
        {"type": "ping"}

    Server -> Client:
        {"type": "incident_update", "data": [...], "timestamp": "2026-10-18T10:30:00Z"}
        {"type": "pong"}
        {"type": "error", "message": "..."}
    """
    await manager.connect(websocket)

    try:
        while True:
            raw_message = await websocket.receive_text()

            try:
                data = json.loads(raw_message)
                msg_type = data.get("type") if isinstance(data, dict) else None

                if msg_type == "subscribe":
                    msg = SubscribeMessage.model_validate(data)
                    await manager.update_subscription(
                        websocket,
                        viewport=msg.viewport,
                        types=msg.types,
                    )
                    logger.info(
                        f"Subscription updated: viewport={msg.viewport}, types={msg.types}"
                    )

                elif msg_type == "ping":
                    await websocket.send_json(PongMessage().model_dump())

                else:
                    error = ErrorMessage(message=f"Unknown message type: {msg_type}")
                    await websocket.send_json(error.model_dump())

            except json.JSONDecodeError:
                error = ErrorMessage(message="Invalid JSON")
                await websocket.send_json(error.model_dump())
            except ValidationError as e:
                error = ErrorMessage(message=f"Invalid subscription: {e.error_count()} error(s)")
                await websocket.send_json(error.model_dump())

    except WebSocketDisconnect:
        await manager.disconnect(websocket)
    except Exception as e:
        logger.exception(f"WebSocket error: {e}")
        await manager.disconnect(websocket)
