"""WebSocket module for the live incident feed."""

from civicalert.websocket.manager import ConnectionManager
from civicalert.websocket.router import router as websocket_router

__all__ = ["ConnectionManager", "websocket_router"]
