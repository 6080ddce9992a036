"""Live feed subscribers and fan-out of incident changes."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

from fastapi import WebSocket

from civicalert.schemas.incident import Incident, IncidentType
from civicalert.websocket.schemas import IncidentUpdateMessage, Viewport

logger = logging.getLogger(__name__)

SEND_TIMEOUT_SECONDS = 5.0


@dataclass
class ClientSubscription:
    """Filters chosen by one feed client. Empty filters match everything."""

    websocket: WebSocket
    viewport: Viewport | None = None
    types: set[IncidentType] = field(default_factory=set)
    connected_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def matches(self, incident: Incident) -> bool:
        if self.types and incident.type not in self.types:
            return False
        if self.viewport is None:
            return True
        return self.viewport.contains(incident.latitude, incident.longitude)


class ConnectionManager:
    """
    Registry of live feed clients.

    Single-process only, like the incident service that feeds it.
    """

    def __init__(self, send_timeout: float = SEND_TIMEOUT_SECONDS):
        self.send_timeout = send_timeout
        self._connections: dict[WebSocket, ClientSubscription] = {}
        self._lock = asyncio.Lock()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self._connections[websocket] = ClientSubscription(websocket=websocket)
        logger.info(f"Feed client connected ({self.connection_count} open)")

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            removed = self._connections.pop(websocket, None)
        if removed is not None:
            logger.info(f"Feed client disconnected ({self.connection_count} open)")

    async def update_subscription(
        self,
        websocket: WebSocket,
        viewport: Viewport | None = None,
        types: list[IncidentType] | None = None,
    ) -> None:
        """Replace whichever filters are given; omitted ones stay as they were."""
        async with self._lock:
            subscription = self._connections.get(websocket)
            if subscription is None:
                return
            if viewport is not None:
                subscription.viewport = viewport
            if types is not None:
                subscription.types = set(types)
        logger.debug(f"Subscription updated: viewport={viewport}, types={types}")

    async def broadcast(self, incidents: list[Incident]) -> None:
        """
        Send each subscriber the incidents that match its filters.

        Sends happen outside the connection lock with a per-client timeout;
        a client that errors or stalls is dropped from the feed.
        """
        if not incidents:
            return

        async with self._lock:
            subscriptions = list(self._connections.values())

        message_time = datetime.now(UTC)
        deliveries = []
        for subscription in subscriptions:
            matching = [i for i in incidents if subscription.matches(i)]
            if matching:
                message = IncidentUpdateMessage(data=matching, timestamp=message_time)
                deliveries.append(self._deliver(subscription.websocket, message))

        if deliveries:
            await asyncio.gather(*deliveries)
            logger.debug(f"Sent {len(incidents)} incidents to {len(deliveries)} subscribers")

    async def _deliver(self, websocket: WebSocket, message: IncidentUpdateMessage) -> None:
        try:
            await asyncio.wait_for(
                websocket.send_json(message.model_dump(mode="json")),
                timeout=self.send_timeout,
            )
        except Exception as e:
            logger.warning(f"Dropping feed client after failed send: {e!r}")
            await self.disconnect(websocket)


# Shared by the feed endpoint and the incident service listener
manager = ConnectionManager()
