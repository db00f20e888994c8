"""Transport-side WebSocket handles and broadcast fan-out."""

import asyncio
import logging
import uuid
from typing import Any

from starlette.websockets import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)

SESSION_REPLACED_CLOSE_CODE = 4000


class WebSocketConnection:
    """A live socket with a server-assigned session id."""

    def __init__(self, websocket: WebSocket, session_id: str | None = None) -> None:
        self.websocket = websocket
        self.session_id = session_id or uuid.uuid4().hex
        self.terminated = False
        self._close_task: asyncio.Task | None = None

    def terminate(self) -> None:
        """Close the socket from the server side without waiting for it.

        Safe to call more than once and on a socket that is already closing.
        """
        if self.terminated:
            return
        self.terminated = True
        self._close_task = asyncio.get_running_loop().create_task(self._close())

    async def _close(self) -> None:
        try:
            await self.websocket.close(
                code=SESSION_REPLACED_CLOSE_CODE, reason="Session replaced"
            )
        except (WebSocketDisconnect, RuntimeError) as exc:
            # Already closed by the client or by the transport.
            logger.debug("Close of session %s skipped: %s", self.session_id, exc)

    async def send_json(self, payload: dict[str, Any]) -> None:
        if self.terminated:
            return
        await self.websocket.send_json(payload)


class ConnectionManager:
    """Track every accepted socket and broadcast JSON frames to them."""

    def __init__(self) -> None:
        self.connections: dict[str, WebSocketConnection] = {}

    def connect(self, connection: WebSocketConnection) -> None:
        self.connections[connection.session_id] = connection
        logger.debug("Socket %s added to open connections", connection.session_id)

    def disconnect(self, session_id: str) -> None:
        if self.connections.pop(session_id, None) is not None:
            logger.debug("Socket %s removed from open connections", session_id)

    async def broadcast(self, message: dict[str, Any]) -> None:
        """Send ``message`` to all open, non-terminated sockets concurrently."""
        targets = [
            connection
            for connection in list(self.connections.values())
            if not connection.terminated
        ]
        if not targets:
            return

        async def safe_send(connection: WebSocketConnection) -> None:
            try:
                await connection.send_json(message)
            except (WebSocketDisconnect, ConnectionError, RuntimeError) as exc:
                logger.warning(
                    "Failed to send to session %s: %s", connection.session_id, exc
                )
                self.disconnect(connection.session_id)

        await asyncio.gather(*[safe_send(connection) for connection in targets])


# Single instance shared across the application.
connection_manager = ConnectionManager()
