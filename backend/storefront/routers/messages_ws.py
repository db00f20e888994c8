"""Messages WebSocket gateway: presence updates and broadcast chat."""

import asyncio
import json
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from storefront.config import settings
from storefront.dependencies import get_connection_manager, get_connection_registry
from storefront.schemas.ws import MessageFromClientIn
from storefront.services.auth_service import user_id_from_access_token
from storefront.services.connection_registry import (
    ConnectionRegistry,
    SessionNotFound,
    UserInactive,
    UserNotFound,
)
from storefront.services.user_directory import DirectoryUnavailable
from storefront.services.ws_connections import ConnectionManager, WebSocketConnection

logger = logging.getLogger(__name__)

router = APIRouter(tags=["messages"])

AUTH_FAILED_CLOSE_CODE = 4001
SERVER_ERROR_CLOSE_CODE = 1011


async def _resolve_ws_token(websocket: WebSocket, query_token: str | None) -> str | None:
    """Resolve token from query string, handshake header or initial auth frame."""
    if query_token:
        return query_token

    header_token = websocket.headers.get("authentication")
    if header_token and header_token.strip():
        return header_token.strip()

    try:
        raw = await asyncio.wait_for(
            websocket.receive_text(), timeout=settings.ws_auth_timeout_seconds
        )
    except (asyncio.TimeoutError, WebSocketDisconnect, RuntimeError):
        return None

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(payload, dict) or payload.get("type") != "auth":
        return None
    token = payload.get("token")
    if not isinstance(token, str):
        return None
    stripped = token.strip()
    return stripped or None


async def _reject(websocket: WebSocket, message: str, code: int) -> None:
    try:
        await websocket.send_json({"type": "error", "message": message})
        await websocket.close(code=code, reason=message)
    except (WebSocketDisconnect, RuntimeError) as exc:
        logger.debug("Could not reject socket cleanly: %s", exc)


def _clients_updated(registry: ConnectionRegistry) -> dict:
    return {"type": "clients-updated", "clients": registry.list_active_session_ids()}


@router.websocket("/ws/messages")
async def websocket_messages(
    websocket: WebSocket,
    registry: Annotated[ConnectionRegistry, Depends(get_connection_registry)],
    manager: Annotated[ConnectionManager, Depends(get_connection_manager)],
    token: str | None = Query(default=None),
):
    """WebSocket endpoint for presence and broadcast messages."""
    await websocket.accept()

    connection = WebSocketConnection(websocket)
    session_id = connection.session_id

    try:
        resolved_token = await _resolve_ws_token(websocket, token)
        user_id = user_id_from_access_token(resolved_token or "")
        if user_id is None:
            await _reject(websocket, "Authentication failed", AUTH_FAILED_CLOSE_CODE)
            return

        try:
            await registry.register(connection, user_id)
        except UserNotFound:
            await _reject(websocket, "User not found", AUTH_FAILED_CLOSE_CODE)
            return
        except UserInactive:
            await _reject(websocket, "User is not active", AUTH_FAILED_CLOSE_CODE)
            return
        except DirectoryUnavailable:
            await _reject(websocket, "Service unavailable", SERVER_ERROR_CLOSE_CODE)
            return

        # Only registered sessions receive broadcasts.
        manager.connect(connection)
        await connection.send_json({"type": "session", "session_id": session_id})
        await manager.broadcast(_clients_updated(registry))

        while True:
            raw = await websocket.receive_text()

            try:
                data = json.loads(raw)
                if isinstance(data, dict) and data.get("type") == "auth":
                    continue
                payload = MessageFromClientIn.model_validate(data)
            except (json.JSONDecodeError, ValidationError):
                await connection.send_json(
                    {"type": "error", "message": "Invalid message format"}
                )
                continue

            try:
                full_name = registry.get_display_name(session_id)
            except SessionNotFound:
                # Evicted by a newer session for the same user.
                break

            await manager.broadcast({
                "type": "message-from-server",
                "full_name": full_name,
                "message": payload.message,
            })

    except WebSocketDisconnect:
        logger.info("WebSocket %s disconnected", session_id)
    except Exception as exc:
        logger.error("WebSocket error on %s: %s", session_id, exc)
        try:
            await websocket.send_json({"type": "error", "message": "Internal error"})
            await websocket.close()
        except (WebSocketDisconnect, RuntimeError):
            logger.debug("Socket %s already closed", session_id)
    finally:
        was_registered = session_id in registry
        await registry.unregister(session_id)
        manager.disconnect(session_id)
        if was_registered:
            await manager.broadcast(_clients_updated(registry))
