# File: fellowship/api/v1/endpoints/realtime.py
import asyncio
import json
import logging
from typing import Any, Dict, Optional, Tuple

from fastapi import APIRouter, Depends, WebSocket, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker

from fellowship import crud
from fellowship.api import deps
from fellowship.core.config import settings
from fellowship.core.security import resolve_session
from fellowship.core.websocket_manager import ClientConnection, ConnectionRegistry
from fellowship.db.database import get_session_factory
from fellowship.models.user import UserRole

logger = logging.getLogger(__name__)
router = APIRouter()

INVALID_MESSAGE = "invalid message"
NO_TENANT = "no tenant"
ACCESS_DENIED = "access denied"
SUBSCRIPTION_LIMIT = "subscription limit reached"


def _load_identity(session_factory: sessionmaker, cookie: Optional[str]) -> Optional[Tuple[str, Optional[str], Optional[UserRole]]]:
    db = session_factory()
    try:
        user = resolve_session(db, cookie)
        if user is None:
            return None
        return user.id, user.tenant_id, user.role
    finally:
        db.close()


def _load_channel_ids(session_factory: sessionmaker, tenant_id: str) -> set:
    db = session_factory()
    try:
        return set(crud.channel.get_ids_by_tenant(db, tenant_id=tenant_id))
    finally:
        db.close()


async def _deny(websocket: WebSocket) -> None:
    """Refuse the upgrade before any socket-level exchange."""
    if "websocket.http.response" in websocket.scope.get("extensions", {}):
        await websocket.send_denial_response(
            JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"error": "unauthenticated", "message": "Authentication required"},
            )
        )
    else:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)


def _parse_frame(message: Dict[str, Any]) -> Optional[str]:
    """Return the channel id of a well-formed subscribe frame, else None."""
    text = message.get("text")
    if text is None:
        return None
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict) or data.get("type") != "subscribe":
        return None
    channel_id = data.get("channelId")
    if not isinstance(channel_id, str) or not channel_id:
        return None
    return channel_id


async def _handle_subscribe(
    connection: ClientConnection,
    channel_id: str,
    registry: ConnectionRegistry,
    session_factory: sessionmaker,
) -> None:
    # Privilege is the one captured at handshake; channel membership is re-read each time
    if not connection.is_platform_admin:
        if not connection.tenant_id:
            connection.push({"type": "error", "message": NO_TENANT})
            return
        channel_ids = await run_in_threadpool(_load_channel_ids, session_factory, connection.tenant_id)
        if channel_id not in channel_ids:
            logger.warning(f"Denied subscribe to {channel_id} for user {connection.account_id}")
            connection.push({"type": "error", "message": ACCESS_DENIED})
            return

    if not registry.subscribe(connection, channel_id):
        connection.push({"type": "error", "message": SUBSCRIPTION_LIMIT})
        return

    connection.push({"type": "subscribed", "channelId": channel_id})


@router.websocket("/ws")
async def realtime_socket(
    websocket: WebSocket,
    registry: ConnectionRegistry = Depends(deps.get_registry),
    session_factory: sessionmaker = Depends(get_session_factory),
) -> None:
    cookie = websocket.cookies.get(settings.SESSION_COOKIE_NAME)
    identity = await run_in_threadpool(_load_identity, session_factory, cookie)
    if identity is None or identity[2] is None:
        logger.info("Rejected socket upgrade without a valid session")
        await _deny(websocket)
        return

    account_id, tenant_id, role = identity
    await websocket.accept()

    connection = ClientConnection(websocket, account_id=account_id, tenant_id=tenant_id, role=role)
    registry.register(connection)
    writer = asyncio.create_task(connection.run_writer())

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            channel_id = _parse_frame(message)
            if channel_id is None:
                connection.push({"type": "error", "message": INVALID_MESSAGE})
                continue
            await _handle_subscribe(connection, channel_id, registry, session_factory)
    finally:
        registry.disconnect(connection)
        writer.cancel()
