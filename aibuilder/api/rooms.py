# FILE: aibuilder/api/rooms.py
"""
WebSocket endpoint for project rooms.

Client messages are JSON ``{"event": ..., "data": ...}``:
- ``join-project`` with the project id; answered with ``joined``.
- ``code-update`` with ``{projectId, code}``; the code is pushed to the other
  members of that project's room as ``code-updated``.
- ``ping``; answered with ``pong``.
"""
import logging
import uuid
from typing import Any, Dict

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

router = APIRouter(tags=["rooms"])
logger = logging.getLogger("aibuilder.rooms")


async def send_event(ws: WebSocket, event: str, data: Any = None):
    """Send an event to the WebSocket if still connected."""
    if ws.client_state == WebSocketState.CONNECTED:
        await ws.send_json({"event": event, "data": data})


@router.websocket("/ws")
async def project_socket(websocket: WebSocket):
    rooms = websocket.app.state.project_rooms
    socket_id = uuid.uuid4().hex[:12]
    await websocket.accept()
    logger.info(f"Client connected: {socket_id}")

    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                await send_event(websocket, "error", "Invalid message")
                continue
            if not isinstance(message, dict):
                await send_event(websocket, "error", "Invalid message")
                continue

            event = message.get("event")
            data = message.get("data")

            if event == "join-project":
                project_id = str(data or "").strip()
                if not project_id:
                    await send_event(websocket, "error", "Project id required")
                    continue
                rooms.join(websocket, project_id)
                logger.info(f"Socket {socket_id} joined project {project_id}")
                await send_event(websocket, "joined", project_id)

            elif event == "code-update":
                update: Dict[str, Any] = data if isinstance(data, dict) else {}
                project_id = str(update.get("projectId") or "").strip()
                if not project_id:
                    await send_event(websocket, "error", "Project id required")
                    continue
                await rooms.broadcast(
                    project_id,
                    {"event": "code-updated", "data": update.get("code", "")},
                    sender=websocket,
                )

            elif event == "ping":
                await send_event(websocket, "pong")

            else:
                await send_event(websocket, "error", f"Unknown event: {event}")

    except WebSocketDisconnect:
        pass
    finally:
        rooms.leave_all(websocket)
        logger.info(f"Client disconnected: {socket_id}")
