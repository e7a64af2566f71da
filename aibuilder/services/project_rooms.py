# FILE: aibuilder/services/project_rooms.py
"""Live collaboration rooms: sockets joined to a project id receive the code
updates pushed by the other members of that room."""

import logging
from typing import Any, Dict, Set

from fastapi import WebSocket
from starlette.websockets import WebSocketState

logger = logging.getLogger("aibuilder.rooms")


def room_name(project_id: str) -> str:
    return f"project:{project_id}"


class ProjectRooms:
    def __init__(self):
        self._rooms: Dict[str, Set[WebSocket]] = {}

    def join(self, ws: WebSocket, project_id: str) -> None:
        self._rooms.setdefault(room_name(project_id), set()).add(ws)

    def leave_all(self, ws: WebSocket) -> None:
        for name in list(self._rooms):
            members = self._rooms[name]
            members.discard(ws)
            if not members:
                del self._rooms[name]

    def members(self, project_id: str) -> Set[WebSocket]:
        return set(self._rooms.get(room_name(project_id), ()))

    async def broadcast(self, project_id: str, message: Dict[str, Any], sender: WebSocket) -> int:
        """Send to everyone in the room except the sender; returns deliveries."""
        delivered = 0
        for ws in self.members(project_id):
            if ws is sender or ws.client_state != WebSocketState.CONNECTED:
                continue
            await ws.send_json(message)
            delivered += 1
        return delivered
