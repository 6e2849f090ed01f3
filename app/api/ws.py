"""
WebSocket feed of live check-ins for the dashboard
"""

import json
import logging
from typing import List
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from app.services.storage import DocumentStore, get_store
from app.services.repositories import CheckinRepo

logger = logging.getLogger(__name__)

class WebSocketManager:
    """Tracks connected dashboard sockets"""

    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.info(f"Dashboard connected. Total connections: {len(self.active_connections)}")

    def disconnect(self, websocket: WebSocket):
        try:
            self.active_connections.remove(websocket)
            logger.info(f"Dashboard disconnected. Remaining connections: {len(self.active_connections)}")
        except ValueError:
            pass

    async def send_personal_message(self, message: dict, websocket: WebSocket):
        try:
            await websocket.send_text(json.dumps(message))
        except (WebSocketDisconnect, RuntimeError) as e:
            logger.error(f"Error sending personal message: {e}")

    async def broadcast(self, message: dict):
        """Send to every dashboard; sockets that fail are dropped"""
        if not self.active_connections:
            return

        disconnected = []
        for websocket in self.active_connections.copy():
            try:
                await websocket.send_text(json.dumps(message))
            except (WebSocketDisconnect, RuntimeError) as e:
                logger.error(f"Error broadcasting to websocket: {e}")
                disconnected.append(websocket)

        for websocket in disconnected:
            self.disconnect(websocket)

    def get_connection_count(self) -> int:
        return len(self.active_connections)

# Global WebSocket manager instance
websocket_manager = WebSocketManager()

router = APIRouter()

@router.websocket("/checkins")
async def checkins_feed(websocket: WebSocket, store: DocumentStore = Depends(get_store)):
    """Push each new check-in to the connected dashboard"""
    await websocket_manager.connect(websocket)

    try:
        await websocket_manager.send_personal_message({
            "type": "connection",
            "total": CheckinRepo(store).count(),
            "connection_count": websocket_manager.get_connection_count(),
        }, websocket)

        while True:
            data = await websocket.receive_text()
            try:
                client_message = json.loads(data)
            except json.JSONDecodeError:
                logger.warning(f"Invalid JSON received from WebSocket: {data}")
                continue

            if client_message.get("type") == "ping":
                await websocket_manager.send_personal_message({
                    "type": "pong",
                    "timestamp": client_message.get("timestamp"),
                }, websocket)

    except WebSocketDisconnect:
        pass
    finally:
        websocket_manager.disconnect(websocket)
