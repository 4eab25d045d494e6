"""
Цикл приёма одного WebSocket-подключения.
Кадры передаются координатору; при отключении или ошибке идёт та же очистка, что и при close.
"""
import logging

from fastapi import WebSocket
from starlette.websockets import WebSocketDisconnect

from .relay import Event, RelayCoordinator
from .ws_manager import WSManager

logger = logging.getLogger(__name__)


async def ws_loop(ws: WebSocket, manager: WSManager, coordinator: RelayCoordinator) -> None:
    await ws.accept()
    conn = manager.connect(ws)
    logger.info("WS: accepted %s", ws.client)
    event = Event.CLOSE
    try:
        while True:
            message = await ws.receive()
            if message["type"] == "websocket.disconnect":
                logger.info("WS: client disconnected code=%s %s", message.get("code"), ws.client)
                break
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes")
            coordinator.dispatch(conn, Event.MESSAGE, raw)
    except WebSocketDisconnect as e:
        logger.info("WS: client disconnected code=%s %s", e.code, ws.client)
    except Exception as e:
        event = Event.ERROR
        logger.exception("WS: error %s: %s", ws.client, e)
    finally:
        conn.detach()
        coordinator.dispatch(conn, event)
        manager.disconnect(conn)
