"""
Менеджер WebSocket: учёт живых подключений и транспорт поверх Starlette.
У каждого подключения своя очередь исходящих и задача-писатель,
так что send() не ждёт медленного клиента и порядок сообщений сохраняется.
"""
import asyncio
import logging
from typing import Any

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from .connection import Connection

logger = logging.getLogger(__name__)

CLOSE_GOING_AWAY = 1001


class WebSocketConnection(Connection):
    def __init__(self, ws: WebSocket):
        super().__init__()
        self.ws = ws
        self._outbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        self._writer: asyncio.Task | None = None
        self._closer: asyncio.Task | None = None

    def __repr__(self) -> str:
        return f"<WebSocketConnection {self.ws.client} room={self.room}>"

    def start(self) -> None:
        self._writer = asyncio.create_task(self._pump())

    def detach(self) -> None:
        """Клиент уже отключился: просто останавливаем писателя."""
        self.closed = True
        if self._writer:
            self._writer.cancel()

    def _deliver(self, payload: dict[str, Any]) -> None:
        self._outbox.put_nowait(payload)

    def _ping(self) -> None:
        # ping-кадры шлёт uvicorn (ws_ping_interval) и сам закрывает соединение без pong;
        # пока обе стороны ASGI-сокета открыты, pong считается полученным
        if (
            self.ws.client_state is WebSocketState.CONNECTED
            and self.ws.application_state is WebSocketState.CONNECTED
        ):
            self.is_alive = True

    def _close(self) -> None:
        if self._writer:
            self._writer.cancel()
        self._closer = asyncio.create_task(self._close_ws())

    async def _pump(self) -> None:
        while True:
            payload = await self._outbox.get()
            try:
                await self.ws.send_json(payload)
            except Exception as e:
                logger.warning("WS: send to %s failed: %s", self.ws.client, e)
                self.closed = True
                return

    async def _close_ws(self) -> None:
        try:
            await self.ws.close(code=CLOSE_GOING_AWAY)
        except Exception as e:
            logger.debug("WS: close %s: %s", self.ws.client, e)


class WSManager:
    def __init__(self):
        self._all: set[WebSocketConnection] = set()

    def __len__(self) -> int:
        return len(self._all)

    def connect(self, ws: WebSocket) -> WebSocketConnection:
        conn = WebSocketConnection(ws)
        self._all.add(conn)
        conn.start()
        return conn

    def disconnect(self, conn: Connection) -> None:
        self._all.discard(conn)

    def connections(self) -> list[Connection]:
        return list(self._all)
