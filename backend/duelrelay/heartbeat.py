"""
Проверка живости: раз в interval секунд каждое подключение пробуется транспортным ping.
Кто не ответил до следующего тика, закрывается и проходит обычную очистку.
"""
import asyncio
import logging

from .constants import DEFAULT_HEARTBEAT_INTERVAL
from .relay import Event, RelayCoordinator

logger = logging.getLogger(__name__)


class LivenessSweeper:
    def __init__(self, manager, coordinator: RelayCoordinator, interval: float = DEFAULT_HEARTBEAT_INTERVAL):
        self.manager = manager
        self.coordinator = coordinator
        self.interval = interval
        self._task: asyncio.Task | None = None

    def sweep(self) -> int:
        """Один тик. Возвращает число закрытых подключений."""
        terminated = 0
        for conn in self.manager.connections():
            if not conn.is_alive:
                logger.info("WS: no pong from %r, terminating", conn)
                conn.terminate()
                self.coordinator.dispatch(conn, Event.CLOSE)
                self.manager.disconnect(conn)
                terminated += 1
                continue
            conn.is_alive = False
            conn.ping()
        return terminated

    async def run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.sweep()
            except Exception as e:
                logger.exception("WS: heartbeat tick failed: %s", e)

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
