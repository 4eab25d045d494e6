"""
Обработка событий соединения: join, move, reset; pong и close/error от транспорта.
Одна точка входа: RelayCoordinator.dispatch. Содержимое ходов не разбирается.
"""
import logging
from enum import Enum
from typing import Any

from .connection import Connection
from .constants import (
    ERROR_MISSING_ROOM,
    ERROR_ROOM_FULL,
    MSG_JOIN,
    MSG_MOVE,
    MSG_RESET,
    TYPE_KEY,
)
from .protocol import (
    decode,
    error_payload,
    joined_payload,
    move_payload,
    peer_joined_payload,
    peer_left_payload,
    reset_payload,
    room_code,
)
from .rooms import RoomRegistry

logger = logging.getLogger(__name__)


class Event(str, Enum):
    MESSAGE = "message"
    PONG = "pong"
    CLOSE = "close"
    ERROR = "error"


class RelayCoordinator:
    def __init__(self, registry: RoomRegistry):
        self.registry = registry

    def dispatch(self, conn: Connection, event: Event, raw: str | bytes | None = None) -> None:
        if event is Event.MESSAGE:
            self.handle_message(conn, raw)
        elif event is Event.PONG:
            conn.is_alive = True
        elif event is Event.CLOSE:
            logger.info("WS: close room=%s", conn.room)
            self.leave(conn)
        elif event is Event.ERROR:
            logger.warning("WS: transport error room=%s", conn.room)
            self.leave(conn)

    def handle_message(self, conn: Connection, raw: str | bytes | None) -> None:
        """Один кадр от клиента. Битый ввод отбрасывается без ответа."""
        if raw is None or conn.closed:
            return
        data = decode(raw)
        if data is None:
            return
        # любой разобранный кадр считается признаком жизни
        conn.is_alive = True
        t = data[TYPE_KEY]
        logger.debug("WS: msg type=%s room=%s", t, conn.room)
        if t == MSG_JOIN:
            self._join(conn, data)
        elif t == MSG_MOVE:
            self._move(conn, data)
        elif t == MSG_RESET:
            self._reset(conn, data)
        else:
            logger.debug("WS: unknown type %r ignored", t)

    def leave(self, conn: Connection) -> None:
        """Выход из текущей комнаты; оставшийся участник получает peer_left."""
        room = self.registry.leave(conn)
        if room is None:
            return
        for peer in room.others(conn):
            peer.send(peer_left_payload(room.code))

    def _join(self, conn: Connection, data: dict[str, Any]) -> None:
        code = room_code(data)
        if not code:
            conn.send(error_payload(ERROR_MISSING_ROOM))
            return
        # Уже в комнате: сначала выходим, как при закрытии
        self.leave(conn)
        side = self.registry.join(conn, code)
        if side is None:
            logger.info("WS: room %s is full", code)
            conn.send(error_payload(ERROR_ROOM_FULL))
            return
        logger.info("WS: joined room=%s side=%s", code, side)
        conn.send(joined_payload(code, side))
        self._broadcast(code, peer_joined_payload(side), exclude=conn)

    def _move(self, conn: Connection, data: dict[str, Any]) -> None:
        code = room_code(data)
        side = self.registry.side_of(conn, code)
        if side is None:
            return
        self._broadcast(code, move_payload(side, data.get("data")), exclude=conn)

    def _reset(self, conn: Connection, data: dict[str, Any]) -> None:
        code = room_code(data)
        if self.registry.member_room(conn, code) is None:
            return
        self._broadcast(code, reset_payload(), exclude=conn)

    def _broadcast(self, code: str, payload: dict[str, Any], exclude: Connection | None = None) -> None:
        for peer in self.registry.peers(code, exclude):
            peer.send(payload)
