"""
Реестр комнат (in-memory): код -> Room.
Комната создаётся при первом join и удаляется, как только опустела.
"""
import logging
import threading
from dataclasses import dataclass, field

from .connection import Connection
from .constants import SIDES

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Room:
    code: str
    clients: set[Connection] = field(default_factory=set)
    sides: dict[Connection, str] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.clients

    def choose_side(self) -> str | None:
        """Первая свободная сторона или None, если комната заполнена."""
        used = set(self.sides.values())
        for side in SIDES:
            if side not in used:
                return side
        return None

    def others(self, conn: Connection | None) -> list[Connection]:
        return [c for c in self.clients if c is not conn]


class RoomRegistry:
    """
    Единственный источник правды о членстве и сторонах.
    Все операции под одним замком: ни одна не оставляет clients и sides рассогласованными.
    """

    def __init__(self) -> None:
        self._rooms: dict[str, Room] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

    def __contains__(self, code: str) -> bool:
        with self._lock:
            return code in self._rooms

    def get(self, code: str) -> Room | None:
        with self._lock:
            return self._rooms.get(code)

    def get_or_create(self, code: str) -> Room:
        with self._lock:
            room = self._rooms.get(code)
            if room is None:
                room = Room(code=code)
                self._rooms[code] = room
                logger.debug("room %s created", code)
            return room

    def remove_if_empty(self, code: str) -> bool:
        """Удалить комнату, если в ней никого. Возвращает True если удалили."""
        with self._lock:
            room = self._rooms.get(code)
            if room is None or not room.is_empty:
                return False
            del self._rooms[code]
            logger.debug("room %s removed", code)
            return True

    def join(self, conn: Connection, code: str) -> str | None:
        """
        Добавить соединение в комнату. Возвращает назначенную сторону
        или None, если обе стороны заняты (состояние не меняется).
        """
        with self._lock:
            room = self.get_or_create(code)
            side = room.choose_side()
            if side is None:
                return None
            room.clients.add(conn)
            room.sides[conn] = side
            conn.room = code
            return side

    def leave(self, conn: Connection) -> Room | None:
        """
        Убрать соединение из его комнаты (по закешированному коду).
        Возвращает покинутую комнату или None, если соединение нигде не состояло.
        """
        with self._lock:
            code = conn.room
            conn.room = None
            if code is None:
                return None
            room = self._rooms.get(code)
            if room is None or conn not in room.clients:
                return None
            room.clients.discard(conn)
            room.sides.pop(conn, None)
            self.remove_if_empty(code)
            return room

    def member_room(self, conn: Connection, code: str) -> Room | None:
        """Комната, если соединение действительно её участник."""
        with self._lock:
            room = self._rooms.get(code)
            if room is None or conn not in room.clients:
                return None
            return room

    def side_of(self, conn: Connection, code: str) -> str | None:
        room = self.member_room(conn, code)
        return room.sides.get(conn) if room else None

    def peers(self, code: str, exclude: Connection | None = None) -> list[Connection]:
        with self._lock:
            room = self._rooms.get(code)
            return room.others(exclude) if room else []

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {
                "rooms": len(self._rooms),
                "members": sum(len(r.clients) for r in self._rooms.values()),
            }
