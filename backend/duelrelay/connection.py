"""
Соединение с точки зрения ядра: флаг живости, код текущей комнаты
и операции транспорта send, ping, terminate.
"""
from typing import Any


class Connection:
    """
    Базовый дескриптор соединения. Транспорт переопределяет _deliver, _close и _ping.
    Идентичность по ссылке (хешируется как object).
    """

    def __init__(self) -> None:
        self.is_alive = True
        self.room: str | None = None
        self.closed = False

    def send(self, payload: dict[str, Any]) -> None:
        """Отправка без ожидания; на закрытом соединении ничего не делает."""
        if self.closed:
            return
        self._deliver(payload)

    def ping(self) -> None:
        """Проба живости на уровне транспорта; ответ приходит как Event.PONG."""
        if self.closed:
            return
        self._ping()

    def terminate(self) -> None:
        """Принудительно закрыть. Повторный вызов ничего не делает."""
        if self.closed:
            return
        self.closed = True
        self._close()

    def _deliver(self, payload: dict[str, Any]) -> None:
        raise NotImplementedError

    def _close(self) -> None:
        raise NotImplementedError

    def _ping(self) -> None:
        raise NotImplementedError
