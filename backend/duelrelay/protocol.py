"""
Кодек сообщений: разбор входящих кадров и сборка исходящих payload.
Поле data у move не интерпретируется и пересылается как есть.
"""
import json
import logging
from typing import Any

from .constants import (
    MSG_ERROR,
    MSG_JOINED,
    MSG_MOVE,
    MSG_PEER_JOINED,
    MSG_PEER_LEFT,
    MSG_RESET,
    TYPE_KEY,
)

logger = logging.getLogger(__name__)


def decode(raw: str | bytes) -> dict[str, Any] | None:
    """
    Разбирает кадр. Возвращает dict с непустым типом или None,
    если это не JSON-объект с полем t.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning("WS: undecodable binary frame: %s", e)
            return None
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        logger.warning("WS: invalid JSON: %s", e)
        return None
    if not isinstance(data, dict) or not data.get(TYPE_KEY):
        logger.warning("WS: message without type dropped")
        return None
    return data


def room_code(data: dict[str, Any]) -> str:
    """Код комнаты из сообщения, обрезанный; пустая строка если его нет."""
    room = data.get("room")
    if not isinstance(room, str):
        return ""
    return room.strip()


def joined_payload(room: str, side: str) -> dict[str, Any]:
    return {TYPE_KEY: MSG_JOINED, "room": room, "side": side}


def error_payload(error: str) -> dict[str, Any]:
    return {TYPE_KEY: MSG_ERROR, "error": error}


def peer_joined_payload(side: str) -> dict[str, Any]:
    return {TYPE_KEY: MSG_PEER_JOINED, "side": side}


def peer_left_payload(room: str) -> dict[str, Any]:
    return {TYPE_KEY: MSG_PEER_LEFT, "room": room}


def move_payload(side: str, data: Any) -> dict[str, Any]:
    return {TYPE_KEY: MSG_MOVE, "from": side, "data": data}


def reset_payload() -> dict[str, Any]:
    return {TYPE_KEY: MSG_RESET}
