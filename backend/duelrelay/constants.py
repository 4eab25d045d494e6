"""Константы протокола: стороны, типы сообщений, коды ошибок."""

# Стороны: первый вошедший в комнату получает X, второй получает O
SIDE_FIRST = "X"
SIDE_SECOND = "O"
SIDES = (SIDE_FIRST, SIDE_SECOND)

# Ключ-дискриминатор во всех сообщениях
TYPE_KEY = "t"

# Входящие
MSG_JOIN = "join"
MSG_MOVE = "move"
MSG_RESET = "reset"

# Исходящие
MSG_JOINED = "joined"
MSG_ERROR = "error"
MSG_PEER_JOINED = "peer_joined"
MSG_PEER_LEFT = "peer_left"

ERROR_MISSING_ROOM = "missing_room"
ERROR_ROOM_FULL = "room_full"
ERROR_INVALID_JSON = "invalid_json"

DEFAULT_HEARTBEAT_INTERVAL = 25.0
