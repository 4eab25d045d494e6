"""Запуск: python -m duelrelay (или duel-relay)."""
import logging

import uvicorn

from .config import get_config
from .main import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    config = get_config()
    setup_logging(config.log_level)
    logger.info("Starting WS relay on %s:%s", config.host, config.port)
    uvicorn.run(
        "duelrelay.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower(),
        ws="websockets",
        # ping/pong-кадры протокола: uvicorn закрывает соединение, не ответившее за timeout
        ws_ping_interval=config.heartbeat_interval,
        ws_ping_timeout=config.heartbeat_interval,
    )


if __name__ == "__main__":
    main()
