"""
Duel relay: HTTP-статус и WebSocket-ретранслятор для комнат на двоих.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .config import get_config
from .heartbeat import LivenessSweeper
from .relay import RelayCoordinator
from .rooms import RoomRegistry
from .ws_handlers import ws_loop
from .ws_manager import WSManager

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_app(heartbeat_interval: float | None = None) -> FastAPI:
    """
    Собирает приложение: свой реестр комнат, координатор и sweeper на каждый экземпляр.
    """
    config = get_config()
    registry = RoomRegistry()
    manager = WSManager()
    coordinator = RelayCoordinator(registry)
    sweeper = LivenessSweeper(
        manager,
        coordinator,
        heartbeat_interval if heartbeat_interval is not None else config.heartbeat_interval,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sweeper.start()
        logger.info("WS relay started, heartbeat every %ss", sweeper.interval)
        yield
        await sweeper.stop()

    app = FastAPI(title="Duel Relay", lifespan=lifespan)
    app.state.registry = registry
    app.state.manager = manager
    app.state.coordinator = coordinator
    app.state.sweeper = sweeper

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse)
    def index():
        return "WS relay running.\n"

    @app.get("/health")
    def health(request: Request):
        stats = request.app.state.registry.stats()
        return {
            "status": "ok",
            "rooms": stats["rooms"],
            "connections": len(request.app.state.manager),
        }

    @app.websocket("/")
    @app.websocket("/ws")
    async def websocket_endpoint(ws: WebSocket):
        logger.info("WS: connection attempt from %s", ws.client)
        await ws_loop(ws, manager, coordinator)

    return app


setup_logging(get_config().log_level)
app = create_app()
