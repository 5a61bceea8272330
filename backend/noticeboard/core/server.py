# noticeboard/core/server.py
"""
HTTP listener activation.
Runs the ASGI app under uvicorn and reports once the socket is bound.
"""
from typing import Callable, Optional
import uvicorn
from fastapi import FastAPI
from noticeboard.config import Settings


class NoticeBoardServer(uvicorn.Server):
    """
    uvicorn.Server that calls `on_listening` after startup has bound the socket.
    """

    def __init__(self, config: uvicorn.Config, on_listening: Optional[Callable[[], None]] = None):
        super().__init__(config)
        self._on_listening = on_listening

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        # startup() flags should_exit instead of raising when lifespan fails
        if self.started and not self.should_exit and self._on_listening is not None:
            self._on_listening()


async def serve(app: FastAPI, settings: Settings, on_listening: Optional[Callable[[], None]] = None) -> None:
    """
    Bind to settings.host:settings.port and serve until shutdown is requested.
    """
    config = uvicorn.Config(app, host=settings.host, port=settings.port)
    server = NoticeBoardServer(config, on_listening=on_listening)
    await server.serve()
