import socket
from json import JSONDecodeError
from typing import Any, Callable

import uvicorn
from fastapi import BackgroundTasks, FastAPI, Request, Response

from groupme_relay.util import log
from groupme_relay.util.config import config


def create_callback_app(on_callback: Callable[[Any], None]) -> FastAPI:
    app = FastAPI(
        docs_url = None,
        redoc_url = None,
        openapi_url = None,
        title = "GroupMe callback listener",
        version = config.version,
    )

    @app.post("/")
    async def receive_callback(request: Request, offloader: BackgroundTasks) -> Response:
        try:
            body = await request.json()
        except (JSONDecodeError, UnicodeDecodeError) as e:
            log.w(f"Ignoring a callback whose body is not JSON: {e}")
            return Response(status_code = 200)
        # acknowledge right away, handlers run after the response is sent
        offloader.add_task(on_callback, body)
        return Response(status_code = 200)

    return app


class CallbackServer(uvicorn.Server):
    """A uvicorn server that reports back once its sockets are bound."""
    __on_ready: Callable[[], None]

    def __init__(self, server_config: uvicorn.Config, on_ready: Callable[[], None]):
        super().__init__(server_config)
        self.__on_ready = on_ready

    async def startup(self, sockets: list[socket.socket] | None = None) -> None:
        await super().startup(sockets = sockets)
        if self.started:
            self.__on_ready()
