import threading
from enum import Enum
from typing import Any

import uvicorn

from groupme_relay.model.callback import SenderType, parse_callback
from groupme_relay.relay.callback_server import CallbackServer, create_callback_app
from groupme_relay.relay.event_emitter import EventEmitter
from groupme_relay.relay.smee_tunnel import SmeeTunnel
from groupme_relay.util import log
from groupme_relay.util.config import config
from groupme_relay.util.errors import ParseError


class RelayEvent(str, Enum):
    ready = "ready"
    raw_callback = "raw_callback"
    callback = "callback"
    user_msg = "user_msg"
    system_msg = "system_msg"
    bot_msg = "bot_msg"


SENDER_TYPE_EVENTS: dict[str, RelayEvent] = {
    SenderType.user.value: RelayEvent.user_msg,
    SenderType.system.value: RelayEvent.system_msg,
    SenderType.bot.value: RelayEvent.bot_msg,
}


class EventRelay(EventEmitter):
    """
    Receives GroupMe bot callbacks through a smee.io channel and re-emits them as events.

    Register handlers first, then call `start()`. Every inbound POST produces a
    `raw_callback` with the untyped body, then a typed `callback` and one of
    `user_msg`, `system_msg` or `bot_msg` when the sender type is known.
    The webhook is always acknowledged with 200: a body that cannot be parsed is
    logged and dropped, and a failing handler is logged without stopping the
    emissions that follow it.
    """
    __relay_url: str
    __port: int
    __tunnel: SmeeTunnel | None
    __server: CallbackServer | None
    __server_thread: threading.Thread | None

    def __init__(self, relay_url: str, port: int):
        super().__init__()
        self.__relay_url = relay_url
        self.__port = port
        self.__tunnel = None
        self.__server = None
        self.__server_thread = None

    @property
    def relay_url(self) -> str:
        return self.__relay_url

    @property
    def port(self) -> int:
        return self.__port

    @property
    def is_listening(self) -> bool:
        return self.__server_thread is not None and self.__server_thread.is_alive()

    def start(self):
        if self.is_listening:
            log.w(f"Relay is already listening on port {self.__port}")
            return
        self.__release()
        log.i(f"Starting relay {self.__relay_url} -> port {self.__port}")

        # the tunnel's chatter stays quiet, its failures still reach the error log
        tunnel = SmeeTunnel(
            source = self.__relay_url,
            target = f"http://{config.tunnel_target_host}:{self.__port}",
            verbose = False,
        )
        tunnel.start()

        server_config = uvicorn.Config(
            create_callback_app(self.handle_callback),
            host = config.listener_host,
            port = self.__port,
            log_level = "info" if config.verbose else "warning",
            access_log = config.verbose,
        )
        server = CallbackServer(server_config, on_ready = self.__on_ready)
        server_thread = threading.Thread(
            target = self.__serve,
            args = (server,),
            name = "groupme-callback-server",
            daemon = True,
        )
        self.__tunnel = tunnel
        self.__server = server
        self.__server_thread = server_thread
        server_thread.start()

    def stop(self):
        if self.__server is None and self.__tunnel is None:
            return
        log.i(f"Stopping relay on port {self.__port}")
        self.__release()

    def handle_callback(self, body: Any):
        if config.log_callback_update:
            log.t("Received a GroupMe callback", body)
        self.__safe_emit(RelayEvent.raw_callback, body)

        try:
            callback = parse_callback(body)
        except ParseError as e:
            log.w(f"Dropping a callback that cannot be parsed: {e}")
            return

        self.__safe_emit(RelayEvent.callback, callback)
        specific_event = SENDER_TYPE_EVENTS.get(callback.sender_type)
        if specific_event:
            self.__safe_emit(specific_event, callback)

    def __serve(self, server: CallbackServer):
        try:
            server.run()
        except SystemExit:
            # uvicorn exits this way when the port cannot be bound
            log.e(f"Callback listener could not start on port {self.__port}")

    def __on_ready(self):
        log.i(f"Listening for callbacks on port {self.__port}")
        self.__safe_emit(RelayEvent.ready)

    def __safe_emit(self, event: RelayEvent, *args: Any):
        try:
            self.emit(event, *args)
        except Exception as e:
            log.e(f"A '{event.value}' handler failed", e)

    def __release(self):
        server, tunnel, server_thread = self.__server, self.__tunnel, self.__server_thread
        self.__server, self.__tunnel, self.__server_thread = None, None, None
        if server is not None:
            server.should_exit = True
        if tunnel is not None:
            tunnel.close()
        if server_thread is not None and server_thread is not threading.current_thread():
            server_thread.join(timeout = config.web_timeout_s)
