import json
import threading

import requests
from requests import Response
from sseclient import SSEClient

from groupme_relay.util import log
from groupme_relay.util.config import config
from groupme_relay.util.safe_printer_mixin import SafePrinterMixin

# hop-specific headers that must not be replayed against the local target
DROPPED_HEADERS = {"host", "content-length", "timestamp"}


class SmeeTunnel(SafePrinterMixin):
    """
    Forwards webhook deliveries from a smee.io channel to a local URL.

    https://github.com/probot/smee-client
    """
    __source: str
    __target: str
    __stop_event: threading.Event
    __thread: threading.Thread | None
    __response: Response | None

    def __init__(self, source: str, target: str, verbose: bool = False):
        super().__init__(verbose)
        self.__source = source
        self.__target = target
        self.__stop_event = threading.Event()
        self.__thread = None
        self.__response = None

    @property
    def source(self) -> str:
        return self.__source

    @property
    def target(self) -> str:
        return self.__target

    @property
    def is_running(self) -> bool:
        return self.__thread is not None and self.__thread.is_alive()

    def start(self):
        if self.is_running:
            return
        self.__stop_event.clear()
        self.__thread = threading.Thread(target = self.__run, name = "smee-tunnel", daemon = True)
        self.__thread.start()

    def close(self):
        self.__stop_event.set()
        response = self.__response
        if response is not None:
            response.close()  # unblocks the pending stream read
        thread = self.__thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout = config.web_timeout_s)
        self.__thread = None
        self.sprint(f"Closed tunnel {self.__source}")

    def __run(self):
        while not self.__stop_event.is_set():
            try:
                self.__stream()
            except Exception as e:
                if self.__stop_event.is_set():
                    break
                log.e(f"Tunnel connection to {self.__source} failed", e)
            self.__stop_event.wait(config.tunnel_retry_delay_s)

    def __stream(self):
        self.sprint(f"Connecting to {self.__source}")
        response = requests.get(
            self.__source,
            headers = {"Accept": "text/event-stream"},
            stream = True,
            timeout = (config.web_timeout_s, None),  # the stream itself stays open
        )
        response.raise_for_status()
        self.__response = response
        self.sprint(f"Forwarding {self.__source} to {self.__target}")
        try:
            for event in SSEClient(response).events():
                if self.__stop_event.is_set():
                    return
                if event.event != "message":
                    continue  # "ready" and "ping" carry no delivery
                self.__forward(event.data)
        finally:
            self.__response = None
            response.close()

    def __forward(self, raw_delivery: str):
        try:
            delivery = json.loads(raw_delivery)
        except ValueError as e:
            log.e(f"Dropping undecodable delivery from {self.__source}", e)
            return
        if not isinstance(delivery, dict):
            log.e(f"Dropping delivery from {self.__source} that is not an object", delivery)
            return

        body = delivery.pop("body", None)
        query = delivery.pop("query", None) or {}
        headers = {
            key: str(value)
            for key, value in delivery.items()
            if key.lower() not in DROPPED_HEADERS and value is not None
        }
        try:
            response = requests.post(
                self.__target,
                params = query,
                json = body,
                headers = headers,
                timeout = config.web_timeout_s,
            )
            self.sprint(f"POST {response.url} - {response.status_code}")
        except requests.RequestException as e:
            log.e(f"Failed to forward delivery to {self.__target}", e)
