import threading
from enum import Enum
from typing import Any, Callable, NamedTuple

Handler = Callable[..., Any]


class Registration(NamedTuple):
    handler: Handler
    once: bool


class EventEmitter:
    """
    Process-local publish/subscribe registry.

    Handlers run synchronously on the emitting thread, in registration order.
    Events emitted before a handler registers are not replayed to it.
    Event names may be given as plain strings or as string enums.
    """
    __registrations: dict[str, list[Registration]]
    __lock: threading.Lock

    def __init__(self):
        self.__registrations = {}
        self.__lock = threading.Lock()

    def on(self, event: str | Enum, handler: Handler | None = None) -> Handler:
        if handler is None:
            # decorator form: @emitter.on("event")
            return lambda decorated: self.on(event, decorated)
        self.__register(event, Registration(handler, once = False))
        return handler

    def once(self, event: str | Enum, handler: Handler | None = None) -> Handler:
        if handler is None:
            return lambda decorated: self.once(event, decorated)
        self.__register(event, Registration(handler, once = True))
        return handler

    def off(self, event: str | Enum, handler: Handler):
        with self.__lock:
            registrations = self.__registrations.get(self.__key(event), [])
            # removes the most recent matching registration only
            for index in range(len(registrations) - 1, -1, -1):
                if registrations[index].handler == handler:
                    del registrations[index]
                    return

    def listeners(self, event: str | Enum) -> list[Handler]:
        with self.__lock:
            return [registration.handler for registration in self.__registrations.get(self.__key(event), [])]

    def emit(self, event: str | Enum, *args: Any) -> bool:
        key = self.__key(event)
        with self.__lock:
            snapshot = list(self.__registrations.get(key, []))
            if any(registration.once for registration in snapshot):
                # one-shot handlers leave the registry before any handler runs
                self.__registrations[key] = [registration for registration in snapshot if not registration.once]
        for registration in snapshot:
            registration.handler(*args)
        return bool(snapshot)

    def __register(self, event: str | Enum, registration: Registration):
        with self.__lock:
            self.__registrations.setdefault(self.__key(event), []).append(registration)

    @staticmethod
    def __key(event: str | Enum) -> str:
        return event.value if isinstance(event, Enum) else event
