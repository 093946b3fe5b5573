import threading
from typing import Any


class Singleton(type):
    """Metaclass that builds each class once per process; `reset()` drops the cached instance."""
    __instances: dict[type, Any] = {}
    __lock = threading.Lock()

    def __call__(cls, *args, **kwargs):
        with Singleton.__lock:
            instance = Singleton.__instances.get(cls)
            if instance is None:
                instance = super().__call__(*args, **kwargs)
                Singleton.__instances[cls] = instance
        return instance

    def reset(cls):
        with Singleton.__lock:
            Singleton.__instances.pop(cls, None)
