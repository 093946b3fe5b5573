# ruff: noqa: E501

import os
from typing import Callable

from groupme_relay.util.singleton import Singleton


class Config(metaclass = Singleton):

    log_level: str
    verbose: bool
    log_callback_update: bool
    groupme_api_base_url: str
    web_timeout_s: int
    listener_host: str
    tunnel_target_host: str
    tunnel_retry_delay_s: int
    version: str

    def __init__(
        self,
        def_log_level: str = "INFO",
        def_verbose: bool = False,
        def_log_callback_update: bool = False,
        def_groupme_api_base_url: str = "https://api.groupme.com/v3",
        def_web_timeout_s: int = 10,
        def_listener_host: str = "0.0.0.0",
        def_tunnel_target_host: str = "localhost",
        def_tunnel_retry_delay_s: int = 3,
        def_version: str = "dev",
    ):
        # @formatter:off
        self.log_level = self.__env("LOG_LEVEL", lambda: def_log_level).lower()
        self.verbose = self.__env("VERBOSE", lambda: str(def_verbose)).lower() == "true"
        self.log_callback_update = self.__env("LOG_CALLBACK_UPDATE", lambda: str(def_log_callback_update)).lower() == "true"
        self.groupme_api_base_url = self.__env("GROUPME_API_BASE_URL", lambda: def_groupme_api_base_url).rstrip("/")
        self.web_timeout_s = int(self.__env("WEB_TIMEOUT_S", lambda: str(def_web_timeout_s)))
        self.listener_host = self.__env("LISTENER_HOST", lambda: def_listener_host)
        self.tunnel_target_host = self.__env("TUNNEL_TARGET_HOST", lambda: def_tunnel_target_host)
        self.tunnel_retry_delay_s = int(self.__env("TUNNEL_RETRY_DELAY_S", lambda: str(def_tunnel_retry_delay_s)))
        self.version = self.__env("VERSION", lambda: def_version)
        # @formatter:on

    @staticmethod
    def __env(name: str, default: Callable[[], str]) -> str:
        env_value = os.environ.get(name, "").strip()
        return env_value if env_value else default()


config = Config()
