import json
from typing import Any

import requests
from pydantic import SecretStr
from requests import Response

from groupme_relay.model.group import Group, parse_group
from groupme_relay.util import log
from groupme_relay.util.config import config
from groupme_relay.util.error_codes import MALFORMED_API_RESPONSE, UNEXPECTED_META_CODE, UNEXPECTED_STATUS_CODE
from groupme_relay.util.errors import ProtocolError
from groupme_relay.util.functions import mask_secret


class GroupMeBotAPI:
    """https://dev.groupme.com/docs/v3"""
    __bot_id: str
    __access_token: SecretStr
    __session: requests.Session
    __api_url: str

    def __init__(
        self,
        bot_id: str,
        access_token: str | SecretStr,
        session: requests.Session | None = None,
    ):
        self.__bot_id = bot_id
        self.__access_token = access_token if isinstance(access_token, SecretStr) else SecretStr(access_token)
        # requests hands back every status code, the checks below decide what counts as success
        self.__session = session or requests.Session()
        self.__session.headers.update({"Content-Type": "application/json"})
        self.__api_url = config.groupme_api_base_url

    @property
    def bot_id(self) -> str:
        return self.__bot_id

    def find_groups(self) -> list[Group]:
        log.t(f"Fetching groups for token {mask_secret(self.__access_token)}")
        response = self.__session.get(
            f"{self.__api_url}/groups",
            params = self.__token_params(),
            timeout = config.web_timeout_s,
        )
        self.__require_status(response, 200)

        envelope = self.__read_envelope(response)
        meta_code = (envelope.get("meta") or {}).get("code")
        if meta_code != 200:
            raise ProtocolError(
                log.e(f"Invalid meta code. Expected 200, received: {meta_code}"),
                UNEXPECTED_META_CODE,
                expected = 200,
                actual = meta_code,
            )
        raw_groups = envelope.get("response")
        if not isinstance(raw_groups, list):
            raise ProtocolError(log.e("GroupMe groups response is not a list", raw_groups), MALFORMED_API_RESPONSE)
        return [parse_group(raw_group) for raw_group in raw_groups]

    def send_message(self, text: str) -> bool:
        log.t(f"Posting message as bot #{self.__bot_id}")
        # the bot id authorizes this call, there is no token here
        payload = {"text": text, "bot_id": self.__bot_id}
        response = self.__session.post(
            f"{self.__api_url}/bots/post",
            data = json.dumps(payload),
            timeout = config.web_timeout_s,
        )
        self.__require_status(response, 202)
        return True

    def delete_message(self, group_id: str, message_id: str) -> bool:
        log.t(f"Deleting message #{message_id} from group #{group_id}")
        response = self.__session.delete(
            f"{self.__api_url}/conversations/{group_id}/messages/{message_id}",
            params = self.__token_params(),
            timeout = config.web_timeout_s,
        )
        self.__require_status(response, 204)
        return True

    def like_message(self, conversation_id: str, message_id: str) -> bool:
        log.t(f"Liking message #{message_id} in conversation #{conversation_id}")
        response = self.__session.post(
            f"{self.__api_url}/messages/{conversation_id}/{message_id}/like",
            params = self.__token_params(),
            timeout = config.web_timeout_s,
        )
        self.__require_status(response, 200)
        return True

    def unlike_message(self, conversation_id: str, message_id: str) -> bool:
        log.t(f"Unliking message #{message_id} in conversation #{conversation_id}")
        response = self.__session.post(
            f"{self.__api_url}/messages/{conversation_id}/{message_id}/unlike",
            params = self.__token_params(),
            timeout = config.web_timeout_s,
        )
        self.__require_status(response, 200)
        return True

    def update_nickname(self, group_id: str, nickname: str) -> bool:
        log.t(f"Renaming the bot to '{nickname}' in group #{group_id}")
        payload = {"membership": {"nickname": nickname}}
        response = self.__session.post(
            f"{self.__api_url}/groups/{group_id}/memberships/update",
            params = self.__token_params(),
            data = json.dumps(payload),
            timeout = config.web_timeout_s,
        )
        self.__require_status(response, 200)
        return True

    def __token_params(self) -> dict[str, str]:
        return {"token": self.__access_token.get_secret_value()}

    @staticmethod
    def __require_status(response: Response, expected: int):
        if response.status_code != expected:
            raise ProtocolError(
                log.e(f"Invalid server status code. Expected {expected}, received: {response.status_code}"),
                UNEXPECTED_STATUS_CODE,
                expected = expected,
                actual = response.status_code,
            )

    @staticmethod
    def __read_envelope(response: Response) -> dict[str, Any]:
        try:
            envelope = response.json()
        except ValueError as e:
            raise ProtocolError(log.e("GroupMe response is not valid JSON"), MALFORMED_API_RESPONSE) from e
        if not isinstance(envelope, dict):
            raise ProtocolError(log.e("GroupMe response is not a JSON object", envelope), MALFORMED_API_RESPONSE)
        return envelope
