import requests
from pydantic import SecretStr

from groupme_relay.model.group import Group
from groupme_relay.relay.event_relay import EventRelay
from groupme_relay.sdk.groupme_bot_api import GroupMeBotAPI


class GroupMe(EventRelay):
    """
    One object for a GroupMe bot: callback events plus the REST operations.

    Example:
        groupme = GroupMe(bot_id, access_token, "https://smee.io/abc123", 5000)

        @groupme.on("user_msg")
        def reply(callback):
            groupme.send_message(f"Hello, {callback.name}!")

        groupme.start()
    """
    __api: GroupMeBotAPI

    def __init__(
        self,
        bot_id: str,
        access_token: str | SecretStr,
        relay_url: str,
        port: int,
        session: requests.Session | None = None,
    ):
        super().__init__(relay_url, port)
        self.__api = GroupMeBotAPI(bot_id, access_token, session = session)

    @property
    def api(self) -> GroupMeBotAPI:
        return self.__api

    def find_groups(self) -> list[Group]:
        return self.__api.find_groups()

    def send_message(self, text: str) -> bool:
        return self.__api.send_message(text)

    def delete_message(self, group_id: str, message_id: str) -> bool:
        return self.__api.delete_message(group_id, message_id)

    def like_message(self, conversation_id: str, message_id: str) -> bool:
        return self.__api.like_message(conversation_id, message_id)

    def unlike_message(self, conversation_id: str, message_id: str) -> bool:
        return self.__api.unlike_message(conversation_id, message_id)

    def update_nickname(self, group_id: str, nickname: str) -> bool:
        return self.__api.update_nickname(group_id, nickname)
