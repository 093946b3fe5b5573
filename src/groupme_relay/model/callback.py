from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from groupme_relay.model.attachment import Attachment
from groupme_relay.model.parsing import project
from groupme_relay.util.error_codes import MALFORMED_CALLBACK


class SenderType(str, Enum):
    user = "user"
    system = "system"
    bot = "bot"


class Callback(BaseModel):
    """
    https://dev.groupme.com/tutorials/bots (callback payload)

    One message or system notification posted to a group the bot lives in.
    `sender_type` is usually one of `SenderType`, but other values are kept as-is.
    """

    model_config = ConfigDict(frozen = True, extra = "ignore", strict = True)

    attachments: list[Attachment]
    avatar_url: str | None = None
    created_at: int | None = None
    group_id: str | None = None
    id: str | None = None
    name: str | None = None
    sender_id: str | None = None
    sender_type: str | None = None
    source_guid: str | None = None
    system: bool | None = None
    text: str | None = None
    user_id: str | None = None


def parse_callback(json: Any) -> Callback:
    return project(Callback, json, MALFORMED_CALLBACK)
