from typing import Any

from pydantic import BaseModel, ConfigDict

from groupme_relay.model.parsing import project
from groupme_relay.util.error_codes import MALFORMED_GROUP


class Group(BaseModel):
    """https://dev.groupme.com/docs/v3#groups_index"""

    model_config = ConfigDict(frozen = True, extra = "ignore", strict = True)

    id: str | None = None
    group_id: str | None = None  # mirrors `id` in every payload seen so far
    name: str | None = None
    phone_number: str | None = None
    type: str | None = None  # "public" or "private"
    description: str | None = None
    image_url: str | None = None
    creator_user_id: str | None = None
    created_at: int | None = None
    updated_at: int | None = None
    max_members: int | None = None
    theme_name: str | None = None
    requires_approval: bool | None = None
    show_join_question: bool | None = None
    share_url: str | None = None
    member_count: int | None = None
    message_count: int | None = None


def parse_group(json: Any) -> Group:
    return project(Group, json, MALFORMED_GROUP)
