from typing import Any

from pydantic import BaseModel, ConfigDict

from groupme_relay.model.parsing import project
from groupme_relay.util.error_codes import MALFORMED_MEMBER


class Member(BaseModel):
    """
    A user as seen from inside one group.

    `user_id` is the platform-wide identity while `id` is only valid within the group.
    `nickname` is group-scoped, `name` is the platform default. `roles` may hold any
    combination of "admin", "owner" and "user".
    """

    model_config = ConfigDict(frozen = True, extra = "ignore", strict = True)

    user_id: str | None = None
    nickname: str | None = None
    id: str | None = None
    muted: bool | None = None
    autokicked: bool | None = None
    roles: list[str] | None = None
    name: str | None = None


def parse_member(json: Any) -> Member:
    return project(Member, json, MALFORMED_MEMBER)
