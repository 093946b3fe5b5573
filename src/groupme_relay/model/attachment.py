from typing import Any

from pydantic import BaseModel, ConfigDict

from groupme_relay.model.parsing import project
from groupme_relay.util.error_codes import MALFORMED_ATTACHMENT


class Attachment(BaseModel):
    """https://dev.groupme.com/docs/v3#messages_create (attachments)"""

    model_config = ConfigDict(frozen = True, extra = "ignore", strict = True)

    type: str | None = None  # e.g. "image", not checked against the URL
    url: str | None = None


def parse_attachment(json: Any) -> Attachment:
    return project(Attachment, json, MALFORMED_ATTACHMENT)
