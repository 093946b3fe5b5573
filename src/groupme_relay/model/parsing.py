from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from groupme_relay.util.errors import ParseError

M = TypeVar("M", bound = BaseModel)


def project(model_type: type[M], json: Any, error_code: int) -> M:
    """Maps a raw JSON object onto `model_type`, field by field, or raises a ParseError."""
    try:
        return model_type.model_validate(json)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
            for error in e.errors()
        )
        raise ParseError(f"Cannot parse {model_type.__name__}: {problems}", error_code) from e
