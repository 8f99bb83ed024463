"""The name and description a new project is created with."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from webic.config import DEFAULT_DESCRIPTION

RESERVED_CHARACTERS = "!$%^&*()+|~=`{}\\[]:\";'<>?,/"

_WHITESPACE = re.compile(r"\s")
_UPPERCASE = re.compile(r"[A-Z]")
_RESERVED = re.compile("[" + re.escape(RESERVED_CHARACTERS) + "]")

INVALID_NAME_MESSAGE = "App name cannot include space, uppercase, or special chars, please try again."
EMPTY_NAME_MESSAGE = "App name cannot be empty, please try again."


def validate_app_name(value: str) -> str | None:
    """Return why *value* is not a usable app name, or ``None`` if it is.

    A name is rejected when it contains whitespace, an uppercase letter or
    one of :data:`RESERVED_CHARACTERS`, or when it is empty.
    """
    if _WHITESPACE.search(value) or _UPPERCASE.search(value) or _RESERVED.search(value):
        return INVALID_NAME_MESSAGE
    if len(value) < 1:
        return EMPTY_NAME_MESSAGE
    return None


class ProjectIdentity(BaseModel):
    """Validated ``{name, description}`` pair, fixed once prompting is over."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = Field(default=DEFAULT_DESCRIPTION)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        problem = validate_app_name(value)
        if problem is not None:
            raise ValueError(problem)
        return value
