"""Domain models for interactive button actions."""

from dataclasses import dataclass
from enum import Enum

PayloadValue = str | int | float | bool | None
Payload = dict[str, PayloadValue]


class TokenMode(str, Enum):
    """How a token carries its payload."""

    DIRECT = "direct"
    STORED = "stored"


class ActionName(str, Enum):
    """Deferred actions attached to inline buttons."""

    ADD_FAVORITE = "add_favorite"
    LOG_FAVORITE = "log_favorite"
    DELETE_FAVORITE = "delete_favorite"
    REMOVE_MEAL = "remove_meal"
    SHOW_DAY = "show_day"


@dataclass(frozen=True)
class ActionToken:
    """Short button identifier and the payload it stands for."""

    token: str
    payload: Payload
    mode: TokenMode
