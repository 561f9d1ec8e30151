"""Short button tokens for deferred chat actions.

Telegram limits ``callback_data`` to a few dozen bytes, which is not enough
for payloads such as "add this food with these macros to favorites". A
payload is either packed into the token itself (direct mode) or kept in a
bounded in-memory store and referenced by a short key (stored mode).

Resolution walks a fixed chain: store lookup by raw token, then the direct
codec, then encodings used by earlier releases whose buttons may still sit
in chat history.
"""

import json
import logging
import math
import secrets
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from macro_mate.domain.actions import ActionName, ActionToken, Payload, TokenMode
from macro_mate.domain.errors import (
    EncodingTooLargeError,
    MalformedTokenError,
    TokenNotFoundError,
)
from macro_mate.services.cache import BoundedCache

logger = logging.getLogger(__name__)

DIRECT_PREFIX = "j:"
STORED_PREFIX = "k:"
MIN_TOKEN_BYTES = 24
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_SUFFIX_LENGTH = 6
_PRIMITIVES = (str, int, float, bool, type(None))


class TokenCodec(Protocol):
    """A token encoding that can recognise and decode its own tokens."""

    name: str

    def matches(self, token: str) -> bool:
        """Return True when the token looks like this encoding."""

    def decode(self, token: str) -> Payload:
        """Decode the token into a payload or raise MalformedTokenError."""


@dataclass(frozen=True)
class DirectJsonCodec:
    """Compact JSON carried inside the token, prefixed with ``j:``."""

    name: str = "direct-json"

    def encode(self, payload: Payload) -> str:
        return f"{DIRECT_PREFIX}{_dumps(payload)}"

    def matches(self, token: str) -> bool:
        return token.startswith(DIRECT_PREFIX)

    def decode(self, token: str) -> Payload:
        return _loads(token[len(DIRECT_PREFIX) :])


@dataclass(frozen=True)
class InlineJsonCodec:
    """Bare JSON object tokens from releases before the ``j:`` prefix."""

    name: str = "inline-json"

    def matches(self, token: str) -> bool:
        return token.startswith("{")

    def decode(self, token: str) -> Payload:
        return _loads(token)


@dataclass(frozen=True)
class DelimitedCodec:
    """Underscore-delimited tokens from the first release.

    ``add_favorite_<protein>_<carbs>_<fats>_<calories>_<food>`` stored the food
    with ``|`` in place of ``_``; the other actions carried a single id.
    Fields that cannot be recovered fall back to zero or ``"unknown"``.
    """

    name: str = "delimited"

    def matches(self, token: str) -> bool:
        return token.startswith(
            ("add_favorite_", "log_favorite_", "delete_favorite_", "remove_")
        )

    def decode(self, token: str) -> Payload:
        if token.startswith("add_favorite_"):
            parts = token[len("add_favorite_") :].split("_", maxsplit=4)
            parts += [""] * (5 - len(parts))
            protein, carbs, fats, calories, food = parts
            return {
                "action": ActionName.ADD_FAVORITE.value,
                "protein_g": _to_float(protein),
                "carbs_g": _to_float(carbs),
                "fats_g": _to_float(fats),
                "calories": _to_float(calories),
                "food_item": food.replace("|", "_") or "unknown",
            }
        for prefix, action, key in (
            ("log_favorite_", ActionName.LOG_FAVORITE, "favorite_id"),
            ("delete_favorite_", ActionName.DELETE_FAVORITE, "favorite_id"),
            ("remove_", ActionName.REMOVE_MEAL, "meal_id"),
        ):
            if token.startswith(prefix):
                ident = token[len(prefix) :].split("_", maxsplit=1)[0]
                if not ident:
                    raise MalformedTokenError(f"Missing id in {prefix} token")
                return {"action": action.value, key: ident}
        raise MalformedTokenError("Unknown delimited token")


def new_store_key() -> str:
    """Return a time-ordered key with a random suffix."""
    stamp = _base36(time.time_ns() // 1_000_000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(_SUFFIX_LENGTH))
    return f"{STORED_PREFIX}{stamp}{suffix}"


@dataclass
class ActionTokenStore:
    """Mint and resolve button tokens for deferred actions."""

    cache: BoundedCache
    max_token_bytes: int = 64
    max_payload_bytes: int = 1024
    key_factory: Callable[[], str] = new_store_key
    direct_codec: DirectJsonCodec = field(default_factory=DirectJsonCodec)
    legacy_codecs: tuple[TokenCodec, ...] = field(
        default_factory=lambda: (InlineJsonCodec(), DelimitedCodec())
    )

    def __post_init__(self) -> None:
        if self.max_token_bytes < MIN_TOKEN_BYTES:
            raise ValueError(f"max_token_bytes must be at least {MIN_TOKEN_BYTES}")

    def mint(self, payload: Payload) -> ActionToken:
        """Encode a payload into a token that fits the transport budget."""
        _validate(payload)
        direct = self.direct_codec.encode(payload)
        if _size(direct) <= self.max_token_bytes:
            return ActionToken(
                token=direct, payload=dict(payload), mode=TokenMode.DIRECT
            )

        encoded_size = _size(_dumps(payload))
        if encoded_size > self.max_payload_bytes:
            raise EncodingTooLargeError(
                f"Payload is {encoded_size} bytes, limit is {self.max_payload_bytes}"
            )
        stored = dict(payload)
        key = self.key_factory()
        while not self.cache.add(key, stored):
            key = self.key_factory()
        return ActionToken(token=key, payload=dict(payload), mode=TokenMode.STORED)

    def resolve(self, token: str) -> Payload:
        """Return the payload for a token.

        Resolution does not consume the token; use ``discard`` once the
        action can no longer be repeated.
        """
        stored = self.cache.get(token)
        if stored is not None:
            return dict(stored)  # type: ignore[call-overload]
        if token.startswith(STORED_PREFIX):
            raise TokenNotFoundError("Token expired or unknown")

        for codec in (self.direct_codec, *self.legacy_codecs):
            if not codec.matches(token):
                continue
            try:
                return codec.decode(token)
            except MalformedTokenError:
                logger.info("Token rejected by codec", extra={"codec": codec.name})
        raise MalformedTokenError("Token matches no known encoding")

    def discard(self, token: str) -> None:
        """Forget a stored token; direct and unknown tokens are ignored."""
        self.cache.pop(token)

    def clear(self) -> None:
        """Drop every stored token."""
        self.cache.clear()

    def __len__(self) -> int:
        return len(self.cache)


def _validate(payload: Payload) -> None:
    for key, value in payload.items():
        if not isinstance(key, str):
            raise TypeError(f"Payload keys must be strings, got {type(key).__name__}")
        if not isinstance(value, _PRIMITIVES):
            raise TypeError(
                f"Payload value for {key!r} must be a primitive, "
                f"got {type(value).__name__}"
            )


def _dumps(payload: Payload) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def _loads(raw: str) -> Payload:
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedTokenError("Token is not valid JSON") from exc
    if not isinstance(decoded, dict):
        raise MalformedTokenError("Token JSON is not an object")
    return decoded


def _size(value: str) -> int:
    return len(value.encode("utf-8"))


def _to_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def _base36(value: int) -> str:
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits)) or "0"
