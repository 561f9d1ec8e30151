"""Tests for button action tokens."""

import threading
from uuid import uuid4

import pytest

from macro_mate.domain.actions import TokenMode
from macro_mate.domain.errors import (
    EncodingTooLargeError,
    MalformedTokenError,
    TokenNotFoundError,
)
from macro_mate.services.actions import (
    STORED_PREFIX,
    ActionTokenStore,
    DelimitedCodec,
    InlineJsonCodec,
    new_store_key,
)
from macro_mate.services.cache import BoundedCache


def _store(capacity: int = 1000, watermark: int = 500) -> ActionTokenStore:
    return ActionTokenStore(cache=BoundedCache(capacity=capacity, watermark=watermark))


def _favorite_payload(index: int = 0) -> dict[str, object]:
    return {
        "action": "add_favorite",
        "protein_g": 31.0,
        "carbs_g": 12.5,
        "fats_g": 3.6,
        "calories": 210.0 + index,
        "food_item": f"grilled chicken breast with rice #{index}",
    }


def test_small_payload_uses_direct_mode_without_store() -> None:
    store = _store()
    payload = {"action": "show_day", "date": "2024-01-03"}

    minted = store.mint(payload)

    assert minted.mode is TokenMode.DIRECT
    assert len(minted.token.encode("utf-8")) <= 64
    assert len(store) == 0
    assert store.resolve(minted.token) == payload


def test_large_payload_is_stored_under_short_token() -> None:
    store = _store()
    payload = _favorite_payload()

    minted = store.mint(payload)

    assert minted.mode is TokenMode.STORED
    assert minted.token.startswith(STORED_PREFIX)
    assert len(minted.token.encode("utf-8")) <= 64
    assert len(store) == 1
    assert store.resolve(minted.token) == payload


def test_direct_budget_counts_bytes_not_characters() -> None:
    store = _store()
    payload = {"action": "x", "f": "é" * 30}

    minted = store.mint(payload)

    assert minted.mode is TokenMode.STORED
    assert store.resolve(minted.token) == payload


def test_custom_byte_budget_changes_mode() -> None:
    store = ActionTokenStore(cache=BoundedCache(), max_token_bytes=256)

    minted = store.mint(_favorite_payload())

    assert minted.mode is TokenMode.DIRECT


def test_budget_below_minimum_is_rejected() -> None:
    with pytest.raises(ValueError):
        ActionTokenStore(cache=BoundedCache(), max_token_bytes=10)


def test_overflow_makes_oldest_tokens_unresolvable() -> None:
    store = _store(capacity=10, watermark=5)
    tokens = [store.mint(_favorite_payload(index)).token for index in range(11)]

    with pytest.raises(TokenNotFoundError):
        store.resolve(tokens[0])
    for token in tokens[:6]:
        with pytest.raises(TokenNotFoundError):
            store.resolve(token)
    for index, token in enumerate(tokens[6:], start=6):
        assert store.resolve(token) == _favorite_payload(index)
    assert len(store) == 5


def test_tokens_stay_resolvable_until_capacity_is_exceeded() -> None:
    store = _store(capacity=10, watermark=5)
    tokens = [store.mint(_favorite_payload(index)).token for index in range(10)]

    for index, token in enumerate(tokens):
        assert store.resolve(token) == _favorite_payload(index)


def test_resolution_is_repeatable_and_isolated() -> None:
    store = _store()
    minted = store.mint(_favorite_payload())

    first = store.resolve(minted.token)
    first["food_item"] = "changed"
    second = store.resolve(minted.token)
    third = store.resolve(minted.token)

    assert second == _favorite_payload()
    assert third == second


def test_caller_mutation_after_mint_does_not_leak() -> None:
    store = _store()
    payload = _favorite_payload()
    minted = store.mint(payload)

    payload["calories"] = 0.0

    assert store.resolve(minted.token)["calories"] == 210.0


def test_discard_removes_stored_token() -> None:
    store = _store()
    minted = store.mint(_favorite_payload())

    store.discard(minted.token)

    with pytest.raises(TokenNotFoundError):
        store.resolve(minted.token)


def test_discard_ignores_direct_tokens() -> None:
    store = _store()
    minted = store.mint({"action": "show_day", "date": "2024-01-03"})

    store.discard(minted.token)

    assert store.resolve(minted.token)["date"] == "2024-01-03"


def test_unknown_stored_token_is_not_found() -> None:
    store = _store()

    with pytest.raises(TokenNotFoundError) as info:
        store.resolve(f"{STORED_PREFIX}missing")

    assert not isinstance(info.value, MalformedTokenError)


def test_cleared_store_forgets_tokens() -> None:
    store = _store()
    minted = store.mint(_favorite_payload())

    store.clear()

    with pytest.raises(TokenNotFoundError):
        store.resolve(minted.token)


def test_oversized_payload_is_rejected_without_insert() -> None:
    store = _store()
    payload = _favorite_payload()
    payload["food_item"] = "x" * 2000

    with pytest.raises(EncodingTooLargeError):
        store.mint(payload)
    assert len(store) == 0


def test_non_primitive_values_are_rejected() -> None:
    store = _store()

    with pytest.raises(TypeError):
        store.mint({"action": "add_favorite", "items": ["rice"]})


def test_key_collisions_are_retried() -> None:
    keys = iter(["k:dup", "k:dup", "k:fresh"])
    store = ActionTokenStore(cache=BoundedCache(), key_factory=lambda: next(keys))

    first = store.mint(_favorite_payload(1))
    second = store.mint(_favorite_payload(2))

    assert first.token == "k:dup"
    assert second.token == "k:fresh"
    assert store.resolve("k:dup") == _favorite_payload(1)


def test_store_keys_are_short_and_unique() -> None:
    keys = {new_store_key() for _ in range(200)}

    assert len(keys) == 200
    assert all(len(key) <= 24 for key in keys)


def test_concurrent_mint_and_resolve() -> None:
    store = _store(capacity=5000, watermark=2500)
    failures: list[str] = []

    def worker(offset: int) -> None:
        for index in range(200):
            payload = _favorite_payload(offset * 1000 + index)
            token = store.mint(payload).token
            if store.resolve(token) != payload:
                failures.append(token)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert failures == []
    assert len(store) == 800


def test_legacy_add_favorite_token_is_decoded() -> None:
    store = _store()

    payload = store.resolve("add_favorite_31_0_3.6_165_chicken|breast")

    assert payload == {
        "action": "add_favorite",
        "protein_g": 31.0,
        "carbs_g": 0.0,
        "fats_g": 3.6,
        "calories": 165.0,
        "food_item": "chicken_breast",
    }


def test_legacy_add_favorite_token_uses_defaults_for_lost_fields() -> None:
    payload = DelimitedCodec().decode("add_favorite_abc_12")

    assert payload["protein_g"] == 0.0
    assert payload["carbs_g"] == 12.0
    assert payload["fats_g"] == 0.0
    assert payload["calories"] == 0.0
    assert payload["food_item"] == "unknown"


def test_legacy_food_item_keeps_underscores_after_fifth_field() -> None:
    payload = DelimitedCodec().decode("add_favorite_1_2_3_4_tuna_melt")

    assert payload["food_item"] == "tuna_melt"


@pytest.mark.parametrize(
    ("token", "action", "key"),
    [
        ("remove_{id}", "remove_meal", "meal_id"),
        ("log_favorite_{id}", "log_favorite", "favorite_id"),
        ("delete_favorite_{id}", "delete_favorite", "favorite_id"),
    ],
)
def test_legacy_id_tokens_are_decoded(token: str, action: str, key: str) -> None:
    ident = str(uuid4())
    store = _store()

    payload = store.resolve(token.format(id=ident))

    assert payload == {"action": action, key: ident}


def test_retired_inline_json_token_is_decoded() -> None:
    store = _store()

    payload = store.resolve('{"action":"show_day","date":"2024-01-03"}')

    assert payload == {"action": "show_day", "date": "2024-01-03"}


def test_inline_codec_only_probes_json_objects() -> None:
    codec = InlineJsonCodec()

    assert codec.matches('{"a":1}')
    assert not codec.matches("remove_1")


@pytest.mark.parametrize(
    "token", ["fav_12", "j:not-json", "j:[1,2]", "{broken", "remove_", ""]
)
def test_unrecognised_tokens_are_malformed(token: str) -> None:
    store = _store()

    with pytest.raises(MalformedTokenError):
        store.resolve(token)


def test_malformed_is_handled_as_not_found() -> None:
    store = _store()

    with pytest.raises(TokenNotFoundError):
        store.resolve("fav_12")
