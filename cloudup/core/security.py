import hashlib
from collections.abc import Mapping
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from cloudup.core.constants import FILE_FIELD


def normalize_options(options: Mapping[Any, Any] | None) -> dict[str, Any]:
    if not options:
        return {}
    normalized: dict[str, Any] = {}
    for key, value in options.items():
        if isinstance(value, (list, tuple)):
            value = ",".join(render_value(item) for item in value)
        normalized[render_value(key)] = value
    return normalized


def render_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def current_timestamp() -> int:
    return int(datetime.now(UTC).timestamp())


def string_to_sign(params: Mapping[str, Any], timestamp: int | str) -> str:
    pairs = [f"{key}={render_value(value)}" for key, value in params.items() if key != FILE_FIELD]
    pairs.append(f"timestamp={timestamp}")
    return "&".join(sorted(pairs))


def sha1_hex(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest().lower()


def sign_params(
    params: Mapping[str, Any],
    secret: str,
    api_key: str,
    now_seconds: int | None = None,
) -> dict[str, Any]:
    timestamp = str(now_seconds if now_seconds is not None else current_timestamp())
    working = {key: value for key, value in params.items() if key != "timestamp"}
    signature = sha1_hex(string_to_sign(working, timestamp) + secret)
    signed = dict(params)
    signed.update({"timestamp": timestamp, "signature": signature, "api_key": api_key})
    return signed
