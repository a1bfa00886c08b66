"""
Response envelope decoding and unwrapping.

The store wraps payloads either in a boolean ``success`` envelope,
keyed by the stringified ID the caller asked for, or in a record
carrying an integer ``status``. Both shapes expose ``is_successful``
and ``payload``; the helpers here turn them into a payload or a
SteamError.
"""

from collections.abc import Iterator
from typing import Any, Protocol, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from steam_storefront.client.errors import (
    DecodeError,
    IdNotFound,
    ParseIdError,
    ResponseWithNoData,
    ResponseWithNoSuccess,
)

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class Envelope(Protocol[T_co]):
    """Anything with a success indicator and an optional payload."""

    @property
    def is_successful(self) -> bool: ...

    @property
    def payload(self) -> T_co | None: ...


def decode(model_type: Any, raw: Any, *, endpoint: str | None = None) -> Any:
    """
    Validate raw JSON against a contract type.

    Args:
        model_type: Pydantic model or any type TypeAdapter accepts
        raw: Decoded JSON body
        endpoint: Endpoint for error reporting

    Returns:
        Validated instance of ``model_type``

    Raises:
        DecodeError: If the body doesn't match the contract
    """
    try:
        return TypeAdapter(model_type).validate_python(raw)
    except PydanticValidationError as e:
        raise DecodeError(
            f"Response validation failed: {e}",
            endpoint=endpoint,
            original_error=e,
        ) from e


def unwrap(envelope: Envelope[T], *, endpoint: str | None = None) -> T:
    """
    Return the payload of a successful envelope.

    Raises:
        ResponseWithNoSuccess: If the envelope reports failure
        ResponseWithNoData: If it reports success without a payload
    """
    if not envelope.is_successful:
        raise ResponseWithNoSuccess(endpoint=endpoint)
    payload = envelope.payload
    if payload is None:
        raise ResponseWithNoData(endpoint=endpoint)
    return payload


def unwrap_flagged(model_type: Any, raw: Any, *, endpoint: str | None = None) -> Any:
    """
    Decode and unwrap a record that carries its own status flag.

    The flag (``model_type.status_key``) is read from the raw body
    first: failure bodies usually omit the payload fields, and must
    not surface as a DecodeError.

    Raises:
        ResponseWithNoSuccess: If the flag is present and not 1
        ResponseWithNoData: If the record reports success without a payload
        DecodeError: If a successful body doesn't match the contract
    """
    if isinstance(raw, dict):
        flag = raw.get(model_type.status_key)
        if flag is not None and flag != 1:
            raise ResponseWithNoSuccess(endpoint=endpoint)
    return unwrap(decode(model_type, raw, endpoint=endpoint), endpoint=endpoint)


def _as_map(raw: Any, endpoint: str | None) -> dict[str, Any]:
    result: dict[str, Any] = decode(dict[str, Any], raw, endpoint=endpoint)
    return result


def unwrap_keyed(
    raw: Any,
    key: str,
    envelope_type: Any,
    *,
    endpoint: str | None = None,
) -> Any:
    """
    Pick one entry of an ID-keyed response and unwrap it.

    The key is looked up before the entry is decoded, so a missing
    key wins over whatever the rest of the map contains.

    Raises:
        IdNotFound: If ``key`` is not in the map
        ResponseWithNoSuccess: If the entry reports failure
        ResponseWithNoData: If the entry has no payload
        DecodeError: If the body or the entry doesn't match the contract
    """
    entries = _as_map(raw, endpoint)
    if key not in entries:
        raise IdNotFound(key, endpoint=endpoint)
    return unwrap(decode(envelope_type, entries[key], endpoint=endpoint), endpoint=endpoint)


def collect_keyed(
    raw: Any,
    envelope_type: Any,
    *,
    endpoint: str | None = None,
) -> Iterator[tuple[int, Any]]:
    """
    Yield ``(id, payload)`` for every successful entry of an ID-keyed response.

    Entries that report failure or carry no payload are skipped.
    Map order is preserved.

    Raises:
        ParseIdError: If a key of a successful entry is not numeric
        DecodeError: If the body or an entry doesn't match the contract
    """
    for key, value in _as_map(raw, endpoint).items():
        envelope = decode(envelope_type, value, endpoint=endpoint)
        if not envelope.is_successful or envelope.payload is None:
            continue
        try:
            item_id = int(key)
        except ValueError as e:
            raise ParseIdError(key, endpoint=endpoint, original_error=e) from e
        yield item_id, envelope.payload
