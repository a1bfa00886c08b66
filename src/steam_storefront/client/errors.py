"""
Steam store API error types.

Every failure of a client operation is raised as a SteamError
subclass; nothing is retried or suppressed on the caller's behalf.
"""

from datetime import datetime, timezone


class SteamError(Exception):
    """Base exception for Steam store client errors."""

    default_message = "Steam store request failed"

    def __init__(
        self,
        message: str | None = None,
        *,
        endpoint: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message or self.default_message)
        self.endpoint = endpoint
        self.status_code = status_code
        self.original_error = original_error
        self.timestamp = datetime.now(timezone.utc)


class ResponseWithNoData(SteamError):
    """Upstream reported success but sent no payload."""

    default_message = "response with no data; this could be due to a rate limit"


class ResponseWithNoSuccess(SteamError):
    """Upstream reported failure."""

    default_message = "response with no success"


class IdNotFound(SteamError):
    """The requested ID is not a key of the response map."""

    def __init__(self, id: str, *, endpoint: str | None = None) -> None:
        super().__init__(f"id {id} was not found in response", endpoint=endpoint)
        self.id = id


class IncorrectCountryCode(SteamError):
    """The country code is not an ISO 3166-1 alpha-2 code."""

    default_message = "failed to parse country from country code"

    def __init__(self, country_code: str) -> None:
        super().__init__(f"{self.default_message}: {country_code!r}")
        self.country_code = country_code


class RequestError(SteamError):
    """Transport failure, error status or unreadable body."""


class RateLimitError(RequestError):
    """The store answered with HTTP 429."""

    default_message = "rate limit exceeded"


class DecodeError(RequestError):
    """The body does not match the expected contract."""

    default_message = "failed to decode response"


class UrlError(SteamError):
    """The endpoint path does not resolve against the store URL."""

    default_message = "failed to build request URL"


class ParseIdError(SteamError):
    """A response map key is not a numeric ID."""

    def __init__(
        self,
        key: str,
        *,
        endpoint: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            f"failed to parse id: {key!r}",
            endpoint=endpoint,
            original_error=original_error,
        )
        self.key = key
