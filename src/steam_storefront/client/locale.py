"""
Locale parameters injected into every store request.
"""

from dataclasses import dataclass

import pycountry

from steam_storefront.client.errors import IncorrectCountryCode
from steam_storefront.contracts import Language


def validate_country_code(country_code: str) -> str:
    """
    Normalize and validate an ISO 3166-1 alpha-2 country code.

    Args:
        country_code: Two-letter code in any case

    Returns:
        str: Upper-cased code

    Raises:
        IncorrectCountryCode: If the code is not in the ISO 3166-1 table
    """
    code = country_code.upper()
    if len(code) != 2 or pycountry.countries.get(alpha_2=code) is None:
        raise IncorrectCountryCode(country_code)
    return code


@dataclass(frozen=True)
class Locale:
    """Display language and pricing country of a client."""

    language: Language | None = None
    country_code: str | None = None

    def __post_init__(self) -> None:
        if self.country_code is not None:
            # frozen dataclass: assign through object
            object.__setattr__(self, "country_code", validate_country_code(self.country_code))

    def to_params(self) -> list[tuple[str, str]]:
        """Query parameters appended after the operation's own."""
        params: list[tuple[str, str]] = []
        if self.language is not None:
            params.append(("l", self.language.value))
        if self.country_code is not None:
            params.append(("cc", self.country_code))
        return params
