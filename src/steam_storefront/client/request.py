"""
Request URL construction for store endpoints.
"""

from collections.abc import Iterable

import httpx

from steam_storefront.client.errors import UrlError
from steam_storefront.client.locale import Locale

APP_DETAILS = "api/appdetails/"
PACKAGE_DETAILS = "api/packagedetails/"
FEATURED = "api/featured/"
FEATURED_CATEGORIES = "api/featuredcategories/"
GENRE_LIST = "api/getgenrelist/"
APPS_IN_GENRE = "api/getappsingenre/"
APPS_IN_CATEGORY = "api/getappsincategory/"
DLC_FOR_APP = "api/dlcforapp/"


def app_reviews(app_id: int) -> str:
    """Path of the reviews endpoint for one app."""
    return f"appreviews/{app_id}"


class RequestBuilder:
    """
    Compose endpoint URLs for a store base URL and locale.

    Operation parameters come first, then ``l`` and ``cc``.
    Values are percent-encoded once, by httpx.
    """

    def __init__(self, store_url: httpx.URL | str, locale: Locale) -> None:
        self._store_url = httpx.URL(store_url)
        self._locale = locale

    @property
    def store_url(self) -> httpx.URL:
        return self._store_url

    def build(
        self,
        path: str,
        params: Iterable[tuple[str, str]] = (),
    ) -> httpx.URL:
        """
        Build the full URL of an endpoint.

        Args:
            path: Endpoint path relative to the store URL
            params: Operation-specific query parameters, in order

        Returns:
            httpx.URL: URL with the complete query string

        Raises:
            UrlError: If the path does not resolve against the store URL
        """
        try:
            url = self._store_url.join(path)
            query = [*params, *self._locale.to_params()]
            return url.copy_with(params=query) if query else url
        except httpx.InvalidURL as e:
            raise UrlError(
                f"Cannot resolve {path!r} against {self._store_url}: {e}",
                endpoint=path,
                original_error=e,
            ) from e
