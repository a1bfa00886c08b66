"""
Steam store API client.

Every operation follows the same path: build the URL, send a GET
request, unwrap the response envelope and stamp whatever the store
leaves out of its payload (e.g. the requested package ID).
"""

from collections.abc import AsyncIterator, Iterable
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from steam_storefront.client.envelope import (
    collect_keyed,
    decode,
    unwrap_flagged,
    unwrap_keyed,
)
from steam_storefront.client.errors import DecodeError, RateLimitError, RequestError
from steam_storefront.client.locale import Locale
from steam_storefront.client.request import (
    APP_DETAILS,
    APPS_IN_CATEGORY,
    APPS_IN_GENRE,
    DLC_FOR_APP,
    FEATURED,
    FEATURED_CATEGORIES,
    GENRE_LIST,
    PACKAGE_DETAILS,
    RequestBuilder,
    app_reviews,
)
from steam_storefront.client.reviews import ReviewsFilter
from steam_storefront.config import RetryConfig, Settings
from steam_storefront.contracts import (
    AppDetails,
    AppPrice,
    AppsIn,
    DataEnvelope,
    DlcData,
    Featured,
    FeaturedCategories,
    FeaturedCategory,
    Genre,
    GenreList,
    Language,
    PackageDetails,
    PriceOverview,
    Reviews,
)
from steam_storefront.logger import get_logger

STORE_URL = "https://store.steampowered.com/"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = "SteamStorefrontClient/0.1"

# featuredcategories sections whose items are not priced store items
NON_CATEGORY_SECTIONS = frozenset({"trailerslideshow"})


class SteamBuilder:
    """
    Builder for Steam.

    Example:
        >>> steam = (
        ...     SteamBuilder()
        ...     .with_country_code("us")
        ...     .with_language(Language.ENGLISH)
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        self._language: Language | None = None
        self._country_code: str | None = None
        self._store_url: str = STORE_URL
        self._timeout: float = DEFAULT_TIMEOUT_SECONDS
        self._user_agent: str = DEFAULT_USER_AGENT
        self._retry_config: RetryConfig | None = None
        self._http_client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "SteamBuilder":
        """
        Seed a builder from explicit settings.

        Args:
            settings: Loaded application settings

        Returns:
            SteamBuilder: Builder with store URL, timeout, locale and retry set
        """
        builder = (
            cls()
            .with_store_url(settings.steam.store_url)
            .with_timeout(settings.steam.timeout_seconds)
            .with_user_agent(settings.steam.user_agent)
            .with_retry(settings.retry)
        )
        if settings.steam.country_code:
            builder = builder.with_country_code(settings.steam.country_code)
        if settings.steam.language:
            builder = builder.with_language(settings.steam.language)
        return builder

    def with_country_code(self, country_code: str) -> "SteamBuilder":
        """ISO 3166-1 alpha-2 two-letter country code, used for prices."""
        self._country_code = country_code.upper()
        return self

    def with_language(self, language: Language | str) -> "SteamBuilder":
        """Language for localized strings, as a Language or its token (e.g. 'english')."""
        self._language = Language(language)
        return self

    def with_store_url(self, store_url: str) -> "SteamBuilder":
        self._store_url = store_url
        return self

    def with_timeout(self, seconds: float) -> "SteamBuilder":
        self._timeout = seconds
        return self

    def with_user_agent(self, user_agent: str) -> "SteamBuilder":
        self._user_agent = user_agent
        return self

    def with_retry(self, retry_config: RetryConfig) -> "SteamBuilder":
        """Retry transport failures; a single attempt disables retrying."""
        self._retry_config = retry_config
        return self

    def with_http_client(self, http_client: httpx.AsyncClient) -> "SteamBuilder":
        """Use an existing transport. The caller stays responsible for closing it."""
        self._http_client = http_client
        return self

    def build(self) -> "Steam":
        """
        Build the client. No request is made.

        Raises:
            IncorrectCountryCode: If the country code is not ISO 3166-1 alpha-2
        """
        locale = Locale(language=self._language, country_code=self._country_code)

        owns_client = self._http_client is None
        http_client = self._http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=True,
            headers={
                "User-Agent": self._user_agent,
                "Accept": "application/json",
            },
        )

        return Steam(
            requests=RequestBuilder(self._store_url, locale),
            locale=locale,
            http_client=http_client,
            owns_client=owns_client,
            retry_config=self._retry_config,
        )


class Steam:
    """
    API client for the Steam store.

    Immutable after construction, so one instance can serve
    concurrent callers.

    Example:
        >>> async with Steam.builder().with_country_code("US").build() as steam:
        ...     app = await steam.app(219990)
        ...     print(app.app_id, app.name)
    """

    def __init__(
        self,
        *,
        requests: RequestBuilder,
        locale: Locale,
        http_client: httpx.AsyncClient,
        owns_client: bool,
        retry_config: RetryConfig | None = None,
    ) -> None:
        self._requests = requests
        self._locale = locale
        self._http = http_client
        self._owns_client = owns_client
        self._retry_config = retry_config
        self._logger = get_logger(__name__, component="client")

    @staticmethod
    def builder() -> SteamBuilder:
        return SteamBuilder()

    @property
    def language(self) -> Language | None:
        return self._locale.language

    @property
    def country_code(self) -> str | None:
        return self._locale.country_code

    @property
    def store_url(self) -> httpx.URL:
        return self._requests.store_url

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client and not self._http.is_closed:
            await self._http.aclose()

    async def __aenter__(self) -> "Steam":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def _create_retrying(self) -> AsyncRetrying:
        """Retry policy for transport failures only; one attempt without a RetryConfig."""
        if self._retry_config is None:
            return AsyncRetrying(stop=stop_after_attempt(1), reraise=True)

        config = self._retry_config
        return AsyncRetrying(
            retry=retry_if_exception_type(httpx.TransportError),
            stop=stop_after_attempt(config.max_attempts),
            wait=wait_exponential(
                multiplier=config.base_delay_seconds,
                max=config.max_delay_seconds,
                exp_base=config.exponential_base,
            ),
            before_sleep=self._log_retry_attempt,
            reraise=True,
        )

    def _log_retry_attempt(self, retry_state: Any) -> None:
        self._logger.warning(
            "Retrying request",
            attempt=retry_state.attempt_number,
            wait_seconds=retry_state.next_action.sleep if retry_state.next_action else 0,
            exception=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _send(self, url: httpx.URL) -> Any:
        """
        GET ``url`` and return the decoded JSON body.

        Raises:
            RateLimitError: If the store answers 429
            RequestError: On transport failure, error status or a non-JSON body
        """
        endpoint = str(url)
        self._logger.debug("Sending request", url=endpoint)

        try:
            async for attempt in self._create_retrying():
                with attempt:
                    response = await self._http.get(url)
        except httpx.HTTPError as e:
            self._logger.warning("Request failed", url=endpoint, error=str(e))
            raise RequestError(str(e), endpoint=endpoint, original_error=e) from e

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            self._logger.warning("Rate limit exceeded", url=endpoint, retry_after=retry_after)
            raise RateLimitError(
                f"Rate limit exceeded. Retry after {retry_after or 'unknown'}s",
                endpoint=endpoint,
                status_code=429,
            )

        if response.status_code >= 400:
            self._logger.warning(
                "Store returned error status",
                url=endpoint,
                status_code=response.status_code,
            )
            raise RequestError(
                f"API error: {response.status_code}",
                endpoint=endpoint,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise RequestError(
                f"Response is not JSON: {e}",
                endpoint=endpoint,
                status_code=response.status_code,
                original_error=e,
            ) from e

    async def featured(self) -> Featured:
        """Get the featured page of the store."""
        url = self._requests.build(FEATURED)
        featured: Featured = unwrap_flagged(Featured, await self._send(url), endpoint=str(url))
        return featured

    async def featured_categories(self) -> dict[str, FeaturedCategory]:
        """
        Get featured categories with prices, e.g. Specials or Top Sellers.

        Sections that are not categories (the trailer slideshow) are left
        out. A category that fails to decode is dropped with a warning.
        """
        url = self._requests.build(FEATURED_CATEGORIES)
        raw = await self._send(url)
        sections: dict[str, Any] = unwrap_flagged(FeaturedCategories, raw, endpoint=str(url))

        categories: dict[str, FeaturedCategory] = {}
        for key, section in sections.items():
            if key in NON_CATEGORY_SECTIONS:
                continue
            try:
                categories[key] = decode(FeaturedCategory, section, endpoint=str(url))
            except DecodeError as e:
                self._logger.warning(
                    "Dropping undecodable featured category",
                    section=key,
                    error=str(e.original_error or e),
                )
        return categories

    async def genres(self) -> list[Genre]:
        """Get the list of store genres."""
        url = self._requests.build(GENRE_LIST)
        genres: list[Genre] = unwrap_flagged(GenreList, await self._send(url), endpoint=str(url))
        return genres

    async def apps_in_genre(self, genre: str) -> AppsIn:
        """
        Get apps of a genre, e.g. ``action`` or ``rpg``.

        Apps are grouped by tabs such as ``topsellers`` or ``specials``.
        """
        url = self._requests.build(APPS_IN_GENRE, [("genre", genre)])
        apps: AppsIn = unwrap_flagged(AppsIn, await self._send(url), endpoint=str(url))
        return apps

    async def apps_in_category(self, category: str) -> AppsIn:
        """
        Get apps of a category, e.g. ``cat_comingsoon`` or ``cat_newreleases``.

        Apps are grouped by tabs such as ``topsellers`` or ``specials``.
        """
        url = self._requests.build(APPS_IN_CATEGORY, [("category", category)])
        apps: AppsIn = unwrap_flagged(AppsIn, await self._send(url), endpoint=str(url))
        return apps

    async def app(self, app_id: int) -> AppDetails:
        """
        Get detailed information about an application.

        Raises:
            IdNotFound: If the response has no entry for ``app_id``
            ResponseWithNoSuccess: If the entry reports failure
            ResponseWithNoData: If the entry has no data
        """
        key = str(app_id)
        url = self._requests.build(APP_DETAILS, [("appids", key)])
        details: AppDetails = unwrap_keyed(
            await self._send(url),
            key,
            DataEnvelope[AppDetails],
            endpoint=str(url),
        )
        return details

    async def package(self, pkg_id: int) -> PackageDetails:
        """
        Get information about a package (not a bundle).

        Raises:
            IdNotFound: If the response has no entry for ``pkg_id``
            ResponseWithNoSuccess: If the entry reports failure
            ResponseWithNoData: If the entry has no data
        """
        key = str(pkg_id)
        url = self._requests.build(PACKAGE_DETAILS, [("packageids", key)])
        details: PackageDetails = unwrap_keyed(
            await self._send(url),
            key,
            DataEnvelope[PackageDetails],
            endpoint=str(url),
        )
        return details.model_copy(update={"pkg_id": pkg_id})

    async def dlc(self, app_id: int) -> DlcData:
        """
        Get the DLC of an application.

        An app without DLC yields an empty ``dlc`` list.

        Raises:
            ResponseWithNoSuccess: If the status is not 1
            ResponseWithNoData: If the response has no DLC list at all
        """
        url = self._requests.build(DLC_FOR_APP, [("appid", str(app_id))])
        dlc: DlcData = unwrap_flagged(DlcData, await self._send(url), endpoint=str(url))
        return dlc

    async def price(self, app_ids: Iterable[int]) -> list[AppPrice]:
        """
        Get price overviews for several applications in one request.

        Apps whose entry reports failure or has no price (e.g. free
        apps) are left out; compare the app IDs of the result with the
        requested ones to find them.

        Raises:
            ParseIdError: If the response is keyed by a non-numeric ID
        """
        ids = [str(app_id) for app_id in app_ids]
        if not ids:
            return []

        url = self._requests.build(
            APP_DETAILS,
            [("appids", ",".join(ids)), ("filters", "price_overview")],
        )
        raw = await self._send(url)

        prices = [
            overview.price_overview.model_copy(update={"app_id": app_id})
            for app_id, overview in collect_keyed(
                raw, DataEnvelope[PriceOverview], endpoint=str(url)
            )
        ]

        if len(prices) < len(ids):
            self._logger.debug(
                "Omitted apps without price",
                requested=len(ids),
                returned=len(prices),
            )
        return prices

    async def reviews(self, app_id: int, review_filter: ReviewsFilter) -> Reviews:
        """
        Get one page of reviews for an application.

        Pass the page to ``review_filter.advance()`` to move to the next one.

        Raises:
            ResponseWithNoSuccess: If the store reports failure
        """
        url = self._requests.build(app_reviews(app_id), review_filter.to_params())
        page: Reviews = unwrap_flagged(Reviews, await self._send(url), endpoint=str(url))
        return page.model_copy(update={"app_id": app_id})

    async def review_pages(
        self,
        app_id: int,
        review_filter: ReviewsFilter,
    ) -> AsyncIterator[Reviews]:
        """
        Iterate over review pages, starting at the filter's cursor.

        A page is fetched only when the caller asks for it; stop
        iterating to stop paging. The filter's cursor is advanced in
        place, so an interrupted walk can be resumed with it.
        """
        while True:
            page = await self.reviews(app_id, review_filter)
            yield page
            if not review_filter.advance(page):
                return
