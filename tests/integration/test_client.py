"""Integration tests for the Steam client with mocked HTTP responses."""

import json
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, cast

import httpx
import pytest
import respx
from structlog.testing import capture_logs

from steam_storefront.client import (
    DecodeError,
    IdNotFound,
    RateLimitError,
    RequestError,
    ResponseWithNoData,
    ResponseWithNoSuccess,
    ReviewsFilter,
    Steam,
    SteamBuilder,
)
from steam_storefront.config import RetryConfig
from steam_storefront.contracts import Language

# Load fixtures
FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

STORE_API = "https://store.steampowered.com/api"


def load_fixture(name: str) -> dict[str, Any]:
    """Load a JSON fixture file."""
    with (FIXTURES_DIR / name).open(encoding="utf-8") as f:
        return cast(dict[str, Any], json.load(f))


@pytest.fixture
def steam() -> Steam:
    """Client without locale."""
    return SteamBuilder().build()


@pytest.fixture
def localized_steam() -> Steam:
    """Client pricing in the US, in English."""
    return SteamBuilder().with_country_code("us").with_language(Language.ENGLISH).build()


class TestApp:
    """Tests for application details."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_app_success(self, steam: Steam) -> None:
        route = respx.get(f"{STORE_API}/appdetails/").mock(
            return_value=httpx.Response(200, json=load_fixture("app_details_response.json"))
        )

        async with steam:
            app = await steam.app(219990)

        assert app.app_id == 219990
        assert app.name == "Grim Dawn"
        assert app.price_overview is not None
        assert app.price_overview.app_id == 219990
        assert route.calls.last.request.url.params["appids"] == "219990"

    @respx.mock
    @pytest.mark.asyncio
    async def test_locale_appended_last(self, localized_steam: Steam) -> None:
        route = respx.get(f"{STORE_API}/appdetails/").mock(
            return_value=httpx.Response(200, json=load_fixture("app_details_response.json"))
        )

        async with localized_steam:
            await localized_steam.app(219990)

        params = route.calls.last.request.url.params
        assert params.multi_items() == [("appids", "219990"), ("l", "english"), ("cc", "US")]

    @respx.mock
    @pytest.mark.asyncio
    async def test_app_not_in_response(self, steam: Steam) -> None:
        respx.get(f"{STORE_API}/appdetails/").mock(
            return_value=httpx.Response(200, json={"20": {"success": False}})
        )

        async with steam:
            with pytest.raises(IdNotFound) as exc_info:
                await steam.app(10)

        assert exc_info.value.id == "10"

    @respx.mock
    @pytest.mark.asyncio
    async def test_app_no_data(self, steam: Steam) -> None:
        respx.get(f"{STORE_API}/appdetails/").mock(
            return_value=httpx.Response(200, json={"10": {"success": True}})
        )

        async with steam:
            with pytest.raises(ResponseWithNoData):
                await steam.app(10)

    @respx.mock
    @pytest.mark.asyncio
    async def test_app_null_body(self, steam: Steam) -> None:
        """The store answers ``null`` when it throttles appdetails."""
        respx.get(f"{STORE_API}/appdetails/").mock(
            return_value=httpx.Response(200, content=b"null")
        )

        async with steam:
            with pytest.raises(DecodeError):
                await steam.app(10)


class TestPackage:
    """Tests for package details."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_package_stamped_with_id(self, steam: Steam) -> None:
        route = respx.get(f"{STORE_API}/packagedetails/").mock(
            return_value=httpx.Response(200, json=load_fixture("package_details_response.json"))
        )

        async with steam:
            package = await steam.package(469)

        assert package.pkg_id == 469
        assert package.name == "The Orange Box"
        assert [app.app_id for app in package.apps][:2] == [220, 380]
        assert route.calls.last.request.url.params["packageids"] == "469"

    @respx.mock
    @pytest.mark.asyncio
    async def test_package_no_success(self, steam: Steam) -> None:
        respx.get(f"{STORE_API}/packagedetails/").mock(
            return_value=httpx.Response(200, json={"7": {"success": False}})
        )

        async with steam:
            with pytest.raises(ResponseWithNoSuccess):
                await steam.package(7)


class TestDlc:
    """Tests for DLC lookup."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_dlc_success(self, steam: Steam) -> None:
        route = respx.get(f"{STORE_API}/dlcforapp/").mock(
            return_value=httpx.Response(200, json=load_fixture("dlc_response.json"))
        )

        async with steam:
            dlc = await steam.dlc(219990)

        assert dlc.app_id == "219990"
        assert dlc.dlc is not None
        assert len(dlc.dlc) == 2
        assert dlc.dlc[0].dlc_id == 642280
        assert route.calls.last.request.url.params["appid"] == "219990"

    @respx.mock
    @pytest.mark.asyncio
    async def test_app_without_dlc(self, steam: Steam) -> None:
        respx.get(f"{STORE_API}/dlcforapp/").mock(
            return_value=httpx.Response(200, json={"status": 1, "appid": "10", "name": "CS", "dlc": []})
        )

        async with steam:
            dlc = await steam.dlc(10)

        assert dlc.dlc == []

    @respx.mock
    @pytest.mark.asyncio
    async def test_dlc_list_missing(self, steam: Steam) -> None:
        respx.get(f"{STORE_API}/dlcforapp/").mock(
            return_value=httpx.Response(200, json={"status": 1, "appid": "10", "name": "CS"})
        )

        async with steam:
            with pytest.raises(ResponseWithNoData):
                await steam.dlc(10)

    @respx.mock
    @pytest.mark.asyncio
    async def test_dlc_bad_status(self, steam: Steam) -> None:
        respx.get(f"{STORE_API}/dlcforapp/").mock(
            return_value=httpx.Response(200, json={"status": 2, "appid": "10", "name": "CS"})
        )

        async with steam:
            with pytest.raises(ResponseWithNoSuccess):
                await steam.dlc(10)


class TestPrice:
    """Tests for batched price lookup."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_failed_entries_skipped(self, steam: Steam) -> None:
        route = respx.get(f"{STORE_API}/appdetails/").mock(
            return_value=httpx.Response(200, json=load_fixture("price_response.json"))
        )

        async with steam:
            prices = await steam.price([10, 20, 30])

        assert [price.app_id for price in prices] == [10, 30]
        assert prices[1].discount_percent == 50
        params = route.calls.last.request.url.params
        assert params["appids"] == "10,20,30"
        assert params["filters"] == "price_overview"

    @respx.mock
    @pytest.mark.asyncio
    async def test_empty_ids_no_request(self, steam: Steam) -> None:
        route = respx.get(f"{STORE_API}/appdetails/")

        async with steam:
            prices = await steam.price([])

        assert prices == []
        assert not route.called


class TestListings:
    """Tests for featured, genre and category listings."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_featured(self, steam: Steam) -> None:
        respx.get(f"{STORE_API}/featured/").mock(
            return_value=httpx.Response(200, json=load_fixture("featured_response.json"))
        )

        async with steam:
            featured = await steam.featured()

        assert featured.featured_win[0].app_id == 489830

    @respx.mock
    @pytest.mark.asyncio
    async def test_featured_categories(self, steam: Steam) -> None:
        respx.get(f"{STORE_API}/featuredcategories/").mock(
            return_value=httpx.Response(
                200, json=load_fixture("featured_categories_response.json")
            )
        )

        async with steam:
            categories = await steam.featured_categories()

        assert set(categories) == {"0", "specials", "top_sellers", "genres"}
        specials = categories["specials"]
        assert specials.items is not None
        assert specials.items[0].final_price == 1599

    @respx.mock
    @pytest.mark.asyncio
    async def test_undecodable_category_dropped_with_warning(self) -> None:
        body = load_fixture("featured_categories_response.json")
        body["new_releases"] = {"id": "cat_newreleases", "name": "New Releases", "items": [{}]}
        respx.get(f"{STORE_API}/featuredcategories/").mock(
            return_value=httpx.Response(200, json=body)
        )

        with capture_logs() as logs:
            async with SteamBuilder().build() as steam:
                categories = await steam.featured_categories()

        assert "new_releases" not in categories
        assert "specials" in categories
        warnings = [entry for entry in logs if entry["log_level"] == "warning"]
        assert [entry["section"] for entry in warnings] == ["new_releases"]

    @respx.mock
    @pytest.mark.asyncio
    async def test_genres(self, steam: Steam) -> None:
        respx.get(f"{STORE_API}/getgenrelist/").mock(
            return_value=httpx.Response(200, json=load_fixture("genre_list_response.json"))
        )

        async with steam:
            genres = await steam.genres()

        assert [genre.id for genre in genres] == ["action", "strategy", "rpg"]

    @respx.mock
    @pytest.mark.asyncio
    async def test_apps_in_genre(self, steam: Steam) -> None:
        route = respx.get(f"{STORE_API}/getappsingenre/").mock(
            return_value=httpx.Response(200, json=load_fixture("apps_in_genre_response.json"))
        )

        async with steam:
            apps = await steam.apps_in_genre("rpg")

        assert apps.id == "rpg"
        assert apps.tabs is not None
        assert [item.app_id for item in apps.tabs["topsellers"].items] == [489830, 219990]
        assert route.calls.last.request.url.params["genre"] == "rpg"

    @respx.mock
    @pytest.mark.asyncio
    async def test_apps_in_category(self, steam: Steam) -> None:
        route = respx.get(f"{STORE_API}/getappsincategory/").mock(
            return_value=httpx.Response(
                200, json={"status": 1, "id": "cat_newreleases", "name": "New Releases", "tabs": []}
            )
        )

        async with steam:
            apps = await steam.apps_in_category("cat_newreleases")

        assert apps.name == "New Releases"
        assert apps.tabs is None
        assert route.calls.last.request.url.params["category"] == "cat_newreleases"

    @respx.mock
    @pytest.mark.asyncio
    async def test_listing_bad_status(self, steam: Steam) -> None:
        respx.get(f"{STORE_API}/getgenrelist/").mock(
            return_value=httpx.Response(200, json={"status": 0})
        )

        async with steam:
            with pytest.raises(ResponseWithNoSuccess):
                await steam.genres()


class TestReviews:
    """Tests for a single review page."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_reviews_page(self, steam: Steam) -> None:
        route = respx.get("https://store.steampowered.com/appreviews/219990").mock(
            return_value=httpx.Response(200, json=load_fixture("reviews_response.json"))
        )
        review_filter = ReviewsFilter(language=Language.ENGLISH, num_per_page=100)

        async with steam:
            page = await steam.reviews(219990, review_filter)

        assert page.app_id == 219990
        assert page.reviews[0].voted_up is True
        params = route.calls.last.request.url.params
        assert params["json"] == "1"
        assert params["language"] == "english"
        assert params["num_per_page"] == "100"

    @respx.mock
    @pytest.mark.asyncio
    async def test_reviews_no_success(self, steam: Steam) -> None:
        respx.get("https://store.steampowered.com/appreviews/10").mock(
            return_value=httpx.Response(
                200, json={"success": 2, "query_summary": {"num_reviews": 0}, "cursor": "*"}
            )
        )

        async with steam:
            with pytest.raises(ResponseWithNoSuccess):
                await steam.reviews(10, ReviewsFilter())


class TestFailureBodies:
    """Tests for failure flags sent without any payload fields."""

    @respx.mock
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("url", "body", "call"),
        [
            (
                "https://store.steampowered.com/appreviews/10",
                {"success": 2},
                lambda s: s.reviews(10, ReviewsFilter()),
            ),
            (f"{STORE_API}/dlcforapp/", {"status": 0}, lambda s: s.dlc(10)),
            (f"{STORE_API}/getappsingenre/", {"status": 0}, lambda s: s.apps_in_genre("rpg")),
            (
                f"{STORE_API}/getappsincategory/",
                {"status": 2},
                lambda s: s.apps_in_category("cat_newreleases"),
            ),
            (f"{STORE_API}/featured/", {"status": 0}, lambda s: s.featured()),
            (f"{STORE_API}/featuredcategories/", {"status": 0}, lambda s: s.featured_categories()),
        ],
    )
    async def test_bare_failure_is_no_success(
        self,
        steam: Steam,
        url: str,
        body: dict[str, Any],
        call: Callable[[Steam], Awaitable[Any]],
    ) -> None:
        respx.get(url).mock(return_value=httpx.Response(200, json=body))

        async with steam:
            with pytest.raises(ResponseWithNoSuccess) as exc_info:
                await call(steam)

        assert not isinstance(exc_info.value, DecodeError)

    @respx.mock
    @pytest.mark.asyncio
    async def test_successful_body_missing_fields_is_decode_error(self, steam: Steam) -> None:
        respx.get(f"{STORE_API}/dlcforapp/").mock(
            return_value=httpx.Response(200, json={"status": 1})
        )

        async with steam:
            with pytest.raises(DecodeError):
                await steam.dlc(10)


class TestTransportErrors:
    """Tests for HTTP-level failures."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_rate_limit(self, steam: Steam) -> None:
        respx.get(f"{STORE_API}/featured/").mock(
            return_value=httpx.Response(429, headers={"Retry-After": "60"})
        )

        async with steam:
            with pytest.raises(RateLimitError) as exc_info:
                await steam.featured()

        assert exc_info.value.status_code == 429
        assert isinstance(exc_info.value, RequestError)

    @respx.mock
    @pytest.mark.asyncio
    async def test_server_error(self, steam: Steam) -> None:
        respx.get(f"{STORE_API}/featured/").mock(return_value=httpx.Response(500))

        async with steam:
            with pytest.raises(RequestError) as exc_info:
                await steam.featured()

        assert exc_info.value.status_code == 500

    @respx.mock
    @pytest.mark.asyncio
    async def test_non_json_body(self, steam: Steam) -> None:
        respx.get(f"{STORE_API}/featured/").mock(
            return_value=httpx.Response(200, text="<html>Access Denied</html>")
        )

        async with steam:
            with pytest.raises(RequestError):
                await steam.featured()

    @respx.mock
    @pytest.mark.asyncio
    async def test_connection_error_not_retried_by_default(self, steam: Steam) -> None:
        route = respx.get(f"{STORE_API}/featured/").mock(
            side_effect=httpx.ConnectError("connection refused")
        )

        async with steam:
            with pytest.raises(RequestError) as exc_info:
                await steam.featured()

        assert route.call_count == 1
        assert isinstance(exc_info.value.original_error, httpx.ConnectError)

    @respx.mock
    @pytest.mark.asyncio
    async def test_connection_error_retried(self) -> None:
        route = respx.get(f"{STORE_API}/getgenrelist/").mock(
            side_effect=[
                httpx.ConnectError("connection refused"),
                httpx.Response(200, json=load_fixture("genre_list_response.json")),
            ]
        )
        retry = RetryConfig(max_attempts=3, base_delay_seconds=0.1, max_delay_seconds=1.0)

        async with SteamBuilder().with_retry(retry).build() as steam:
            genres = await steam.genres()

        assert len(genres) == 3
        assert route.call_count == 2

    @respx.mock
    @pytest.mark.asyncio
    async def test_error_status_not_retried(self) -> None:
        route = respx.get(f"{STORE_API}/featured/").mock(return_value=httpx.Response(503))
        retry = RetryConfig(max_attempts=3, base_delay_seconds=0.1, max_delay_seconds=1.0)

        async with SteamBuilder().with_retry(retry).build() as steam:
            with pytest.raises(RequestError):
                await steam.featured()

        assert route.call_count == 1


class TestClientLifecycle:
    """Tests for HTTP client ownership."""

    @pytest.mark.asyncio
    async def test_owned_client_closed(self) -> None:
        steam = SteamBuilder().build()

        async with steam:
            pass

        assert steam._http.is_closed

    @pytest.mark.asyncio
    async def test_shared_client_left_open(self) -> None:
        async with httpx.AsyncClient() as http_client:
            async with SteamBuilder().with_http_client(http_client).build():
                pass

            assert not http_client.is_closed
