"""
Data contracts for packages and DLC.
"""

from pydantic import Field

from steam_storefront.contracts.common import Platforms, ReleaseDate, StatusModel, StoreModel
from steam_storefront.contracts.price import PackagePrice, Price


class PackageApp(StoreModel):
    """Application contained in a package."""

    app_id: int = Field(..., alias="id")
    name: str


class Controller(StoreModel):
    """Controller support of a package."""

    full_gamepad: bool = False


class PackageDetails(StoreModel):
    """
    Package (not bundle) details from the packagedetails endpoint.

    The package ID is not echoed back by the store; the client
    stamps it from the requested ID.
    """

    pkg_id: int = Field(default=0, description="Steam package ID")
    name: str
    page_image: str
    small_logo: str
    apps: list[PackageApp] = Field(default_factory=list)
    price: PackagePrice
    platforms: Platforms
    controller: Controller
    release_date: ReleaseDate


class DlcDetails(StoreModel):
    """DLC entry of the dlcforapp endpoint."""

    dlc_id: int = Field(..., alias="id")
    name: str
    header_image: str
    price_overview: Price
    platforms: Platforms
    release_date: ReleaseDate
    controller_support: str | None = None


class DlcData(StatusModel):
    """
    DLC list of an application.

    An empty ``dlc`` list means the app has no DLC; a missing
    list means the store sent no data.
    """

    app_id: str = Field(..., alias="appid")
    name: str
    dlc: list[DlcDetails] | None = None

    @property
    def payload(self) -> "DlcData | None":
        return self if self.dlc is not None else None
