from dataclasses import dataclass
from typing import Callable

from bs4 import BeautifulSoup

from partasala_api.scraper.parser import (
    Brand,
    VehicleDetail,
    VehicleSummary,
    extract_brands,
    extract_detail,
    extract_vehicles,
)


@dataclass(frozen=True)
class PageShape:
    """Where the catalog pages live and how to read them.

    Everything that depends on the upstream site's markup sits here, so a
    redesign of the site means swapping one value.
    """

    home_path: str
    brand_path_template: str
    vehicle_path_template: str
    extract_brands: Callable[[BeautifulSoup, str], list[Brand]]
    extract_vehicles: Callable[[BeautifulSoup, str, str], list[VehicleSummary]]
    extract_detail: Callable[[BeautifulSoup, str, str, str], VehicleDetail]

    def brand_path(self, brand_slug: str) -> str:
        return self.brand_path_template.format(slug=brand_slug)

    def vehicle_path(self, vehicle_slug: str) -> str:
        return self.vehicle_path_template.format(slug=vehicle_slug)


PARTASALA_SHAPE = PageShape(
    home_path="",
    brand_path_template="/bilaflokkur/{slug}/",
    vehicle_path_template="/bilaskra/{slug}/",
    extract_brands=extract_brands,
    extract_vehicles=extract_vehicles,
    extract_detail=extract_detail,
)
