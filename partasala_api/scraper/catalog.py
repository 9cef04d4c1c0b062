import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field, replace
from typing import Protocol

from bs4 import BeautifulSoup

from partasala_api.config import Settings
from partasala_api.scraper.client import FetchError
from partasala_api.scraper.parser import Brand, VehicleDetail, VehicleSummary
from partasala_api.scraper.shape import PARTASALA_SHAPE, PageShape


logger = logging.getLogger(__name__)

MATCH_BRAND = "brand"
MATCH_CAR_NAME = "car_name"


class PageFetcher(Protocol):
    def fetch(self, url: str) -> BeautifulSoup: ...


class MissingQueryError(ValueError):
    pass


@dataclass
class AggregateResult:
    vehicles: list[VehicleSummary] = field(default_factory=list)
    skipped_brands: list[str] = field(default_factory=list)


class PartasalaCatalog:
    def __init__(self, client: PageFetcher, settings: Settings, shape: PageShape = PARTASALA_SHAPE) -> None:
        self._client = client
        self._base_url = settings.base_url.rstrip("/")
        self._concurrency = max(1, settings.brand_concurrency)
        self._shape = shape

    def list_brands(self) -> list[Brand]:
        soup = self._client.fetch(self._base_url + self._shape.home_path)
        return self._shape.extract_brands(soup, self._base_url)

    def list_brand_vehicles(self, brand_slug: str) -> list[VehicleSummary]:
        soup = self._client.fetch(self._base_url + self._shape.brand_path(brand_slug))
        return self._shape.extract_vehicles(soup, brand_slug, self._base_url)

    def vehicle_detail(self, vehicle_slug: str) -> VehicleDetail:
        page_url = self._base_url + self._shape.vehicle_path(vehicle_slug)
        soup = self._client.fetch(page_url)
        return self._shape.extract_detail(soup, vehicle_slug, page_url, self._base_url)

    def all_vehicles(self) -> AggregateResult:
        brands = self.list_brands()
        result = AggregateResult()
        for brand, vehicles in self._vehicles_per_brand(brands):
            if vehicles is None:
                result.skipped_brands.append(brand.slug)
                continue
            result.vehicles.extend(vehicles)

        logger.info(
            "Collected %s vehicles from %s brands (skipped=%s)",
            len(result.vehicles),
            len(brands) - len(result.skipped_brands),
            len(result.skipped_brands),
        )
        return result

    def search(self, query: str) -> AggregateResult:
        needle = (query or "").strip().lower()
        if not needle:
            raise MissingQueryError('Missing search query parameter "q"')

        brands = self.list_brands()
        result = AggregateResult()
        for brand, vehicles in self._vehicles_per_brand(brands):
            if vehicles is None:
                result.skipped_brands.append(brand.slug)
                continue

            if needle in brand.name.lower():
                result.vehicles.extend(replace(vehicle, match_type=MATCH_BRAND) for vehicle in vehicles)
                continue

            result.vehicles.extend(
                replace(vehicle, match_type=MATCH_CAR_NAME)
                for vehicle in vehicles
                if needle in vehicle.name.lower()
            )

        logger.info("Search %r matched %s vehicles (skipped=%s)", needle, len(result.vehicles), len(result.skipped_brands))
        return result

    def _try_brand_vehicles(self, brand: Brand) -> list[VehicleSummary] | None:
        try:
            return self.list_brand_vehicles(brand.slug)
        except FetchError as exc:
            logger.warning("Skipping brand %s: %s", brand.slug, exc)
            return None

    def _vehicles_per_brand(self, brands: list[Brand]) -> list[tuple[Brand, list[VehicleSummary] | None]]:
        """Fetch every brand's listing, keeping the brand order.

        A brand whose listing could not be fetched maps to None.
        """
        if self._concurrency <= 1 or len(brands) <= 1:
            return [(brand, self._try_brand_vehicles(brand)) for brand in brands]

        by_index: dict[int, list[VehicleSummary] | None] = {}
        with ThreadPoolExecutor(max_workers=self._concurrency) as executor:
            future_to_index = {
                executor.submit(self._try_brand_vehicles, brand): index for index, brand in enumerate(brands)
            }
            for future in as_completed(future_to_index):
                by_index[future_to_index[future]] = future.result()

        return [(brand, by_index[index]) for index, brand in enumerate(brands)]
