from partasala_api.scraper.catalog import AggregateResult, MissingQueryError, PartasalaCatalog
from partasala_api.scraper.client import FetchError, HttpClient
from partasala_api.scraper.parser import (
    Brand,
    Image,
    VehicleDetail,
    VehicleSummary,
    extract_brands,
    extract_detail,
    extract_vehicles,
)
from partasala_api.scraper.shape import PARTASALA_SHAPE, PageShape
from partasala_api.scraper.urls import full_size_image_url, normalize_url, slug_from_href

__all__ = [
    "AggregateResult",
    "Brand",
    "FetchError",
    "HttpClient",
    "Image",
    "MissingQueryError",
    "PARTASALA_SHAPE",
    "PageShape",
    "PartasalaCatalog",
    "VehicleDetail",
    "VehicleSummary",
    "extract_brands",
    "extract_detail",
    "extract_vehicles",
    "full_size_image_url",
    "normalize_url",
    "slug_from_href",
]
