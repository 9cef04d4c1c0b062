from fastapi import APIRouter, Depends, Query

from partasala_api.api.deps import get_catalog
from partasala_api.scraper.catalog import PartasalaCatalog
from partasala_api.scraper.parser import VehicleSummary
from partasala_api.schemas.catalog import (
    BrandListResponse,
    BrandOut,
    BrandVehiclesResponse,
    SearchResponse,
    VehicleDetailOut,
    VehicleDetailResponse,
    VehicleListResponse,
    VehicleOut,
)

router = APIRouter(tags=["catalog"])


def _to_vehicle_out(vehicles: list[VehicleSummary]) -> list[VehicleOut]:
    return [VehicleOut.model_validate(vehicle) for vehicle in vehicles]


@router.get("/brands", response_model=BrandListResponse)
def list_brands(catalog: PartasalaCatalog = Depends(get_catalog)) -> BrandListResponse:
    brands = catalog.list_brands()
    return BrandListResponse(count=len(brands), data=[BrandOut.model_validate(brand) for brand in brands])


@router.get("/brands/{brand_slug}", response_model=BrandVehiclesResponse)
def list_brand_vehicles(brand_slug: str, catalog: PartasalaCatalog = Depends(get_catalog)) -> BrandVehiclesResponse:
    vehicles = catalog.list_brand_vehicles(brand_slug)
    return BrandVehiclesResponse(brand=brand_slug, count=len(vehicles), data=_to_vehicle_out(vehicles))


@router.get("/cars", response_model=VehicleListResponse)
def list_all_vehicles(catalog: PartasalaCatalog = Depends(get_catalog)) -> VehicleListResponse:
    result = catalog.all_vehicles()
    return VehicleListResponse(
        count=len(result.vehicles),
        data=_to_vehicle_out(result.vehicles),
        skipped_brands=result.skipped_brands,
    )


@router.get("/cars/{car_slug}", response_model=VehicleDetailResponse)
def get_vehicle_detail(car_slug: str, catalog: PartasalaCatalog = Depends(get_catalog)) -> VehicleDetailResponse:
    detail = catalog.vehicle_detail(car_slug)
    return VehicleDetailResponse(data=VehicleDetailOut.model_validate(detail))


@router.get("/search", response_model=SearchResponse)
def search_vehicles(
    q: str | None = Query(None),
    catalog: PartasalaCatalog = Depends(get_catalog),
) -> SearchResponse:
    result = catalog.search(q or "")
    return SearchResponse(
        query=q or "",
        count=len(result.vehicles),
        data=_to_vehicle_out(result.vehicles),
        skipped_brands=result.skipped_brands,
    )
