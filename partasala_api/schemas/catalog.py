from pydantic import BaseModel, ConfigDict, model_serializer


class BrandOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    slug: str
    url: str


class VehicleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    slug: str
    url: str
    thumbnail: str | None
    brand: str
    match_type: str | None = None

    @model_serializer(mode="wrap")
    def _omit_unset_match_type(self, handler):
        data = handler(self)
        if data.get("match_type") is None:
            data.pop("match_type", None)
        return data


class ImageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    url: str
    thumbnail: str


class VehicleDetailOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    slug: str
    url: str
    brand: str | None
    description: str | None
    image_count: int
    images: list[ImageOut]


class BrandListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[BrandOut]


class BrandVehiclesResponse(BaseModel):
    success: bool = True
    brand: str
    count: int
    data: list[VehicleOut]


class VehicleListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[VehicleOut]
    skipped_brands: list[str]


class VehicleDetailResponse(BaseModel):
    success: bool = True
    data: VehicleDetailOut


class SearchResponse(BaseModel):
    success: bool = True
    query: str
    count: int
    data: list[VehicleOut]
    skipped_brands: list[str]


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
