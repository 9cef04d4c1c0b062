import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from partasala_api.api.catalog import router as catalog_router
from partasala_api.config import SETTINGS
from partasala_api.scraper.catalog import MissingQueryError
from partasala_api.scraper.client import FetchError
from partasala_api.schemas.catalog import ErrorResponse


logger = logging.getLogger(__name__)

API_NAME = "Partasala.is Scraper API"
API_VERSION = "1.0.0"

ENDPOINTS = {
    "/brands": {
        "method": "GET",
        "description": "Get list of all car brands",
        "response": "Array of brand objects with name and URL",
    },
    "/brands/<brand_slug>": {
        "method": "GET",
        "description": "Get list of cars for a specific brand",
        "parameters": {"brand_slug": "Brand identifier (e.g., audi, bmw, toyota)"},
        "response": "Array of car objects with name, URL, and thumbnail",
    },
    "/cars": {
        "method": "GET",
        "description": "Get all available cars across all brands",
        "response": "Array of all car objects with name, URL, and thumbnail",
    },
    "/cars/<car_slug>": {
        "method": "GET",
        "description": "Get details and images for a specific car",
        "parameters": {"car_slug": "Car identifier from the car URL"},
        "response": "Car object with name, description, and array of image URLs",
    },
    "/search": {
        "method": "GET",
        "description": "Search for cars by name",
        "parameters": {"q": "Search query"},
        "response": "Array of matching cars",
    },
}

app = FastAPI(title=API_NAME, version=API_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(SETTINGS.cors_allow_origins),
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Accept"],
)

app.include_router(catalog_router)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.exception_handler(FetchError)
def handle_fetch_error(request: Request, exc: FetchError) -> JSONResponse:
    logger.warning("Upstream fetch failed for %s (%s): %s", request.url.path, exc.kind, exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


@app.exception_handler(MissingQueryError)
def handle_missing_query(request: Request, exc: MissingQueryError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


@app.get("/")
def index() -> dict[str, object]:
    return {"name": API_NAME, "version": API_VERSION, "endpoints": ENDPOINTS}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


def main() -> None:
    logging.basicConfig(
        level=SETTINGS.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting %s on %s:%s (upstream=%s)", API_NAME, SETTINGS.api_host, SETTINGS.api_port, SETTINGS.base_url)
    uvicorn.run(app, host=SETTINGS.api_host, port=SETTINGS.api_port)


if __name__ == "__main__":
    main()
