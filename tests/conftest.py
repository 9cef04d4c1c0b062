from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from partasala_api.config import Settings
from partasala_api.scraper.client import HTTP_STATUS, NETWORK, FetchError

FIXTURES_DIR = Path(__file__).parent / "fixtures"
BASE_URL = "https://partasala.is"


def read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


class FakeFetcher:
    """Serves canned pages by URL; anything unknown fails like a 404."""

    def __init__(self, pages: dict[str, str], failing: set[str] | None = None) -> None:
        self.pages = pages
        self.failing = failing or set()
        self.requested: list[str] = []

    def fetch(self, url: str) -> BeautifulSoup:
        self.requested.append(url)
        if url in self.failing:
            raise FetchError(f"failed to fetch {url}: connection reset", url=url, kind=NETWORK)
        if url not in self.pages:
            raise FetchError("status code error: 404 Not Found", url=url, kind=HTTP_STATUS, status_code=404)
        return BeautifulSoup(self.pages[url], "html.parser")


def brand_listing_html(*vehicles: tuple[str, str]) -> str:
    items = "".join(f'<li><a href="/bilaskra/{slug}/">{name}</a></li>' for slug, name in vehicles)
    return f"<html><body><ul>{items}</ul></body></html>"


@pytest.fixture
def settings() -> Settings:
    return Settings(base_url=BASE_URL)


@pytest.fixture
def home_html() -> str:
    return read_fixture("home.html")


@pytest.fixture
def brand_audi_html() -> str:
    return read_fixture("brand_audi.html")


@pytest.fixture
def vehicle_detail_html() -> str:
    return read_fixture("vehicle_detail.html")


@pytest.fixture
def catalog_pages(home_html: str) -> dict[str, str]:
    return {
        BASE_URL: home_html,
        f"{BASE_URL}/bilaflokkur/audi/": brand_listing_html(
            ("audi-a4-2008", "Audi A4 2008"),
            ("audi-a6-2011", "Audi A6 2011"),
            ("audi-q7-2012", "Audi Q7 2012"),
        ),
        f"{BASE_URL}/bilaflokkur/bmw/": brand_listing_html(
            ("bmw-320-2005", "BMW 320 Sport"),
            ("bmw-x5-2009", "BMW X5"),
        ),
        f"{BASE_URL}/bilaflokkur/toyota/": brand_listing_html(
            ("toyota-corolla-2010", "Toyota Corolla"),
            ("toyota-rav4-2015", "Toyota RAV4 320"),
        ),
    }
