from typing import Iterator

from partasala_api.config import SETTINGS
from partasala_api.scraper.catalog import PartasalaCatalog
from partasala_api.scraper.client import HttpClient


def get_catalog() -> Iterator[PartasalaCatalog]:
    client = HttpClient(SETTINGS)
    try:
        yield PartasalaCatalog(client, SETTINGS)
    finally:
        client.close()
