import logging
import re
from dataclasses import dataclass

from bs4 import BeautifulSoup

from partasala_api.scraper.urls import full_size_image_url, is_image_link, normalize_url, slug_from_href


logger = logging.getLogger(__name__)

BRAND_HREF_RE = re.compile(r"/bilaflokkur/[^/]+/?$")
VEHICLE_HREF_RE = re.compile(r"/bilaskra/[^/]+/?$")
BRAND_HREF_MARKER = "/bilaflokkur/"
DESCRIPTION_CLASS_MARKERS = ("description", "content", "lýsing")
UPLOADS_MARKER = "uploads"
SPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class Brand:
    name: str
    slug: str
    url: str


@dataclass(frozen=True)
class VehicleSummary:
    name: str
    slug: str
    url: str
    thumbnail: str | None
    brand: str
    match_type: str | None = None


@dataclass(frozen=True)
class Image:
    url: str
    thumbnail: str


@dataclass(frozen=True)
class VehicleDetail:
    name: str
    slug: str
    url: str
    brand: str | None
    description: str | None
    images: tuple[Image, ...]

    @property
    def image_count(self) -> int:
        return len(self.images)


def _clean_text(value: str | None) -> str | None:
    if value is None:
        return None
    text = SPACE_RE.sub(" ", value.replace("\xa0", " ")).strip()
    return text or None


def _node_text(node) -> str:
    if node is None:
        return ""
    return _clean_text(node.get_text()) or ""


def _class_text(node) -> str:
    value = node.get("class")
    if value is None:
        return ""
    if isinstance(value, str):
        return value.lower()
    return " ".join(value).lower()


def _matching_anchors(soup: BeautifulSoup, pattern: re.Pattern[str]):
    seen: set[str] = set()
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"]
        if not pattern.search(href):
            continue
        slug = slug_from_href(href)
        if slug in seen:
            continue
        seen.add(slug)
        yield anchor, href, slug


def extract_brands(soup: BeautifulSoup, base_url: str) -> list[Brand]:
    brands = [
        Brand(name=_node_text(anchor), slug=slug, url=normalize_url(href, base_url))
        for anchor, href, slug in _matching_anchors(soup, BRAND_HREF_RE)
    ]
    # Deduplicated in document order above; the listing itself is alphabetical.
    brands.sort(key=lambda brand: brand.name)
    return brands


def extract_vehicles(soup: BeautifulSoup, brand_slug: str, base_url: str) -> list[VehicleSummary]:
    vehicles: list[VehicleSummary] = []
    for anchor, href, slug in _matching_anchors(soup, VEHICLE_HREF_RE):
        thumbnail = None
        img = anchor.find("img")
        src = img.get("src") if img is not None else None
        if src:
            thumbnail = normalize_url(src, base_url)

        vehicles.append(
            VehicleSummary(
                name=_node_text(anchor),
                slug=slug,
                url=normalize_url(href, base_url),
                thumbnail=thumbnail,
                brand=brand_slug,
            )
        )
    return vehicles


def _extract_description(soup: BeautifulSoup) -> str | None:
    for div in soup.find_all("div"):
        class_text = _class_text(div)
        if any(marker in class_text for marker in DESCRIPTION_CLASS_MARKERS):
            lines = (line.strip() for line in div.get_text().splitlines())
            return "\n".join(line for line in lines if line)
    return None


def _extract_images(soup: BeautifulSoup, base_url: str) -> tuple[Image, ...]:
    images: list[Image] = []
    seen: set[str] = set()

    for img in soup.find_all("img", src=True):
        src = img["src"]
        if UPLOADS_MARKER not in src or "logo" in src.lower():
            continue
        full_url = normalize_url(full_size_image_url(src), base_url)
        if full_url in seen:
            continue
        seen.add(full_url)
        images.append(Image(url=full_url, thumbnail=normalize_url(src, base_url)))

    for anchor in soup.find_all("a", href=True):
        href = anchor["href"]
        if not is_image_link(href) or UPLOADS_MARKER not in href:
            continue
        full_url = normalize_url(href, base_url)
        if full_url in seen:
            continue
        seen.add(full_url)
        images.append(Image(url=full_url, thumbnail=full_url))

    return tuple(images)


def extract_detail(soup: BeautifulSoup, slug: str, page_url: str, base_url: str) -> VehicleDetail:
    brand_anchor = soup.find("a", href=lambda value: bool(value) and BRAND_HREF_MARKER in value)
    images = _extract_images(soup, base_url)

    detail = VehicleDetail(
        name=_node_text(soup.find("h1")),
        slug=slug,
        url=page_url,
        brand=_node_text(brand_anchor) if brand_anchor is not None else None,
        description=_extract_description(soup),
        images=images,
    )
    logger.debug("Parsed vehicle %s: name=%r images=%s", slug, detail.name, detail.image_count)
    return detail
