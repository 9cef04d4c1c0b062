import re
from urllib.parse import urlparse

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")
SIZE_SUFFIX_RE = re.compile(r"-\d+x\d+(\.(?:jpe?g|png|gif))$", re.IGNORECASE)


def normalize_url(href: str, base_url: str) -> str:
    """Turn a link found on a catalog page into an absolute URL.

    Absolute http(s) URLs pass through untouched, so applying this twice
    gives the same result as applying it once.
    """
    lowered = href.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return href
    if href.startswith("//"):
        scheme = urlparse(base_url).scheme or "https"
        return f"{scheme}:{href}"
    if href.startswith("/"):
        return base_url + href
    return f"{base_url}/{href}"


def slug_from_href(href: str) -> str:
    return href.rstrip("/").split("/")[-1]


def full_size_image_url(src: str) -> str:
    # photo-300x300.jpg -> photo.jpg
    return SIZE_SUFFIX_RE.sub(r"\1", src)


def is_image_link(href: str) -> bool:
    return href.lower().endswith(IMAGE_EXTENSIONS)
