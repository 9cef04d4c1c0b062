import logging
import threading
from time import monotonic

import requests
from bs4 import BeautifulSoup, UnicodeDammit

from partasala_api.config import Settings


logger = logging.getLogger(__name__)

TIMEOUT = "timeout"
NETWORK = "network"
HTTP_STATUS = "http_status"

CHUNK_SIZE = 64 * 1024
FALLBACK_ENCODINGS = {"", "iso-8859-1", "latin-1"}


class FetchError(Exception):
    def __init__(
        self,
        message: str,
        *,
        url: str,
        kind: str,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.kind = kind
        self.status_code = status_code
        self.reason = reason


class HttpClient:
    """Fetches catalog pages and hands them back as parsed soup.

    The client only carries connection config (timeout, user agent). The
    timeout is a deadline for the whole request: requests bounds the connect
    and each socket read, and the body is streamed so the remaining time is
    checked between chunks. Each thread gets its own session.
    """

    def __init__(self, settings: Settings) -> None:
        self._timeout = settings.request_timeout_seconds
        self._headers = {"User-Agent": settings.user_agent}
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._sessions_lock = threading.Lock()

    @property
    def _session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    def fetch(self, url: str) -> BeautifulSoup:
        return BeautifulSoup(self.get_text(url), "html.parser")

    def get_text(self, url: str) -> str:
        logger.debug("Fetching %s", url)
        deadline = monotonic() + self._timeout
        try:
            with self._session.get(url, headers=self._headers, timeout=self._timeout, stream=True) as response:
                if response.status_code != 200:
                    raise FetchError(
                        f"status code error: {response.status_code} {response.reason}",
                        url=url,
                        kind=HTTP_STATUS,
                        status_code=response.status_code,
                        reason=response.reason,
                    )

                chunks: list[bytes] = []
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if monotonic() > deadline:
                        raise requests.Timeout(f"no complete response within {self._timeout}s")
                    chunks.append(chunk)
                body = b"".join(chunks)

                declared = (response.encoding or "").lower()
                known_encodings = [] if declared in FALLBACK_ENCODINGS else [declared]
                return UnicodeDammit(body, known_encodings, is_html=True).unicode_markup or body.decode(
                    "utf-8", errors="replace"
                )
        except FetchError as exc:
            logger.warning("Fetch failed for %s: %s", url, exc)
            raise
        except requests.Timeout as exc:
            logger.warning("Fetch timed out for %s after %ss", url, self._timeout)
            raise FetchError(f"timed out fetching {url}", url=url, kind=TIMEOUT) from exc
        except requests.RequestException as exc:
            logger.warning("Network error for %s: %s", url, exc)
            raise FetchError(f"failed to fetch {url}: {exc}", url=url, kind=NETWORK) from exc

    def close(self) -> None:
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
