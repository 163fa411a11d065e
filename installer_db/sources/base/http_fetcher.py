"""
HTTP Fetch Collaborator

Blocking page/feed retrieval shared by every scraping adapter. Proxy and
timeout travel with each request as an immutable FetchOptions value instead
of being set on a shared fetcher instance.

No retries are performed: a timeout, connection error or non-success status
is reported once and the calling adapter gives up on its source.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from .exceptions import FetchException

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

DEFAULT_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36',
    'Accept': 'text/html,application/xhtml+xml,application/json;q=0.9,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.5',
}


@dataclass(frozen=True)
class FetchOptions:
    """Per-request network settings"""
    proxy: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    def proxies(self) -> Optional[Dict[str, str]]:
        if not self.proxy:
            return None
        return {'http': self.proxy, 'https': self.proxy}

    def direct(self) -> 'FetchOptions':
        """Same options without a proxy"""
        return FetchOptions(proxy=None, timeout=self.timeout)


@dataclass(frozen=True)
class FetchResponse:
    """Body text and status code of one request"""
    url: str
    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return self.status_code == 200 and bool(self.text)


class HttpFetcher:
    """requests-based fetch collaborator with connection pooling"""

    def __init__(self, session: Optional[requests.Session] = None, headers: Optional[Dict[str, str]] = None):
        self.session = session or requests.Session()
        self.session.headers.update(headers or DEFAULT_HEADERS)

    def get(self, url: str, options: FetchOptions = FetchOptions()) -> FetchResponse:
        """
        Issue one GET request

        Raises:
            FetchException: on timeouts, connection errors and other request failures
        """
        logger.debug(f"GET {url} (proxy={options.proxy or 'none'}, timeout={options.timeout}s)")
        try:
            response = self.session.get(url, proxies=options.proxies(), timeout=options.timeout)
        except requests.Timeout as e:
            raise FetchException(f"Request timed out after {options.timeout}s: {e}", url=url)
        except requests.RequestException as e:
            raise FetchException(f"Request failed: {e}", url=url)
        return FetchResponse(url=url, status_code=response.status_code, text=response.text)

    def get_text(self, url: str, options: FetchOptions = FetchOptions()) -> str:
        """
        Return the body of a successful (HTTP 200, non-empty) response

        Raises:
            FetchException: on request failures and non-success responses
        """
        response = self.get(url, options)
        if not response.ok:
            raise FetchException(
                f"Unexpected response status {response.status_code} ({len(response.text)} bytes)",
                status_code=response.status_code,
                url=url
            )
        return response.text

    def close(self):
        """Clean up resources (close sessions, etc.)"""
        self.session.close()
