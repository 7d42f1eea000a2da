"""
Fetcher - single HTTP GET with timeout, User-Agent rotation and typed failures
"""

import random
import time
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Union

import aiohttp

from ..error_handler import FetchError, FetchErrorKind, classify_error, with_retry
from .config import CrawlConfig

logger = logging.getLogger(__name__)

USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_5) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/18.0 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64; rv:133.0) Gecko/20100101 Firefox/133.0",
]

DEFAULT_HEADERS = {
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.9',
}


def random_user_agent() -> str:
    """Pick a User-Agent uniformly at random from the rotation pool"""
    return random.choice(USER_AGENTS)


@dataclass
class Fetched:
    """A 2xx response body"""
    url: str
    status_code: int
    body: str
    response_time: float = 0.0


@dataclass
class FetchFailed:
    """A fetch that failed after the retry"""
    url: str
    error_kind: FetchErrorKind
    message: str
    status_code: Optional[int] = None


FetchOutcome = Union[Fetched, FetchFailed]


class Fetcher:
    """Fetches pages through a shared aiohttp session"""

    def __init__(self, session: aiohttp.ClientSession, config: CrawlConfig):
        self.session = session
        self.config = config
        self.timeout = aiohttp.ClientTimeout(total=config.timeout_seconds)

    def build_headers(self) -> Dict[str, str]:
        headers = dict(DEFAULT_HEADERS)
        headers['User-Agent'] = random_user_agent()
        return headers

    async def fetch(self, url: str) -> Fetched:
        """
        Issue one GET request

        Raises:
            FetchError: on timeout, network failure or a non-2xx response
        """
        start_time = time.time()
        try:
            async with self.session.get(
                url,
                headers=self.build_headers(),
                timeout=self.timeout,
                allow_redirects=True,
                max_redirects=self.config.max_redirects
            ) as response:
                if not 200 <= response.status < 300:
                    raise aiohttp.ClientResponseError(
                        request_info=response.request_info,
                        history=response.history,
                        status=response.status,
                        message=response.reason or ""
                    )
                body = await response.text(errors='replace')
                return Fetched(
                    url=url,
                    status_code=response.status,
                    body=body,
                    response_time=time.time() - start_time
                )
        except Exception as e:
            raise classify_error(e, url) from e

    async def fetch_outcome(self, url: str) -> FetchOutcome:
        """Fetch with the single retry; failures come back as FetchFailed"""
        try:
            return await with_retry(
                lambda: self.fetch(url),
                delay_ms=self.config.retry_delay_ms,
                label=url
            )
        except FetchError as e:
            logger.warning(f"Fetch failed for {url}: {e.message}")
            return FetchFailed(
                url=url,
                error_kind=e.kind,
                message=e.message,
                status_code=e.status_code
            )
