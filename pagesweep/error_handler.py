import asyncio
import errno
import logging
import socket
import ssl
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

import aiohttp

logger = logging.getLogger(__name__)

# Fixed pause before the single extra attempt
RETRY_DELAY_MS = 1000


class FetchErrorKind(Enum):
    """Classification of fetch failures"""
    TIMEOUT = "timeout"
    DNS = "dns"
    TLS = "tls"
    CONNECTION_RESET = "connection_reset"
    CONNECTION_REFUSED = "connection_refused"
    HTTP_STATUS = "http_status"
    UNKNOWN = "unknown"


class CrawlError(Exception):
    """Base class for all crawler errors"""


class CrawlConfigError(CrawlError):
    """Invalid configuration or input; fatal to the whole run"""


class FetchError(CrawlError):
    """A single fetch failed; carries a user-legible message"""

    def __init__(self, kind: FetchErrorKind, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    def __repr__(self):
        return f"FetchError(kind={self.kind.value!r}, message={self.message!r}, status_code={self.status_code!r})"


def _os_error_of(error: BaseException) -> Optional[BaseException]:
    """aiohttp connector errors wrap the original OS error"""
    return getattr(error, 'os_error', None)


def _is_instance(error: BaseException, types) -> bool:
    return isinstance(error, types) or isinstance(_os_error_of(error), types)


def _has_errno(error: BaseException, code: int) -> bool:
    if getattr(error, 'errno', None) == code:
        return True
    return getattr(_os_error_of(error), 'errno', None) == code


def classify_error(error: BaseException, url: str = "") -> FetchError:
    """
    Map any exception raised while fetching into a FetchError

    Args:
        error: The exception raised by the HTTP layer
        url: The URL being fetched (used in DNS messages)

    Returns:
        FetchError with kind, message and status code (HTTP responses only)
    """
    if isinstance(error, FetchError):
        return error

    if isinstance(error, aiohttp.TooManyRedirects):
        return FetchError(FetchErrorKind.UNKNOWN, "Too many redirects", error.status or None)

    if isinstance(error, aiohttp.ClientResponseError):
        message = f"HTTP {error.status}: {error.message}" if error.message else f"HTTP {error.status}"
        return FetchError(FetchErrorKind.HTTP_STATUS, message, error.status)

    # TimeoutError is an OSError subclass, so it must be checked first
    if isinstance(error, (asyncio.TimeoutError, aiohttp.ServerTimeoutError)):
        return FetchError(FetchErrorKind.TIMEOUT, "Request timed out")

    if isinstance(error, aiohttp.ClientConnectorDNSError) or _is_instance(error, socket.gaierror):
        return FetchError(FetchErrorKind.DNS, f"DNS lookup failed: {url or 'unknown host'}")

    if isinstance(error, aiohttp.ClientSSLError) or _is_instance(error, ssl.SSLError):
        return FetchError(FetchErrorKind.TLS, "SSL certificate error")

    if _is_instance(error, ConnectionResetError) or _has_errno(error, errno.ECONNRESET):
        return FetchError(FetchErrorKind.CONNECTION_RESET, "Connection reset by server")

    if _is_instance(error, ConnectionRefusedError) or _has_errno(error, errno.ECONNREFUSED):
        return FetchError(FetchErrorKind.CONNECTION_REFUSED, "Connection refused")

    message = str(error) or error.__class__.__name__
    return FetchError(FetchErrorKind.UNKNOWN, message)


async def with_retry(
    operation: Callable[[], Awaitable[Any]],
    delay_ms: float = RETRY_DELAY_MS,
    label: str = ""
) -> Any:
    """
    Run an async operation with exactly one extra attempt

    On failure, waits a fixed delay and runs the operation once more. If the
    second attempt also fails, the first error is raised since it is usually
    the more diagnostic one.
    """
    try:
        return await operation()
    except Exception as first_error:
        logger.warning(f"Attempt 1/2 failed for {label or 'operation'}: {first_error}; "
                       f"retrying in {delay_ms / 1000:.1f}s")
        await asyncio.sleep(delay_ms / 1000)
        try:
            return await operation()
        except Exception as second_error:
            logger.debug(f"Attempt 2/2 failed for {label or 'operation'}: {second_error}")
            raise first_error
