"""Fetch error taxonomy."""
from __future__ import annotations


class FetchError(Exception):
    """Base class for failures talking to a remote endpoint."""

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class RequestTimeoutError(FetchError, TimeoutError):
    """A request did not complete within its time bound and was aborted."""

    def __init__(self, url: str, timeout: float) -> None:
        super().__init__(f"Request timeout after {timeout:g}s: {url}", url)
        self.timeout = timeout


class HttpError(FetchError):
    """The endpoint answered with a non-success status code."""

    def __init__(self, url: str, status: int) -> None:
        super().__init__(f"HTTP {status} from {url}", url)
        self.status = status


class ParseError(FetchError):
    """The response body could not be decoded."""


class NoDataError(FetchError):
    """A full pagination cycle produced zero usable records."""
