from __future__ import annotations

import abc
import contextlib
import io
from collections.abc import Mapping
from email.message import Message
from http import HTTPStatus

from .exceptions import RequestError, TransportError


class RequestHandler(abc.ABC):
    """HTTP capability handed to the extractors

    The extractors never open connections themselves: anything able to turn a
    Request into a Response can be passed in. Subclasses implement _send().

    A non-2xx status must be raised as HTTPError, carrying the response.
    Any other failure to get a response must be raised as a RequestError.

    @param headers: HTTP headers to send with every request.
    @param timeout: Socket timeout in seconds, for handlers doing real I/O.
    """

    def __init__(self, *, headers: Mapping | None = None, timeout: float | None = None):
        self.headers = dict(headers or {})
        self.timeout = timeout

    def send(self, request: Request) -> Response:
        if not isinstance(request, Request):
            raise TypeError('Expected an instance of Request')
        try:
            return self._send(request)
        except RequestError as e:
            if e.handler is None:
                e.handler = self
            raise

    @abc.abstractmethod
    def _send(self, request: Request) -> Response:
        """Perform the request. Redefine in subclasses."""

    def close(self):  # noqa: B027
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class Request:
    """A GET (or other `method`) of `url` with extra `headers`"""

    def __init__(self, url: str, headers: Mapping | None = None, method: str | None = None):
        if not isinstance(url, str):
            raise TypeError('url must be a string')
        self.url = url
        self.headers = dict(headers or {})
        self.method = (method or 'GET').upper()

    def __repr__(self):
        return f'<Request {self.method} {self.url}>'


class Response(io.IOBase):
    """
    File-like body of an HTTP response, with its status and headers

    @param fp: File-like object the body is read from.
    @param url: Final URL of the response.
    @param headers: Response headers; lookups are case-insensitive.
    @param status: HTTP status code.
    @param reason: Status phrase, derived from the status when not given.
    """

    def __init__(self, fp, url: str, headers: Mapping[str, str], status: int = 200, reason: str | None = None):
        self.fp = fp
        self.url = url
        self.status = status
        self.headers = Message()
        for name, value in headers.items():
            self.headers.add_header(name, value)
        if reason is None:
            with contextlib.suppress(ValueError):
                reason = HTTPStatus(status).phrase
        self.reason = reason

    def readable(self):
        return True

    def read(self, amt: int | None = None) -> bytes:
        try:
            return self.fp.read(amt)
        except RequestError:
            raise
        except OSError as e:
            raise TransportError(cause=e) from e

    def close(self):
        self.fp.close()
        super().close()

    def get_header(self, name, default=None):
        """Value of header `name`; repeated headers are joined with a comma"""
        values = self.headers.get_all(name)
        return ', '.join(values) if values else default
