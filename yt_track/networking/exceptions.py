from __future__ import annotations

import typing

from ..utils import TrackError

if typing.TYPE_CHECKING:
    from .common import Response


class RequestError(TrackError):
    """A request handler could not produce a usable response

    `handler` is filled in by RequestHandler.send() when left unset.
    """

    def __init__(self, msg: str | None = None, cause: Exception | str | None = None, handler=None):
        self.cause = cause
        self.handler = handler
        super().__init__(msg or (cause and str(cause)) or None)


class TransportError(RequestError):
    """Connection or read failure"""


class HTTPError(RequestError):
    """The server answered with a non-2xx status; the response is kept open"""

    def __init__(self, response: Response):
        self.response = response
        self.status = response.status
        self.reason = response.reason
        super().__init__(f'HTTP Error {self.status}: {self.reason}')

    def close(self):
        self.response.close()

    def __repr__(self):
        return f'<HTTPError {self.status}: {self.reason}>'
