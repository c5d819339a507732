# flake8: noqa: F401
from .common import Request, RequestHandler, Response
from .exceptions import HTTPError, RequestError, TransportError
