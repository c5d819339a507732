# flake8: noqa: F401
import sys

if sys.version_info < (3, 9):
    raise ImportError(
        f'You are using an unsupported version of Python. Only Python versions 3.9 and above are supported by yt-track')  # noqa: F541

__license__ = 'The Unlicense'

from .extractor.youtube import (
    PassthroughSignatureResolver,
    SignatureResolver,
    YoutubeTrackDetails,
    resolve_formats,
    resolve_metadata,
)
from .formats import Format, TrackMetadata
from .networking import HTTPError, Request, RequestError, RequestHandler, Response, TransportError
from .utils import (
    DURATION_MS_UNKNOWN,
    ExtractorError,
    ManifestDownloadError,
    Severity,
    SignatureResolutionError,
    TrackError,
    UnplayableVideoError,
    UnrecognizedFormatsError,
)
from .version import __version__

__all__ = [
    'DURATION_MS_UNKNOWN',
    'ExtractorError',
    'Format',
    'HTTPError',
    'ManifestDownloadError',
    'PassthroughSignatureResolver',
    'Request',
    'RequestError',
    'RequestHandler',
    'Response',
    'Severity',
    'SignatureResolutionError',
    'SignatureResolver',
    'TrackError',
    'TrackMetadata',
    'TransportError',
    'UnplayableVideoError',
    'UnrecognizedFormatsError',
    'YoutubeTrackDetails',
    '__version__',
    'resolve_formats',
    'resolve_metadata',
]
