import collections.abc
import enum
import re
import sys

from . import traversal

__name__ = __name__.rsplit('.', 1)[0]  # noqa: A001: Pretend to be the parent module


class NO_DEFAULT:
    pass


def IDENTITY(x):
    return x


# Reserved carrier for "unbounded" durations (live streams); not a real length
DURATION_MS_UNKNOWN = (1 << 63) - 1


def preferredencoding():
    """Get preferred encoding.

    Returns the best encoding scheme for the system, based on
    locale.getpreferredencoding() and some further tweaks.
    """
    import locale
    try:
        pref = locale.getpreferredencoding()
        'TEST'.encode(pref)
    except Exception:
        pref = 'UTF-8'

    return pref


def write_string(s, out=None, encoding=None):
    assert isinstance(s, str)
    out = out or sys.stderr
    # `sys.stderr` might be `None` (Ref: https://github.com/pyinstaller/pyinstaller/pull/7217)
    if not out:
        return

    enc, buffer = None, out
    if 'b' in (getattr(out, 'mode', None) or ''):
        enc = encoding or preferredencoding()
    elif hasattr(out, 'buffer'):
        buffer = out.buffer
        enc = encoding or getattr(out, 'encoding', None) or preferredencoding()

    buffer.write(s.encode(enc, 'ignore') if enc else s)
    out.flush()


def bug_reports_message(before=';'):
    from ..version import REPOSITORY

    msg = (f'please report this issue on  https://github.com/{REPOSITORY}/issues?q= , '
           'including the video id and the full verbose output')

    before = before.rstrip()
    if not before or before.endswith(('.', '!', '?')):
        msg = msg[0].title() + msg[1:]

    return (before + ' ' if before else '') + msg


class Severity(enum.Enum):
    """How an extraction failure should be treated by the caller"""
    # The platform reports the video as unplayable; nothing can be done about it
    COMMON = 'common'
    # The document was not understood; the extractor is probably out of date
    SUSPICIOUS = 'suspicious'
    # Something outside of the payload broke (network, manifest corruption)
    FAULT = 'fault'


class TrackError(Exception):
    """Base exception for yt-track errors."""
    msg = None

    def __init__(self, msg=None):
        if msg is not None:
            self.msg = msg
        elif self.msg is None:
            self.msg = type(self).__name__
        super().__init__(self.msg)


class ExtractorError(TrackError):
    """Error during track details extraction."""
    severity = Severity.SUSPICIOUS

    def __init__(self, msg, cause=None, video_id=None, ie=None, severity=None):
        """ Only errors with COMMON severity are expected; the rest get a bug report hint. """
        if severity is not None:
            self.severity = severity
        self.orig_msg = str(msg)
        self.cause = cause
        self.video_id = video_id
        self.ie = ie
        super().__init__(self._format_msg())

    @property
    def expected(self):
        return self.severity is Severity.COMMON

    def _format_msg(self):
        return ''.join((
            format_field(self.ie, None, '[%s] '),
            format_field(self.video_id, None, '%s: '),
            self.orig_msg,
            format_field(self.cause, None, ' (caused by %r)'),
            '' if self.severity is not Severity.SUSPICIOUS else bug_reports_message()))


class UnplayableVideoError(ExtractorError):
    """The platform itself reports the video as unavailable.

    The message is the reason text supplied by the platform, verbatim.
    """
    severity = Severity.COMMON

    def __init__(self, reason, video_id=None):
        super().__init__(reason or 'This video is unavailable')
        self.reason = reason
        self.video_id = video_id


class UnrecognizedFormatsError(ExtractorError):
    """None of the known format-bearing fields were found in the document"""
    severity = Severity.SUSPICIOUS

    def __init__(self, arguments=None, **kwargs):
        super().__init__(
            'Unable to play this YouTube track: no adaptive formats, no dash, no stream map', **kwargs)
        self.arguments = arguments


class ManifestDownloadError(ExtractorError):
    """The DASH manifest could not be fetched"""
    severity = Severity.FAULT

    def __init__(self, msg, status=None, **kwargs):
        super().__init__(msg, **kwargs)
        self.status = status


class SignatureResolutionError(ExtractorError):
    severity = Severity.FAULT


def int_or_none(v, scale=1, default=None, get_attr=None, invscale=1):
    if get_attr and v is not None:
        v = getattr(v, get_attr, None)
    if isinstance(v, bool):
        return default
    try:
        return int(v) * invscale // scale
    except (ValueError, TypeError, OverflowError):
        return default


def str_or_none(v, default=None):
    return default if v is None else str(v)


def bool_or_none(v, default=None):
    return v if isinstance(v, bool) else default


def strip_or_none(v, default=None):
    return v.strip() if isinstance(v, str) else default


def is_iterable_like(x, allowed_types=collections.abc.Iterable, blocked_types=NO_DEFAULT):
    if blocked_types is NO_DEFAULT:
        blocked_types = (str, bytes, collections.abc.Mapping)
    return isinstance(x, allowed_types) and not isinstance(x, blocked_types)


def variadic(x, allowed_types=NO_DEFAULT):
    return x if is_iterable_like(x, blocked_types=allowed_types) else (x, )


def format_field(obj, field=None, template='%s', ignore=NO_DEFAULT, default='', func=IDENTITY):
    val = traversal.traverse_obj(obj, *variadic(field))
    if not val if ignore is NO_DEFAULT else val in variadic(ignore):
        return default
    return template % func(val)


def extract_between(s, start, end):
    """Return the text between the first `start` and the following `end`, or None"""
    if not isinstance(s, str):
        return None
    idx = s.find(start)
    if idx < 0:
        return None
    idx += len(start)
    stop = s.find(end, idx)
    return None if stop < 0 else s[idx:stop]


def parse_content_type(content_type):
    """Split "type/subtype; key=value" into the mime type and its parameters.

    Raises ValueError when the mime part is not of the form type/subtype
    """
    if not isinstance(content_type, str):
        raise ValueError(f'Invalid content type {content_type!r}')
    mime_type, *params = content_type.split(';')
    mime_type = mime_type.strip().lower()
    if not re.fullmatch(r'[\w.+-]+/[\w.+-]+', mime_type):
        raise ValueError(f'Invalid content type {content_type!r}')
    parameters = {}
    for param in params:
        key, _, value = param.partition('=')
        key = key.strip().lower()
        if key:
            parameters[key] = value.strip().strip('"')
    return mime_type, parameters


def limit_length(s, length):
    """ Add ellipses to overly long strings """
    if s is None:
        return None
    ELLIPSES = '...'
    if len(s) > length:
        return s[:length - len(ELLIPSES)] + ELLIPSES
    return s


class TrackLogger:
    """Route extractor messages according to the params dict.

    If params['logger'] is given, everything goes there. Otherwise warnings
    are printed to stderr and debug output only appears with params['verbose']
    """

    def __init__(self, params=None):
        self.params = params or {}

    def debug(self, message):
        if not self.params.get('verbose', False):
            return
        message = f'[debug] {message}'
        if self.params.get('logger'):
            self.params['logger'].debug(message)
        else:
            write_string(f'{message}\n')

    def warning(self, message):
        if self.params.get('logger') is not None:
            self.params['logger'].warning(message)
        elif not self.params.get('no_warnings'):
            write_string(f'WARNING: {message}\n')
