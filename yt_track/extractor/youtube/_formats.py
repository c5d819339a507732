"""Format list decoding for the four player argument schemas

Every builder here is a pure function of its input. Malformed or incomplete
items are skipped one by one; a batch only ever yields fewer formats, it never
fails as a whole.
"""
import enum
import re
import urllib.parse

from ...formats import DEFAULT_SIGNATURE_KEY, Format
from ...utils import (
    dict_get,
    extract_between,
    int_or_none,
    limit_length,
    parse_content_type,
    traverse_obj,
)

# Lower is worse; all of these stay below any real bitrate
QUALITY_BITRATES = {
    'small': -10,
    'medium': -5,
    'hd720': -4,
}
UNKNOWN_QUALITY_BITRATE = -1

_ESCAPED_SEPARATOR_RE = re.compile(r'\\+u0{2}26')


class FormatSource(enum.Enum):
    """Format-bearing fields of the player arguments, in the order they are tried"""
    ADAPTIVE_FMTS = 'adaptive_fmts'
    PLAYER_RESPONSE = 'player_response'
    DASH_MANIFEST = 'dashmpd'
    STREAM_MAP = 'url_encoded_fmt_stream_map'


def select_format_sources(args):
    """Yield (FormatSource, raw value) for each format-bearing field present in `args`"""
    for source in FormatSource:
        value = traverse_obj(args, source.value)
        if isinstance(value, str) or (source is FormatSource.PLAYER_RESPONSE and isinstance(value, dict)):
            yield source, value


def decode_url_encoded_items(value, escaped_separator=False):
    """Decode "key=value&key=value" into a dict.

    Values are percent-decoded, a key without a value maps to '', and the
    last occurrence of a key wins. Some payloads escape the separator as a
    literal backslash-u0026 sequence; `escaped_separator` undoes that first.
    Never raises: broken escapes are kept as literal text.
    """
    if not isinstance(value, str):
        return {}
    if escaped_separator:
        value = _ESCAPED_SEPARATOR_RE.sub('&', value)
    return dict(urllib.parse.parse_qsl(value, keep_blank_values=True))


def split_format_list(value):
    if not isinstance(value, str):
        return []
    return [item for item in value.split(',') if item]


def quality_to_bitrate(quality):
    """Map a named quality to a negative ordering surrogate for the missing bitrate"""
    if not isinstance(quality, str):
        return UNKNOWN_QUALITY_BITRATE
    return QUALITY_BITRATES.get(quality, UNKNOWN_QUALITY_BITRATE)


class _FormatSkipped(Exception):
    pass


def _require(item, key, func=None):
    value = item.get(key)
    if func is not None:
        value = func(value)
    if value is None or value == '':
        raise _FormatSkipped(f'missing {key}')
    return value


def _content_type(value):
    parse_content_type(value)
    return value


def _build_formats(items, build, source, ie=None, video_id=None):
    formats, any_failures = [], False
    for item in items:
        try:
            formats.append(build(item))
        except _FormatSkipped as e:
            any_failures = True
            if ie:
                ie.write_debug(f'Skipping {source} format ({e}): {limit_length(str(item), 200)}', video_id)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            any_failures = True
            if ie:
                ie.write_debug(f'Failed to parse {source} format, skipping: {e!r}', video_id)

    if not formats and any_failures and ie:
        ie.report_warning(
            f'All {len(items)} {source} formats either failed to load or were skipped due to missing fields',
            video_id)
    return formats


def _build_adaptive_format(item):
    fmt = decode_url_encoded_items(item)
    return Format(
        content_type=_content_type(_require(fmt, 'type')),
        bitrate=_require(fmt, 'bitrate', int_or_none),
        content_length=_require(fmt, 'clen', int_or_none),
        url=_require(fmt, 'url'),
        signature=fmt.get('s') or None,
        signature_key=fmt.get('sp') or DEFAULT_SIGNATURE_KEY)


def _build_stream_map_format(item):
    fmt = decode_url_encoded_items(item)
    url = _require(fmt, 'url')
    # This schema has no length field; it only survives inside the url
    content_length = int_or_none(extract_between(url, 'clen=', '&'))
    if content_length is None:
        raise _FormatSkipped('no content length in url')
    return Format(
        content_type=_content_type(_require(fmt, 'type')),
        bitrate=quality_to_bitrate(fmt.get('quality')),
        content_length=content_length,
        url=url,
        signature=fmt.get('s') or None,
        signature_key=fmt.get('sp') or DEFAULT_SIGNATURE_KEY)


def _build_streaming_data_format(fmt):
    if not isinstance(fmt, dict):
        raise _FormatSkipped('not an object')
    cipher = dict_get(fmt, ('cipher', 'signatureCipher'))
    cipher_info = decode_url_encoded_items(cipher, escaped_separator=True) if cipher else {}
    url = cipher_info['url'] if 'url' in cipher_info else fmt.get('url')
    if not isinstance(url, str) or not url:
        raise _FormatSkipped('missing url')
    return Format(
        content_type=_content_type(_require(fmt, 'mimeType')),
        bitrate=_require(fmt, 'bitrate', int_or_none),
        content_length=_require(fmt, 'contentLength', int_or_none),
        url=url,
        signature=cipher_info.get('s') or None,
        signature_key=cipher_info.get('sp') or DEFAULT_SIGNATURE_KEY)


def formats_from_adaptive_fmts(adaptive_fmts, ie=None, video_id=None):
    return _build_formats(
        split_format_list(adaptive_fmts), _build_adaptive_format, 'adaptive_fmts', ie, video_id)


def formats_from_stream_map(stream_map, ie=None, video_id=None):
    return _build_formats(
        split_format_list(stream_map), _build_stream_map_format, 'url_encoded_fmt_stream_map', ie, video_id)


def formats_from_streaming_data(streaming_formats, ie=None, video_id=None):
    if not isinstance(streaming_formats, list):
        return []
    return _build_formats(
        streaming_formats, _build_streaming_data_format, 'streamingData', ie, video_id)
