# flake8: noqa: F401
from ._details import YoutubeTrackDetails, resolve_formats, resolve_metadata
from ._formats import (
    QUALITY_BITRATES,
    UNKNOWN_QUALITY_BITRATE,
    FormatSource,
    decode_url_encoded_items,
    formats_from_adaptive_fmts,
    formats_from_stream_map,
    formats_from_streaming_data,
    quality_to_bitrate,
    select_format_sources,
)
from ._manifest import extract_dash_formats, parse_dash_manifest
from ._metadata import extract_track_info
from ._signature import PassthroughSignatureResolver, SignatureResolver
