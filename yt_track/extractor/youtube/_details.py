import json

from ._formats import (
    FormatSource,
    formats_from_adaptive_fmts,
    formats_from_stream_map,
    formats_from_streaming_data,
    select_format_sources,
)
from ._manifest import extract_dash_formats
from ._metadata import extract_track_info, parse_player_response
from ..common import InfoExtractor
from ...utils import UnrecognizedFormatsError, traverse_obj


class YoutubeTrackDetails(InfoExtractor):
    """Formats and track information of one video's player page payload

    `info` is the decoded player config, i.e. the object holding `args` and
    `assets`. It may be None when the platform returned nothing for the video.
    """

    IE_NAME = 'youtube'

    def __init__(self, video_id, info, params=None):
        super().__init__(params)
        self.video_id = video_id
        self.info = info

    @property
    def player_script(self):
        return traverse_obj(self.info, ('assets', 'js'), expected_type=str)

    def get_track_info(self):
        return extract_track_info(self, self.video_id, self.info)

    def get_formats(self, http, signature_resolver):
        """Return the formats of the first format-bearing field that yields any.

        Fields are tried in a fixed order: adaptive_fmts, player_response,
        dashmpd, url_encoded_fmt_stream_map.
        """
        args = traverse_obj(self.info, 'args', expected_type=dict) or {}

        for source, value in select_format_sources(args):
            formats = self._load_formats(source, value, http, signature_resolver)
            if formats:
                return formats
            self.write_debug(f'No formats found in {source.value}', self.video_id)

        self.report_warning(
            f'No detected format field, arguments are: {json.dumps(args, default=repr)}',
            self.video_id)
        raise UnrecognizedFormatsError(arguments=args, video_id=self.video_id, ie=self.IE_NAME)

    def _load_formats(self, source, value, http, signature_resolver):
        if source is FormatSource.ADAPTIVE_FMTS:
            return formats_from_adaptive_fmts(value, self, self.video_id)

        elif source is FormatSource.PLAYER_RESPONSE:
            streaming_data = traverse_obj(
                parse_player_response(self, value, self.video_id), 'streamingData', expected_type=dict)
            if not streaming_data:
                return []
            return [
                *formats_from_streaming_data(streaming_data.get('formats'), self, self.video_id),
                *formats_from_streaming_data(streaming_data.get('adaptiveFormats'), self, self.video_id),
            ]

        elif source is FormatSource.DASH_MANIFEST:
            return extract_dash_formats(
                self, http, signature_resolver, self.player_script, value, self.video_id)

        elif source is FormatSource.STREAM_MAP:
            return formats_from_stream_map(value, self, self.video_id)

        raise ValueError(f'Unknown format source {source!r}')


def resolve_formats(video_id, info, http, signature_resolver, params=None):
    return YoutubeTrackDetails(video_id, info, params).get_formats(http, signature_resolver)


def resolve_metadata(video_id, info, params=None):
    return YoutubeTrackDetails(video_id, info, params).get_track_info()
