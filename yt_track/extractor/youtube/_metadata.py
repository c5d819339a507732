from ...formats import TrackMetadata
from ...utils import (
    DURATION_MS_UNKNOWN,
    ExtractorError,
    UnplayableVideoError,
    bool_or_none,
    int_or_none,
    str_or_none,
    traverse_obj,
)

DEFAULT_BASE_URL = 'https://www.youtube.com/watch?v='


def _build_track_info(ie, video_id, title, author, is_stream, length_seconds):
    if is_stream:
        length = DURATION_MS_UNKNOWN
    elif length_seconds is None:
        raise ExtractorError('Unable to extract track length', video_id=video_id, ie=ie.IE_NAME)
    else:
        length = length_seconds * 1000

    return TrackMetadata(
        title=title,
        author=author,
        length=length,
        identifier=video_id,
        is_stream=is_stream,
        uri=ie.get_param('base_url', DEFAULT_BASE_URL) + video_id)


def _extract_legacy_track_info(ie, video_id, args):
    if str_or_none(traverse_obj(args, 'status')) == 'fail':
        raise UnplayableVideoError(str_or_none(traverse_obj(args, 'reason')), video_id=video_id)

    return _build_track_info(
        ie, video_id,
        title=str_or_none(traverse_obj(args, 'title')),
        author=str_or_none(traverse_obj(args, 'author')),
        is_stream=str_or_none(traverse_obj(args, 'live_playback')) == '1',
        length_seconds=int_or_none(traverse_obj(args, 'length_seconds')))


def _extract_player_response_track_info(ie, video_id, player_response):
    playability_status = traverse_obj(player_response, 'playabilityStatus', expected_type=dict)
    if traverse_obj(playability_status, 'status') == 'ERROR':
        raise UnplayableVideoError(str_or_none(traverse_obj(playability_status, 'reason')), video_id=video_id)

    video_details = traverse_obj(player_response, 'videoDetails', expected_type=dict) or {}
    return _build_track_info(
        ie, video_id,
        title=str_or_none(video_details.get('title')),
        author=str_or_none(video_details.get('author')),
        is_stream=bool_or_none(video_details.get('isLiveContent'), default=False),
        length_seconds=int_or_none(video_details.get('lengthSeconds')))


def parse_player_response(ie, player_response, video_id):
    if isinstance(player_response, dict):
        return player_response
    return ie._parse_json(player_response, video_id, errnote='Unable to parse player response')


def extract_track_info(ie, video_id, info):
    """Build the TrackMetadata of a player page payload.

    Returns None if there is no payload at all. Raises UnplayableVideoError when
    the payload says the video cannot be played, in either schema.
    """
    if info is None:
        return None

    args = traverse_obj(info, 'args', expected_type=dict) or {}
    player_response = traverse_obj(args, 'player_response')
    if player_response is None:
        return _extract_legacy_track_info(ie, video_id, args)

    return _extract_player_response_track_info(
        ie, video_id, parse_player_response(ie, player_response, video_id))
