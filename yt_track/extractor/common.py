import json
import xml.etree.ElementTree

from ..networking import Request
from ..networking.exceptions import HTTPError, RequestError
from ..utils import (
    ExtractorError,
    ManifestDownloadError,
    TrackLogger,
    format_field,
)


class _TreeBuilder(xml.etree.ElementTree.TreeBuilder):
    def doctype(self, name, pubid, system):
        pass


def etree_fromstring(text):
    return xml.etree.ElementTree.XML(text, parser=xml.etree.ElementTree.XMLParser(target=_TreeBuilder()))


class InfoExtractor:
    """Information Extractor class.

    Extractors turn an already downloaded metadata document into formats and
    track information. They hold no state apart from their parameters, so a
    single instance may be shared between threads.

    The params dict understands the following keys:

    logger:        Object with debug and warning methods, e.g. a logging.Logger.
                   When absent, warnings are printed to stderr.
    verbose:       Print debug messages.
    no_warnings:   Do not print warnings (ignored when a logger is given).
    """

    IE_NAME = None

    def __init__(self, params=None):
        self.params = params or {}
        self._logger = TrackLogger(self.params)

    def get_param(self, name, default=None):
        return self.params.get(name, default)

    def report_warning(self, msg, video_id=None):
        idstr = format_field(video_id, None, '%s: ')
        self._logger.warning(f'[{self.IE_NAME}] {idstr}{msg}')

    def write_debug(self, msg, video_id=None):
        idstr = format_field(video_id, None, '%s: ')
        self._logger.debug(f'[{self.IE_NAME}] {idstr}{msg}')

    def _parse_json(self, json_string, video_id, errnote='Failed to parse JSON'):
        try:
            return json.loads(json_string)
        except (TypeError, ValueError) as ve:
            raise ExtractorError(errnote, cause=ve, video_id=video_id, ie=self.IE_NAME)

    def _parse_xml(self, xml_string, video_id, errnote='Failed to parse XML'):
        if isinstance(xml_string, str):
            xml_string = xml_string.encode()
        try:
            return etree_fromstring(xml_string)
        except xml.etree.ElementTree.ParseError as ve:
            raise ExtractorError(errnote, cause=ve, video_id=video_id, ie=self.IE_NAME)

    def _download_xml(self, http, url, video_id, note=None, errnote='Failed to download XML'):
        """Fetch `url` with a single GET through the `http` handler and parse it.

        Any status other than 200 is an error. The response is always closed.
        """
        if note:
            self.write_debug(note, video_id)
        try:
            res = http.send(Request(url))
        except HTTPError as e:
            e.close()
            raise ManifestDownloadError(
                f'{errnote}: invalid status code {e.status}', status=e.status,
                cause=e, video_id=video_id, ie=self.IE_NAME)
        except RequestError as e:
            raise ManifestDownloadError(errnote, cause=e, video_id=video_id, ie=self.IE_NAME)

        with res:
            if res.status != 200:
                raise ManifestDownloadError(
                    f'{errnote}: invalid status code {res.status}', status=res.status,
                    video_id=video_id, ie=self.IE_NAME)
            try:
                content = res.read()
            except RequestError as e:
                raise ManifestDownloadError(errnote, cause=e, video_id=video_id, ie=self.IE_NAME)

        return self._parse_xml(content, video_id)
