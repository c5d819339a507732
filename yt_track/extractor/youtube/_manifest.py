from ...formats import DEFAULT_SIGNATURE_KEY, Format
from ...utils import ExtractorError, extract_between, int_or_none, strip_or_none


def _local_name(tag):
    return tag.rpartition('}')[2] if isinstance(tag, str) else None


def _iter_elements(element, name):
    """Find descendants by tag name, whatever namespace the manifest declares"""
    return (e for e in element.iter() if _local_name(e.tag) == name)


def parse_dash_manifest(mpd_doc, ie=None, video_id=None):
    """
    Parse formats from a DASH MPD manifest.

    Only representations whose BaseURL carries a "/clen/<length>/" segment are
    kept. Anything else malformed (no BaseURL, bad bandwidth) means the
    manifest itself is broken and fails the whole call.
    """
    ie_name = ie.IE_NAME if ie else None
    formats = []
    for adaptation_set in _iter_elements(mpd_doc, 'AdaptationSet'):
        for representation in _iter_elements(adaptation_set, 'Representation'):
            representation_attrib = adaptation_set.attrib.copy()
            representation_attrib.update(representation.attrib)
            content_type = '{}; codecs={}'.format(
                adaptation_set.get('mimeType') or representation_attrib.get('mimeType', ''),
                representation_attrib.get('codecs', ''))

            base_url = next(_iter_elements(representation, 'BaseURL'), None)
            url = strip_or_none(base_url.text) if base_url is not None else None
            if not url:
                raise ExtractorError(
                    f'Representation {representation.get("id")} has no BaseURL', video_id=video_id, ie=ie_name)

            content_length = int_or_none(extract_between(url, '/clen/', '/'))
            if content_length is None:
                if ie:
                    ie.write_debug(f'Skipping format {content_type} because the content length is missing', video_id)
                continue

            bandwidth = representation.get('bandwidth')
            try:
                bitrate = int(bandwidth)
            except (TypeError, ValueError) as e:
                raise ExtractorError(
                    f'Invalid bandwidth {bandwidth!r} for format {content_type}',
                    cause=e, video_id=video_id, ie=ie_name)

            formats.append(Format(
                content_type=content_type,
                bitrate=bitrate,
                content_length=content_length,
                url=url,
                signature=None,
                signature_key=DEFAULT_SIGNATURE_KEY))
    return formats


def extract_dash_formats(ie, http, signature_resolver, player_script, dash_url, video_id):
    """Resolve the manifest url, fetch it once and parse it"""
    resolved_url = signature_resolver.resolve_manifest_url(http, player_script, dash_url)
    mpd_doc = ie._download_xml(
        http, resolved_url, video_id,
        note='Downloading DASH manifest', errnote='Failed to download DASH manifest')
    return parse_dash_manifest(mpd_doc, ie, video_id)
