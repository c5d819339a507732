from __future__ import annotations

import dataclasses

from .utils import DURATION_MS_UNKNOWN, parse_content_type

DEFAULT_SIGNATURE_KEY = 'signature'


@dataclasses.dataclass(frozen=True)
class Format:
    """One playable stream variant of a track

    `bitrate` is either the real bitrate or, for schemas that only name a
    quality, a negative ordering surrogate. Surrogates keep their relative
    order and always sort below real bitrates.
    When `signature` is set, `url` is the base that still needs the
    descrambled signature appended under `signature_key`.
    """
    content_type: str
    bitrate: int
    content_length: int
    url: str
    signature: str | None = None
    signature_key: str = DEFAULT_SIGNATURE_KEY

    @property
    def mime_type(self):
        return parse_content_type(self.content_type)[0]

    @property
    def codecs(self):
        return parse_content_type(self.content_type)[1].get('codecs')

    @property
    def is_ciphered(self):
        return self.signature is not None

    def apply_signature(self, signature):
        """Return the playable URL once the cipher has been descrambled into `signature`"""
        if signature is None:
            return self.url
        return f'{self.url}&{self.signature_key}={signature}'


@dataclasses.dataclass(frozen=True)
class TrackMetadata:
    title: str | None
    author: str | None
    length: int
    identifier: str
    is_stream: bool
    uri: str

    @property
    def is_length_unknown(self):
        return self.length == DURATION_MS_UNKNOWN
