from __future__ import annotations

import abc
import re

from ...utils import SignatureResolutionError

__all__ = [
    'PassthroughSignatureResolver',
    'SignatureResolver',
]


class SignatureResolver(abc.ABC):
    """Turns obfuscated manifest urls into fetchable ones.

    Implementations usually download and evaluate the player script; they may
    use the given request handler for that.
    """

    @abc.abstractmethod
    def resolve_manifest_url(self, http, player_script: str | None, manifest_url: str) -> str:
        """Return a url for `manifest_url` that can be requested as is"""
        pass


class PassthroughSignatureResolver(SignatureResolver):
    """Accept manifest urls that carry no scrambled signature and reject the rest"""

    _SIGNED_PATH_RE = re.compile(r'/s/[^/]+')

    def resolve_manifest_url(self, http, player_script, manifest_url):
        if self._SIGNED_PATH_RE.search(manifest_url):
            raise SignatureResolutionError(
                'The manifest url carries a scrambled signature, but no descrambling resolver was given')
        return manifest_url
