# flake8: noqa: F401
from .common import InfoExtractor
from .youtube import YoutubeTrackDetails
