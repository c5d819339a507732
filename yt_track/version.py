__version__ = '2024.06.01'

REPOSITORY = 'yt-track/yt-track'
