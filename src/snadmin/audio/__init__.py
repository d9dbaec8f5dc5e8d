"""Media download module for snadmin."""

from snadmin.audio.downloader import DownloadProgress, MediaDownloader, media_filename

__all__ = [
    "DownloadProgress",
    "MediaDownloader",
    "media_filename",
]
