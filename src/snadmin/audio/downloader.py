"""Streaming download of episode media files."""

import logging
from collections.abc import Callable
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel, Field

from snadmin.episodes.models import Episode
from snadmin.utils.errors import DownloadError, NetworkError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class DownloadProgress(BaseModel):
    """Progress information for a media download."""

    downloaded_bytes: int = Field(default=0, ge=0, description="Bytes written so far")
    total_bytes: int | None = Field(
        default=None, ge=0, description="Total bytes to download (if known)"
    )

    @property
    def percentage(self) -> float | None:
        """Calculate download percentage if total is known."""
        if self.total_bytes and self.total_bytes > 0:
            return (self.downloaded_bytes / self.total_bytes) * 100
        return None


def media_filename(episode: Episode) -> str:
    """Local file name for an episode: its uuid plus the media URL's extension."""
    suffix = PurePosixPath(urlparse(episode.media_url).path).suffix
    return f"{episode.uuid}{suffix}"


class MediaDownloader:
    """Download episode media with a GET, streamed to disk.

    The bearer token is only sent when the media URL is on the API host; media
    on any other host (typically a CDN) is fetched without credentials.
    """

    def __init__(
        self,
        output_dir: Path | None = None,
        progress_callback: Callable[[DownloadProgress], None] | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
        token: str | None = None,
        api_base_url: str | None = None,
    ):
        """Initialize media downloader.

        Args:
            output_dir: Directory to save media into (default: current directory)
            progress_callback: Optional callback for progress updates
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
            token: API bearer token
            api_base_url: API base URL; its host scopes where the token is sent
        """
        self.output_dir = output_dir or Path.cwd()
        self.progress_callback = progress_callback
        self.timeout = timeout
        self.transport = transport
        self.token = token
        self.api_host = urlparse(api_base_url).hostname if api_base_url else None

    def download(self, episode: Episode) -> Path:
        """Download an episode's media file.

        The body is written to a sibling ".part" file that replaces the target
        only once complete, so an existing file survives a failed download.

        Args:
            episode: Episode whose media_url is fetched

        Returns:
            Path to the written file

        Raises:
            NetworkError: If the request fails
            DownloadError: If the file cannot be written
        """
        url = episode.media_url
        output_path = self.output_dir / media_filename(episode)
        part_path = output_path.with_name(output_path.name + ".part")
        logger.debug(f"Downloading {url} to {output_path}")

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            with httpx.Client(
                headers=self._auth_headers(url),
                timeout=self.timeout,
                transport=self.transport,
                follow_redirects=True,
            ) as http:
                with http.stream("GET", url) as response:
                    response.raise_for_status()
                    self._write_stream(response, part_path)
            part_path.replace(output_path)
        except httpx.HTTPStatusError as e:
            raise NetworkError(
                f"Failed to download {url}: HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            _discard_partial(part_path)
            raise NetworkError(f"Failed to download {url}: {e}") from e
        except OSError as e:
            _discard_partial(part_path)
            raise DownloadError(f"Failed to write {output_path}: {e}") from e

        return output_path

    def _auth_headers(self, url: str) -> dict[str, str]:
        if self.token and self.api_host and urlparse(url).hostname == self.api_host:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def _write_stream(self, response: httpx.Response, output_path: Path) -> None:
        length = response.headers.get("Content-Length")
        progress = DownloadProgress(
            total_bytes=int(length) if length and length.isdigit() else None
        )

        with open(output_path, "wb") as f:
            for chunk in response.iter_bytes(CHUNK_SIZE):
                f.write(chunk)
                progress.downloaded_bytes += len(chunk)
                if self.progress_callback:
                    self.progress_callback(progress)


def _discard_partial(path: Path) -> None:
    if path.exists():
        path.unlink()
