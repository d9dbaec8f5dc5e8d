"""HTTP client for the podcast host's episode admin API."""

import logging
from types import TracebackType
from typing import Any

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from snadmin.config.settings import AdminSettings
from snadmin.episodes.models import Episode
from snadmin.utils.errors import MalformedResponseError, NetworkError, NotFoundError

logger = logging.getLogger(__name__)

_EPISODE_LIST = TypeAdapter(list[Episode])


class EpisodeClient:
    """Fetch, list and update episodes of one feed.

    Every request carries the bearer token from the settings. Use as a context
    manager so the underlying connection pool is closed.
    """

    def __init__(
        self,
        settings: AdminSettings,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Feed id, token, base URL and timeout
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.settings = settings
        self._http = httpx.Client(
            headers={"Authorization": f"Bearer {settings.token}"},
            timeout=settings.timeout,
            transport=transport,
        )

    def __enter__(self) -> "EpisodeClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def list_episodes(self) -> list[Episode]:
        """GET every episode of the feed."""
        data = self._request("GET", f"{self.settings.feed_url}/episodes")
        try:
            return _EPISODE_LIST.validate_python(data)
        except PydanticValidationError as e:
            raise MalformedResponseError(f"Episode list has unexpected shape: {e}") from e

    def get_episode(self, episode_id: str) -> Episode:
        """GET one episode by its numeric id."""
        data = self._request("GET", f"{self.settings.feed_url}/episode/{episode_id}")
        try:
            return Episode.model_validate(data)
        except PydanticValidationError as e:
            raise MalformedResponseError(
                f"Episode {episode_id} has unexpected shape: {e}"
            ) from e

    def update_episode(self, episode_uuid: str, field: str, value: Any) -> None:
        """PATCH a single field of the episode identified by uuid.

        Args:
            episode_uuid: The episode's uuid (not its numeric id)
            field: Registry field name
            value: Already-coerced JSON value
        """
        self._request(
            "PATCH",
            f"{self.settings.feed_url}/episode/{episode_uuid}",
            json={field: value},
            expect_json=False,
        )

    def _request(
        self,
        method: str,
        url: str,
        json: dict[str, Any] | None = None,
        expect_json: bool = True,
    ) -> Any:
        logger.debug(f"{method} {url}")
        try:
            response = self._http.request(method, url, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                raise NotFoundError(f"Not found: {url}") from e
            raise NetworkError(
                f"{method} {url} failed with HTTP {status}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e

        if not expect_json:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response from {url} is not JSON") from e
