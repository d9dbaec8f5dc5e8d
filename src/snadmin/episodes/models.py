"""Data models for podcast episodes served by the admin API."""

from collections.abc import Iterable
from enum import Enum

from pydantic import AwareDatetime, BaseModel, ConfigDict

# Updatable fields, in the order the API documents them. id, uuid and
# podcast_uuid are server-owned and never appear here.
DATABASE_FIELDS: tuple[str, ...] = (
    "title",
    "subtitle",
    "description",
    "media_url",
    "media_size",
    "media_type",
    "media_duration",
    "pub_date",
    "link",
    "image",
    "episode_type",
    "season",
    "episode",
)

# Columns before the title: "{id:3}│ ", "{date}│ ", "{hh:mm:ss}│ ", "{size:6.2f} MB│ "
LISTING_PREFIX_WIDTH = 38


class SortKey(str, Enum):
    """Fields an episode listing can be ordered by."""

    ID = "id"
    PUB_DATE = "pub_date"


class Episode(BaseModel):
    """Represents a single episode record as returned by the API."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    subtitle: str | None = None
    description: str | None = None
    media_url: str
    media_size: int
    media_type: str
    media_duration: int | None = None
    pub_date: AwareDatetime
    link: str | None = None
    image: str | None = None
    episode_type: str | None = None
    season: str | None = None
    episode: str | None = None
    uuid: str
    podcast_uuid: str

    @property
    def duration_formatted(self) -> str:
        """Duration as H:MM:SS (0:00:00 when unknown)."""
        hours, minutes, seconds = split_duration(self.media_duration or 0)
        return f"{hours}:{minutes:02d}:{seconds:02d}"


def split_duration(total_seconds: int) -> tuple[int, int, int]:
    """Split a second count into (hours, minutes, seconds)."""
    return total_seconds // 3600, total_seconds // 60 % 60, total_seconds % 60


def format_listing_line(episode: Episode, width: int | None = None) -> str:
    """Render an episode as one fixed-layout line for the console.

    Args:
        episode: Episode to render
        width: Terminal width in characters, or None when unknown
            (e.g. output redirected to a file)

    Returns:
        Line of the form ``id│ date│ hh:mm:ss│ size MB│ title``. With a known
        width the title is cut to the columns left after the fixed prefix.
    """
    hours, minutes, seconds = split_duration(episode.media_duration or 0)

    title = episode.title
    if width is not None:
        title = title[: max(width - LISTING_PREFIX_WIDTH, 0)]

    return (
        f"{episode.id:3}│ "
        f"{episode.pub_date.strftime('%Y-%m-%d')}│ "
        f"{hours:2}:{minutes:02}:{seconds:02}│ "
        f"{episode.media_size / 1_000_000:6.2f} MB│ "
        f"{title}"
    )


def sort_episodes(episodes: Iterable[Episode], key: SortKey) -> list[Episode]:
    """Return episodes ordered ascending by the given key."""
    return sorted(episodes, key=lambda ep: getattr(ep, key.value))
