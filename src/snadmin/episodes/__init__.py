"""Episode model, field registry and update coercion."""

from snadmin.episodes.coercion import FIELD_KINDS, FieldKind, coerce_field_value, validate_field
from snadmin.episodes.models import (
    DATABASE_FIELDS,
    Episode,
    SortKey,
    format_listing_line,
    sort_episodes,
)

__all__ = [
    "DATABASE_FIELDS",
    "Episode",
    "FIELD_KINDS",
    "FieldKind",
    "SortKey",
    "coerce_field_value",
    "format_listing_line",
    "sort_episodes",
    "validate_field",
]
