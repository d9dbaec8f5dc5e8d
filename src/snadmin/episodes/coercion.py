"""Conversion of command-line text into typed values for episode updates.

The admin API wants integer seconds for durations and RFC 3339 timestamps
for publication dates, while the CLI accepts human-friendly text. Each
updatable field maps to a ``FieldKind`` in ``FIELD_KINDS``; adding a typed
field is a one-line table entry.
"""

import logging
import re
from collections.abc import Callable
from datetime import datetime, timezone, tzinfo
from enum import Enum
from typing import Any

from snadmin.episodes.models import DATABASE_FIELDS
from snadmin.utils.errors import (
    InvalidDateError,
    InvalidDurationError,
    InvalidFieldError,
    TimezoneUnavailableError,
)

logger = logging.getLogger(__name__)

PUB_DATE_FORMAT = "%Y-%m-%d %H:%M"
_PUB_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}")
_DURATION_COMPONENT = re.compile(r"[0-9]+")
MAX_DURATION_COMPONENTS = 3


class FieldKind(str, Enum):
    """How a raw string is turned into the JSON value for a field."""

    PASSTHROUGH = "string"
    DURATION_SECONDS = "duration"
    RFC3339_DATE = "date"


FIELD_KINDS: dict[str, FieldKind] = {
    field: FieldKind.PASSTHROUGH for field in DATABASE_FIELDS
} | {
    "media_duration": FieldKind.DURATION_SECONDS,
    "pub_date": FieldKind.RFC3339_DATE,
}

FIELD_INPUT_HINTS: dict[FieldKind, str] = {
    FieldKind.PASSTHROUGH: "any text",
    FieldKind.DURATION_SECONDS: "[[HH:]MM:]SS",
    FieldKind.RFC3339_DATE: "YYYY-MM-DD HH:MM (local time)",
}


def validate_field(field: str) -> str:
    """Check that a field name may be targeted by an update.

    Raises:
        InvalidFieldError: If the field is not in the registry
    """
    if field not in FIELD_KINDS:
        raise InvalidFieldError(
            f"'{field}' is not an updatable field",
            suggestion=f"Choose one of: {', '.join(DATABASE_FIELDS)}",
        )
    return field


def parse_duration(raw_value: str) -> int:
    """Parse ``[[HH:]MM:]SS`` into total seconds.

    Components are read right to left as seconds, minutes and hours.
    Components are not range-checked, so "90" and "1:30" both give 90.

    Raises:
        InvalidDurationError: On an empty or non-numeric component, or more
            than three components
    """
    parts = raw_value.split(":")
    if len(parts) > MAX_DURATION_COMPONENTS:
        raise InvalidDurationError(
            f"Invalid duration '{raw_value}': too many components",
            suggestion="Use [[HH:]MM:]SS, e.g. 1:02:03",
        )

    total = 0
    for position, part in enumerate(reversed(parts)):
        if not _DURATION_COMPONENT.fullmatch(part):
            raise InvalidDurationError(
                f"Invalid duration '{raw_value}': '{part}' is not a whole number",
                suggestion="Use [[HH:]MM:]SS, e.g. 1:02:03",
            )
        total += int(part) * 60**position
    return total


def local_timezone() -> tzinfo:
    """Return the process's current local UTC offset as a fixed timezone.

    Raises:
        TimezoneUnavailableError: If the offset cannot be determined
    """
    try:
        offset = datetime.now().astimezone().utcoffset()
    except (OSError, OverflowError, ValueError) as e:
        raise TimezoneUnavailableError(f"Could not determine local timezone: {e}") from e

    if offset is None:
        raise TimezoneUnavailableError("Could not determine local timezone")
    return timezone(offset)


def parse_pub_date(
    raw_value: str,
    tz_provider: Callable[[], tzinfo] = local_timezone,
) -> str:
    """Parse ``YYYY-MM-DD HH:MM`` local time into an RFC 3339 string.

    Args:
        raw_value: Date and time without seconds or offset
        tz_provider: Returns the timezone to attach to the parsed time

    Returns:
        Timestamp such as ``2024-03-01T14:30:00-05:00``

    Raises:
        InvalidDateError: If the text does not match the format or names an
            impossible date or time
        TimezoneUnavailableError: If the local offset is unknown
    """
    if not _PUB_DATE_PATTERN.fullmatch(raw_value):
        raise InvalidDateError(
            f"Invalid date '{raw_value}'",
            suggestion="Use YYYY-MM-DD HH:MM, e.g. 2024-03-01 14:30",
        )
    try:
        naive = datetime.strptime(raw_value, PUB_DATE_FORMAT)
    except ValueError as e:
        raise InvalidDateError(f"Invalid date '{raw_value}': {e}") from e

    return naive.replace(tzinfo=tz_provider()).isoformat()


def coerce_field_value(
    field: str,
    raw_value: str,
    tz_provider: Callable[[], tzinfo] = local_timezone,
) -> Any:
    """Convert a raw CLI string into the JSON value the API expects for field.

    Args:
        field: Registry field name
        raw_value: Unvalidated user text
        tz_provider: Timezone source for pub_date

    Returns:
        int seconds for media_duration, RFC 3339 str for pub_date, raw_value
        unchanged for every other field

    Raises:
        InvalidFieldError: If field is not in the registry
        CoercionError: If raw_value is malformed for the field's kind
    """
    kind = FIELD_KINDS.get(validate_field(field))

    if kind is FieldKind.DURATION_SECONDS:
        value: Any = parse_duration(raw_value)
    elif kind is FieldKind.RFC3339_DATE:
        value = parse_pub_date(raw_value, tz_provider)
    else:
        value = raw_value

    logger.debug(f"Coerced {field}={raw_value!r} to {value!r}")
    return value

