"""Loading schedule snapshots from JSON documents.

The document mirrors what the data layer exports:

    {
        "settings": {"workingHoursStart": "08:00", "workingHoursEnd": "22:00"},
        "students": [{"id": ..., "name": ..., "sessionType": "onsite",
                      "sessionTime": "16:00", "sessions": [...]}],
        "groups": [...]
    }

Both camelCase and snake_case keys are accepted.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Optional, Union

from smartslots.domain.models import (
    BusinessSettings,
    InvalidSchedulingInput,
    Location,
    ScheduleSnapshot,
    Session,
    SessionKind,
    SessionStatus,
    Student,
    StudentGroup,
)

logger = logging.getLogger(__name__)


def _get(data: dict, *keys: str, default: Any = None) -> Any:
    """Return the first present key among camelCase/snake_case spellings."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _parse_date(value: Any, where: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise InvalidSchedulingInput(f"{where}: invalid date {value!r}") from None


def _parse_duration(value: Any, where: str) -> Optional[int]:
    if value in (None, ""):
        return None
    if isinstance(value, bool):
        raise InvalidSchedulingInput(f"{where}: invalid duration {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidSchedulingInput(f"{where}: invalid duration {value!r}") from None


def location_from_dict(data: Optional[dict]) -> Optional[Location]:
    """Build a Location, or None when coordinates are missing."""
    if not data:
        return None
    lat = _get(data, "lat", "latitude")
    lng = _get(data, "lng", "lon", "longitude")
    if lat is None or lng is None:
        return None
    return Location(
        lat=float(lat),
        lng=float(lng),
        address=_get(data, "address"),
        name=_get(data, "name"),
    )


def session_from_dict(data: dict, owner_id: str) -> Session:
    where = f"session {data.get('id', '?')} of {owner_id}"
    if "date" not in data:
        raise InvalidSchedulingInput(f"{where}: missing date")
    return Session(
        id=str(data.get("id", "")),
        session_date=_parse_date(data["date"], where),
        time=_get(data, "time") or None,
        duration_minutes=_parse_duration(_get(data, "duration", "duration_minutes"), where),
        status=SessionStatus.parse(_get(data, "status", default="scheduled")),
        location=location_from_dict(_get(data, "location")),
    )


def _owner_fields(data: dict) -> dict:
    owner_id = str(_get(data, "id", default=""))
    return {
        "id": owner_id,
        "name": str(_get(data, "name", default=owner_id)),
        "session_kind": SessionKind.parse(
            _get(data, "sessionType", "session_type", "session_kind", default="online")
        ),
        "session_time": _get(data, "sessionTime", "session_time") or None,
        "session_duration": _parse_duration(
            _get(data, "sessionDuration", "session_duration"), f"owner {owner_id}"
        ),
        "location": location_from_dict(_get(data, "location")),
        "sessions": [
            session_from_dict(s, owner_id) for s in _get(data, "sessions", default=[])
        ],
    }


def settings_from_dict(data: Optional[dict]) -> BusinessSettings:
    data = data or {}
    defaults = BusinessSettings()
    return BusinessSettings(
        working_hours_start=_get(
            data, "workingHoursStart", "working_hours_start",
            default=defaults.working_hours_start,
        ),
        working_hours_end=_get(
            data, "workingHoursEnd", "working_hours_end",
            default=defaults.working_hours_end,
        ),
        locale=_get(data, "locale", default=defaults.locale),
    )


def snapshot_from_dict(data: dict) -> ScheduleSnapshot:
    """Build a ScheduleSnapshot from a JSON-style dict.

    Raises:
        InvalidSchedulingInput: If a field has an unusable value.
    """
    if not isinstance(data, dict):
        raise InvalidSchedulingInput("Snapshot document must be a JSON object")

    students = [Student(**_owner_fields(s)) for s in data.get("students", [])]
    groups = [StudentGroup(**_owner_fields(g)) for g in data.get("groups", [])]
    settings = settings_from_dict(data.get("settings"))

    logger.debug(
        "Loaded snapshot with %d students, %d groups", len(students), len(groups)
    )
    return ScheduleSnapshot(students=students, groups=groups, settings=settings)


def load_snapshot(path: Union[str, Path]) -> ScheduleSnapshot:
    """Read a snapshot JSON file from disk."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidSchedulingInput(f"{path}: not valid JSON ({exc})") from exc
    return snapshot_from_dict(data)
