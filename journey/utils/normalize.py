from typing import Dict, Iterable, List
from uuid import UUID
from datetime import date

from journey.core.errors import ErrorKind, JourneyError
from journey.models.trips.activity import Activity


def parse_uuid(value: str, label: str = "id") -> UUID:
    """
    Parse a path identifier, rejecting anything that is not a textual UUID
    before the storage layer is touched.
    """
    try:
        return UUID(value)
    except (ValueError, TypeError, AttributeError):
        raise JourneyError(ErrorKind.INVALID_ID, f"invalid {label}: {value!r} is not a uuid") from None


def group_activities_by_date(activities: Iterable[Activity]) -> Dict[date, List[Activity]]:
    """
    Group activities by the calendar date of occurs_at.

    Groups come out in the order their first activity was retrieved and each
    group keeps retrieval order; nothing is sorted.
    """
    grouped: Dict[date, List[Activity]] = {}
    for activity in activities:
        grouped.setdefault(activity.occurs_at.date(), []).append(activity)
    return grouped
