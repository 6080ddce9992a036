"""Filtering and ordering of incident lists for the feed and dashboard."""

from collections.abc import Iterable
from datetime import UTC

from civicalert.schemas.incident import Incident, IncidentFilter


def _matches(incident: Incident, filters: IncidentFilter) -> bool:
    if filters.type and incident.type != filters.type:
        return False
    if filters.status and incident.status != filters.status:
        return False
    if filters.severity and incident.severity != filters.severity:
        return False

    created_on = incident.created_at.astimezone(UTC).date()
    if filters.start_date and created_on < filters.start_date:
        return False
    if filters.end_date and created_on > filters.end_date:
        return False

    return True


def filter_incidents(
    incidents: Iterable[Incident],
    filters: IncidentFilter | None = None,
) -> list[Incident]:
    """
    Apply ``filters`` and sort by priority score, highest first.

    Incidents with equal scores keep their input order.
    """
    filters = filters or IncidentFilter()
    matched = [i for i in incidents if _matches(i, filters)]

    search = filters.search.strip().lower() if filters.search else None
    if search:
        matched = [
            i
            for i in matched
            if search in i.id.lower() or search in i.description.lower()
        ]

    # sorted() is stable with reverse=True as well
    return sorted(matched, key=lambda i: i.priority_score, reverse=True)
