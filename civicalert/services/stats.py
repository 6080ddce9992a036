"""Dashboard statistics computed from the full incident collection."""

from collections import Counter
from collections.abc import Sequence
from datetime import UTC, date, timedelta

from civicalert.schemas.incident import Incident, IncidentStatus, IncidentType, SeverityLevel
from civicalert.schemas.stats import DashboardStats, TrendPoint
from civicalert.services.lifecycle import is_active

TREND_DAYS = 7
HIGH_SEVERITIES = frozenset({SeverityLevel.HIGH, SeverityLevel.CRITICAL})


def _trend_label(day: date) -> str:
    """Format like 'Sun, Oct 18'."""
    return f"{day:%a}, {day:%b} {day.day}"


def build_trend(incidents: Sequence[Incident], today: date) -> list[TrendPoint]:
    """Count incidents created on each of the last seven days, oldest first."""
    per_day = Counter(i.created_at.astimezone(UTC).date() for i in incidents)
    points = []
    for offset in range(TREND_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        points.append(TrendPoint(day=day, date=_trend_label(day), count=per_day[day]))
    return points


def compute_dashboard_stats(incidents: Sequence[Incident], today: date) -> DashboardStats:
    """
    Summarize ``incidents`` for the dashboard.

    Every incident type and severity level is present in the breakdowns,
    zero-filled, so each breakdown sums to the total.
    """
    by_type = Counter(i.type for i in incidents)
    by_severity = Counter(i.severity for i in incidents)

    return DashboardStats(
        total_incidents=len(incidents),
        active_incidents=sum(1 for i in incidents if is_active(i)),
        high_severity_alerts=sum(
            1 for i in incidents if i.severity in HIGH_SEVERITIES and is_active(i)
        ),
        resolved_incidents=sum(
            1 for i in incidents if i.status == IncidentStatus.RESOLVED
        ),
        incidents_by_type={t: by_type[t] for t in IncidentType},
        severity_distribution={s: by_severity[s] for s in SeverityLevel},
        incidents_trend=build_trend(incidents, today),
    )
