"""Tests for dashboard statistics."""

from datetime import date, timedelta

from civicalert.schemas.incident import IncidentStatus, IncidentType, SeverityLevel
from civicalert.services.stats import compute_dashboard_stats
from tests.conftest import FIXED_NOW, make_incident

TODAY = FIXED_NOW.date()


def sample_incidents():
    return [
        make_incident(1, IncidentType.FIRE, SeverityLevel.CRITICAL),
        make_incident(
            2, IncidentType.FIRE, SeverityLevel.HIGH, status=IncidentStatus.RESOLVED
        ),
        make_incident(
            3,
            IncidentType.MEDICAL,
            SeverityLevel.HIGH,
            status=IncidentStatus.IN_PROGRESS,
            created_at=FIXED_NOW - timedelta(days=1),
        ),
        make_incident(
            4,
            IncidentType.SAFETY,
            SeverityLevel.LOW,
            status=IncidentStatus.VERIFIED,
            created_at=FIXED_NOW - timedelta(days=6),
        ),
        make_incident(5, IncidentType.ACCIDENT, created_at=FIXED_NOW - timedelta(days=10)),
    ]


class TestComputeDashboardStats:
    """Tests for compute_dashboard_stats."""

    def test_counts(self):
        stats = compute_dashboard_stats(sample_incidents(), TODAY)

        assert stats.total_incidents == 5
        assert stats.active_incidents == 4
        assert stats.resolved_incidents == 1
        # Resolved high severity incidents are not alerts
        assert stats.high_severity_alerts == 2

    def test_breakdowns_are_zero_filled_and_sum_to_total(self):
        stats = compute_dashboard_stats(sample_incidents(), TODAY)

        assert set(stats.incidents_by_type) == set(IncidentType)
        assert set(stats.severity_distribution) == set(SeverityLevel)
        assert stats.incidents_by_type[IncidentType.INFRASTRUCTURE] == 0
        assert stats.incidents_by_type[IncidentType.FIRE] == 2
        assert stats.severity_distribution[SeverityLevel.HIGH] == 2
        assert sum(stats.incidents_by_type.values()) == stats.total_incidents
        assert sum(stats.severity_distribution.values()) == stats.total_incidents

    def test_trend_counts_real_days(self):
        stats = compute_dashboard_stats(sample_incidents(), TODAY)
        trend = stats.incidents_trend

        assert len(trend) == 7
        assert trend[0].day == TODAY - timedelta(days=6)
        assert trend[-1].day == TODAY
        assert [p.count for p in trend] == [1, 0, 0, 0, 0, 1, 2]

    def test_trend_labels(self):
        stats = compute_dashboard_stats([], date(2026, 10, 18))

        assert stats.incidents_trend[-1].date == "Sun, Oct 18"
        assert stats.incidents_trend[0].date == "Mon, Oct 12"

    def test_empty_collection(self):
        stats = compute_dashboard_stats([], TODAY)

        assert stats.total_incidents == 0
        assert all(count == 0 for count in stats.incidents_by_type.values())
        assert all(point.count == 0 for point in stats.incidents_trend)
