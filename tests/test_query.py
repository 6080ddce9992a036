"""Tests for incident filtering and ordering."""

from datetime import date, timedelta

from civicalert.schemas.incident import (
    IncidentFilter,
    IncidentStatus,
    IncidentType,
    SeverityLevel,
)
from civicalert.services.query import filter_incidents
from tests.conftest import FIXED_NOW, make_incident


def sample_incidents():
    return [
        make_incident(1, IncidentType.FIRE, SeverityLevel.HIGH),  # 15.5
        make_incident(2, IncidentType.ACCIDENT, SeverityLevel.LOW),  # 3.5
        make_incident(
            3,
            IncidentType.MEDICAL,
            SeverityLevel.MEDIUM,
            status=IncidentStatus.RESOLVED,
            created_at=FIXED_NOW - timedelta(days=3),
            description="Person collapsed in shopping center",
        ),  # 8.5
        make_incident(
            4,
            IncidentType.SAFETY,
            SeverityLevel.MEDIUM,
            created_at=FIXED_NOW - timedelta(days=5),
            description="Suspicious activity reported",
        ),  # 8.5
    ]


class TestFilterIncidents:
    """Tests for filter_incidents."""

    def test_no_filter_returns_all_by_priority(self):
        result = filter_incidents(sample_incidents())

        assert [i.id for i in result] == ["INC-000001", "INC-000003", "INC-000004", "INC-000002"]

    def test_ties_keep_input_order(self):
        incidents = sample_incidents()
        reordered = [incidents[3], incidents[2]]

        result = filter_incidents(reordered)

        assert [i.id for i in result] == ["INC-000004", "INC-000003"]

    def test_filter_by_type(self):
        result = filter_incidents(sample_incidents(), IncidentFilter(type=IncidentType.FIRE))

        assert [i.id for i in result] == ["INC-000001"]

    def test_filter_by_status_and_severity(self):
        filters = IncidentFilter(
            status=IncidentStatus.UNVERIFIED,
            severity=SeverityLevel.MEDIUM,
        )

        result = filter_incidents(sample_incidents(), filters)

        assert [i.id for i in result] == ["INC-000004"]

    def test_date_range_is_inclusive(self):
        filters = IncidentFilter(
            start_date=date(2026, 10, 13),
            end_date=date(2026, 10, 15),
        )

        result = filter_incidents(sample_incidents(), filters)

        assert {i.id for i in result} == {"INC-000003", "INC-000004"}

    def test_end_date_covers_whole_day(self):
        """An incident late on the end date is still included."""
        filters = IncidentFilter(end_date=FIXED_NOW.date())

        result = filter_incidents(sample_incidents(), filters)

        assert len(result) == 4

    def test_search_matches_description_case_insensitive(self):
        result = filter_incidents(sample_incidents(), IncidentFilter(search="COLLAPSED"))

        assert [i.id for i in result] == ["INC-000003"]

    def test_search_matches_id(self):
        result = filter_incidents(sample_incidents(), IncidentFilter(search="inc-000002"))

        assert [i.id for i in result] == ["INC-000002"]

    def test_search_combines_with_filters(self):
        filters = IncidentFilter(type=IncidentType.ACCIDENT, search="collapsed")

        assert filter_incidents(sample_incidents(), filters) == []

    def test_blank_search_is_ignored(self):
        result = filter_incidents(sample_incidents(), IncidentFilter(search="   "))

        assert len(result) == 4

    def test_input_not_mutated(self):
        incidents = sample_incidents()
        original_order = [i.id for i in incidents]

        filter_incidents(incidents, IncidentFilter(type=IncidentType.FIRE))

        assert [i.id for i in incidents] == original_order
