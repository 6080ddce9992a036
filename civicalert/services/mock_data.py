"""Sample incidents for development and demos."""

import random
from datetime import UTC, datetime, timedelta

from civicalert.schemas.incident import Incident, IncidentStatus, IncidentType, SeverityLevel
from civicalert.services.incidents import format_incident_id
from civicalert.services.scoring import calculate_priority_score

# San Francisco, City Hall area
BASE_LATITUDE = 37.7749
BASE_LONGITUDE = -122.4194
COORDINATE_SPREAD = 0.1
MAX_AGE = timedelta(days=7)

DESCRIPTIONS: dict[IncidentType, list[str]] = {
    IncidentType.ACCIDENT: [
        "Vehicle collision at intersection",
        "Multi-car pileup on highway",
        "Pedestrian struck by vehicle",
        "Motorcycle accident near school zone",
        "Bus and truck collision",
    ],
    IncidentType.MEDICAL: [
        "Person collapsed in shopping center",
        "Cardiac emergency at office building",
        "Severe allergic reaction reported",
        "Individual in respiratory distress",
        "Unconscious person found in park",
    ],
    IncidentType.FIRE: [
        "Building fire reported",
        "Smoke emanating from residential area",
        "Kitchen fire in restaurant",
        "Electrical fire in commercial building",
        "Wildfire approaching residential zone",
    ],
    IncidentType.INFRASTRUCTURE: [
        "Water main break flooding street",
        "Power line down across road",
        "Sinkhole forming in parking lot",
        "Bridge structural damage reported",
        "Gas leak detected in neighborhood",
    ],
    IncidentType.SAFETY: [
        "Suspicious activity reported",
        "Armed individual spotted near school",
        "Public disturbance in downtown area",
        "Chemical spill on highway",
        "Hazardous material found in public area",
    ],
}

TRIAGED_NOTES = ["Initial assessment completed", "Resources dispatched"]


def generate_mock_incident(
    sequence: int,
    rng: random.Random,
    now: datetime | None = None,
) -> Incident:
    now = now or datetime.now(UTC)
    incident_type = rng.choice(list(IncidentType))
    status = rng.choice(list(IncidentStatus))
    severity = rng.choice(list(SeverityLevel))
    confirmations = rng.randrange(20)
    created_at = now - timedelta(seconds=rng.uniform(0, MAX_AGE.total_seconds()))

    return Incident(
        id=format_incident_id(sequence),
        type=incident_type,
        description=rng.choice(DESCRIPTIONS[incident_type]),
        latitude=BASE_LATITUDE + (rng.random() - 0.5) * COORDINATE_SPREAD,
        longitude=BASE_LONGITUDE + (rng.random() - 0.5) * COORDINATE_SPREAD,
        status=status,
        severity=severity,
        confirmations=confirmations,
        priority_score=calculate_priority_score(incident_type, severity, confirmations),
        created_at=created_at,
        updated_at=created_at,
        notes=list(TRIAGED_NOTES) if status != IncidentStatus.UNVERIFIED else [],
    )


def generate_mock_incidents(
    count: int,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> list[Incident]:
    """
    Generate ``count`` random incidents numbered from ``INC-000001``.

    Returned highest priority first.
    """
    rng = rng or random.Random()
    incidents = [generate_mock_incident(n, rng, now) for n in range(1, count + 1)]
    return sorted(incidents, key=lambda i: i.priority_score, reverse=True)
