"""Priority scoring for incidents."""

from civicalert.schemas.incident import IncidentType, SeverityLevel

TYPE_WEIGHTS: dict[IncidentType, int] = {
    IncidentType.ACCIDENT: 3,
    IncidentType.MEDICAL: 4,
    IncidentType.FIRE: 5,
    IncidentType.INFRASTRUCTURE: 2,
    IncidentType.SAFETY: 4,
}

SEVERITY_WEIGHTS: dict[SeverityLevel, int] = {
    SeverityLevel.LOW: 1,
    SeverityLevel.MEDIUM: 2,
    SeverityLevel.HIGH: 3,
    SeverityLevel.CRITICAL: 5,
}

CONFIRMATION_WEIGHT = 0.5
MAX_CONFIRMATION_BONUS = 5.0


def calculate_priority_score(
    incident_type: IncidentType,
    severity: SeverityLevel,
    confirmations: int,
) -> float:
    """
    Compute the priority score used to rank incidents.

    The base score is the product of the type and severity weights. Each
    confirmation adds half a point, capped at five points in total.
    Rounded to one decimal place.
    """
    base_score = TYPE_WEIGHTS[incident_type] * SEVERITY_WEIGHTS[severity]
    confirmation_bonus = min(confirmations * CONFIRMATION_WEIGHT, MAX_CONFIRMATION_BONUS)
    return round((base_score + confirmation_bonus) * 10) / 10
