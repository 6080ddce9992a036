"""Incident lifecycle rules.

Status transitions are unconstrained for staff, with two exceptions:
confirmations auto-verify an incident once enough citizens corroborate it,
and a false report forces the incident to resolved and locks it.
"""

from civicalert.schemas.incident import Incident, IncidentStatus

AUTO_VERIFY_THRESHOLD = 3

ACTIVE_STATUSES = frozenset(
    {
        IncidentStatus.UNVERIFIED,
        IncidentStatus.VERIFIED,
        IncidentStatus.IN_PROGRESS,
    }
)


def is_active(incident: Incident) -> bool:
    return incident.status in ACTIVE_STATUSES


def apply_confirmation(incident: Incident) -> bool:
    """
    Record one more confirmation on ``incident`` in place.

    Returns True if the confirmation auto-verified the incident.
    """
    incident.confirmations += 1
    if (
        incident.confirmations >= AUTO_VERIFY_THRESHOLD
        and incident.status == IncidentStatus.UNVERIFIED
    ):
        incident.status = IncidentStatus.VERIFIED
        return True
    return False


def apply_false_report(incident: Incident) -> None:
    """Flag ``incident`` as a false report and resolve it."""
    incident.is_false_report = True
    incident.status = IncidentStatus.RESOLVED


def is_locked(incident: Incident) -> bool:
    """False reports no longer accept status or severity changes."""
    return incident.is_false_report
