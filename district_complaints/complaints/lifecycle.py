"""Complaint status machine.

Every status change in the system goes through ``apply_transition``; the
table below is the only place that says which role may move a complaint
from one status to another.
"""
import dataclasses
from typing import NamedTuple, Optional

from django.utils import timezone

from .choices import Role, Status
from .exceptions import ComplaintLocked, InvalidTransition, MissingRequiredField, Unauthorized

INITIAL_STATUS = Status.UNREAD

STAFF_ROLES = frozenset({Role.MUKTAR, Role.ADMIN, Role.MANAGER})
SUPERVISOR_ROLES = frozenset({Role.ADMIN, Role.MANAGER})


class Edge(NamedTuple):
    roles: frozenset
    required_field: Optional[str] = None


ALLOWED_TRANSITIONS = {
    (Status.UNREAD, Status.IN_PROGRESS): Edge(STAFF_ROLES),
    (Status.UNREAD, Status.REJECTED): Edge(STAFF_ROLES, "rejection_reason"),
    (Status.IN_PROGRESS, Status.COMPLETED): Edge(STAFF_ROLES, "resolution_note"),
    # Administrative closure; the reason doubles as the closure note.
    (Status.IN_PROGRESS, Status.CLOSED): Edge(SUPERVISOR_ROLES, "rejection_reason"),
}


def next_statuses(current_status, actor_role) -> list:
    """Statuses ``actor_role`` may move a complaint in ``current_status`` to."""
    return [
        target
        for (source, target), edge in ALLOWED_TRANSITIONS.items()
        if source == current_status and actor_role in edge.roles
    ]


def can_transition(current_status, target_status, actor_role) -> bool:
    edge = ALLOWED_TRANSITIONS.get((current_status, target_status))
    return edge is not None and actor_role in edge.roles


def check_transition(current_status, target_status, actor_role, resolution_note="", rejection_reason=""):
    """Raise the first failing rule for the requested move, in checking order.

    Authorization is checked first (the actor must hold a staff role at all),
    then edge existence, then the edge's own role list, then the metadata
    the edge demands.
    """
    if actor_role not in STAFF_ROLES:
        raise Unauthorized(actor_role, current_status, target_status)

    edge = ALLOWED_TRANSITIONS.get((current_status, target_status))
    if edge is None:
        raise InvalidTransition(current_status, target_status)
    if actor_role not in edge.roles:
        raise Unauthorized(actor_role, current_status, target_status)

    supplied = {
        "resolution_note": (resolution_note or "").strip(),
        "rejection_reason": (rejection_reason or "").strip(),
    }
    if edge.required_field and not supplied[edge.required_field]:
        raise MissingRequiredField(edge.required_field)
    return edge


def apply_transition(complaint, target_status, actor_role, resolution_note="", rejection_reason="", now=None):
    """Return a copy of ``complaint`` moved to ``target_status``.

    The input record is never modified, so a failed check leaves nothing
    half-applied.
    """
    edge = check_transition(
        complaint.status,
        target_status,
        actor_role,
        resolution_note=resolution_note,
        rejection_reason=rejection_reason,
    )
    changes = {
        "status": Status(target_status),
        "status_changed_at": now or timezone.now(),
    }
    if edge.required_field == "resolution_note":
        changes["resolution_note"] = resolution_note.strip()
    elif edge.required_field == "rejection_reason":
        changes["rejection_reason"] = rejection_reason.strip()
    return dataclasses.replace(complaint, **changes)


def apply_notes(complaint, actor_role, staff_notes=None, public_note=None, expected_completion=None):
    """Return a copy of ``complaint`` with the staff annotations replaced.

    ``None`` leaves a field untouched. Annotations never change the status,
    and a complaint in a terminal status cannot be annotated any more.
    """
    if actor_role not in STAFF_ROLES:
        raise Unauthorized(actor_role, complaint.status, complaint.status)
    if complaint.is_terminal:
        raise ComplaintLocked(complaint.status)

    changes = {}
    if staff_notes is not None:
        changes["staff_notes"] = staff_notes.strip()
    if public_note is not None:
        changes["public_note"] = public_note.strip()
    if expected_completion is not None:
        changes["expected_completion"] = expected_completion
    return dataclasses.replace(complaint, **changes)
