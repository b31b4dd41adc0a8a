"""Urgency based routing of new complaints to a responsible staff role."""
import logging

from .choices import Role, Urgency
from .domain import Assignment

logger = logging.getLogger(__name__)

GENERAL_OFFICE = "General Office"
ADMIN_OFFICE = "Admin Office"
MANAGER_OFFICE = "Manager Office"

ROUTING_TABLE = {
    Urgency.NORMAL: (Role.MUKTAR, GENERAL_OFFICE),
    Urgency.URGENT: (Role.ADMIN, ADMIN_OFFICE),
    Urgency.CRITICAL: (Role.MANAGER, MANAGER_OFFICE),
}


def route(urgency, district, directory) -> Assignment:
    """Pick the role and, where the directory has one, the person for a complaint.

    Normal complaints go to the Muktar of the complaint's district, urgent ones
    to the first Admin and critical ones to the first Manager. A missing staff
    member never fails the submission: the office placeholder is assigned
    instead.
    """
    role, placeholder = ROUTING_TABLE[Urgency(urgency)]

    if role == Role.MUKTAR:
        staff = directory.by_district(role, district)
        assigned_district = district
    else:
        candidates = directory.by_role(role)
        staff = candidates[0] if candidates else None
        assigned_district = ""

    if staff is None:
        logger.info("No %s available for %s complaint in %s; routing to %s", role.label, urgency, district, placeholder)
        return Assignment(role=role, district=assigned_district, assignee_name=placeholder)
    return Assignment(
        role=role,
        district=assigned_district,
        assignee_name=staff.name,
        assignee_id=staff.id,
    )
