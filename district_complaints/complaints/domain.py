"""Plain value types passed between the lifecycle engine and its collaborators.

The ORM models in ``complaints.models`` persist these; the engine itself never
touches a model instance.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from .choices import TERMINAL_STATUSES


@dataclass(frozen=True)
class StaffEntry:
    id: str
    name: str
    role: str
    district: str = ""


@dataclass(frozen=True)
class Assignment:
    role: str
    district: str
    assignee_name: str
    assignee_id: Optional[str] = None

    @property
    def is_placeholder(self) -> bool:
        return self.assignee_id is None


@dataclass(frozen=True)
class AdmissionWindow:
    contact: str
    last_submission_at: datetime


@dataclass(frozen=True)
class ComplaintRecord:
    id: str
    tracking_number: str
    district: str
    category: str
    urgency: str
    status: str
    title: str
    description: str
    submitter_contact: str
    assigned_role: str
    assigned_district: str
    assignee_name: str
    created_at: datetime
    assignee_id: Optional[str] = None
    help_offer: str = ""
    resolution_note: str = ""
    rejection_reason: str = ""
    status_changed_at: Optional[datetime] = None
    staff_notes: str = ""
    public_note: str = ""
    expected_completion: Optional[date] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def public_view(self) -> dict:
        """Fields a resident may see when looking a complaint up by tracking number."""
        return {
            "tracking_number": self.tracking_number,
            "title": self.title,
            "district": self.district,
            "category": self.category,
            "urgency": self.urgency,
            "status": self.status,
            "assignee_name": self.assignee_name,
            "created_at": self.created_at.isoformat(),
            "resolution_note": self.resolution_note,
            "rejection_reason": self.rejection_reason,
            "public_note": self.public_note,
            "expected_completion": self.expected_completion.isoformat() if self.expected_completion else None,
        }

    def staff_view(self) -> dict:
        data = self.public_view()
        data.update(
            {
                "id": self.id,
                "description": self.description,
                "submitter_contact": self.submitter_contact,
                "assigned_role": self.assigned_role,
                "assigned_district": self.assigned_district,
                "help_offer": self.help_offer,
                "staff_notes": self.staff_notes,
                "status_changed_at": self.status_changed_at.isoformat() if self.status_changed_at else None,
            }
        )
        return data
