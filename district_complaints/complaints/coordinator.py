"""Entry points the rest of the portal uses to file and move complaints.

``LifecycleCoordinator`` is handed its collaborators:

``store``
    ``load_complaint(id, for_update=False)``, ``save_complaint(record)``,
    ``find_by_tracking_number(tracking_number)``,
    ``tracking_number_exists(tracking_number)``,
    ``complaints_for(role, district)``,
    ``load_admission_window(contact, for_update=False)``,
    ``save_admission_window(window, previous_at=None)``, which writes only
    if the stored window still holds ``previous_at`` and reports whether it
    did, and ``atomic()``, a context manager that rolls every write inside
    it back if the block raises.
``directory``
    ``by_role(role)`` and ``by_district(role, district)`` returning
    ``StaffEntry`` values.

``complaints.stores`` provides ORM-backed versions of both.

Per-contact and per-complaint locks are process wide, so coordinators built
per request still serialize against each other.
"""
import logging
import secrets
import uuid

from django.conf import settings
from django.utils import timezone

from .admission import DEFAULT_COOLDOWN, AdmissionControl
from .choices import Role
from .domain import ComplaintRecord
from .exceptions import NotFound, RateLimited, SubmissionValidationError
from .forms import ComplaintSubmissionForm
from .lifecycle import INITIAL_STATUS, apply_notes, apply_transition
from .locks import KeyedLock
from .routing import route

logger = logging.getLogger(__name__)

TRACKING_DIGITS = 8
TRACKING_ATTEMPTS = 20

COMPLAINT_LOCKS = KeyedLock()


class LifecycleCoordinator:
    def __init__(self, store, directory, cooldown=DEFAULT_COOLDOWN, tracking_prefix="TRK", clock=timezone.now):
        self.store = store
        self.directory = directory
        self.admission = AdmissionControl(store, cooldown=cooldown)
        self.tracking_prefix = tracking_prefix.strip().upper()
        self.clock = clock
        self._complaint_locks = COMPLAINT_LOCKS

    def submit(self, data, now=None) -> ComplaintRecord:
        """File a new complaint and return its record.

        Raises ``SubmissionValidationError`` for malformed input (before the
        cooldown is even looked at) and ``RateLimited`` while the submitter's
        cooldown is running. The complaint and the submitter's new admission
        window are written together or not at all.
        """
        form = ComplaintSubmissionForm(data)
        if not form.is_valid():
            field, message = form.first_error()
            raise SubmissionValidationError(field, message)
        cleaned = form.cleaned_data
        contact = cleaned["phone_number"]
        now = now or self.clock()

        with self.admission.serialized(contact), self.store.atomic():
            decision = self.admission.check_and_reserve(contact, now, for_update=True)
            if not decision.allowed:
                raise RateLimited(decision.remaining)

            assignment = route(cleaned["urgency"], cleaned["district"], self.directory)
            record = ComplaintRecord(
                id=str(uuid.uuid4()),
                tracking_number=self._allocate_tracking_number(),
                district=cleaned["district"],
                category=cleaned["category"],
                urgency=cleaned["urgency"],
                status=INITIAL_STATUS,
                title=cleaned["title"],
                description=cleaned["description"],
                submitter_contact=contact,
                assigned_role=assignment.role,
                assigned_district=assignment.district,
                assignee_name=assignment.assignee_name,
                assignee_id=assignment.assignee_id,
                help_offer=cleaned["help_offer"],
                created_at=now,
            )
            self.store.save_complaint(record)
            if self.admission.commit(contact, now, previous=decision.last_submission_at) is None:
                # Another submission for this contact won the window; undo ours.
                raise RateLimited(self._remaining_after_lost_commit(contact, now))

        logger.info(
            "Complaint %s filed (%s, %s) and routed to %s / %s",
            record.tracking_number,
            record.urgency,
            record.district,
            record.assigned_role,
            record.assignee_name,
        )
        return record

    def transition(
        self,
        complaint_id,
        target_status,
        actor_role,
        resolution_note="",
        rejection_reason="",
        now=None,
    ) -> ComplaintRecord:
        now = now or self.clock()
        with self._complaint_locks.hold(str(complaint_id)), self.store.atomic():
            complaint = self.store.load_complaint(complaint_id, for_update=True)
            if complaint is None:
                raise NotFound(complaint_id)
            updated = apply_transition(
                complaint,
                target_status,
                actor_role,
                resolution_note=resolution_note,
                rejection_reason=rejection_reason,
                now=now,
            )
            self.store.save_complaint(updated)

        logger.info(
            "Complaint %s moved %s -> %s by %s",
            updated.tracking_number,
            complaint.status,
            updated.status,
            actor_role,
        )
        return updated

    def update_notes(
        self,
        complaint_id,
        actor_role,
        staff_notes=None,
        public_note=None,
        expected_completion=None,
    ) -> ComplaintRecord:
        """Replace the staff annotations on an open complaint.

        ``staff_notes`` stay internal; ``public_note`` and
        ``expected_completion`` are shown on the public tracking page.
        """
        with self._complaint_locks.hold(str(complaint_id)), self.store.atomic():
            complaint = self.store.load_complaint(complaint_id, for_update=True)
            if complaint is None:
                raise NotFound(complaint_id)
            updated = apply_notes(
                complaint,
                actor_role,
                staff_notes=staff_notes,
                public_note=public_note,
                expected_completion=expected_completion,
            )
            self.store.save_complaint(updated)

        logger.info("Complaint %s annotated by %s", updated.tracking_number, actor_role)
        return updated

    def track(self, tracking_number) -> ComplaintRecord:
        complaint = self.store.find_by_tracking_number((tracking_number or "").strip().upper())
        if complaint is None:
            raise NotFound(tracking_number)
        return complaint

    def queue(self, role, district="") -> list:
        """Complaints routed to ``role``; Muktars only see their own district."""
        if role != Role.MUKTAR:
            district = ""
        return self.store.complaints_for(role, district)

    def _remaining_after_lost_commit(self, contact, now):
        decision = self.admission.check_and_reserve(contact, now)
        return decision.remaining if not decision.allowed else self.admission.cooldown

    def _allocate_tracking_number(self) -> str:
        for _ in range(TRACKING_ATTEMPTS):
            candidate = f"{self.tracking_prefix}-{secrets.randbelow(10 ** TRACKING_DIGITS):0{TRACKING_DIGITS}d}"
            if not self.store.tracking_number_exists(candidate):
                return candidate
        raise RuntimeError("Could not allocate a unique tracking number.")


def default_coordinator() -> LifecycleCoordinator:
    """Coordinator wired to the database and the project settings."""
    from .stores import DatabaseComplaintStore, DatabaseStaffDirectory

    return LifecycleCoordinator(
        store=DatabaseComplaintStore(),
        directory=DatabaseStaffDirectory(),
        cooldown=getattr(settings, "COMPLAINT_COOLDOWN", DEFAULT_COOLDOWN),
        tracking_prefix=getattr(settings, "COMPLAINT_TRACKING_PREFIX", "TRK"),
    )
