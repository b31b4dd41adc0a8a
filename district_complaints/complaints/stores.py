"""Database-backed persistence and staff directory for the lifecycle engine."""
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from .models import AdmissionWindow, Complaint, StaffMember


class DatabaseComplaintStore:
    def atomic(self):
        return transaction.atomic()

    def load_complaint(self, complaint_id, for_update=False):
        queryset = Complaint.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(pk=complaint_id).to_record()
        except (Complaint.DoesNotExist, ValidationError, ValueError):
            return None

    def save_complaint(self, record):
        Complaint.objects.update_or_create(
            pk=record.id,
            defaults=Complaint.fields_from_record(record),
        )

    def find_by_tracking_number(self, tracking_number):
        complaint = Complaint.objects.filter(tracking_number=tracking_number).first()
        return complaint.to_record() if complaint else None

    def tracking_number_exists(self, tracking_number) -> bool:
        return Complaint.objects.filter(tracking_number=tracking_number).exists()

    def complaints_for(self, role, district=""):
        queryset = Complaint.objects.filter(assigned_role=role)
        if district:
            queryset = queryset.filter(assigned_district=district)
        return [complaint.to_record() for complaint in queryset.order_by("-created_at")]

    def load_admission_window(self, contact, for_update=False):
        queryset = AdmissionWindow.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        window = queryset.filter(pk=contact).first()
        return window.to_value() if window else None

    def save_admission_window(self, window, previous_at=None) -> bool:
        """Write ``window`` only if the stored row still holds ``previous_at``.

        The first window for a contact is an INSERT, so of two racing first
        submissions the database lets exactly one through.
        """
        if previous_at is None:
            try:
                with transaction.atomic():
                    AdmissionWindow.objects.create(
                        contact=window.contact,
                        last_submission_at=window.last_submission_at,
                    )
            except IntegrityError:
                return False
            return True
        updated = AdmissionWindow.objects.filter(
            pk=window.contact,
            last_submission_at=previous_at,
        ).update(last_submission_at=window.last_submission_at)
        return updated == 1


class DatabaseStaffDirectory:
    def _active(self, role):
        return StaffMember.objects.filter(role=role, is_active=True).order_by("created_at", "id")

    def by_role(self, role):
        return [member.to_entry() for member in self._active(role)]

    def by_district(self, role, district):
        member = self._active(role).filter(district=district).first()
        return member.to_entry() if member else None
