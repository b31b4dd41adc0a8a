import uuid

from django.conf import settings
from django.db import models

from .choices import Category, District, Role, Status, Urgency
from .domain import AdmissionWindow as AdmissionWindowValue
from .domain import ComplaintRecord, StaffEntry


class StaffMember(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="staff_profile",
        null=True,
        blank=True,
    )
    name = models.CharField(max_length=255)
    role = models.CharField(max_length=20, choices=Role.choices)
    district = models.CharField(max_length=50, choices=District.choices, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self):
        if self.district:
            return f"{self.name} ({self.get_role_display()}, {self.district})"
        return f"{self.name} ({self.get_role_display()})"

    def to_entry(self) -> StaffEntry:
        return StaffEntry(id=str(self.pk), name=self.name, role=self.role, district=self.district)


class Complaint(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tracking_number = models.CharField(max_length=24, unique=True, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField()
    district = models.CharField(max_length=50, choices=District.choices)
    category = models.CharField(max_length=50, choices=Category.choices)
    urgency = models.CharField(max_length=20, choices=Urgency.choices, default=Urgency.NORMAL)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.UNREAD)
    submitter_contact = models.CharField(max_length=20)
    help_offer = models.TextField(blank=True)
    assigned_role = models.CharField(max_length=20, choices=Role.choices)
    assigned_district = models.CharField(max_length=50, blank=True)
    assignee = models.ForeignKey(
        StaffMember,
        on_delete=models.SET_NULL,
        related_name="assigned_complaints",
        null=True,
        blank=True,
    )
    assignee_name = models.CharField(max_length=255)
    resolution_note = models.TextField(blank=True)
    rejection_reason = models.TextField(blank=True)
    created_at = models.DateTimeField()
    status_changed_at = models.DateTimeField(null=True, blank=True)
    staff_notes = models.TextField(blank=True)
    public_note = models.TextField(blank=True)
    expected_completion = models.DateField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["assigned_role", "assigned_district", "status"], name="complaint_queue_idx"),
        ]

    def __str__(self):
        return self.tracking_number

    def to_record(self) -> ComplaintRecord:
        return ComplaintRecord(
            id=str(self.pk),
            tracking_number=self.tracking_number,
            district=self.district,
            category=self.category,
            urgency=self.urgency,
            status=self.status,
            title=self.title,
            description=self.description,
            submitter_contact=self.submitter_contact,
            assigned_role=self.assigned_role,
            assigned_district=self.assigned_district,
            assignee_name=self.assignee_name,
            assignee_id=str(self.assignee_id) if self.assignee_id else None,
            help_offer=self.help_offer,
            resolution_note=self.resolution_note,
            rejection_reason=self.rejection_reason,
            created_at=self.created_at,
            status_changed_at=self.status_changed_at,
            staff_notes=self.staff_notes,
            public_note=self.public_note,
            expected_completion=self.expected_completion,
        )

    @classmethod
    def fields_from_record(cls, record: ComplaintRecord) -> dict:
        return {
            "tracking_number": record.tracking_number,
            "title": record.title,
            "description": record.description,
            "district": record.district,
            "category": record.category,
            "urgency": record.urgency,
            "status": record.status,
            "submitter_contact": record.submitter_contact,
            "help_offer": record.help_offer,
            "assigned_role": record.assigned_role,
            "assigned_district": record.assigned_district,
            "assignee_id": int(record.assignee_id) if record.assignee_id else None,
            "assignee_name": record.assignee_name,
            "resolution_note": record.resolution_note,
            "rejection_reason": record.rejection_reason,
            "created_at": record.created_at,
            "status_changed_at": record.status_changed_at,
            "staff_notes": record.staff_notes,
            "public_note": record.public_note,
            "expected_completion": record.expected_completion,
        }


class AdmissionWindow(models.Model):
    contact = models.CharField(max_length=20, primary_key=True)
    last_submission_at = models.DateTimeField()

    class Meta:
        verbose_name = "admission window"

    def __str__(self):
        return f"{self.contact} @ {self.last_submission_at:%Y-%m-%d %H:%M}"

    def to_value(self) -> AdmissionWindowValue:
        return AdmissionWindowValue(contact=self.contact, last_submission_at=self.last_submission_at)
