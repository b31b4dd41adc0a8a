# Generated manually for initial project scaffold.

import uuid

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


DISTRICT_CHOICES = [
    ("District 1", "Al-Zahra (District 1)"),
    ("District 2", "Al-Mogambo (District 2)"),
    ("District 3", "Al-Furqan (District 3)"),
]
ROLE_CHOICES = [("MUKTAR", "Muktar"), ("ADMIN", "Admin"), ("MANAGER", "Manager")]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="StaffMember",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("role", models.CharField(choices=ROLE_CHOICES, max_length=20)),
                ("district", models.CharField(blank=True, choices=DISTRICT_CHOICES, max_length=50)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "user",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="staff_profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={"ordering": ["created_at", "id"]},
        ),
        migrations.CreateModel(
            name="AdmissionWindow",
            fields=[
                ("contact", models.CharField(max_length=20, primary_key=True, serialize=False)),
                ("last_submission_at", models.DateTimeField()),
            ],
            options={"verbose_name": "admission window"},
        ),
        migrations.CreateModel(
            name="Complaint",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("tracking_number", models.CharField(editable=False, max_length=24, unique=True)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("district", models.CharField(choices=DISTRICT_CHOICES, max_length=50)),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("Electricity", "Electricity"),
                            ("Water", "Water"),
                            ("Roads", "Roads"),
                            ("Sanitation", "Sanitation"),
                            ("Security", "Security"),
                            ("Other", "Other"),
                        ],
                        max_length=50,
                    ),
                ),
                (
                    "urgency",
                    models.CharField(
                        choices=[("NORMAL", "Normal"), ("URGENT", "Urgent"), ("CRITICAL", "Critical")],
                        default="NORMAL",
                        max_length=20,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("UNREAD", "Unread"),
                            ("IN_PROGRESS", "In Progress"),
                            ("COMPLETED", "Completed"),
                            ("REJECTED", "Rejected"),
                            ("CLOSED", "Closed"),
                        ],
                        default="UNREAD",
                        max_length=20,
                    ),
                ),
                ("submitter_contact", models.CharField(max_length=20)),
                ("help_offer", models.TextField(blank=True)),
                ("assigned_role", models.CharField(choices=ROLE_CHOICES, max_length=20)),
                ("assigned_district", models.CharField(blank=True, max_length=50)),
                ("assignee_name", models.CharField(max_length=255)),
                ("resolution_note", models.TextField(blank=True)),
                ("rejection_reason", models.TextField(blank=True)),
                ("created_at", models.DateTimeField()),
                ("status_changed_at", models.DateTimeField(blank=True, null=True)),
                (
                    "assignee",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="assigned_complaints",
                        to="complaints.staffmember",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["assigned_role", "assigned_district", "status"],
                        name="complaint_queue_idx",
                    )
                ],
            },
        ),
    ]
