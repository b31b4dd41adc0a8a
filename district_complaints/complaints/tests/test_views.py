import uuid
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.contrib import admin
from django.test import Client, RequestFactory, TestCase, override_settings
from django.urls import reverse

from complaints.choices import District, Role, Status
from complaints.models import Complaint, StaffMember

from .fakes import submission

User = get_user_model()


class ComplaintApiTests(TestCase):
    def setUp(self):
        self.muktar_user = User.objects.create_user(username="ali", password="StrongPass123!")
        self.muktar = StaffMember.objects.create(
            user=self.muktar_user,
            name="Ali",
            role=Role.MUKTAR,
            district=District.DISTRICT_1,
        )
        self.admin_user = User.objects.create_user(username="admin1", password="StrongPass123!")
        StaffMember.objects.create(user=self.admin_user, name="Admin One", role=Role.ADMIN)
        self.citizen = User.objects.create_user(username="citizen", password="StrongPass123!")

    def submit(self, **overrides):
        return self.client.post(reverse("complaints:complaint_submit"), data=submission(**overrides))

    def transition(self, complaint_id, **data):
        return self.client.post(
            reverse("complaints:complaint_transition", kwargs={"complaint_id": complaint_id}),
            data=data,
        )

    def test_submit_returns_tracking_number_and_assignee(self):
        response = self.submit()
        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertTrue(payload["tracking_number"].startswith("TRK-"))
        self.assertEqual(payload["assigned_role"], Role.MUKTAR)
        self.assertEqual(payload["assignee_name"], "Ali")
        self.assertTrue(Complaint.objects.filter(tracking_number=payload["tracking_number"]).exists())

    def test_invalid_submission_reports_field(self):
        response = self.submit(phone_number="12345")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "phone_number")
        self.assertFalse(Complaint.objects.exists())

    def test_second_submission_is_rate_limited(self):
        self.assertEqual(self.submit().status_code, 201)
        response = self.submit(title="Second complaint")
        self.assertEqual(response.status_code, 429)
        retry_after = response.json()["retry_after_seconds"]
        self.assertGreater(retry_after, 23 * 3600)
        self.assertLessEqual(retry_after, 24 * 3600)
        self.assertEqual(response["Retry-After"], str(retry_after))

    @override_settings(COMPLAINT_COOLDOWN=timedelta(hours=1), COMPLAINT_TRACKING_PREFIX="CMP")
    def test_settings_drive_prefix_and_cooldown(self):
        response = self.submit()
        self.assertTrue(response.json()["tracking_number"].startswith("CMP-"))
        self.assertLessEqual(self.submit().json()["retry_after_seconds"], 3600)

    def test_public_tracking_lookup(self):
        tracking_number = self.submit().json()["tracking_number"]
        response = self.client.get(reverse("complaints:complaint_track", kwargs={"tracking_number": tracking_number}))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], Status.UNREAD)
        self.assertNotIn("submitter_contact", response.json())

        missing = self.client.get(reverse("complaints:complaint_track", kwargs={"tracking_number": "TRK-0"}))
        self.assertEqual(missing.status_code, 404)

    def test_staff_queue_shows_own_district(self):
        self.submit()
        self.submit(phone_number="0911111111", district="District 2")
        self.client.login(username="ali", password="StrongPass123!")
        response = self.client.get(reverse("complaints:staff_queue"))
        self.assertEqual(response.status_code, 200)
        complaints = response.json()["complaints"]
        self.assertEqual(len(complaints), 1)
        self.assertEqual(complaints[0]["district"], "District 1")
        self.assertEqual(sorted(complaints[0]["next_statuses"]), ["IN_PROGRESS", "REJECTED"])

    def test_citizen_cannot_use_staff_endpoints(self):
        self.client.login(username="citizen", password="StrongPass123!")
        self.assertEqual(self.client.get(reverse("complaints:staff_queue")).status_code, 403)

    def test_submission_works_without_a_csrf_token(self):
        client = Client(enforce_csrf_checks=True)
        response = client.post(reverse("complaints:complaint_submit"), data=submission())
        self.assertEqual(response.status_code, 201)

    def test_staff_endpoints_still_check_csrf(self):
        client = Client(enforce_csrf_checks=True)
        client.login(username="ali", password="StrongPass123!")
        self.submit()
        complaint = Complaint.objects.get()
        response = client.post(
            reverse("complaints:complaint_transition", kwargs={"complaint_id": complaint.pk}),
            data={"status": Status.IN_PROGRESS},
        )
        self.assertEqual(response.status_code, 403)

    def test_anonymous_user_gets_json_401(self):
        response = self.client.get(reverse("complaints:staff_queue"))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "authentication_required")

    def test_login_page_renders_and_signs_staff_in(self):
        self.assertEqual(self.client.get(reverse("login")).status_code, 200)
        response = self.client.post(reverse("login"), {"username": "ali", "password": "StrongPass123!"}, follow=True)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["role"], Role.MUKTAR)

    def test_transition_flow_and_error_mapping(self):
        self.submit()
        complaint = Complaint.objects.get()
        self.client.login(username="ali", password="StrongPass123!")

        skipped = self.transition(complaint.pk, status=Status.COMPLETED, resolution_note="Done.")
        self.assertEqual(skipped.status_code, 409)

        accepted = self.transition(complaint.pk, status=Status.IN_PROGRESS)
        self.assertEqual(accepted.status_code, 200)
        self.assertEqual(accepted.json()["status"], Status.IN_PROGRESS)

        closed = self.transition(complaint.pk, status=Status.CLOSED, rejection_reason="Not ours.")
        self.assertEqual(closed.status_code, 403)

        missing_note = self.transition(complaint.pk, status=Status.COMPLETED)
        self.assertEqual(missing_note.status_code, 400)
        self.assertEqual(missing_note.json()["field"], "resolution_note")

        completed = self.transition(complaint.pk, status=Status.COMPLETED, resolution_note="Cable replaced.")
        self.assertEqual(completed.status_code, 200)
        complaint.refresh_from_db()
        self.assertEqual(complaint.status, Status.COMPLETED)
        self.assertEqual(complaint.resolution_note, "Cable replaced.")

    def test_admin_can_close(self):
        self.submit()
        complaint = Complaint.objects.get()
        self.client.login(username="admin1", password="StrongPass123!")
        self.assertEqual(self.transition(complaint.pk, status=Status.IN_PROGRESS).status_code, 200)
        response = self.transition(complaint.pk, status=Status.CLOSED, rejection_reason="Duplicate report.")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["rejection_reason"], "Duplicate report.")

    def test_transition_on_unknown_complaint(self):
        self.client.login(username="admin1", password="StrongPass123!")
        response = self.transition(uuid.uuid4(), status=Status.IN_PROGRESS)
        self.assertEqual(response.status_code, 404)

    def test_transition_with_unknown_status_value(self):
        self.submit()
        complaint = Complaint.objects.get()
        self.client.login(username="admin1", password="StrongPass123!")
        response = self.transition(complaint.pk, status="ARCHIVED")
        self.assertEqual(response.status_code, 400)


class SeedDataCommandTests(TestCase):
    def test_seed_registers_staff_once(self):
        call_command("seed_data", verbosity=0)
        call_command("seed_data", verbosity=0)
        self.assertEqual(StaffMember.objects.filter(role=Role.MUKTAR).count(), 3)
        self.assertEqual(StaffMember.objects.filter(role=Role.ADMIN).count(), 1)
        self.assertEqual(StaffMember.objects.filter(role=Role.MANAGER).count(), 1)
        self.assertEqual(
            StaffMember.objects.get(role=Role.MUKTAR, district=District.DISTRICT_2).name,
            "Sami Al-Muktar",
        )


class ComplaintNotesApiTests(TestCase):
    def setUp(self):
        user = User.objects.create_user(username="ali", password="StrongPass123!")
        StaffMember.objects.create(user=user, name="Ali", role=Role.MUKTAR, district=District.DISTRICT_1)
        self.client.post(reverse("complaints:complaint_submit"), data=submission())
        self.complaint = Complaint.objects.get()
        self.client.login(username="ali", password="StrongPass123!")

    def notes(self, **data):
        return self.client.post(
            reverse("complaints:complaint_notes", kwargs={"complaint_id": self.complaint.pk}),
            data=data,
        )

    def test_public_note_and_expected_date_show_on_tracking(self):
        response = self.notes(public_note="Maintenance team dispatched.", expected_completion="2024-10-28")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["staff_notes"], "")

        tracked = self.client.get(
            reverse("complaints:complaint_track", kwargs={"tracking_number": self.complaint.tracking_number})
        ).json()
        self.assertEqual(tracked["public_note"], "Maintenance team dispatched.")
        self.assertEqual(tracked["expected_completion"], "2024-10-28")

    def test_staff_notes_stay_internal(self):
        self.notes(staff_notes="Neighbour has a spare key.")
        tracked = self.client.get(
            reverse("complaints:complaint_track", kwargs={"tracking_number": self.complaint.tracking_number})
        ).json()
        self.assertNotIn("staff_notes", tracked)
        self.complaint.refresh_from_db()
        self.assertEqual(self.complaint.staff_notes, "Neighbour has a spare key.")

    def test_bad_date_is_rejected(self):
        response = self.notes(expected_completion="next week")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "expected_completion")

    def test_closed_complaint_is_locked(self):
        self.client.post(
            reverse("complaints:complaint_transition", kwargs={"complaint_id": self.complaint.pk}),
            data={"status": Status.REJECTED, "rejection_reason": "Duplicate."},
        )
        response = self.notes(public_note="Too late.")
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"], "locked")


class ComplaintAdminTests(TestCase):
    def test_complaints_are_read_only_in_admin(self):
        model_admin = admin.site._registry[Complaint]
        request = RequestFactory().get("/admin/")
        readonly = model_admin.get_readonly_fields(request, obj=Complaint())
        for field in ("title", "description", "district", "category", "submitter_contact", "status", "staff_notes"):
            self.assertIn(field, readonly)
        self.assertFalse(model_admin.has_add_permission(request))
