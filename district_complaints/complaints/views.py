import logging

from django.contrib.auth.mixins import LoginRequiredMixin, UserPassesTestMixin
from django.core.exceptions import PermissionDenied
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from .coordinator import default_coordinator
from .exceptions import (
    ComplaintLocked,
    InvalidTransition,
    MissingRequiredField,
    NotFound,
    RateLimited,
    SubmissionValidationError,
    Unauthorized,
)
from .forms import ComplaintNotesForm, TransitionForm
from .lifecycle import next_statuses

logger = logging.getLogger(__name__)


def get_staff_profile(user):
    return getattr(user, "staff_profile", None)


class StaffRequiredMixin(LoginRequiredMixin, UserPassesTestMixin):
    def test_func(self):
        profile = get_staff_profile(self.request.user)
        return profile is not None and profile.is_active

    def handle_no_permission(self):
        if self.request.user.is_authenticated:
            raise PermissionDenied("Staff access required.")
        return JsonResponse({"error": "authentication_required"}, status=401)


# Public endpoint for sessionless clients.
@method_decorator(csrf_exempt, name="dispatch")
class ComplaintSubmitView(View):
    def post(self, request):
        coordinator = default_coordinator()
        try:
            complaint = coordinator.submit(request.POST)
        except SubmissionValidationError as error:
            return JsonResponse(
                {"error": "validation", "field": error.field, "message": error.message},
                status=400,
            )
        except RateLimited as error:
            response = JsonResponse(
                {"error": "rate_limited", "retry_after_seconds": error.retry_after_seconds},
                status=429,
            )
            response["Retry-After"] = str(error.retry_after_seconds)
            return response

        return JsonResponse(
            {
                "tracking_number": complaint.tracking_number,
                "assigned_role": complaint.assigned_role,
                "assignee_name": complaint.assignee_name,
            },
            status=201,
        )


class ComplaintTrackView(View):
    def get(self, request, tracking_number):
        try:
            complaint = default_coordinator().track(tracking_number)
        except NotFound:
            return JsonResponse({"error": "not_found"}, status=404)
        return JsonResponse(complaint.public_view())


class StaffQueueView(StaffRequiredMixin, View):
    def get(self, request):
        profile = get_staff_profile(request.user)
        complaints = default_coordinator().queue(profile.role, profile.district)
        status = request.GET.get("status", "").strip()
        if status:
            complaints = [complaint for complaint in complaints if complaint.status == status]
        return JsonResponse(
            {
                "role": profile.role,
                "district": profile.district,
                "complaints": [
                    dict(complaint.staff_view(), next_statuses=next_statuses(complaint.status, profile.role))
                    for complaint in complaints
                ],
            }
        )


class ComplaintTransitionView(StaffRequiredMixin, View):
    def post(self, request, complaint_id):
        form = TransitionForm(request.POST)
        if not form.is_valid():
            return JsonResponse({"error": "validation", "field": "status", "message": form.errors["status"][0]}, status=400)

        profile = get_staff_profile(request.user)
        try:
            complaint = default_coordinator().transition(
                complaint_id,
                form.cleaned_data["status"],
                profile.role,
                resolution_note=form.cleaned_data["resolution_note"],
                rejection_reason=form.cleaned_data["rejection_reason"],
            )
        except NotFound:
            return JsonResponse({"error": "not_found"}, status=404)
        except Unauthorized:
            logger.warning("%s (%s) refused a transition on %s", request.user, profile.role, complaint_id)
            return JsonResponse({"error": "unauthorized"}, status=403)
        except InvalidTransition as error:
            return JsonResponse(
                {"error": "invalid_transition", "from": error.current_status, "to": error.target_status},
                status=409,
            )
        except MissingRequiredField as error:
            return JsonResponse({"error": "missing_field", "field": error.field}, status=400)

        return JsonResponse(complaint.staff_view())


class ComplaintNotesView(StaffRequiredMixin, View):
    def post(self, request, complaint_id):
        form = ComplaintNotesForm(request.POST)
        if not form.is_valid():
            field, messages = next(iter(form.errors.items()))
            return JsonResponse({"error": "validation", "field": field, "message": messages[0]}, status=400)

        profile = get_staff_profile(request.user)
        try:
            complaint = default_coordinator().update_notes(complaint_id, profile.role, **form.updates())
        except NotFound:
            return JsonResponse({"error": "not_found"}, status=404)
        except ComplaintLocked as error:
            return JsonResponse({"error": "locked", "status": error.status}, status=409)

        return JsonResponse(complaint.staff_view())
