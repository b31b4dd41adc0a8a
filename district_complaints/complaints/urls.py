from django.urls import path

from .views import (
    ComplaintNotesView,
    ComplaintSubmitView,
    ComplaintTrackView,
    ComplaintTransitionView,
    StaffQueueView,
)

app_name = "complaints"

urlpatterns = [
    path("complaints/", ComplaintSubmitView.as_view(), name="complaint_submit"),
    path("track/<str:tracking_number>/", ComplaintTrackView.as_view(), name="complaint_track"),
    path("staff/queue/", StaffQueueView.as_view(), name="staff_queue"),
    path(
        "staff/complaints/<uuid:complaint_id>/transition/",
        ComplaintTransitionView.as_view(),
        name="complaint_transition",
    ),
    path(
        "staff/complaints/<uuid:complaint_id>/notes/",
        ComplaintNotesView.as_view(),
        name="complaint_notes",
    ),
]
