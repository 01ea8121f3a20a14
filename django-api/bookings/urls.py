from django.urls import path

from bookings.handlers import (
    AllocationCheckView,
    FinalizeView,
    SessionDetailView,
    SessionListView,
    ShareLinkView,
    SlotDetailView,
    SlotListView,
)

urlpatterns = [
    path("sessions", SessionListView.as_view(), name="session-list"),
    path("sessions/<str:session_id>", SessionDetailView.as_view(), name="session-detail"),
    path("sessions/<str:session_id>/slots", SlotListView.as_view(), name="slot-list"),
    path(
        "sessions/<str:session_id>/slots/<int:slot_id>",
        SlotDetailView.as_view(),
        name="slot-detail",
    ),
    path("sessions/<str:session_id>/finalize", FinalizeView.as_view(), name="session-finalize"),
    path(
        "sessions/<str:session_id>/allocation",
        AllocationCheckView.as_view(),
        name="session-allocation",
    ),
    path("sessions/<str:session_id>/share", ShareLinkView.as_view(), name="session-share"),
]
