from bookings.handlers.views import (
    AllocationCheckView,
    FinalizeView,
    SessionDetailView,
    SessionListView,
    ShareLinkView,
    SlotDetailView,
    SlotListView,
)

__all__ = [
    "SessionListView",
    "SessionDetailView",
    "SlotListView",
    "SlotDetailView",
    "FinalizeView",
    "AllocationCheckView",
    "ShareLinkView",
]
