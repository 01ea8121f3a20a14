"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from django.core.cache import cache
from django.utils import timezone
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.caching import SESSION_LIST_KEY, cache_timeout, session_key
from bookings.domain import SlotId
from bookings.domain.errors import DomainError, ErrorCode
from bookings.handlers.serializers import (
    AllocationCheckSerializer,
    AllocationResultSerializer,
    FinalizeSerializer,
    SessionInputSerializer,
    SessionSerializer,
    SlotInputSerializer,
)
from bookings.services.booking_service import BookingService
from bookings.sharing import build_share_url
from bookings.stores.django_store import DjangoSessionStore

ERROR_STATUS = {
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.SESSION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CAPACITY_EXCEEDED: status.HTTP_409_CONFLICT,
    ErrorCode.ALLOCATION_MISMATCH: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def get_service() -> BookingService:
    return BookingService(DjangoSessionStore())


def error_response(error: DomainError) -> Response:
    body = {"code": error.code.value, "message": error.message}
    field = getattr(error, "field", None)
    if field is not None:
        body["field"] = field
    return Response(body, status=ERROR_STATUS[error.code])


def invalid_format_response(errors) -> Response:
    return Response(
        {"code": ErrorCode.INVALID_INPUT.value, "message": "Invalid request", "errors": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


class BookingAPIView(APIView):
    """Base view that turns domain errors into error responses."""

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            return error_response(exc)
        return super().handle_exception(exc)


class SessionListView(BookingAPIView):
    """Handler for GET/POST /api/sessions"""

    def get(self, request: Request) -> Response:
        when = request.query_params.get("when")
        service = get_service()
        if when == "upcoming":
            sessions = service.list_upcoming(timezone.localdate())
        elif when == "past":
            sessions = service.list_past(timezone.localdate())
        elif when is None:
            data = cache.get(SESSION_LIST_KEY)
            if data is None:
                data = SessionSerializer(service.list_sessions(), many=True).data
                cache.set(SESSION_LIST_KEY, data, cache_timeout())
            return Response(data)
        else:
            return invalid_format_response({"when": ["Expected 'upcoming' or 'past'."]})
        return Response(SessionSerializer(sessions, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = SessionInputSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_format_response(serializer.errors)
        session = get_service().create_session(serializer.to_input())
        return Response(SessionSerializer(session).data, status=status.HTTP_201_CREATED)


class SessionDetailView(BookingAPIView):
    """Handler for GET/DELETE /api/sessions/{session_id}"""

    def get(self, request: Request, session_id: str) -> Response:
        key = session_key(session_id)
        data = cache.get(key)
        if data is None:
            data = SessionSerializer(get_service().get_session(session_id)).data
            cache.set(key, data, cache_timeout())
        return Response(data)

    def delete(self, request: Request, session_id: str) -> Response:
        get_service().delete_session(session_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SlotListView(BookingAPIView):
    """Handler for POST /api/sessions/{session_id}/slots"""

    def post(self, request: Request, session_id: str) -> Response:
        serializer = SlotInputSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_format_response(serializer.errors)
        session = get_service().book_slot(session_id, serializer.to_input())
        return Response(SessionSerializer(session).data, status=status.HTTP_201_CREATED)


class SlotDetailView(BookingAPIView):
    """Handler for DELETE /api/sessions/{session_id}/slots/{slot_id}"""

    def delete(self, request: Request, session_id: str, slot_id: int) -> Response:
        session = get_service().cancel_slot(session_id, SlotId(slot_id))
        return Response(SessionSerializer(session).data)


class FinalizeView(BookingAPIView):
    """Handler for POST /api/sessions/{session_id}/finalize"""

    def post(self, request: Request, session_id: str) -> Response:
        serializer = FinalizeSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_format_response(serializer.errors)
        session = get_service().finalize(
            session_id,
            serializer.validated_data["total_amount"],
            serializer.validated_data.get("individual_costs"),
        )
        return Response(SessionSerializer(session).data)


class AllocationCheckView(BookingAPIView):
    """Handler for POST /api/sessions/{session_id}/allocation"""

    def post(self, request: Request, session_id: str) -> Response:
        serializer = AllocationCheckSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_format_response(serializer.errors)
        check = get_service().check_allocation(
            session_id,
            serializer.validated_data["total_amount"],
            serializer.validated_data["individual_costs"],
        )
        return Response(AllocationResultSerializer(check).data)


class ShareLinkView(BookingAPIView):
    """Handler for GET /api/sessions/{session_id}/share"""

    def get(self, request: Request, session_id: str) -> Response:
        session = get_service().get_session(session_id)
        return Response({"url": build_share_url(session.id.value)})
