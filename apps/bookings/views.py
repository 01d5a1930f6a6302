"""API views for the booking domain."""

from __future__ import annotations

import logging

from django.db import DatabaseError  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.api.permissions import IsElevatedRole, is_elevated
from shared.application.message_bus import message_bus

from .application.command_handlers import (
    CancelBookingCommand,
    ConfirmBookingCommand,
    ConfirmPickupCommand,
    CreateBookingCommand,
    DeleteBookingCommand,
    RejectBookingCommand,
    ReturnItemsCommand,
    UpdateBookingCommand,
    UpdatePaymentStatusCommand,
)
from .domain.entities import Actor
from .domain.exceptions import (
    BookingError,
    BookingNotFoundError,
    BookingPermissionError,
    ItemNotFoundError,
)
from .filters import BookingFilterSet
from .models import Booking
from .pagination import MetadataPagination
from .serializers import (
    BookingItemSerializer,
    BookingItemsRequestSerializer,
    BookingSerializer,
    BookingSummarySerializer,
    DecisionSerializer,
    PaymentStatusSerializer,
)

logger = logging.getLogger(__name__)


def booking_error_status(exc: BookingError) -> int:
    if isinstance(exc, (BookingNotFoundError, ItemNotFoundError)):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, BookingPermissionError):
        return status.HTTP_403_FORBIDDEN
    return status.HTTP_400_BAD_REQUEST


class BookingViewSet(viewsets.GenericViewSet):
    """
    Viewset for reading bookings and running lifecycle commands.

    Reads are scoped to the caller unless they hold an elevated role.
    Writes are dispatched as commands through the message bus.
    """

    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = MetadataPagination
    filter_backends = [DjangoFilterBackend]
    filterset_class = BookingFilterSet
    lookup_value_regex = r"\d+"

    def get_queryset(self):  # type: ignore
        qs = Booking.objects.select_related("user").order_by("booking_number", "id")
        user = self.request.user
        if is_elevated(user):
            return qs
        return qs.filter(user=user)

    def get_serializer_class(self):  # type: ignore
        if self.action in ("list", "my"):
            return BookingSummarySerializer
        return BookingSerializer

    def handle_exception(self, exc):  # type: ignore
        if isinstance(exc, BookingError):
            return Response({"detail": str(exc)}, status=booking_error_status(exc))
        if isinstance(exc, DatabaseError):
            logger.error(f"Storage failure in booking request: {exc}", exc_info=True)
            return Response(
                {"detail": "Could not process booking request"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return super().handle_exception(exc)

    def _actor(self) -> Actor:
        return Actor.from_user(self.request.user)

    def _booking_response(self, booking: Booking, message: str, **extra) -> dict:
        booking = (
            Booking.objects.select_related("user")
            .prefetch_related("items__item", "items__location")
            .get(pk=booking.pk)
        )
        return {"message": message, "booking": BookingSerializer(booking).data, **extra}

    def _paginated(self, queryset, serializer_class):
        page = self.paginate_queryset(queryset)
        serializer = serializer_class(page, many=True)
        return self.get_paginated_response(serializer.data)

    # ===== Reads =====

    def list(self, request):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset())
        return self._paginated(queryset, BookingSummarySerializer)

    def retrieve(self, request, pk=None):  # type: ignore
        booking = get_object_or_404(self.get_queryset(), pk=pk)
        data = BookingSummarySerializer(booking).data

        paginator = MetadataPagination()
        lines = booking.items.select_related("item", "location").order_by("start_date", "id")
        page = paginator.paginate_queryset(lines, request, view=self)
        data["booking_items"] = paginator.get_paginated_data(
            BookingItemSerializer(page, many=True).data
        )
        return Response(data)

    @action(detail=False, methods=["get"])
    def my(self, request):  # type: ignore
        queryset = Booking.objects.select_related("user").filter(user=request.user).order_by("-created_at", "-id")
        return self._paginated(queryset, BookingSummarySerializer)

    @action(detail=False, methods=["get"], permission_classes=[IsElevatedRole])
    def count(self, request):  # type: ignore
        return Response({"count": Booking.objects.count()})

    # ===== Writes =====

    def create(self, request):  # type: ignore
        serializer = BookingItemsRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor = self._actor()
        result = message_bus.handle_command(CreateBookingCommand(
            actor=actor,
            owner_id=serializer.validated_data.get("user_id") or actor.user_id,
            lines=serializer.get_lines(),
            notes=serializer.validated_data.get("notes", ""),
        ))
        return Response(
            self._booking_response(result.booking, "Booking created", warning=result.warning),
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, pk=None):  # type: ignore
        serializer = BookingItemsRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = message_bus.handle_command(UpdateBookingCommand(
            actor=self._actor(),
            booking_id=int(pk),
            lines=serializer.get_lines(),
            notes=serializer.validated_data.get("notes"),
        ))
        return Response(self._booking_response(result.booking, "Booking updated", warning=result.warning))

    def destroy(self, request, pk=None):  # type: ignore
        result = message_bus.handle_command(DeleteBookingCommand(actor=self._actor(), booking_id=int(pk)))
        return Response({"message": "Booking deleted", "bookingId": result.booking.pk})

    @action(detail=True, methods=["post"], permission_classes=[IsElevatedRole])
    def confirm(self, request, pk=None):  # type: ignore
        result = message_bus.handle_command(ConfirmBookingCommand(actor=self._actor(), booking_id=int(pk)))
        return Response(self._booking_response(result.booking, "Booking confirmed"))

    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):  # type: ignore
        serializer = DecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = message_bus.handle_command(RejectBookingCommand(
            actor=self._actor(),
            booking_id=int(pk),
            reason=serializer.validated_data["reason"],
        ))
        return Response(self._booking_response(result.booking, "Booking rejected"))

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        serializer = DecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = message_bus.handle_command(CancelBookingCommand(
            actor=self._actor(),
            booking_id=int(pk),
            reason=serializer.validated_data["reason"],
        ))
        return Response(result.to_dict())

    @action(detail=True, methods=["post"], url_path="return", permission_classes=[IsElevatedRole])
    def return_items(self, request, pk=None):  # type: ignore
        result = message_bus.handle_command(ReturnItemsCommand(actor=self._actor(), booking_id=int(pk)))
        return Response(self._booking_response(result.booking, "Items returned"))

    @action(detail=True, methods=["post"], permission_classes=[IsElevatedRole])
    def pickup(self, request, pk=None):  # type: ignore
        result = message_bus.handle_command(ConfirmPickupCommand(booking_id=int(pk), actor=self._actor()))
        return Response(self._booking_response(result.booking, "Pickup confirmed"))

    @action(detail=True, methods=["patch"], url_path="payment-status", permission_classes=[IsElevatedRole])
    def payment_status(self, request, pk=None):  # type: ignore
        serializer = PaymentStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = message_bus.handle_command(UpdatePaymentStatusCommand(
            booking_id=int(pk),
            payment_status=serializer.get_payment_status(),
            actor=self._actor(),
        ))
        return Response({
            "message": "Payment status updated",
            "bookingId": result.booking.pk,
            "payment_status": result.booking.payment_status,
        })
