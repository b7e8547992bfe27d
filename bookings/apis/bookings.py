from rest_framework import filters, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from bookings import lifecycle
from bookings.apis.dashboard import booking_counts, status_breakdown
from bookings.models import Booking
from bookings.serializers import (
    BookingCreateSerializer,
    BookingSerializer,
    BookingSummarySerializer,
    MarkPaidSerializer,
    PaymentUpdateSerializer,
    StatusUpdateSerializer,
)
from catalog.models import Service
from onepoint.pagination import StandardResultsSetPagination
from users.permissions import Actor, IsAdminRole

UUID_REGEX = r"[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}"


def booking_response(booking, message=None, status_code=status.HTTP_200_OK):
    payload = {"success": True}
    if message:
        payload["message"] = message
    payload["booking"] = BookingSerializer(booking).data
    return Response(payload, status=status_code)


class BookingViewSet(viewsets.GenericViewSet):
    queryset = Booking.objects.all().select_related("service", "user")
    serializer_class = BookingSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StandardResultsSetPagination
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["booking_id", "service_name"]
    ordering_fields = ["created_at", "service_fee", "status", "payment_status"]
    lookup_value_regex = UUID_REGEX
    results_key = "bookings"

    def get_queryset(self):
        qs = super().get_queryset().filter(user=self.request.user)
        status_param = self.request.query_params.get("status")
        if status_param:
            qs = qs.filter(status=status_param)
        return qs.order_by("-created_at")

    # POST /api/bookings/
    def create(self, request):
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        service = Service.objects.filter(pk=data["serviceId"]).first()
        if service is None:
            raise NotFound("Service not found")

        booking = lifecycle.create_booking(
            Actor.from_request(request),
            request.user,
            service,
            user_details=data.get("userDetails"),
            additional_info=data.get("additionalInfo", ""),
            payment_method=data["paymentMethod"],
            transaction_id=data.get("transactionId", ""),
        )

        return Response(
            {
                "success": True,
                "message": "Booking created successfully",
                "booking": BookingSummarySerializer(booking).data,
            },
            status=status.HTTP_201_CREATED,
        )

    # GET /api/bookings/<id>/
    def retrieve(self, request, pk=None):
        booking = lifecycle.get_booking(Actor.from_request(request), pk)
        return booking_response(booking)

    # GET /api/bookings/my-bookings/
    @action(detail=False, methods=["get"], url_path="my-bookings")
    def my_bookings(self, request):
        bookings = self.filter_queryset(self.get_queryset())
        data = BookingSerializer(bookings, many=True).data
        return Response({"success": True, "count": len(data), "bookings": data})

    # GET /api/bookings/stats/
    @action(detail=False, methods=["get"])
    def stats(self, request):
        qs = Booking.objects.filter(user=request.user)
        return Response({
            "success": True,
            "stats": {
                **booking_counts(qs),
                "statusBreakdown": status_breakdown(qs),
            },
        })

    # PUT /api/bookings/<id>/payment/
    @action(detail=True, methods=["put"])
    def payment(self, request, pk=None):
        actor = Actor.from_request(request)
        booking = lifecycle.get_booking(actor, pk)
        serializer = PaymentUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        booking = lifecycle.record_payment(
            booking,
            actor,
            data["paymentStatus"],
            payment_method=data.get("paymentMethod"),
            transaction_id=data.get("transactionId"),
        )
        return booking_response(booking, "Payment status updated successfully")

    # PUT /api/bookings/<id>/cancel/
    @action(detail=True, methods=["put"])
    def cancel(self, request, pk=None):
        actor = Actor.from_request(request)
        booking = lifecycle.get_booking(actor, pk)
        booking = lifecycle.cancel_booking(booking, actor)
        return booking_response(booking, "Booking cancelled successfully")

    # PUT /api/bookings/<id>/status/
    @action(detail=True, methods=["put"], url_path="status", permission_classes=[IsAuthenticated, IsAdminRole])
    def update_status(self, request, pk=None):
        actor = Actor.from_request(request)
        booking = lifecycle.get_booking(actor, pk)
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = lifecycle.change_status(
            booking,
            actor,
            serializer.validated_data["status"],
            serializer.validated_data.get("message") or None,
        )
        return booking_response(booking, "Booking status updated successfully")

    # PUT /api/bookings/<id>/mark-paid/
    @action(detail=True, methods=["put"], url_path="mark-paid", permission_classes=[IsAuthenticated, IsAdminRole])
    def mark_paid(self, request, pk=None):
        actor = Actor.from_request(request)
        booking = lifecycle.get_booking(actor, pk)
        serializer = MarkPaidSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = lifecycle.mark_paid(booking, actor, serializer.validated_data["paymentMethod"])
        return booking_response(booking, "Payment marked as paid successfully")
