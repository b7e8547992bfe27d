from django.db.models import Q
from rest_framework import filters, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from bookings import lifecycle
from bookings.apis.bookings import booking_response
from bookings.models import Booking
from bookings.serializers import (
    AdminBookingListSerializer,
    BookingDetailsUpdateSerializer,
    NotifySerializer,
    StatusUpdateSerializer,
)
from onepoint.pagination import StandardResultsSetPagination
from users.permissions import Actor, IsAdminRole


class AdminBookingViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    queryset = Booking.objects.all().select_related("user", "service")
    serializer_class = AdminBookingListSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]
    pagination_class = StandardResultsSetPagination
    filter_backends = [filters.OrderingFilter]
    ordering_fields = ["created_at", "service_fee", "status", "payment_status"]
    results_key = "bookings"

    def get_queryset(self):
        qs = super().get_queryset()
        params = self.request.query_params

        status_param = params.get("status")
        if status_param:
            qs = qs.filter(status=status_param)

        payment_status = params.get("paymentStatus")
        if payment_status:
            qs = qs.filter(payment_status=payment_status)

        search = (params.get("search") or "").strip()
        if search:
            qs = qs.filter(
                Q(booking_id__icontains=search)
                | Q(service_name__icontains=search)
                | Q(user_details__fullName__icontains=search)
                | Q(user_details__email__icontains=search)
                | Q(user_details__phone__icontains=search)
            )
        return qs.order_by("-created_at")

    def get_object(self):
        return lifecycle.find_booking(self.kwargs[self.lookup_field])

    # GET /api/admin/bookings/<id>/
    def retrieve(self, request, pk=None):
        return booking_response(self.get_object())

    # PUT /api/admin/bookings/<id>/
    def update(self, request, pk=None, partial=True):
        booking = self.get_object()
        serializer = BookingDetailsUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        booking = lifecycle.update_details(booking, Actor.from_request(request), serializer.validated_data)
        return booking_response(booking, "Booking updated successfully")

    def partial_update(self, request, pk=None):
        return self.update(request, pk, partial=True)

    # DELETE /api/admin/bookings/<id>/
    def destroy(self, request, pk=None):
        booking_id = lifecycle.delete_booking(self.get_object(), Actor.from_request(request))
        return Response(
            {"success": True, "message": "Booking deleted successfully", "bookingId": booking_id},
            status=status.HTTP_200_OK,
        )

    # GET /api/admin/bookings/recent/
    @action(detail=False, methods=["get"])
    def recent(self, request):
        try:
            limit = max(1, min(int(request.query_params.get("limit", 10)), 50))
        except ValueError:
            limit = 10
        bookings = self.get_queryset()[:limit]
        data = AdminBookingListSerializer(bookings, many=True).data
        return Response({"success": True, "count": len(data), "bookings": data})

    # PUT /api/admin/bookings/<id>/status/
    @action(detail=True, methods=["put"], url_path="status")
    def update_status(self, request, pk=None):
        booking = self.get_object()
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = lifecycle.change_status(
            booking,
            Actor.from_request(request),
            serializer.validated_data["status"],
            serializer.validated_data.get("message") or None,
        )
        return booking_response(booking, f"Booking status updated to {booking.status}")

    # POST /api/admin/bookings/<id>/notify/
    @action(detail=True, methods=["post"])
    def notify(self, request, pk=None):
        booking = self.get_object()
        serializer = NotifySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking, email_status = lifecycle.notify_booking(
            booking, Actor.from_request(request), serializer.validated_data["message"]
        )
        response = booking_response(booking, "Notification sent successfully")
        response.data["notification"] = {
            "message": serializer.validated_data["message"].strip(),
            "emailStatus": email_status,
        }
        return response
