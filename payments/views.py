# payments/views.py
import logging

from django.conf import settings
from django.http import HttpResponse
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings import lifecycle
from bookings.models import Booking, PaymentMethod, PaymentStatus
from bookings.serializers import PaymentUpdateSerializer
from payments.serializers import PaymentDetailSerializer
from payments.utils import generate_receipt_pdf
from users.permissions import Actor

logger = logging.getLogger(__name__)

PAYMENT_METHODS = [
    {"id": PaymentMethod.CASH, "name": "Cash Payment", "description": "Pay in cash at our office"},
    {"id": PaymentMethod.UPI, "name": "UPI Payment", "description": "Pay via UPI (Google Pay, PhonePe, etc.)"},
    {"id": PaymentMethod.BANK_TRANSFER, "name": "Bank Transfer", "description": "Direct bank transfer"},
    {"id": PaymentMethod.ONLINE, "name": "Online Payment", "description": "Credit/Debit card payment"},
    {"id": PaymentMethod.NOT_PAID, "name": "Pay Later", "description": "Pay after service completion"},
]


class BookingPaymentMixin:
    """Resolves ``booking_id`` (the BK... reference) for the calling actor."""

    def get_booking(self, request, booking_id):
        booking = (
            Booking.objects.select_related("user", "service")
            .filter(booking_id=booking_id.upper())
            .first()
        )
        if booking is None:
            raise NotFound("Booking not found")
        actor = Actor.from_request(request)
        lifecycle.ensure_can_access(actor, booking)
        return actor, booking


# GET /api/payments/methods/
class PaymentMethodsView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        return Response({"success": True, "methods": PAYMENT_METHODS})


# GET|PUT /api/payments/<booking_id>/
class BookingPaymentView(BookingPaymentMixin, APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, booking_id):
        _, booking = self.get_booking(request, booking_id)
        return Response({"success": True, "payment": PaymentDetailSerializer(booking).data})

    def put(self, request, booking_id):
        actor, booking = self.get_booking(request, booking_id)
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
        return Response({
            "success": True,
            "message": "Payment updated successfully",
            "payment": PaymentDetailSerializer(booking).data,
        })


# POST /api/payments/test/<booking_id>/
class TestPaymentView(BookingPaymentMixin, APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, booking_id):
        if not settings.PAYMENTS_ENABLE_TEST_ENDPOINT:
            raise PermissionDenied("Test payments are not available in this environment")

        actor, booking = self.get_booking(request, booking_id)
        booking = lifecycle.record_test_payment(booking, actor)
        logger.info("Test payment recorded for %s (%s)", booking.booking_id, booking.transaction_id)

        return Response({
            "success": True,
            "message": "Test payment successful",
            "payment": PaymentDetailSerializer(booking).data,
        })


# GET /api/payments/<booking_id>/receipt/
class PaymentReceiptView(BookingPaymentMixin, APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, booking_id):
        _, booking = self.get_booking(request, booking_id)
        if booking.payment_status not in (PaymentStatus.PAID, PaymentStatus.REFUNDED):
            raise ValidationError("Receipt is only available for paid bookings")

        filename, pdf = generate_receipt_pdf(booking)
        response = HttpResponse(pdf, content_type="application/pdf")
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        return response
