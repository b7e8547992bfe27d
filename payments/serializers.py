from rest_framework import serializers

from bookings.models import Booking


class PaymentDetailSerializer(serializers.ModelSerializer):
    bookingId = serializers.CharField(source="booking_id")
    amount = serializers.DecimalField(source="service_fee", max_digits=10, decimal_places=2)
    status = serializers.CharField(source="payment_status")
    method = serializers.CharField(source="payment_method")
    date = serializers.DateTimeField(source="payment_date")
    transactionId = serializers.CharField(source="transaction_id")
    bookingStatus = serializers.CharField(source="status")

    class Meta:
        model = Booking
        fields = ["bookingId", "amount", "status", "method", "date", "transactionId", "bookingStatus"]
        read_only_fields = fields
