from decimal import Decimal

from rest_framework import serializers

from users.serializers import AddressSerializer, aadhaar_validator, pan_validator

from .models import Booking, BookingStatus, PaymentMethod, PaymentStatus

INVALID_STATUS_MESSAGE = "Invalid status. Must be: pending, processing, completed, or cancelled"


# -------------------------
# Embedded documents
# -------------------------
class UserDetailsSerializer(serializers.Serializer):
    fullName = serializers.CharField(required=False, allow_blank=True, max_length=120)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=15)
    address = AddressSerializer(required=False)
    aadhaarNumber = serializers.CharField(required=False, allow_blank=True, validators=[aadhaar_validator])
    panNumber = serializers.CharField(required=False, allow_blank=True, validators=[pan_validator])
    dateOfBirth = serializers.DateField(required=False, allow_null=True)
    fatherName = serializers.CharField(required=False, allow_blank=True, max_length=120)

    def validate_panNumber(self, value):
        return value.upper()


# -------------------------
# Booking read serializers
# -------------------------
class BookingServiceSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    category = serializers.CharField()
    serviceId = serializers.CharField(source="service_id")
    fee = serializers.DecimalField(max_digits=10, decimal_places=2)
    processingTime = serializers.CharField(source="processing_time")


class BookingSerializer(serializers.ModelSerializer):
    bookingId = serializers.CharField(source="booking_id")
    user = serializers.PrimaryKeyRelatedField(read_only=True)
    service = BookingServiceSerializer(read_only=True)
    serviceName = serializers.CharField(source="service_name")
    serviceFee = serializers.DecimalField(source="service_fee", max_digits=10, decimal_places=2)
    userDetails = serializers.JSONField(source="user_details")
    additionalInfo = serializers.CharField(source="additional_info")
    paymentStatus = serializers.CharField(source="payment_status")
    paymentMethod = serializers.CharField(source="payment_method")
    paymentDate = serializers.DateTimeField(source="payment_date")
    transactionId = serializers.CharField(source="transaction_id")
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")

    class Meta:
        model = Booking
        fields = [
            "id",
            "bookingId",
            "user",
            "service",
            "serviceName",
            "category",
            "serviceFee",
            "userDetails",
            "additionalInfo",
            "status",
            "paymentStatus",
            "paymentMethod",
            "paymentDate",
            "transactionId",
            "tracking",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class BookingSummarySerializer(serializers.ModelSerializer):
    bookingId = serializers.CharField(source="booking_id")
    service = serializers.CharField(source="service_name")
    paymentStatus = serializers.CharField(source="payment_status")
    paymentMethod = serializers.CharField(source="payment_method")
    amount = serializers.DecimalField(source="service_fee", max_digits=10, decimal_places=2)
    createdAt = serializers.DateTimeField(source="created_at")

    class Meta:
        model = Booking
        fields = ["id", "bookingId", "service", "category", "status", "paymentStatus", "paymentMethod", "amount", "createdAt"]
        read_only_fields = fields


class AdminBookingListSerializer(BookingSummarySerializer):
    customer = serializers.SerializerMethodField()

    class Meta(BookingSummarySerializer.Meta):
        fields = BookingSummarySerializer.Meta.fields + ["customer"]
        read_only_fields = fields

    def get_customer(self, obj):
        details = obj.user_details or {}
        return {
            "id": obj.user_id,
            "fullName": details.get("fullName"),
            "email": details.get("email"),
            "phone": details.get("phone"),
        }


# -------------------------
# Command payloads
# -------------------------
class BookingCreateSerializer(serializers.Serializer):
    serviceId = serializers.CharField()
    userDetails = UserDetailsSerializer(required=False)
    additionalInfo = serializers.CharField(required=False, allow_blank=True, default="")
    paymentMethod = serializers.ChoiceField(choices=PaymentMethod.choices, default=PaymentMethod.NOT_PAID)
    transactionId = serializers.CharField(required=False, allow_blank=True, default="", max_length=100)

    def validate_serviceId(self, value):
        value = str(value).strip()
        if not value.isdigit():
            raise serializers.ValidationError("Invalid service ID format")
        return int(value)


class PaymentUpdateSerializer(serializers.Serializer):
    paymentStatus = serializers.ChoiceField(choices=PaymentStatus.choices)
    paymentMethod = serializers.ChoiceField(choices=PaymentMethod.choices, required=False)
    transactionId = serializers.CharField(required=False, allow_blank=True, max_length=100)


class MarkPaidSerializer(serializers.Serializer):
    paymentMethod = serializers.ChoiceField(choices=PaymentMethod.choices, default=PaymentMethod.CASH)


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=BookingStatus.choices,
        error_messages={"invalid_choice": INVALID_STATUS_MESSAGE},
    )
    message = serializers.CharField(required=False, allow_blank=True, max_length=500)


class NotifySerializer(serializers.Serializer):
    message = serializers.CharField(
        max_length=1000,
        error_messages={
            "blank": "Notification message is required",
            "required": "Notification message is required",
        },
    )


class BookingDetailsUpdateSerializer(serializers.Serializer):
    serviceFee = serializers.DecimalField(source="service_fee", max_digits=10, decimal_places=2, min_value=Decimal("0"), required=False)
    additionalInfo = serializers.CharField(source="additional_info", required=False, allow_blank=True)
    userDetails = UserDetailsSerializer(source="user_details", required=False)
    paymentMethod = serializers.ChoiceField(source="payment_method", choices=PaymentMethod.choices, required=False)
