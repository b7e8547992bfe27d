import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

from catalog.models import Service, ServiceCategory


class BookingStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PROCESSING = "processing", "Processing"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


class PaymentStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    FAILED = "failed", "Failed"
    REFUNDED = "refunded", "Refunded"


class PaymentMethod(models.TextChoices):
    CASH = "cash", "Cash"
    ONLINE = "online", "Online"
    BANK_TRANSFER = "bank_transfer", "Bank Transfer"
    UPI = "upi", "UPI"
    NOT_PAID = "not_paid", "Not Paid"


class TrackingType(models.TextChoices):
    STATUS = "status", "Status change"
    NOTIFICATION = "notification", "Notification"
    UPDATE = "update", "Details update"


class Booking(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    booking_id = models.CharField(
        max_length=20,
        unique=True,
        editable=False,
        help_text="Human-readable reference (e.g. BK250115123456)",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    service = models.ForeignKey(
        Service,
        on_delete=models.PROTECT,
        related_name="bookings",
    )

    # Snapshot of the service at booking time
    category = models.CharField(max_length=40, choices=ServiceCategory.choices)
    service_name = models.CharField(max_length=255)
    service_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))

    # {fullName, email, phone, address{...}, aadhaarNumber, panNumber, dateOfBirth, fatherName}
    user_details = models.JSONField(default=dict, blank=True)
    additional_info = models.TextField(blank=True, default="")

    status = models.CharField(max_length=20, choices=BookingStatus.choices, default=BookingStatus.PENDING)
    payment_status = models.CharField(max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.PENDING)
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices, default=PaymentMethod.NOT_PAID)
    payment_date = models.DateTimeField(null=True, blank=True)
    transaction_id = models.CharField(max_length=100, blank=True, default="")

    # Append-only: [{status, message, updatedBy, timestamp, type}]
    tracking = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="booking_status_idx"),
            models.Index(fields=["payment_status"], name="booking_payment_status_idx"),
            models.Index(fields=["-created_at"], name="booking_created_at_idx"),
        ]

    def __str__(self):
        return f"Booking {self.booking_id} ({self.service_name})"

    @property
    def amount(self):
        return self.service_fee

    def track(self, message, updated_by, kind=TrackingType.STATUS, status=None):
        """Append one entry to the tracking log (not saved)."""
        entry = {
            "status": status or self.status,
            "message": message,
            "updatedBy": updated_by,
            "timestamp": timezone.now().isoformat(),
            "type": str(kind),
        }
        self.tracking = [*(self.tracking or []), entry]
        return entry

    @property
    def status_history(self):
        return [entry for entry in self.tracking or [] if entry.get("type", TrackingType.STATUS) == TrackingType.STATUS]
