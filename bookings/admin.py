from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ("booking_id", "service_name", "user", "status", "payment_status", "service_fee", "created_at")
    search_fields = ("booking_id", "service_name", "user__email", "user__full_name")
    list_filter = ("status", "payment_status", "payment_method", "category", "created_at")
    ordering = ("-created_at",)
    # Status and payment move only through the booking lifecycle
    readonly_fields = (
        "id",
        "booking_id",
        "status",
        "payment_status",
        "payment_date",
        "transaction_id",
        "tracking",
        "created_at",
        "updated_at",
    )
