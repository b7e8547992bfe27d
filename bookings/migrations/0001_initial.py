import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "booking_id",
                    models.CharField(
                        editable=False,
                        help_text="Human-readable reference (e.g. BK250115123456)",
                        max_length=20,
                        unique=True,
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("driving-licence", "Driving Licence"),
                            ("registration-certificate", "Registration Certificate"),
                            ("passport", "Passport"),
                            ("marriage-certificate", "Marriage Certificate"),
                            ("legal-heir-certificate", "Legal Heir Certificate"),
                            ("rti", "RTI"),
                            ("gst-registration", "GST Registration"),
                            ("vehicle-challan", "Vehicle Challan"),
                            ("birth-certificate", "Birth Certificate"),
                            ("insurance", "Insurance"),
                            ("visa", "Visa"),
                        ],
                        max_length=40,
                    ),
                ),
                ("service_name", models.CharField(max_length=255)),
                ("service_fee", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("user_details", models.JSONField(blank=True, default=dict)),
                ("additional_info", models.TextField(blank=True, default="")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("processing", "Processing"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("paid", "Paid"),
                            ("failed", "Failed"),
                            ("refunded", "Refunded"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "payment_method",
                    models.CharField(
                        choices=[
                            ("cash", "Cash"),
                            ("online", "Online"),
                            ("bank_transfer", "Bank Transfer"),
                            ("upi", "UPI"),
                            ("not_paid", "Not Paid"),
                        ],
                        default="not_paid",
                        max_length=20,
                    ),
                ),
                ("payment_date", models.DateTimeField(blank=True, null=True)),
                ("transaction_id", models.CharField(blank=True, default="", max_length=100)),
                ("tracking", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "service",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="catalog.service",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status"], name="booking_status_idx"),
                    models.Index(fields=["payment_status"], name="booking_payment_status_idx"),
                    models.Index(fields=["-created_at"], name="booking_created_at_idx"),
                ],
            },
        ),
    ]
