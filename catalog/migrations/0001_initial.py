import django.core.validators
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Service",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
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
                (
                    "service_id",
                    models.CharField(
                        max_length=2,
                        validators=[
                            django.core.validators.RegexValidator("^[A-Za-z]{1,2}$", "Service code must be a letter.")
                        ],
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("detailed_description", models.TextField(blank=True, default="")),
                (
                    "fee",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                (
                    "government_fee",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                (
                    "service_fee",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                ("processing_time", models.CharField(default="7-10 working days", max_length=50)),
                ("requirements", models.JSONField(blank=True, default=list, help_text="List of requirement strings")),
                ("documents_required", models.JSONField(blank=True, default=list, help_text="List of document names")),
                ("steps", models.JSONField(blank=True, default=list)),
                ("faqs", models.JSONField(blank=True, default=list)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["category", "service_id"],
                "indexes": [models.Index(fields=["is_active"], name="service_is_active_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("category", "service_id"), name="unique_service_code_per_category")
                ],
            },
        ),
    ]
