from decimal import Decimal

from django.core.validators import MinValueValidator, RegexValidator
from django.db import models


class ServiceCategory(models.TextChoices):
    DRIVING_LICENCE = "driving-licence", "Driving Licence"
    REGISTRATION_CERTIFICATE = "registration-certificate", "Registration Certificate"
    PASSPORT = "passport", "Passport"
    MARRIAGE_CERTIFICATE = "marriage-certificate", "Marriage Certificate"
    LEGAL_HEIR_CERTIFICATE = "legal-heir-certificate", "Legal Heir Certificate"
    RTI = "rti", "RTI"
    GST_REGISTRATION = "gst-registration", "GST Registration"
    VEHICLE_CHALLAN = "vehicle-challan", "Vehicle Challan"
    BIRTH_CERTIFICATE = "birth-certificate", "Birth Certificate"
    INSURANCE = "insurance", "Insurance"
    VISA = "visa", "Visa"


class Service(models.Model):
    """
    A bookable government-document service, addressed either by its
    primary key or by ``(category, service_id)`` where ``service_id`` is
    the letter code shown to customers (A, B, C...).
    """

    category = models.CharField(max_length=40, choices=ServiceCategory.choices)
    service_id = models.CharField(
        max_length=2,
        validators=[RegexValidator(r"^[A-Za-z]{1,2}$", "Service code must be a letter.")],
    )
    name = models.CharField(max_length=255)
    description = models.TextField()
    detailed_description = models.TextField(blank=True, default="")

    fee = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0"))]
    )
    government_fee = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00"), validators=[MinValueValidator(Decimal("0"))]
    )
    service_fee = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00"), validators=[MinValueValidator(Decimal("0"))]
    )
    processing_time = models.CharField(max_length=50, default="7-10 working days")

    requirements = models.JSONField(default=list, blank=True, help_text="List of requirement strings")
    documents_required = models.JSONField(default=list, blank=True, help_text="List of document names")
    # [{stepNumber, title, description}]
    steps = models.JSONField(default=list, blank=True)
    # [{question, answer}]
    faqs = models.JSONField(default=list, blank=True)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["category", "service_id"]
        constraints = [
            models.UniqueConstraint(fields=["category", "service_id"], name="unique_service_code_per_category"),
        ]
        indexes = [
            models.Index(fields=["is_active"], name="service_is_active_idx"),
        ]

    def __str__(self):
        return f"{self.category}/{self.service_id} - {self.name}"

    def save(self, *args, **kwargs):
        if self.service_id:
            self.service_id = self.service_id.strip().upper()
        super().save(*args, **kwargs)

    @property
    def total_fee(self):
        return (self.fee or 0) + (self.government_fee or 0) + (self.service_fee or 0)
