from rest_framework import serializers

from .models import Service


class ServiceSerializer(serializers.ModelSerializer):
    serviceId = serializers.CharField(source="service_id")
    detailedDescription = serializers.CharField(source="detailed_description")
    governmentFee = serializers.DecimalField(source="government_fee", max_digits=10, decimal_places=2)
    serviceFee = serializers.DecimalField(source="service_fee", max_digits=10, decimal_places=2)
    totalFee = serializers.DecimalField(source="total_fee", max_digits=12, decimal_places=2, read_only=True)
    processingTime = serializers.CharField(source="processing_time")
    documentsRequired = serializers.JSONField(source="documents_required")
    isActive = serializers.BooleanField(source="is_active")

    class Meta:
        model = Service
        fields = [
            "id",
            "category",
            "serviceId",
            "name",
            "description",
            "detailedDescription",
            "fee",
            "governmentFee",
            "serviceFee",
            "totalFee",
            "processingTime",
            "requirements",
            "documentsRequired",
            "steps",
            "faqs",
            "isActive",
        ]
        read_only_fields = fields


class ServiceMiniSerializer(serializers.ModelSerializer):
    serviceId = serializers.CharField(source="service_id")

    class Meta:
        model = Service
        fields = ["name", "serviceId", "fee"]
        read_only_fields = fields
