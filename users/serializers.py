from django.contrib.auth import password_validation
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import RegexValidator
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed

from .models import User


aadhaar_validator = RegexValidator(r"^\d{12}$", "Aadhaar number must be 12 digits.")
pan_validator = RegexValidator(r"^[A-Za-z]{5}[0-9]{4}[A-Za-z]$", "PAN must look like ABCDE1234F.")
pincode_validator = RegexValidator(r"^\d{6}$", "Pincode must be 6 digits.")


# -----------------------------
# Address (embedded document)
# -----------------------------
class AddressSerializer(serializers.Serializer):
    street = serializers.CharField(required=False, allow_blank=True, max_length=255)
    city = serializers.CharField(required=False, allow_blank=True, max_length=100)
    state = serializers.CharField(required=False, allow_blank=True, max_length=100)
    pincode = serializers.CharField(required=False, allow_blank=True, validators=[pincode_validator])


# -----------------------------
# User Serializers
# -----------------------------
class UserSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(source="full_name")
    aadhaarNumber = serializers.CharField(source="aadhaar_number", read_only=True)
    panNumber = serializers.CharField(source="pan_number", read_only=True)
    dateOfBirth = serializers.DateField(source="date_of_birth", read_only=True)
    fatherName = serializers.CharField(source="father_name", read_only=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = User
        fields = (
            "id",
            "fullName",
            "email",
            "phone",
            "address",
            "aadhaarNumber",
            "panNumber",
            "dateOfBirth",
            "fatherName",
            "role",
            "isActive",
            "createdAt",
        )
        read_only_fields = fields


class ProfileSerializer(UserSerializer):
    bookings = serializers.SerializerMethodField()

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ("bookings",)
        read_only_fields = fields

    def get_bookings(self, obj):
        return [str(pk) for pk in obj.bookings.values_list("pk", flat=True)]


class RegisterSerializer(serializers.Serializer):
    fullName = serializers.CharField(max_length=120)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=15, required=False, allow_blank=True)
    password = serializers.CharField(write_only=True, min_length=6)
    address = AddressSerializer(required=False)

    def validate_email(self, value):
        value = value.lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("User already exists")
        return value

    def validate_password(self, value):
        try:
            password_validation.validate_password(value)
        except DjangoValidationError as e:
            raise serializers.ValidationError(list(e.messages))
        return value

    def create(self, validated_data):
        return User.objects.create_user(
            email=validated_data["email"],
            full_name=validated_data["fullName"],
            password=validated_data["password"],
            phone=validated_data.get("phone", ""),
            address=validated_data.get("address", {}),
        )


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        user = User.objects.filter(email__iexact=attrs["email"]).first()
        if not user or not user.check_password(attrs["password"]):
            raise AuthenticationFailed("Invalid email or password")
        if not user.is_active:
            raise AuthenticationFailed("User account is deactivated")
        attrs["user"] = user
        return attrs


class ProfileUpdateSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(source="full_name", required=False, max_length=120)
    address = AddressSerializer(required=False)
    aadhaarNumber = serializers.CharField(
        source="aadhaar_number", required=False, allow_blank=True, validators=[aadhaar_validator]
    )
    panNumber = serializers.CharField(
        source="pan_number", required=False, allow_blank=True, validators=[pan_validator]
    )
    dateOfBirth = serializers.DateField(source="date_of_birth", required=False, allow_null=True)
    fatherName = serializers.CharField(source="father_name", required=False, allow_blank=True)

    class Meta:
        model = User
        fields = ("fullName", "phone", "address", "aadhaarNumber", "panNumber", "dateOfBirth", "fatherName")

    def validate_panNumber(self, value):
        return value.upper()

    def update(self, instance, validated_data):
        address = validated_data.pop("address", None)
        if address is not None:
            instance.address = {**(instance.address or {}), **address}
        return super().update(instance, validated_data)


class AdminUserUpdateSerializer(ProfileUpdateSerializer):
    role = serializers.ChoiceField(choices=User.Role.choices, required=False)
    isActive = serializers.BooleanField(source="is_active", required=False)

    class Meta(ProfileUpdateSerializer.Meta):
        fields = ("fullName", "phone", "address", "role", "isActive")


class AdminUserSerializer(UserSerializer):
    stats = serializers.SerializerMethodField()

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ("stats",)
        read_only_fields = fields

    def get_stats(self, obj):
        breakdown = self.context.get("status_breakdown", {}).get(obj.pk, {})
        return {
            "totalBookings": getattr(obj, "total_bookings", 0) or 0,
            "totalSpent": float(getattr(obj, "total_spent", 0) or 0),
            "statusBreakdown": breakdown,
        }
