from django.db.models import Count, Q, Sum
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.models import Booking, PaymentStatus, BookingStatus
from users.serializers import ProfileSerializer, ProfileUpdateSerializer


class ClientMeAPIView(APIView):
    permission_classes = [IsAuthenticated]

    # GET /api/auth/me/
    def get(self, request):
        user = request.user
        stats = Booking.objects.filter(user=user).aggregate(
            total=Count("id"),
            active=Count("id", filter=Q(status__in=[BookingStatus.PENDING, BookingStatus.PROCESSING])),
            completed=Count("id", filter=Q(status=BookingStatus.COMPLETED)),
            spent=Sum("service_fee", filter=Q(payment_status=PaymentStatus.PAID)),
        )

        return Response({
            "success": True,
            "user": ProfileSerializer(user).data,
            "stats": {
                "totalBookings": stats["total"],
                "activeBookings": stats["active"],
                "completedBookings": stats["completed"],
                "totalSpent": float(stats["spent"] or 0),
            },
        })

    # PATCH /api/auth/me/
    def patch(self, request):
        user = request.user
        data = request.data

        # ❌ Block login identity and role changes
        if "email" in data and str(data["email"]).lower() != user.email:
            raise ValidationError({"email": "Email cannot be changed."})
        if "role" in data and data["role"] != user.role:
            raise ValidationError({"role": "Role cannot be changed."})

        serializer = ProfileUpdateSerializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()

        return Response({
            "success": True,
            "message": "Profile updated successfully",
            "user": ProfileSerializer(user).data,
        })
