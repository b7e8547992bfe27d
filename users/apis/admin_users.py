import logging
from collections import defaultdict

from django.db import transaction
from django.db.models import Count, Q, Sum
from rest_framework import filters, mixins, status, viewsets
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from bookings.models import Booking, PaymentStatus
from onepoint.pagination import StandardResultsSetPagination
from users.models import User
from users.permissions import IsAdminRole
from users.serializers import AdminUserSerializer, AdminUserUpdateSerializer

logger = logging.getLogger(__name__)


# -----------------------------
# Admin: User management
# -----------------------------
class AdminUserViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    queryset = User.objects.all()
    serializer_class = AdminUserSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]
    pagination_class = StandardResultsSetPagination
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["full_name", "email", "phone"]
    ordering_fields = ["created_at", "full_name", "email"]
    results_key = "users"

    def get_queryset(self):
        qs = super().get_queryset().annotate(
            total_bookings=Count("bookings", distinct=True),
            total_spent=Sum(
                "bookings__service_fee",
                filter=Q(bookings__payment_status=PaymentStatus.PAID),
            ),
        )
        role = self.request.query_params.get("role")
        if role:
            qs = qs.filter(role=role)
        return qs.order_by("-created_at")

    def get_serializer_class(self):
        if self.action in ("update", "partial_update"):
            return AdminUserUpdateSerializer
        return super().get_serializer_class()

    def _status_breakdown(self, users):
        rows = (
            Booking.objects.filter(user__in=users)
            .values("user_id", "status")
            .annotate(count=Count("id"))
        )
        breakdown = defaultdict(dict)
        for row in rows:
            breakdown[row["user_id"]][row["status"]] = row["count"]
        return breakdown

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        context = self.get_serializer_context()
        context["status_breakdown"] = self._status_breakdown([u.pk for u in page])
        serializer = AdminUserSerializer(page, many=True, context=context)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request, *args, **kwargs):
        user = self.get_object()
        context = self.get_serializer_context()
        context["status_breakdown"] = self._status_breakdown([user.pk])
        return Response({"success": True, "user": AdminUserSerializer(user, context=context).data})

    @transaction.atomic
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", True)
        user = self.get_object()
        serializer = AdminUserUpdateSerializer(user, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        if user.pk == request.user.pk:
            if serializer.validated_data.get("is_active") is False:
                raise ValidationError({"isActive": "You cannot deactivate your own account."})
            if serializer.validated_data.get("role", user.role) != user.role:
                raise ValidationError({"role": "You cannot change your own role."})

        serializer.save()
        logger.info("Admin %s updated user %s", request.user.email, user.email)
        user = self.get_queryset().get(pk=user.pk)
        return Response({
            "success": True,
            "message": "User updated successfully",
            "user": AdminUserSerializer(user, context=self.get_serializer_context()).data,
        })

    @transaction.atomic
    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        if user.pk == request.user.pk:
            raise ValidationError("You cannot delete your own account.")

        booking_count = user.bookings.count()
        if booking_count:
            raise ValidationError(
                f"Cannot delete user with {booking_count} active bookings. "
                "Delete bookings first or deactivate the user."
            )

        logger.info("Admin %s deleted user %s", request.user.email, user.email)
        user.delete()
        return Response({"success": True, "message": "User deleted successfully"}, status=status.HTTP_200_OK)
