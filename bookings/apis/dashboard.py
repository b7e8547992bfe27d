from datetime import datetime, timedelta
from decimal import Decimal

from django.db.models import Count, Q, Sum
from django.db.models.functions import TruncDate
from django.utils import timezone
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.models import Booking, BookingStatus, PaymentStatus
from bookings.serializers import AdminBookingListSerializer
from users.models import User
from users.permissions import IsAdminRole

ANALYTICS_DAYS = 30
RECENT_BOOKINGS = 10


# --------------------------------------------------
# DATE FILTER (created_at)
# --------------------------------------------------
def filter_created_range(qs, request):
    date_from = request.query_params.get("date_from")
    date_to = request.query_params.get("date_to")

    if not (date_from and date_to):
        return qs

    try:
        df = datetime.strptime(date_from, "%Y-%m-%d").date()
        dt = datetime.strptime(date_to, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError({"date_from": "Dates must use the YYYY-MM-DD format."})

    return qs.filter(created_at__date__range=(df, dt))


# --------------------------------------------------
# Shared aggregations
# --------------------------------------------------
def booking_counts(qs):
    counts = qs.aggregate(
        total=Count("id"),
        pending=Count("id", filter=Q(status__in=[BookingStatus.PENDING, BookingStatus.PROCESSING])),
        completed=Count("id", filter=Q(status=BookingStatus.COMPLETED)),
    )
    return {
        "totalBookings": counts["total"],
        "pendingBookings": counts["pending"],
        "completedBookings": counts["completed"],
    }


def status_breakdown(qs):
    return [
        {
            "status": row["status"],
            "count": row["count"],
            "totalAmount": row["total_amount"] or Decimal("0.00"),
        }
        for row in (
            qs.values("status")
            .annotate(count=Count("id"), total_amount=Sum("service_fee"))
            .order_by("status")
        )
    ]


def total_revenue(qs):
    return (
        qs.filter(payment_status=PaymentStatus.PAID)
        .aggregate(total=Sum("service_fee"))["total"]
        or Decimal("0.00")
    )


# --------------------------------------------------
# GET /api/admin/stats/
# --------------------------------------------------
class AdminStatsAPIView(APIView):
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        bookings_qs = filter_created_range(Booking.objects.all(), request)
        recent = bookings_qs.select_related("user").order_by("-created_at")[:RECENT_BOOKINGS]

        return Response({
            "success": True,
            "stats": {
                **booking_counts(bookings_qs),
                "totalUsers": User.objects.filter(role=User.Role.USER).count(),
                "totalRevenue": total_revenue(bookings_qs),
                "statusBreakdown": status_breakdown(bookings_qs),
            },
            "recentBookings": AdminBookingListSerializer(recent, many=True).data,
        })


# --------------------------------------------------
# GET /api/admin/analytics/services/
# --------------------------------------------------
class ServiceAnalyticsAPIView(APIView):
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        try:
            days = int(request.query_params.get("days", ANALYTICS_DAYS))
        except ValueError:
            raise ValidationError({"days": "Must be a whole number of days."})
        days = max(1, min(days, 365))

        since = timezone.now() - timedelta(days=days)
        window = Booking.objects.filter(created_at__gte=since)

        popular = list(
            window.values("service_name", "category")
            .annotate(count=Count("id"), total_revenue=Sum("service_fee"))
            .order_by("-count", "service_name")[:10]
        )

        revenue_by_day = list(
            window.filter(payment_status=PaymentStatus.PAID)
            .annotate(day=TruncDate("created_at"))
            .values("day")
            .annotate(revenue=Sum("service_fee"), count=Count("id"))
            .order_by("day")
        )

        status_distribution = list(
            window.values("status").annotate(count=Count("id")).order_by("status")
        )
        payment_methods = list(
            window.values("payment_method")
            .annotate(count=Count("id"), total_amount=Sum("service_fee"))
            .order_by("payment_method")
        )

        return Response({
            "success": True,
            "analytics": {
                "popularServices": [
                    {
                        "serviceName": row["service_name"],
                        "category": row["category"],
                        "count": row["count"],
                        "totalRevenue": row["total_revenue"] or Decimal("0.00"),
                    }
                    for row in popular
                ],
                "revenueByDay": [
                    {"date": row["day"].isoformat(), "revenue": row["revenue"], "count": row["count"]}
                    for row in revenue_by_day
                ],
                "statusDistribution": status_distribution,
                "paymentMethodDistribution": [
                    {
                        "paymentMethod": row["payment_method"],
                        "count": row["count"],
                        "totalAmount": row["total_amount"] or Decimal("0.00"),
                    }
                    for row in payment_methods
                ],
                "timeframe": f"Last {days} days",
            },
        })
