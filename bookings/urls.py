# bookings/urls.py
from django.urls import path, include
from rest_framework.routers import SimpleRouter

from bookings.apis import (
    AdminBookingViewSet,
    AdminStatsAPIView,
    BookingViewSet,
    ServiceAnalyticsAPIView,
)

# -----------------------------------------------------
# 🔹 Router registration
# -----------------------------------------------------
router = SimpleRouter()
router.register(r"bookings", BookingViewSet, basename="booking")

admin_router = SimpleRouter()
admin_router.register(r"bookings", AdminBookingViewSet, basename="admin-booking")

# -----------------------------------------------------
# 🔹 URL patterns
# -----------------------------------------------------
urlpatterns = [
    path("", include(router.urls)),
    path("admin/", include(admin_router.urls)),
    path("admin/stats/", AdminStatsAPIView.as_view(), name="admin-stats"),
    path("admin/analytics/services/", ServiceAnalyticsAPIView.as_view(), name="admin-service-analytics"),
]
