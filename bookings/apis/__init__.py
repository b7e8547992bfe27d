from .bookings import BookingViewSet
from .admin_bookings import AdminBookingViewSet
from .dashboard import AdminStatsAPIView, ServiceAnalyticsAPIView

__all__ = ["BookingViewSet", "AdminBookingViewSet", "AdminStatsAPIView", "ServiceAnalyticsAPIView"]
