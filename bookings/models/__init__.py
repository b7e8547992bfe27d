from .booking import Booking, BookingStatus, PaymentMethod, PaymentStatus, TrackingType

__all__ = ["Booking", "BookingStatus", "PaymentMethod", "PaymentStatus", "TrackingType"]
