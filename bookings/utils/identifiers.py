import secrets

from django.utils import timezone

BOOKING_PREFIX = "BK"
SUFFIX_MIN = 100000
SUFFIX_MAX = 999999
MAX_ATTEMPTS = 5


class BookingIdExhausted(RuntimeError):
    """No free booking id could be drawn."""


def generate_booking_id(today=None):
    """``BK`` + ``YYMMDD`` + six random digits, e.g. ``BK250115482913``."""
    today = today or timezone.localdate()
    suffix = SUFFIX_MIN + secrets.randbelow(SUFFIX_MAX - SUFFIX_MIN + 1)
    return f"{BOOKING_PREFIX}{today.strftime('%y%m%d')}{suffix}"


def new_booking_id(today=None, attempts=MAX_ATTEMPTS):
    """Draw booking ids until one is not taken yet."""
    from bookings.models import Booking

    for _ in range(attempts):
        candidate = generate_booking_id(today)
        if not Booking.objects.filter(booking_id=candidate).exists():
            return candidate
    raise BookingIdExhausted(f"Could not generate a unique booking id after {attempts} attempts")
