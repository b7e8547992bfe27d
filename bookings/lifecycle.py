"""
Booking lifecycle.

Every state change a booking can go through is implemented here, and only
here. Views validate their payloads, resolve the :class:`Actor` and call one
of these functions. Each mutating operation runs inside
``transaction.atomic`` with the booking row locked, checks ownership and the
transition table before touching anything, and writes the status change
together with its tracking entry in a single ``save``.

Transitions::

    pending    -> processing | cancelled
    processing -> completed (admin) | cancelled
    completed  -> (terminal)
    cancelled  -> (terminal)

Payment rules shared by every payment entry point:

- marking a booking ``paid`` stamps ``payment_date`` and moves a
  ``pending`` booking to ``processing``;
- cancelling refunds a paid booking and fails any other payment;
- completing a booking whose payment is still ``pending`` marks it paid
  (``BOOKINGS_AUTO_PAY_ON_COMPLETE``).
"""

import logging
import uuid

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from bookings.models import Booking, BookingStatus, PaymentMethod, PaymentStatus, TrackingType
from bookings.utils.identifiers import new_booking_id
from bookings.utils.notifications import send_booking_notification_email
from onepoint.exceptions import InvalidTransition
from users.permissions import SYSTEM_ACTOR_NAME, Actor

logger = logging.getLogger(__name__)


TRANSITIONS = {
    BookingStatus.PENDING: frozenset({BookingStatus.PROCESSING, BookingStatus.CANCELLED}),
    BookingStatus.PROCESSING: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

CANCELLABLE = frozenset({BookingStatus.PENDING, BookingStatus.PROCESSING})
DELETABLE = frozenset({BookingStatus.PENDING, BookingStatus.CANCELLED})
TERMINAL = frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED})
PREPAID_METHODS = frozenset({PaymentMethod.ONLINE, PaymentMethod.UPI, PaymentMethod.BANK_TRANSFER})

MSG_CREATED = "Booking created successfully"
MSG_PAYMENT_RECEIVED = "Payment received, processing started"
MSG_MARKED_PAID = "Payment marked as received by admin"
MSG_TEST_PAYMENT = "Test payment received, processing started"
MSG_DETAILS_UPDATED = "Booking details updated by admin"

UPDATABLE_FIELDS = ("service_fee", "additional_info", "user_details", "payment_method")


# =====================================================
# Rules
# =====================================================
def can_transition(current, target):
    return target in TRANSITIONS.get(current, frozenset())


def ensure_transition(booking, target):
    if not can_transition(booking.status, target):
        raise InvalidTransition(f"Cannot change booking status from {booking.status} to {target}")


def ensure_can_access(actor: Actor, booking: Booking):
    if actor.is_admin or actor.owns(booking.user_id):
        return
    raise PermissionDenied("Not authorized to access this booking")


def ensure_admin(actor: Actor):
    if not actor.is_admin:
        raise PermissionDenied("Not authorized as admin")


# =====================================================
# Lookups
# =====================================================
def get_booking(actor: Actor, pk) -> Booking:
    """Booking by primary key, visible to its owner and admins."""
    booking = Booking.objects.select_related("service", "user").filter(pk=pk).first()
    if booking is None:
        raise NotFound("Booking not found")
    ensure_can_access(actor, booking)
    return booking


def find_booking(identifier) -> Booking:
    """Booking by UUID or by its human-readable ``bookingId``."""
    qs = Booking.objects.select_related("service", "user")
    booking = None
    try:
        booking = qs.filter(pk=uuid.UUID(str(identifier))).first()
    except ValueError:
        pass
    if booking is None:
        booking = qs.filter(booking_id=str(identifier).upper()).first()
    if booking is None:
        raise NotFound("Booking not found")
    return booking


def _locked(booking: Booking) -> Booking:
    return Booking.objects.select_for_update().select_related("service", "user").get(pk=booking.pk)


def _apply_status(booking: Booking, target, message, updated_by):
    previous = booking.status
    booking.status = target
    booking.track(message, updated_by)
    logger.info("Booking %s: %s -> %s by %s", booking.booking_id, previous, target, updated_by)


# =====================================================
# Creation
# =====================================================
def build_user_details(user, overrides=None):
    """Snapshot of the customer, booking-supplied values winning over the profile."""
    overrides = overrides or {}
    details = {
        "fullName": user.full_name,
        "email": user.email,
        "phone": user.phone,
        "address": dict(user.address or {}),
        "aadhaarNumber": user.aadhaar_number,
        "panNumber": user.pan_number,
        "dateOfBirth": user.date_of_birth.isoformat() if user.date_of_birth else None,
        "fatherName": user.father_name,
    }
    for key, value in overrides.items():
        if key == "address":
            details["address"].update({k: v for k, v in (value or {}).items() if v not in (None, "")})
        elif value not in (None, ""):
            details[key] = value.isoformat() if hasattr(value, "isoformat") else value

    missing = [key for key in ("fullName", "email", "phone") if not details.get(key)]
    if missing:
        raise ValidationError({"userDetails": f"Missing required details: {', '.join(missing)}"})
    return details


@transaction.atomic
def create_booking(actor: Actor, user, service, user_details=None, additional_info="",
                   payment_method=PaymentMethod.NOT_PAID, transaction_id=""):
    if not service.is_active:
        raise ValidationError("This service is currently unavailable")

    booking = Booking(
        booking_id=new_booking_id(),
        user=user,
        service=service,
        category=service.category,
        service_name=service.name,
        service_fee=service.fee,
        user_details=build_user_details(user, user_details),
        additional_info=additional_info or "",
        payment_method=payment_method,
        transaction_id=transaction_id or "",
    )
    booking.track(MSG_CREATED, SYSTEM_ACTOR_NAME)
    booking.save()
    logger.info("Booking %s created by %s for %s", booking.booking_id, actor.name, service)

    if payment_method in PREPAID_METHODS:
        booking = record_payment(
            booking,
            Actor.system(),
            PaymentStatus.PAID,
            transaction_id=transaction_id or None,
        )
    return booking


# =====================================================
# Payments
# =====================================================
@transaction.atomic
def record_payment(booking, actor: Actor, payment_status, payment_method=None, transaction_id=None,
                   message=MSG_PAYMENT_RECEIVED, updated_by=None):
    """
    Single payment rule for every entry point.

    Paid stamps ``payment_date`` and moves a pending booking to processing
    with one tracking entry. Terminal bookings keep their payment state.
    """
    booking = _locked(booking)
    ensure_can_access(actor, booking)

    if payment_status not in PaymentStatus.values:
        raise ValidationError({"paymentStatus": f"Invalid payment status: {payment_status}"})
    if booking.status in TERMINAL:
        raise InvalidTransition(f"Cannot update payment for a booking that is already {booking.status}")

    booking.payment_status = payment_status
    if payment_method:
        booking.payment_method = payment_method
    if transaction_id:
        booking.transaction_id = transaction_id

    if payment_status == PaymentStatus.PAID:
        booking.payment_date = timezone.now()
        if booking.status == BookingStatus.PENDING:
            _apply_status(booking, BookingStatus.PROCESSING, message, updated_by or actor.name)

    booking.save()
    logger.info("Booking %s: payment %s via %s", booking.booking_id, booking.payment_status, booking.payment_method)
    return booking


def mark_paid(booking, actor: Actor, payment_method=PaymentMethod.CASH):
    ensure_admin(actor)
    return record_payment(
        booking,
        actor,
        PaymentStatus.PAID,
        payment_method=payment_method or PaymentMethod.CASH,
        message=MSG_MARKED_PAID,
    )


def record_test_payment(booking, actor: Actor):
    transaction_id = f"TEST_{int(timezone.now().timestamp() * 1000)}"
    return record_payment(
        booking,
        actor,
        PaymentStatus.PAID,
        payment_method=PaymentMethod.UPI,
        transaction_id=transaction_id,
        message=MSG_TEST_PAYMENT,
        updated_by=SYSTEM_ACTOR_NAME,
    )


# =====================================================
# Status changes
# =====================================================
@transaction.atomic
def cancel_booking(booking, actor: Actor, message=None):
    booking = _locked(booking)
    ensure_can_access(actor, booking)

    if booking.status not in CANCELLABLE:
        raise InvalidTransition(f"Booking cannot be cancelled as it is already {booking.status}")

    if booking.payment_status == PaymentStatus.PAID:
        booking.payment_status = PaymentStatus.REFUNDED
    else:
        booking.payment_status = PaymentStatus.FAILED

    default = "Booking cancelled by admin" if actor.is_admin and not actor.owns(booking.user_id) else "Booking cancelled by user"
    _apply_status(booking, BookingStatus.CANCELLED, message or default, actor.name)
    booking.save()
    return booking


@transaction.atomic
def complete_booking(booking, actor: Actor, message=None):
    ensure_admin(actor)
    booking = _locked(booking)
    ensure_transition(booking, BookingStatus.COMPLETED)

    if booking.payment_status == PaymentStatus.PENDING and settings.BOOKINGS_AUTO_PAY_ON_COMPLETE:
        booking.payment_status = PaymentStatus.PAID
        booking.payment_date = timezone.now()

    _apply_status(
        booking,
        BookingStatus.COMPLETED,
        message or f"Status updated to {BookingStatus.COMPLETED} by admin",
        actor.name,
    )
    booking.save()
    return booking


@transaction.atomic
def change_status(booking, actor: Actor, target, message=None):
    """Admin status change, routed through the same rules as the dedicated operations."""
    ensure_admin(actor)
    if target not in BookingStatus.values:
        raise ValidationError({"status": "Invalid status. Must be: pending, processing, completed, or cancelled"})

    if target == BookingStatus.CANCELLED:
        return cancel_booking(booking, actor, message)
    if target == BookingStatus.COMPLETED:
        return complete_booking(booking, actor, message)

    booking = _locked(booking)
    ensure_transition(booking, target)
    _apply_status(booking, target, message or f"Status updated to {target} by admin", actor.name)
    booking.save()
    return booking


# =====================================================
# Admin maintenance
# =====================================================
@transaction.atomic
def update_details(booking, actor: Actor, changes):
    """Admin edit of fee, notes, customer snapshot or payment method."""
    ensure_admin(actor)
    booking = _locked(booking)

    changed = []
    for field in UPDATABLE_FIELDS:
        if field not in changes:
            continue
        value = changes[field]
        if field == "user_details":
            merged = {**(booking.user_details or {})}
            for key, item in value.items():
                if key == "address":
                    merged["address"] = {**(merged.get("address") or {}), **item}
                else:
                    merged[key] = item.isoformat() if hasattr(item, "isoformat") else item
            value = merged
        if getattr(booking, field) != value:
            setattr(booking, field, value)
            changed.append(field)

    if changed:
        booking.track(MSG_DETAILS_UPDATED, actor.name, kind=TrackingType.UPDATE)
        booking.save()
        logger.info("Booking %s: %s updated by %s", booking.booking_id, ", ".join(changed), actor.name)
    return booking


@transaction.atomic
def _record_notification(booking, actor: Actor, message):
    ensure_admin(actor)
    message = (message or "").strip()
    if not message:
        raise ValidationError({"message": "Notification message is required"})

    booking = _locked(booking)
    booking.track(f"Notification: {message}", actor.name, kind=TrackingType.NOTIFICATION)
    booking.save()
    return booking


def notify_booking(booking, actor: Actor, message):
    """Log a notification on the booking, then e-mail the customer."""
    booking = _record_notification(booking, actor, message)
    email_status = send_booking_notification_email(booking, message.strip())
    logger.info("Booking %s: notification logged, email %s", booking.booking_id, email_status)
    return booking, email_status


@transaction.atomic
def delete_booking(booking, actor: Actor):
    ensure_admin(actor)
    booking = _locked(booking)
    if booking.status not in DELETABLE:
        raise InvalidTransition(
            f"Cannot delete booking with status: {booking.status}. "
            "Only pending or cancelled bookings can be deleted."
        )
    booking_id = booking.booking_id
    booking.delete()
    logger.info("Booking %s deleted by %s", booking_id, actor.name)
    return booking_id
