import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils.html import strip_tags

logger = logging.getLogger(__name__)

EMAIL_SENT = "sent"
EMAIL_FAILED = "failed"
EMAIL_SKIPPED = "skipped"


def send_templated_email(email, subject: str, template_name: str, context: dict) -> str:
    """
    Sends a templated HTML email with a plain-text fallback.

    Returns one of ``sent`` / ``failed``; delivery errors are logged and
    reported through the status instead of failing the caller.
    """
    html_content = render_to_string(template_name, context)
    text_content = strip_tags(html_content)

    email_msg = EmailMultiAlternatives(
        subject=subject,
        body=text_content,
        from_email=f"{settings.BUSINESS_NAME} <{settings.DEFAULT_FROM_EMAIL}>",
        to=[email],
    )
    email_msg.attach_alternative(html_content, "text/html")

    try:
        email_msg.send(fail_silently=False)
    except Exception as e:
        logger.error("Failed to send '%s' to %s: %s", subject, email, e)
        return EMAIL_FAILED
    return EMAIL_SENT


def send_booking_notification_email(booking, message: str) -> str:
    email = (booking.user_details or {}).get("email") or booking.user.email
    if not email:
        return EMAIL_SKIPPED

    return send_templated_email(
        email,
        subject=f"Update on your booking {booking.booking_id}",
        template_name="emails/booking_notification.html",
        context={
            "booking": booking,
            "customer_name": (booking.user_details or {}).get("fullName") or booking.user.full_name,
            "message": message,
            "business_name": settings.BUSINESS_NAME,
        },
    )
