"""Email utilities for the orders app.

Uses Django's email backend, with links composed from FRONTEND_URL.
"""

import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger("storefront.orders")


def format_cents(cents: int) -> str:
    return f"{cents // 100}.{cents % 100:02d}"


def send_order_placed_email(order) -> None:
    """Send an order confirmation to the order owner's email address.

    Includes a link to view the order on the frontend using `FRONTEND_URL`.
    No-ops if the user has no email. Delivery failures are logged, never raised.
    """
    to_email = getattr(order.user, "email", None)
    if not to_email:
        return

    subject = f"Your order #{order.id} has been placed"
    frontend = getattr(settings, "FRONTEND_URL", "")
    lines = [
        "Thank you for your order!",
        "",
        f"Order: #{order.id}",
        f"Status: {order.status}",
        f"Total: {format_cents(order.total_cents)}",
    ]
    if frontend:
        lines += ["", f"You can view your order here: {frontend.rstrip('/')}/orders/{order.id}"]

    try:
        send_mail(
            subject,
            "\n".join(lines) + "\n",
            getattr(settings, "DEFAULT_FROM_EMAIL", None),
            [to_email],
            fail_silently=False,
        )
    except (SMTPException, OSError):
        logger.exception(
            "order.email_failed",
            extra={"event": "order.email_failed", "order_id": order.id, "user_id": order.user_id},
        )
