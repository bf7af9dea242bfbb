"""Rental request e-mails for the shop admin and the customer.

Delivery goes through the SendGrid API. Senders report delivery with a boolean
and never raise; a rental request is never failed because mail could not be
delivered.
"""

from __future__ import annotations

import html
import logging
import os
from dataclasses import dataclass
from datetime import datetime

from python_http_client.exceptions import HTTPError
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail, ReplyTo

from camera_rental.models.inventory_models import Camera, RentalRequest
from camera_rental.services.rental_service import format_request_number, rental_days


NOTIFY_LOGGER = logging.getLogger("camera_rental.notifications")
SHOP_NAME = "CamQuest"
DEFAULT_SENDER = "noreply@camquest.example.com"


@dataclass
class MailSettings:
    api_key: str
    admin_email: str
    sender: str
    notify_customer: bool

    @property
    def enabled(self) -> bool:
        return bool(self.api_key and self.sender)


def _env_flag(name: str, default: bool) -> bool:
    raw = (os.environ.get(name) or "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def load_mail_settings() -> MailSettings:
    return MailSettings(
        api_key=(os.environ.get("SENDGRID_API_KEY") or "").strip(),
        admin_email=(os.environ.get("ADMIN_EMAIL") or "").strip(),
        sender=(os.environ.get("MAIL_FROM") or DEFAULT_SENDER).strip(),
        notify_customer=_env_flag("NOTIFY_CUSTOMER", True),
    )


def _format_currency(amount: float) -> str:
    return f"${float(amount):.2f}"


def _format_date(value: datetime) -> str:
    return f"{value:%B} {value.day}, {value.year}"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _rental_lines(rental: RentalRequest, camera: Camera) -> list[tuple[str, str]]:
    days = rental_days(rental.start_date, rental.end_date)
    return [
        ("Request ID", format_request_number(rental.id)),
        (
            "Rental Period",
            f"{_format_date(rental.start_date)} to {_format_date(rental.end_date)} ({_plural(days, 'day')})",
        ),
        ("Quantity", _plural(rental.quantity, "unit")),
        ("Daily Rate", _format_currency(camera.price_per_day)),
        ("Total Price", _format_currency(rental.total_price)),
        ("Status", rental.status.capitalize()),
    ]


def _customer_lines(rental: RentalRequest) -> list[tuple[str, str]]:
    return [
        ("Name", rental.customer_name),
        ("Email", rental.customer_email),
        ("Phone", rental.customer_phone),
    ]


def _html_section(title: str, lines: list[tuple[str, str]]) -> str:
    rows = "".join(
        f"<p><strong>{html.escape(label)}:</strong> {html.escape(value)}</p>" for label, value in lines
    )
    return f"<h3>{html.escape(title)}</h3>{rows}"


def _text_section(title: str, lines: list[tuple[str, str]]) -> str:
    return "\n".join([title.upper()] + [f"{label}: {value}" for label, value in lines])


def admin_email_content(rental: RentalRequest, camera: Camera) -> tuple[str, str, str]:
    """Return ``(subject, text, html)`` for the admin notification."""
    rental_section = _rental_lines(rental, camera)
    customer_section = _customer_lines(rental)
    footer = f"This is an automated notification from {SHOP_NAME} Rental System."
    subject = f"[{SHOP_NAME}] New Rental Request: {camera.name}"
    text = "\n\n".join(
        [
            "NEW RENTAL REQUEST",
            f"Camera: {camera.name} ({camera.category})",
            _text_section("Rental Details", rental_section),
            _text_section("Customer Information", customer_section),
            footer,
        ]
    )
    body = (
        "<h2>New Rental Request</h2>"
        f"<p>{html.escape(camera.name)} ({html.escape(camera.category)})</p>"
        f"{_html_section('Rental Details', rental_section)}"
        f"{_html_section('Customer Information', customer_section)}"
        f"<p>{html.escape(footer)}</p>"
    )
    return subject, text, body


def customer_email_content(rental: RentalRequest, camera: Camera) -> tuple[str, str, str]:
    """Return ``(subject, text, html)`` for the customer confirmation."""
    rental_section = _rental_lines(rental, camera)
    greeting = f"Dear {rental.customer_name},"
    intro = (
        f"Thank you for your rental request for the {camera.name}. "
        "We will review it and contact you shortly to confirm availability and pickup details."
    )
    subject = f"[{SHOP_NAME}] Your Rental Request {format_request_number(rental.id)}"
    text = "\n\n".join(
        [
            "YOUR RENTAL REQUEST HAS BEEN RECEIVED",
            greeting,
            intro,
            _text_section("Rental Details", rental_section),
            f"{SHOP_NAME} - Professional Camera Rentals",
        ]
    )
    body = (
        "<h2>Your Rental Request Has Been Received</h2>"
        f"<p>{html.escape(greeting)}</p><p>{html.escape(intro)}</p>"
        f"{_html_section('Rental Details', rental_section)}"
    )
    return subject, text, body


def build_admin_message(rental: RentalRequest, camera: Camera, settings: MailSettings) -> Mail:
    subject, text, body = admin_email_content(rental, camera)
    return Mail(
        from_email=settings.sender,
        to_emails=settings.admin_email,
        subject=subject,
        plain_text_content=text,
        html_content=body,
    )


def build_customer_message(rental: RentalRequest, camera: Camera, settings: MailSettings) -> Mail:
    subject, text, body = customer_email_content(rental, camera)
    message = Mail(
        from_email=settings.sender,
        to_emails=rental.customer_email,
        subject=subject,
        plain_text_content=text,
        html_content=body,
    )
    if settings.admin_email:
        message.reply_to = ReplyTo(settings.admin_email)
    return message


def _deliver(message: Mail, recipient: str, settings: MailSettings) -> bool:
    try:
        response = SendGridAPIClient(settings.api_key).send(message)
    except HTTPError as exc:
        NOTIFY_LOGGER.warning("Mail delivery failed to=%s status=%s", recipient, exc.status_code)
        return False
    except OSError as exc:
        NOTIFY_LOGGER.warning("Mail delivery failed to=%s error=%s", recipient, exc)
        return False
    if response.status_code >= 300:
        NOTIFY_LOGGER.warning("Mail delivery rejected to=%s status=%s", recipient, response.status_code)
        return False
    return True


def send_rental_request_notification(rental: RentalRequest, camera: Camera) -> bool:
    settings = load_mail_settings()
    if not settings.enabled or not settings.admin_email:
        NOTIFY_LOGGER.warning("Admin notification skipped rental_id=%s reason=mail_not_configured", rental.id)
        return False
    if not _deliver(build_admin_message(rental, camera, settings), settings.admin_email, settings):
        return False
    NOTIFY_LOGGER.info("Admin notification sent rental_id=%s to=%s", rental.id, settings.admin_email)
    return True


def send_customer_confirmation_email(rental: RentalRequest, camera: Camera) -> bool:
    settings = load_mail_settings()
    if not settings.enabled:
        NOTIFY_LOGGER.warning("Customer confirmation skipped rental_id=%s reason=mail_not_configured", rental.id)
        return False
    if not _deliver(build_customer_message(rental, camera, settings), rental.customer_email, settings):
        return False
    NOTIFY_LOGGER.info("Customer confirmation sent rental_id=%s to=%s", rental.id, rental.customer_email)
    return True


def dispatch_rental_notifications(rental: RentalRequest, camera: Camera) -> None:
    try:
        if send_rental_request_notification(rental, camera):
            NOTIFY_LOGGER.info("Email notification sent to admin for rental request #%s", rental.id)
        else:
            NOTIFY_LOGGER.warning("Failed to send email notification for rental request #%s", rental.id)
        if load_mail_settings().notify_customer:
            send_customer_confirmation_email(rental, camera)
    except Exception:
        NOTIFY_LOGGER.exception("Error in email notification process rental_id=%s", rental.id)
