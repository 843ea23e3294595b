import logging
from html import escape
from typing import Optional

import resend

from config import get_settings

logger = logging.getLogger(__name__)

SUPPORT_PHONE = "+254 700 123 456"


class NotificationError(RuntimeError):
    """Delivery to the customer failed."""


def _amount(quote) -> str:
    if quote.final_total:
        return f"KSh {quote.final_total:,.2f}"
    return "Custom pricing"


def render_quote_received_email(quote) -> str:
    """Short acknowledgement sent when a customer submits the public form."""
    return f"""<!DOCTYPE html>
<html>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
  <h2>Hello {escape(quote.customer_name)}!</h2>
  <p>Thank you for choosing DripTech! We have received your irrigation quote request.</p>
  <p><strong>Project Type:</strong> {escape(quote.project_type)}<br>
     <strong>Area Size:</strong> {escape(quote.area_size)}<br>
     <strong>Location:</strong> {escape(quote.location)}</p>
  <p>Our irrigation specialist will contact you within 24 hours.</p>
  <p>Questions? Call us at <strong>{SUPPORT_PHONE}</strong></p>
</body>
</html>
"""


class QuoteNotifier:
    """
    Delivers quote documents to customers. Email goes through Resend when an
    API key is configured, otherwise it is written to the log. WhatsApp and
    SMS are log-only.
    """

    def __init__(self, api_key: Optional[str] = None, from_email: str = "quotes@driptech.co.ke"):
        self.api_key = api_key
        self.from_email = from_email

    # =========================
    # CHANNELS
    # =========================

    def send_quote_email(self, quote, html: str, subject: str) -> Optional[str]:
        if not self.api_key:
            logger.info("Email (stub) to %s: %s", quote.customer_email, subject)
            logger.debug("Email content: %s", html)
            return None

        resend.api_key = self.api_key
        params = {
            "from": self.from_email,
            "to": [quote.customer_email],
            "subject": subject,
            "html": html,
        }
        try:
            email = resend.Emails.send(params)
        except Exception as e:
            logger.exception("Resend delivery to %s failed", quote.customer_email)
            raise NotificationError(f"Email delivery failed: {e}") from e

        email_id = email.get("id") if isinstance(email, dict) else getattr(email, "id", None)
        logger.info("Email sent to %s (id=%s)", quote.customer_email, email_id)
        return email_id

    def send_whatsapp_notification(self, quote) -> None:
        message = (
            f"Hi {quote.customer_name}! Your irrigation quote #{quote.id} is ready.\n"
            f"Project: {quote.project_type} for {quote.area_size}\n"
            f"Location: {quote.location}\n"
            f"Estimated Cost: {_amount(quote)}\n"
            "Check your email for the detailed quote. - DripTech Team"
        )
        logger.info("WhatsApp (stub) to %s: %s", quote.customer_phone, message)

    def send_sms_notification(self, quote) -> None:
        message = (
            f"DripTech: Your irrigation quote #{quote.id} is ready! "
            f"Check your email: {quote.customer_email}. Total: {_amount(quote)}. "
            f"Questions? Call {SUPPORT_PHONE}"
        )
        logger.info("SMS (stub) to %s: %s", quote.customer_phone, message)

    # =========================
    # QUOTE FLOWS
    # =========================

    def send_quote(self, quote, document_html: str) -> None:
        """
        Deliver the rendered quotation. Email failures propagate as
        NotificationError so the caller can report them.
        """
        self.send_quote_email(
            quote,
            document_html,
            subject=f"Your DripTech Irrigation Quote - {quote.project_type}",
        )
        if quote.delivery_method == "whatsapp":
            self.send_whatsapp_notification(quote)
        elif quote.delivery_method == "sms":
            self.send_sms_notification(quote)

    def notify_quote_received(self, quote) -> None:
        """Acknowledge a public quote request. Runs in the background; failures are only logged."""
        try:
            self.send_quote_email(
                quote,
                render_quote_received_email(quote),
                subject="We received your DripTech quote request",
            )
            if quote.delivery_method == "whatsapp":
                self.send_whatsapp_notification(quote)
            elif quote.delivery_method == "sms":
                self.send_sms_notification(quote)
        except Exception:
            logger.exception("Quote %s acknowledgement failed", quote.id)


def get_notifier() -> QuoteNotifier:
    """FastAPI dependency returning the configured notifier."""
    settings = get_settings()
    return QuoteNotifier(api_key=settings.resend_api_key, from_email=settings.quotes_from_email)
