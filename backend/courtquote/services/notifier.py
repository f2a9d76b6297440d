"""Email notifier — sends approved quotation PDFs to clients over SMTP."""

from __future__ import annotations

import html
import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr, make_msgid
from typing import TYPE_CHECKING

from courtquote.formatting import format_inr

if TYPE_CHECKING:
    from courtquote.models.quotation import Quotation
    from courtquote.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationResult:
    """Outcome of one delivery attempt."""

    sent: bool
    recipient: str
    message_id: str | None = None
    error: str | None = None


class EmailNotifier:
    """Delivers approved quotations by email with the PDF attached."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def send_quotation(
        self, quotation: Quotation, pdf: bytes, filename: str | None = None
    ) -> NotificationResult:
        """Email *pdf* to the quotation's client.

        Delivery problems are logged and reported in the result rather
        than raised; an approval never depends on the mail server.
        """
        recipient = quotation.client_info.email
        if not recipient:
            logger.warning(
                "No client email for quotation %s; skipping delivery",
                quotation.quotation_number,
            )
            return NotificationResult(sent=False, recipient="", error="Client has no email address")

        if not self._settings.smtp_configured:
            logger.warning(
                "SMTP_HOST not configured; quotation %s for %s was not emailed",
                quotation.quotation_number,
                recipient,
            )
            return NotificationResult(sent=False, recipient=recipient, error="SMTP is not configured")

        message = self.build_message(
            quotation, pdf, filename or f"Quotation_{quotation.quotation_number}.pdf"
        )
        s = self._settings
        try:
            with smtplib.SMTP(s.smtp_host, s.smtp_port, timeout=s.smtp_timeout) as server:
                server.starttls()
                if s.smtp_user and s.smtp_password:
                    server.login(s.smtp_user, s.smtp_password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.exception(
                "Failed to email quotation %s to %s", quotation.quotation_number, recipient
            )
            return NotificationResult(sent=False, recipient=recipient, error=str(exc))

        logger.info("Emailed quotation %s to %s", quotation.quotation_number, recipient)
        return NotificationResult(sent=True, recipient=recipient, message_id=message["Message-ID"])

    def build_message(self, quotation: Quotation, pdf: bytes, filename: str) -> EmailMessage:
        s = self._settings
        client = quotation.client_info
        project = quotation.project_info
        display_name = client.name or "Valued Client"
        sender = s.smtp_from_email or s.smtp_user or s.company_email

        msg = EmailMessage()
        msg["Subject"] = (
            f"Your Approved Quotation #{quotation.quotation_number} - {s.company_name}"
        )
        msg["From"] = formataddr((s.smtp_from_name, sender))
        msg["To"] = client.email
        msg["Message-ID"] = make_msgid(domain=sender.partition("@")[2] or None)

        grand_total = format_inr(quotation.pricing.grand_total)
        construction = project.construction_type or "standard"
        notes = f"\nSpecial notes from our team:\n{quotation.admin_notes}\n" if quotation.admin_notes else ""
        msg.set_content(
            f"Dear {display_name},\n\n"
            "Your sports court construction quotation has been reviewed and "
            "approved by our team. The detailed quotation is attached as a PDF.\n\n"
            f"Quotation Number: {quotation.quotation_number}\n"
            f"Project: {project.sport_names} Construction\n"
            f"Construction Type: {construction}\n"
            f"Area: {project.area:g} sq. meters\n"
            f"Grand Total: {grand_total}\n"
            f"{notes}\n"
            "Our project manager will contact you within 24 hours.\n\n"
            f"Regards,\n{s.company_name}\n"
        )

        notes_html = (
            f"<h3>Special Notes from Our Team</h3><p><em>{html.escape(quotation.admin_notes)}</em></p>"
            if quotation.admin_notes
            else ""
        )
        msg.add_alternative(
            f"""\
<html>
  <body style="font-family: Arial, sans-serif; color: #333; max-width: 600px; margin: 0 auto;">
    <h1 style="margin-bottom: 0;">{html.escape(s.company_name.upper())}</h1>
    <p style="margin-top: 4px;">{html.escape(s.company_tagline)}</p>
    <h2 style="color: #27ae60;">Your Quotation Has Been Approved!</h2>
    <p>Dear <strong>{html.escape(display_name)}</strong>,</p>
    <p>Your sports court construction quotation has been reviewed and approved
       by our team. The detailed quotation is attached as a PDF.</p>
    <table style="width: 100%; border-collapse: collapse;">
      <tr><td><strong>Quotation Number:</strong></td><td>{html.escape(quotation.quotation_number)}</td></tr>
      <tr><td><strong>Project:</strong></td><td>{html.escape(project.sport_names)} Construction</td></tr>
      <tr><td><strong>Construction Type:</strong></td><td>{html.escape(construction)}</td></tr>
      <tr><td><strong>Area:</strong></td><td>{project.area:g} sq. meters</td></tr>
    </table>
    <p style="font-size: 20px; font-weight: bold;">Grand Total: {grand_total}</p>
    {notes_html}
    <h3>What's Next?</h3>
    <ul>
      <li>Our project manager will contact you within 24 hours</li>
      <li>We'll schedule a site visit if required</li>
      <li>Project timeline discussion and finalization</li>
      <li>Payment schedule and contract signing</li>
    </ul>
    <p style="font-size: 11px; color: #888;">This is an automated email. Please do not reply to this message.</p>
  </body>
</html>
""",
            subtype="html",
        )
        msg.add_attachment(pdf, maintype="application", subtype="pdf", filename=filename)
        return msg
