from datetime import datetime
from html import escape

from app.features.contact.schemas import ContactSubmission
from app.platform.config import DEFAULT_ADMIN_EMAIL, Settings, settings
from app.platform.services.mailer import OutgoingEmail

NOT_PROVIDED = "Not provided"
ADMIN_SUBJECT_PREFIX = "New Contact Form Submission: "


def _single_line(value: str) -> str:
    return " ".join(value.split())


def _multiline_html(value: str) -> str:
    return escape(value).replace("\r\n", "\n").replace("\n", "<br>")


def build_admin_notification(
    submission: ContactSubmission,
    submitted_at: datetime,
    config: Settings | None = None,
) -> OutgoingEmail:
    config = config or settings

    html_body = f"""
<h2>New Contact Form Submission</h2>
<p><strong>Name:</strong> {escape(submission.name)}</p>
<p><strong>Email:</strong> {escape(submission.email)}</p>
<p><strong>Company:</strong> {escape(submission.company or NOT_PROVIDED)}</p>
<p><strong>Phone:</strong> {escape(submission.phone or NOT_PROVIDED)}</p>
<p><strong>Subject:</strong> {escape(submission.subject)}</p>
<p><strong>Message:</strong></p>
<p>{_multiline_html(submission.message)}</p>
<hr>
<p><em>Submitted on: {submitted_at.strftime("%Y-%m-%d %H:%M:%S %Z").strip()}</em></p>
"""

    return OutgoingEmail(
        from_address=config.email_user or "",
        to=config.admin_email or DEFAULT_ADMIN_EMAIL,
        subject=ADMIN_SUBJECT_PREFIX + _single_line(submission.subject),
        html_body=html_body,
    )


def build_confirmation_notification(email: str, name: str, config: Settings | None = None) -> OutgoingEmail:
    config = config or settings
    company = config.company_name

    html_body = f"""
<h2>Thank you for contacting {escape(company)}!</h2>
<p>Dear {escape(name)},</p>
<p>We have received your message and will get back to you within 24-48 hours.</p>
<p>If you have any urgent inquiries, please call us at {escape(config.support_phone)}.</p>
<br>
<p>Best regards,</p>
<p>The {escape(company)} Team</p>
<hr>
<p><em>This is an automated confirmation email. Please do not reply to this message.</em></p>
"""

    return OutgoingEmail(
        from_address=config.email_user or "",
        to=email,
        subject=f"Thank you for contacting {company}",
        html_body=html_body,
    )
