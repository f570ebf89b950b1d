from __future__ import annotations

import asyncio
import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formatdate, make_msgid

from app.platform.config import Settings, settings

logger = logging.getLogger(__name__)


class EmailServiceError(RuntimeError):
    pass


@dataclass(frozen=True)
class TransportProfile:
    name: str
    host: str
    port: int
    use_ssl: bool
    username: str | None
    password: str | None


@dataclass(frozen=True)
class OutgoingEmail:
    from_address: str
    to: str
    subject: str
    html_body: str


def select_transport_profile(config: Settings | None = None) -> TransportProfile:
    """Pick the organisation SMTP server when one is configured, else the fallback provider."""
    config = config or settings

    if config.smtp_host and config.smtp_host.strip():
        return TransportProfile(
            name="smtp",
            host=config.smtp_host.strip(),
            port=int(config.smtp_port),
            use_ssl=bool(config.smtp_secure),
            username=config.email_user,
            password=config.email_pass,
        )

    return TransportProfile(
        name=config.fallback_smtp_name,
        host=config.fallback_smtp_host,
        port=int(config.fallback_smtp_port),
        use_ssl=True,
        username=config.email_user,
        password=config.email_pass,
    )


def build_message(email: OutgoingEmail) -> EmailMessage:
    msg = EmailMessage()
    msg["Subject"] = email.subject
    msg["From"] = email.from_address
    msg["To"] = email.to
    msg["Date"] = formatdate(localtime=False)
    domain = email.from_address.rsplit("@", 1)[-1] if "@" in email.from_address else None
    msg["Message-ID"] = make_msgid(domain=domain)

    msg.set_content("This message requires an HTML capable email client.")
    msg.add_alternative(email.html_body, subtype="html")
    return msg


def _send_message(profile: TransportProfile, msg: EmailMessage, timeout: float) -> None:
    if profile.use_ssl:
        context = ssl.create_default_context()
        with smtplib.SMTP_SSL(profile.host, profile.port, context=context, timeout=timeout) as client:
            if profile.username and profile.password:
                client.login(profile.username, profile.password)
            client.send_message(msg)
        return

    with smtplib.SMTP(profile.host, profile.port, timeout=timeout) as client:
        client.ehlo()
        client.starttls(context=ssl.create_default_context())
        if profile.username and profile.password:
            client.login(profile.username, profile.password)
        client.send_message(msg)


class Mailer:
    def __init__(self, config: Settings | None = None) -> None:
        self._config = config or settings

    @property
    def sender(self) -> str:
        return self._config.email_user or ""

    async def send(self, email: OutgoingEmail) -> str:
        if not email.from_address:
            raise EmailServiceError("EMAIL_USER is not configured")

        profile = select_transport_profile(self._config)
        try:
            msg = build_message(email)
        except ValueError as exc:
            raise EmailServiceError(f"Could not build email: {exc}") from exc

        try:
            await asyncio.to_thread(_send_message, profile, msg, float(self._config.smtp_timeout_seconds))
        except (smtplib.SMTPException, OSError) as exc:
            raise EmailServiceError(f"{profile.name} transport failed: {exc}") from exc

        message_id = str(msg["Message-ID"])
        logger.info("Email sent via %s to %s message_id=%s", profile.name, email.to, message_id)
        return message_id
