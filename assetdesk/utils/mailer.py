"""
➡️ But : Envoyer les emails sortants (identifiants des nouveaux employés).

ConsoleMailer : n'envoie rien, journalise (dev / tests).
SmtpMailer : envoi réel via smtplib.

make_mailer() choisit l'implémentation selon settings.MAIL_BACKEND.
Une erreur d'envoi est propagée : l'appelant annule sa transaction.
"""

import logging
from html import escape
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Optional

from assetdesk.core.config import settings

logger = logging.getLogger(__name__)


@dataclass
class OutgoingEmail:
    to: str
    subject: str
    text: str
    html: Optional[str] = None


class Mailer:
    def send(self, message: OutgoingEmail) -> None:
        raise NotImplementedError


class ConsoleMailer(Mailer):
    """Mode dev : on journalise le message sans l'envoyer."""

    def __init__(self):
        self.outbox: list[OutgoingEmail] = []

    def send(self, message: OutgoingEmail) -> None:
        self.outbox.append(message)
        logger.info("[console mail] to=%s subject=%r", message.to, message.subject)


class SmtpMailer(Mailer):
    def __init__(
        self,
        *,
        host: str,
        port: int,
        sender: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _build(self, message: OutgoingEmail) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = message.subject
        msg["From"] = self.sender
        msg["To"] = message.to
        msg.set_content(message.text)
        if message.html:
            msg.add_alternative(message.html, subtype="html")
        return msg

    def send(self, message: OutgoingEmail) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password or "")
            server.send_message(self._build(message))
        logger.info("Mail sent to %s (%s)", message.to, message.subject)


def make_mailer() -> Mailer:
    if settings.MAIL_BACKEND == "smtp":
        return SmtpMailer(
            host=settings.MAIL_HOST,
            port=settings.MAIL_PORT,
            sender=settings.MAIL_FROM,
            username=settings.MAIL_USERNAME,
            password=settings.MAIL_PASSWORD,
            use_tls=settings.MAIL_USE_TLS,
        )
    return ConsoleMailer()


# -----------------------------
# Templates
# -----------------------------

def build_credentials_email(*, full_name: str, email: str, password: str) -> OutgoingEmail:
    text = (
        f"Hello {full_name},\n\n"
        "Your account has been created. Below are your login credentials:\n\n"
        f"Email: {email}\n"
        f"Password: {password}\n\n"
        "Please login using these credentials and change your password as soon as possible "
        "for security reasons.\n\n"
        "If you have any questions, please contact the administrator.\n"
    )
    html = (
        "<html><body>"
        "<h1>Welcome to Our Platform</h1>"
        f"<p>Hello {escape(full_name)},</p>"
        "<p>Your account has been created. Below are your login credentials:</p>"
        f"<p><strong>Email:</strong> {escape(email)}<br><strong>Password:</strong> {escape(password)}</p>"
        "<p>Please login using these credentials and change your password as soon as possible "
        "for security reasons.</p>"
        "<p><small>This is an automated email. Please do not reply to this message.</small></p>"
        "</body></html>"
    )
    return OutgoingEmail(to=email, subject="Your Account Credentials", text=text, html=html)
