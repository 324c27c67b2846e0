"""
Mail dispatcher for welcome and password reset emails.

Templates are rendered with Jinja2 and delivered through fastapi-mail.
A single MailDispatcher is built at startup and handed to routes through
the get_mailer dependency.
"""
import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import Request
from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType
from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from ..config import Settings

# Set up logging
logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"

WELCOME_SUBJECT = "Bem-vindo ao AVASOFT - Conta Criada com Sucesso!"
RESET_SUBJECT = "Redefinição de Senha - AVASOFT"


class MailDeliveryError(Exception):
    """Raised when an email could not be handed to the SMTP relay."""


class MailDispatcher:
    """
    Renders HTML templates and sends them through an SMTP relay.

    Args:
        mail: Configured FastMail client
        frontend_url: Link target used in the welcome email
        timeout_seconds: Upper bound for a single send
    """

    def __init__(self, mail: FastMail, frontend_url: str, timeout_seconds: float = 30):
        self.mail = mail
        self.frontend_url = frontend_url
        self.timeout_seconds = timeout_seconds
        self.templates = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(["html"]),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "MailDispatcher":
        """
        Build a dispatcher from application settings.

        Args:
            settings: Application settings

        Returns:
            MailDispatcher: Ready to send
        """
        conf = ConnectionConfig(
            MAIL_USERNAME=settings.email_user,
            MAIL_PASSWORD=settings.email_pass,
            MAIL_FROM=settings.sender_address,
            MAIL_FROM_NAME=settings.mail_from_name,
            MAIL_PORT=settings.mail_port,
            MAIL_SERVER=settings.mail_server,
            MAIL_STARTTLS=settings.mail_starttls,
            MAIL_SSL_TLS=settings.mail_ssl_tls,
            USE_CREDENTIALS=True,
            VALIDATE_CERTS=True,
            SUPPRESS_SEND=1 if settings.mail_suppress_send else 0,
            TIMEOUT=settings.mail_timeout_seconds,
        )
        logger.info(
            f"Email Configuration: SERVER={settings.mail_server}, PORT={settings.mail_port}, "
            f"FROM={settings.sender_address}, SUPPRESS_SEND={settings.mail_suppress_send}"
        )
        return cls(FastMail(conf), settings.frontend_url, settings.mail_timeout_seconds)

    def render(self, template_name: str, **context) -> str:
        """
        Render an email template to HTML.

        Raises:
            MailDeliveryError: If the template is missing or fails to render
        """
        context.setdefault("year", datetime.now().year)
        try:
            return self.templates.get_template(template_name).render(**context)
        except TemplateError as e:
            logger.error(f"Email template {template_name} failed to render: {str(e)}")
            raise MailDeliveryError(f"Could not render {template_name}") from e

    async def send(self, email: str, subject: str, html: str) -> None:
        """
        Send one HTML email.

        Raises:
            MailDeliveryError: If the relay fails or does not answer in time
        """
        message = MessageSchema(
            subject=subject,
            recipients=[email],
            body=html,
            subtype=MessageType.html,
        )
        try:
            await asyncio.wait_for(self.mail.send_message(message), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            logger.error(f"Email to {email} timed out after {self.timeout_seconds}s")
            raise MailDeliveryError(f"SMTP relay timed out after {self.timeout_seconds}s") from e
        except Exception as e:
            logger.error(f"Email to {email} failed: {str(e)}")
            raise MailDeliveryError(str(e)) from e
        logger.info(f"Email sent successfully to {email}")

    async def send_welcome(
        self, full_name: str, email: str, user_name: str, temp_password: Optional[str]
    ) -> None:
        """
        Send the account-created email with the login credentials.

        Args:
            full_name: Recipient's name
            email: Recipient's address
            user_name: Login name
            temp_password: Generated password, or None if the user chose one
        """
        html = self.render(
            "welcome.html",
            full_name=full_name,
            user_name=user_name,
            temp_password=temp_password,
            frontend_url=self.frontend_url,
        )
        await self.send(email, WELCOME_SUBJECT, html)

    async def send_reset_instructions(self, email: str, reset_link: str) -> None:
        """
        Send the password reset email.

        Args:
            email: Recipient's address
            reset_link: Deep link to the frontend reset page
        """
        html = self.render("reset_password.html", reset_link=reset_link)
        await self.send(email, RESET_SUBJECT, html)


def get_mailer(request: Request) -> MailDispatcher:
    """Mail dispatcher dependency, built once in the application lifespan."""
    return request.app.state.mailer
