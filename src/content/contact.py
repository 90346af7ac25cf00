"""Contact form validation and delivery through the EmailJS REST API."""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass, field
from typing import Optional

import requests

from src.ui.toasts import ToastQueue

from . import settings
from .client import _session

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_MESSAGE_LENGTH = 10
_UNSET_MARKERS = (
    "your_service_id_here",
    "your_template_id_here",
    "your_public_key_here",
)


class EmailServiceError(Exception):
    """Raised with a user-facing message when an email cannot be sent."""


@dataclass(frozen=True)
class EmailConfig:
    service_id: str = settings.EMAILJS_SERVICE_ID
    template_id: str = settings.EMAILJS_TEMPLATE_ID
    public_key: str = settings.EMAILJS_PUBLIC_KEY
    api_url: str = settings.EMAILJS_API_URL

    @property
    def is_configured(self) -> bool:
        values = (self.service_id, self.template_id, self.public_key)
        return all(values) and not any(v in _UNSET_MARKERS for v in values)


@dataclass(frozen=True)
class ContactFormData:
    name: str
    email: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class EmailResponse:
    status: int
    text: str


def validate_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def validate_form(form: ContactFormData) -> ValidationResult:
    errors: list[str] = []
    if not form.name.strip():
        errors.append("Name is required")

    if not form.email.strip():
        errors.append("Email is required")
    elif not validate_email(form.email):
        errors.append("Please enter a valid email address")

    if not form.message.strip():
        errors.append("Message is required")
    elif len(form.message.strip()) < MIN_MESSAGE_LENGTH:
        errors.append(f"Message must be at least {MIN_MESSAGE_LENGTH} characters long")

    return ValidationResult(is_valid=not errors, errors=errors)


def friendly_error(message: str, owner_email: str = settings.OWNER_EMAIL) -> str:
    """Map a raw delivery error to the message shown to the visitor."""
    lowered = message.lower()
    if "not configured" in lowered:
        return f"Email service is not configured. Please contact me directly at {owner_email}"
    if "network" in lowered or "connection" in lowered or "fetch" in lowered:
        return "Network error. Please check your connection and try again."
    if "insufficient authentication scopes" in lowered or "gmail_api" in lowered:
        return f"Email service needs reconfiguration. Please contact me directly at {owner_email}"
    if "412" in message:
        return f"Email service temporarily unavailable. Please contact me directly at {owner_email}"
    return message or "Failed to send email"


class EmailService:
    def __init__(self, config: EmailConfig | None = None, timeout: float = 15.0) -> None:
        self.config = config or EmailConfig()
        self.timeout = timeout
        self._http = _session()

    def send_email_sync(self, form: ContactFormData) -> EmailResponse:
        """Send ``form`` through EmailJS.

        Raises:
            EmailServiceError: With a visitor-friendly message on any failure.
        """
        try:
            if not self.config.is_configured:
                raise EmailServiceError(
                    "Email service is not configured. Please check your environment variables."
                )
            payload = {
                "service_id": self.config.service_id,
                "template_id": self.config.template_id,
                "user_id": self.config.public_key,
                "template_params": {
                    "from_name": form.name,
                    "from_email": form.email,
                    "message": form.message,
                    "to_name": settings.OWNER_NAME,
                },
            }
            r = self._http.post(self.config.api_url, json=payload, timeout=self.timeout)
            if r.status_code != 200:
                raise EmailServiceError(f"{r.status_code} {r.text}")
            return EmailResponse(status=r.status_code, text=r.text)
        except (EmailServiceError, requests.RequestException) as e:
            logger.error("EmailJS error: %s", e)
            if isinstance(e, requests.ConnectionError):
                raise EmailServiceError(friendly_error("network error")) from e
            raise EmailServiceError(friendly_error(str(e))) from e

    async def send_email(self, form: ContactFormData) -> EmailResponse:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.send_email_sync, form)

    def close(self) -> None:
        self._http.close()


async def submit_contact_form(
    form: ContactFormData,
    service: EmailService,
    toasts: ToastQueue,
) -> Optional[EmailResponse]:
    """Validate and send ``form``, reporting the outcome as a toast.

    Returns:
        The delivery response, or None when validation or delivery failed.
    """
    result = validate_form(form)
    if not result.is_valid:
        toasts.show_toast("error", "Please fix the errors in the form")
        return None
    try:
        response = await service.send_email(form)
    except EmailServiceError as e:
        toasts.show_toast("error", str(e))
        return None
    toasts.show_toast("success", "Message sent successfully! I'll get back to you soon.")
    return response
