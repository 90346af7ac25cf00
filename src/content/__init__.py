"""Content package public API: API client, contact form and error reporting."""

from .client import ContentClient
from .contact import (
    ContactFormData,
    EmailConfig,
    EmailService,
    EmailServiceError,
    submit_contact_form,
    validate_form,
)
from .errors import ErrorReport, GlobalErrorHandler, safe_async, safe_call

__all__ = [
    "ContentClient",
    "ContactFormData",
    "EmailConfig",
    "EmailService",
    "EmailServiceError",
    "submit_contact_form",
    "validate_form",
    "ErrorReport",
    "GlobalErrorHandler",
    "safe_async",
    "safe_call",
]
