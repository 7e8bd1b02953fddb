"""Input validation applied to user payloads before they reach the service."""
from __future__ import annotations

from typing import List, Optional

from email_validator import EmailNotValidError, validate_email

from .errors import ValidationFailure
from .models import UserView


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def collect_user_errors(view: UserView) -> List[str]:
    """Return the validation messages for ``view`` in field order."""

    errors: List[str] = []
    if _is_blank(view.first_name):
        errors.append("firstName is required")
    if _is_blank(view.last_name):
        errors.append("lastName is required")

    if _is_blank(view.email):
        errors.append("email is required")
    else:
        try:
            validate_email(view.email, check_deliverability=False, globally_deliverable=False)
        except EmailNotValidError:
            errors.append("email must be a well-formed email address")

    if _is_blank(view.password):
        errors.append("password is required")
    return errors


def validate_user_view(view: UserView) -> UserView:
    """Raise :class:`ValidationFailure` unless every required field is present and valid."""

    errors = collect_user_errors(view)
    if errors:
        raise ValidationFailure(errors)
    return view


__all__ = ["collect_user_errors", "validate_user_view"]
