"""Field validators.

Every validator takes the raw string typed into a single field and returns
``None`` when it is acceptable or the message to show under the field.
"""
import re
from typing import Callable, Dict, Mapping, Optional

from pydantic import HttpUrl, TypeAdapter, ValidationError

Validator = Callable[[str], Optional[str]]

PASSWORD_SYMBOLS = '!@#$%^&*(),.?":{}|<>'
PASSWORD_MIN_LENGTH = 8
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20

_LETTERS_ONLY = re.compile(r"[A-Za-z]+")
_HAS_LETTER = re.compile(r"[A-Za-z]")
_USERNAME_CHARS = re.compile(r"[A-Za-z0-9_\-.]+")
_EMAIL = re.compile(r"[A-Za-z0-9][A-Za-z0-9._%+-]*@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
_PHONE = re.compile(r"[6-9][0-9]{9}")
_ZIP_CODE = re.compile(r"[0-9]{6}")

_url_adapter = TypeAdapter(HttpUrl)


def validate_required(label: str) -> Validator:
    """Build a validator rejecting blank input with ``"<label> is required"``."""
    def _validate(value: str) -> Optional[str]:
        if not value or not value.strip():
            return f"{label} is required"
        return None
    return _validate


def validate_first_name(value: str) -> Optional[str]:
    if not value:
        return "First name is required"
    if not _LETTERS_ONLY.fullmatch(value):
        return "First name must contain only letters (no numbers or symbols)"
    return None


def validate_last_name(value: str) -> Optional[str]:
    if not value:
        return "Last name is required"
    if not _LETTERS_ONLY.fullmatch(value):
        return "Last name must contain only letters"
    return None


def validate_username(value: str) -> Optional[str]:
    if not value:
        return "Username is required"
    if len(value) < USERNAME_MIN_LENGTH:
        return f"Username must be at least {USERNAME_MIN_LENGTH} characters"
    if len(value) > USERNAME_MAX_LENGTH:
        return f"Username must be less than {USERNAME_MAX_LENGTH} characters"
    if not _HAS_LETTER.search(value):
        return "Username must contain at least one letter"
    if not _USERNAME_CHARS.fullmatch(value):
        return "Username can only contain letters, numbers, and characters: _-."
    return None


def validate_email(value: str) -> Optional[str]:
    if not value:
        return "Email is required"
    local_part, _, domain = value.partition("@")
    if not _EMAIL.fullmatch(value) or not _HAS_LETTER.search(local_part):
        return (
            "Invalid email format. Email must start with a letter/number "
            "and contain at least one letter before '@'"
        )
    domain_name = domain.split(".")[0]
    if len(domain_name) < 2 or domain_name.isdigit():
        return "Invalid domain. Must contain at least 2 letters (e.g., example@site.com)"
    return None


def validate_password(value: str) -> Optional[str]:
    if not value:
        return "Password is required"
    if len(value) < PASSWORD_MIN_LENGTH:
        return f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
    if not re.search(r"[A-Z]", value):
        return "Password must contain at least one uppercase letter"
    if not re.search(r"[a-z]", value):
        return "Password must contain at least one lowercase letter"
    if not re.search(r"[0-9]", value):
        return "Password must contain at least one number"
    if not any(char in PASSWORD_SYMBOLS for char in value):
        return "Password must contain at least one special character"
    return None


def validate_confirm_password(password: str, confirm_password: str) -> Optional[str]:
    if not confirm_password:
        return "Confirm password is required"
    if password != confirm_password:
        return "Passwords must match"
    return None


def validate_phone(value: str) -> Optional[str]:
    # optional field
    if not value:
        return None
    if not _PHONE.fullmatch(value):
        return "Phone must start with 6, 7, 8, or 9 and be exactly 10 digits"
    return None


def validate_zip_code(value: str) -> Optional[str]:
    if not value:
        return None
    if not _ZIP_CODE.fullmatch(value):
        return "Pincode must be exactly 6 digits"
    return None


def validate_url(value: str, message: str = "Invalid URL") -> Optional[str]:
    if not value:
        return None
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return message
    return None


def validate_fields(values: Mapping[str, str], rules: Mapping[str, Validator]) -> Dict[str, str]:
    """Run ``rules`` over ``values`` and return ``{field: message}`` for every failure."""
    errors = {}
    for field_name, rule in rules.items():
        message = rule(values.get(field_name) or "")
        if message:
            errors[field_name] = message
    return errors
