"""
Field policies shared by the credential and prescription stores.

Each validator returns ``None`` when the value is acceptable and an error
message otherwise.
"""
import re
from typing import Optional

USERNAME_MIN_LENGTH = 4
PASSWORD_MIN_LENGTH = 8
# bcrypt only hashes the first 72 bytes
PASSWORD_MAX_BYTES = 72

_USERNAME_RE = re.compile(r'[a-zA-Z0-9_-]+')
_SPECIAL_RE = re.compile(r'[!@#$%^&*()_+\-=\[\]{};\':"\\|,.<>/?]')
_AADHAR_RE = re.compile(r'[0-9]{12}')
_MOBILE_RE = re.compile(r'[0-9]{10}')


def validate_username(username) -> Optional[str]:
    if not isinstance(username, str) or not username.strip():
        return 'Username is required'
    if len(username) < USERNAME_MIN_LENGTH:
        return f'Username must be at least {USERNAME_MIN_LENGTH} characters long'
    if not _USERNAME_RE.fullmatch(username):
        return 'Username can only contain letters, numbers, underscore and hyphen'
    return None


def validate_password(password) -> Optional[str]:
    if not isinstance(password, str) or not password:
        return 'Password is required'
    if len(password) < PASSWORD_MIN_LENGTH:
        return f'Password must be at least {PASSWORD_MIN_LENGTH} characters long'
    if len(password.encode('utf-8')) > PASSWORD_MAX_BYTES:
        return f'Password must be at most {PASSWORD_MAX_BYTES} bytes long'
    if not re.search(r'[A-Z]', password):
        return 'Password must contain at least one uppercase letter'
    if not re.search(r'[a-z]', password):
        return 'Password must contain at least one lowercase letter'
    if not re.search(r'\d', password):
        return 'Password must contain at least one number'
    if not _SPECIAL_RE.search(password):
        return 'Password must contain at least one special character'
    return None


def validate_aadhar(aadhar) -> Optional[str]:
    """Aadhar is optional; when given it must be exactly 12 digits."""
    if is_blank(aadhar):
        return None
    if not _AADHAR_RE.fullmatch(str(aadhar)):
        return 'Aadhar number must be exactly 12 digits'
    return None


def validate_mobile(mobile) -> Optional[str]:
    """Mobile is optional; when given it must be exactly 10 digits."""
    if is_blank(mobile):
        return None
    if not _MOBILE_RE.fullmatch(str(mobile)):
        return 'Mobile number must be exactly 10 digits'
    return None


def parse_positive_int(value) -> Optional[int]:
    """Coerce ``value`` to a positive int, or return None if it isn't one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    try:
        number = int(str(value).strip())
    except (ValueError, TypeError):
        return None
    return number if number > 0 else None


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
