from .decorators import require_role

from .audit import log_audit

from .sanitization import sanitize_string, sanitize_object

from .validation import (
    validate_username,
    validate_password,
    validate_aadhar,
    validate_mobile,
    parse_positive_int,
)

__all__ = [
    # Decorators
    "require_role",
    # Audit
    "log_audit",
    # Sanitization
    "sanitize_string",
    "sanitize_object",
    # Validation
    "validate_username",
    "validate_password",
    "validate_aadhar",
    "validate_mobile",
    "parse_positive_int",
]
