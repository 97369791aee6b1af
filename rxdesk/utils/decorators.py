from functools import wraps

from flask_login import current_user

from rxdesk.exceptions import AuthenticationRequired, PermissionDenied


def require_role(*roles):
    """
    Decorator to require specific session roles on a gateway operation
    Usage: @require_role('admin', 'moderator')
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                raise AuthenticationRequired()

            if not current_user.has_any_role(*roles):
                raise PermissionDenied(
                    f'Permission denied. Required roles: {", ".join(roles)}'
                )

            return f(*args, **kwargs)
        return decorated_function
    return decorator
