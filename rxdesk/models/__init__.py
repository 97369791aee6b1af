from .user import User, ROLE_ADMIN, ROLE_MODERATOR
from .prescription import Prescription

__all__ = ["User", "ROLE_ADMIN", "ROLE_MODERATOR", "Prescription"]
