from typing import Any, Dict, Optional

from flask_login import UserMixin

from rxdesk.extensions import bcrypt

ROLE_ADMIN = 'admin'
ROLE_MODERATOR = 'moderator'


class User(UserMixin):
    """A stored account: the single admin or one of the moderators it created."""

    def __init__(self, username: str, role: str, password_hash: str = None,
                 created_by: Optional[str] = None):
        self.username = username
        self.role = role
        self.password_hash = password_hash
        self.created_by = created_by

    def get_id(self):
        # Flask-Login keys the UI session on the username
        return self.username

    def set_password(self, password):
        """Hash and set password"""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Check if provided password matches hash"""
        if not self.password_hash:
            return False
        try:
            return bcrypt.check_password_hash(self.password_hash, password)
        except (TypeError, ValueError):
            # Stored value is not a bcrypt hash, or password is not text
            return False

    def has_any_role(self, *role_names):
        return self.role in role_names

    def identity(self) -> Dict[str, str]:
        """The role-bearing identity handed to the UI after login."""
        return {'username': self.username, 'role': self.role}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'User':
        return cls(
            username=data.get('username'),
            role=data.get('role'),
            password_hash=data.get('passwordHash'),
            created_by=data.get('createdBy'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'username': self.username,
            'passwordHash': self.password_hash,
            'role': self.role,
            'createdBy': self.created_by,
        }

    def __repr__(self):
        return f"<User {self.username} - {self.role}>"
