"""
Credential Store
Owns the user collection: the single admin account and its moderators.
"""
import logging
from typing import Any, Dict, List, Optional

from rxdesk.exceptions import (
    AlreadyExists,
    InvalidCredentials,
    NotFoundOrProtected,
    UsernameTaken,
    ValidationError,
)
from rxdesk.extensions import bcrypt
from rxdesk.models import User, ROLE_ADMIN, ROLE_MODERATOR
from rxdesk.storage import JsonCollection
from rxdesk.utils.audit import log_audit
from rxdesk.utils.validation import validate_password, validate_username

logger = logging.getLogger(__name__)


def _check_policies(username, password):
    errors = {}
    username_error = validate_username(username)
    if username_error:
        errors['username'] = username_error
    password_error = validate_password(password)
    if password_error:
        errors['password'] = password_error
    if errors:
        raise ValidationError(next(iter(errors.values())), errors)


class CredentialStore:
    def __init__(self, collection: JsonCollection):
        self.collection = collection
        self._unknown_user_hash = None

    def list_users(self) -> List[Dict[str, Any]]:
        """All user records, password hashes included."""
        return self.collection.load()

    def get_user(self, username: str) -> Optional[User]:
        for record in self.collection.load():
            if record.get('username') == username:
                return User.from_dict(record)
        return None

    def admin_exists(self) -> bool:
        return any(u.get('role') == ROLE_ADMIN for u in self.collection.load())

    def register_admin(self, username: str, password: str) -> User:
        """
        Create the one admin account.

        The admin check, the username check and the write happen under the
        collection lock, so two registrations cannot both succeed. Once an
        admin exists every call fails with AlreadyExists, whatever the input.
        """
        with self.collection.transaction() as users:
            if any(u.get('role') == ROLE_ADMIN for u in users):
                raise AlreadyExists('Admin user already exists')
            _check_policies(username, password)
            if any(u.get('username') == username for u in users):
                raise UsernameTaken('Username already exists')

            admin = User(username=username, role=ROLE_ADMIN)
            admin.set_password(password)
            users.append(admin.to_dict())
            self.collection.save(users)

        logger.info(f"Admin account '{username}' registered")
        log_audit('user', 'register_admin', user=username, entity_id=username)
        return admin

    def create_moderator(self, username: str, password: str,
                         created_by: Optional[str] = None) -> User:
        _check_policies(username, password)

        with self.collection.transaction() as users:
            if any(u.get('username') == username for u in users):
                raise UsernameTaken('Username already exists')

            moderator = User(username=username, role=ROLE_MODERATOR, created_by=created_by)
            moderator.set_password(password)
            users.append(moderator.to_dict())
            self.collection.save(users)

        logger.info(f"Moderator '{username}' created by '{created_by}'")
        log_audit('user', 'create', user=created_by, entity_id=username,
                  details={'role': ROLE_MODERATOR})
        return moderator

    def delete_moderator(self, username: str, deleted_by: Optional[str] = None) -> None:
        """Remove a moderator. Admin records are never removed, even by exact name."""
        with self.collection.transaction() as users:
            remaining = [
                u for u in users
                if u.get('role') == ROLE_ADMIN or u.get('username') != username
            ]
            if len(remaining) == len(users):
                raise NotFoundOrProtected()
            self.collection.save(remaining)

        logger.info(f"Moderator '{username}' deleted")
        log_audit('user', 'delete', user=deleted_by, entity_id=username)

    def authenticate(self, username: str, password: str) -> Dict[str, str]:
        """Return ``{username, role}`` or raise one generic InvalidCredentials."""
        if not username or not password:
            raise InvalidCredentials('Username and password are required')

        user = self.get_user(username) if isinstance(username, str) else None
        if user is None:
            # Unknown usernames still pay for one bcrypt check
            User(username, role=None, password_hash=self._dummy_hash()).check_password(password)
            logger.info("Failed login attempt")
            raise InvalidCredentials()
        if not user.check_password(password):
            logger.info("Failed login attempt")
            raise InvalidCredentials()
        return user.identity()

    def _dummy_hash(self) -> str:
        if self._unknown_user_hash is None:
            self._unknown_user_hash = bcrypt.generate_password_hash(
                'unknown-user-placeholder'
            ).decode('utf-8')
        return self._unknown_user_hash
