"""
Error taxonomy for the records core.

Stores and the backup codec raise these; the request gateway turns them
into ``{'success': False, ...}`` results so nothing crosses the UI boundary
as an exception.
"""


class RecordsError(Exception):
    code = 'RECORDS_ERROR'

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(RecordsError):
    code = 'VALIDATION_ERROR'

    def __init__(self, message: str, errors: dict = None):
        self.errors = errors or {}
        super().__init__(message, details={'errors': self.errors})


class AlreadyExists(RecordsError):
    code = 'ALREADY_EXISTS'


class UsernameTaken(RecordsError):
    code = 'USERNAME_TAKEN'


class InvalidCredentials(RecordsError):
    code = 'INVALID_CREDENTIALS'

    def __init__(self, message: str = 'Invalid username or password'):
        super().__init__(message)


class NotFoundOrProtected(RecordsError):
    code = 'NOT_FOUND_OR_PROTECTED'

    def __init__(self, message: str = 'User not found or cannot be deleted'):
        super().__init__(message)


class MalformedBackup(RecordsError):
    code = 'MALFORMED_BACKUP'

    def __init__(self, message: str = 'Invalid backup data format'):
        super().__init__(message)


class StorageError(RecordsError):
    code = 'STORAGE_ERROR'


class AuthenticationRequired(RecordsError):
    code = 'AUTHENTICATION_REQUIRED'

    def __init__(self, message: str = 'Authentication required'):
        super().__init__(message)


class PermissionDenied(RecordsError):
    code = 'PERMISSION_DENIED'
