import os
from dotenv import load_dotenv

load_dotenv()


def _default_data_dir():
    return os.path.join(os.path.expanduser('~'), '.rxdesk')


class Config:
    """Base configuration"""
    SECRET_KEY = os.getenv('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # User-data directory holding both collections
    DATA_DIR = os.getenv('RXDESK_DATA_DIR', _default_data_dir())
    USERS_FILE = os.getenv('RXDESK_USERS_FILE', 'users.json')
    PRESCRIPTIONS_FILE = os.getenv('RXDESK_PRESCRIPTIONS_FILE', 'prescriptions.json')

    # Password hashing cost (bcrypt log rounds)
    BCRYPT_LOG_ROUNDS = int(os.getenv('BCRYPT_LOG_ROUNDS', '12'))

    # Description stamped into exported backup snapshots
    BACKUP_DESCRIPTION = os.getenv('BACKUP_DESCRIPTION', 'Prescription App Backup')

    # Local gateway the UI process talks to
    GATEWAY_HOST = os.getenv('GATEWAY_HOST', '127.0.0.1')
    GATEWAY_PORT = int(os.getenv('GATEWAY_PORT', '5317'))
    UI_ORIGINS = [
        o.strip() for o in os.getenv(
            'UI_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173'
        ).split(',') if o.strip()
    ]

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE = os.getenv('LOG_FILE', 'rxdesk.log')

    # Session cookie for the UI session
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Strict'


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    SECRET_KEY = os.getenv('SECRET_KEY')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'WARNING')

    def __init__(self):
        if not self.SECRET_KEY or self.SECRET_KEY == 'dev-secret-key-change-in-production':
            raise ValueError("SECRET_KEY environment variable must be set in production and must not be the default value")


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    DEBUG = True
    SECRET_KEY = 'testing-secret-key'
    # Cheap hashes keep the suite fast
    BCRYPT_LOG_ROUNDS = 4


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config():
    """Get configuration based on FLASK_ENV"""
    env = os.getenv('FLASK_ENV', 'development')
    return config.get(env, config['default'])
