from flask import Flask, jsonify
from .extensions import bcrypt, login_manager, get_stores
from pathlib import Path
import logging

# Setup basic logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s %(levelname)s: %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(config_name=None, **overrides):
    """Create Flask application factory"""
    app = Flask(__name__)

    # Load configuration
    from rxdesk.config import config, get_config
    config_class = config.get(config_name, config['default']) if config_name else get_config()
    app.config.from_object(config_class())
    app.config.update(overrides)

    logging.getLogger('rxdesk').setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # The user-data directory is the one thing we cannot run without
    data_dir = Path(app.config['DATA_DIR']).expanduser()
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.critical(f"Cannot create data directory {data_dir}: {e}")
        raise RuntimeError(f"Cannot create data directory {data_dir}: {e}") from e

    # Initialize extensions
    bcrypt.init_app(app)
    login_manager.init_app(app)

    from rxdesk.utils.cors import init_cors
    init_cors(app)

    # Stores own their collection files; nothing else writes them
    from rxdesk.storage import JsonCollection
    from rxdesk.services import CredentialStore, PrescriptionStore
    app.extensions['rxdesk'] = {
        'credentials': CredentialStore(
            JsonCollection(data_dir / app.config['USERS_FILE'], name='users')
        ),
        'prescriptions': PrescriptionStore(
            JsonCollection(data_dir / app.config['PRESCRIPTIONS_FILE'], name='prescriptions')
        ),
    }

    # Global error handlers
    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal Server Error: {error}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Internal server error. Check logs for details.'
        }), 500

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({
            'success': False,
            'error': 'Endpoint not found'
        }), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({
            'success': False,
            'error': 'Method not allowed'
        }), 405

    # Setup file logging
    if not app.debug and not app.testing:
        from logging.handlers import RotatingFileHandler

        log_dir = data_dir / 'logs'
        log_dir.mkdir(exist_ok=True)

        file_handler = RotatingFileHandler(
            str(log_dir / app.config['LOG_FILE']),
            maxBytes=10240000,
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        logging.getLogger('rxdesk').addHandler(file_handler)
        app.logger.addHandler(file_handler)
        app.logger.setLevel(logging.INFO)
        app.logger.info('Application startup')

    # Security headers
    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'no-referrer'
        response.headers['Cache-Control'] = 'no-store'
        return response

    # The UI session is keyed on the username
    @login_manager.user_loader
    def load_user(username):
        return get_stores()['credentials'].get_user(username)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({
            'success': False,
            'message': 'Authentication required'
        }), 401

    from .routes import ipc_bp
    app.register_blueprint(ipc_bp)

    from .cli import register_cli
    register_cli(app)

    logger.info(f"Records stored in {data_dir}")
    return app
