"""
CORS Configuration
Only the local UI origins may call the gateway, with the session cookie.
"""

CORS_CONFIG = {
    "methods": ["POST", "OPTIONS"],
    "allow_headers": [
        "Content-Type",
        "X-Requested-With",
        "Accept",
        "Origin",
    ],
    "supports_credentials": True,
    "max_age": 86400,  # 24 hours
}


def init_cors(app):
    """
    Initialize CORS for the gateway routes
    """
    from flask_cors import CORS

    origins = app.config.get("UI_ORIGINS") or []
    CORS(app,
         resources={r"/api/ipc/*": {"origins": origins}},
         methods=CORS_CONFIG["methods"],
         allow_headers=CORS_CONFIG["allow_headers"],
         supports_credentials=CORS_CONFIG["supports_credentials"],
         max_age=CORS_CONFIG["max_age"])

    app.logger.info("CORS enabled for UI origins: %s", ", ".join(origins) or "none")
