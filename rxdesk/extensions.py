from flask_bcrypt import Bcrypt
from flask_login import LoginManager

# Shared password hasher and UI session manager
bcrypt = Bcrypt()
login_manager = LoginManager()


def get_stores():
    """The credential and prescription stores of the running app."""
    from flask import current_app
    return current_app.extensions['rxdesk']
