"""
Request Gateway
The fixed set of named operations the UI process may invoke.

Each operation takes plain data and returns plain data. Inputs are
sanitized before any store sees them, and failures come back as
``{'success': False, ...}`` results, never as exceptions.
"""
import logging

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_user

from rxdesk.exceptions import RecordsError, ValidationError
from rxdesk.extensions import get_stores
from rxdesk.models import ROLE_ADMIN, ROLE_MODERATOR
from rxdesk.services import import_snapshot
from rxdesk.utils.decorators import require_role
from rxdesk.utils.sanitization import sanitize_object

logger = logging.getLogger(__name__)

ipc_bp = Blueprint("ipc", __name__, url_prefix="/api/ipc")

# name -> (handler, key carrying the failure text)
OPERATIONS = {}


def operation(name, failure_key="message"):
    def decorator(f):
        OPERATIONS[name] = (f, failure_key)
        return f
    return decorator


def _failure(failure_key, message, error=None):
    result = {"success": False, failure_key: message}
    if isinstance(error, ValidationError) and error.errors:
        result["errors"] = error.errors
    return result


def _credentials(payload):
    payload = payload if isinstance(payload, dict) else {}
    return payload.get("username"), payload.get("password")


@operation("checkAdminExists")
def check_admin_exists(payload):
    return {"success": True, "adminExists": get_stores()["credentials"].admin_exists()}


@operation("registerAdmin")
def register_admin(payload):
    username, password = _credentials(payload)
    get_stores()["credentials"].register_admin(username, password)
    return {"success": True, "message": "Admin created successfully"}


@operation("login")
def login(payload):
    username, password = _credentials(payload)
    store = get_stores()["credentials"]
    identity = store.authenticate(username, password)
    login_user(store.get_user(identity["username"]))
    logger.info(f"User '{identity['username']}' logged in as {identity['role']}")
    return {"success": True, "user": identity}


@operation("createModerator")
@require_role(ROLE_ADMIN)
def create_moderator(payload):
    username, password = _credentials(payload)
    if not username or not password:
        raise ValidationError("Username and password are required")
    created_by = payload.get("createdBy") or current_user.username
    get_stores()["credentials"].create_moderator(username, password, created_by)
    return {"success": True, "message": "Moderator created successfully"}


@operation("getUsers", failure_key="error")
@require_role(ROLE_ADMIN, ROLE_MODERATOR)
def get_users(payload):
    return get_stores()["credentials"].list_users()


@operation("deleteModerator")
@require_role(ROLE_ADMIN)
def delete_moderator(payload):
    # The UI sends the bare username; accept {"username": ...} as well
    username = payload.get("username") if isinstance(payload, dict) else payload
    if not username or not isinstance(username, str):
        raise ValidationError("Username is required")
    get_stores()["credentials"].delete_moderator(username, deleted_by=current_user.username)
    return {"success": True, "message": "Moderator deleted successfully"}


@operation("getPrescriptions", failure_key="error")
@require_role(ROLE_ADMIN, ROLE_MODERATOR)
def get_prescriptions(payload):
    filters = payload if isinstance(payload, dict) else {}
    return get_stores()["prescriptions"].list_prescriptions(
        gender=filters.get("gender"),
        department=filters.get("department"),
        type=filters.get("type"),
    )


@operation("savePrescription", failure_key="error")
@require_role(ROLE_MODERATOR)
def save_prescription(payload):
    if not payload or not isinstance(payload, dict):
        raise ValidationError("Invalid prescription data")
    return get_stores()["prescriptions"].intake(payload, created_by=current_user.username)


@operation("importBackup")
@require_role(ROLE_ADMIN, ROLE_MODERATOR)
def import_backup(payload):
    added = import_snapshot(payload, get_stores()["prescriptions"],
                            imported_by=current_user.username)
    return {
        "success": True,
        "message": f"Import successful. Added {added} new prescriptions.",
    }


def dispatch(name, payload=None):
    """
    Run one named operation and return its plain-data result.

    Must be called inside a request context (the UI session lives there).
    """
    if name not in OPERATIONS:
        return {"success": False, "message": f"Unknown operation: {name}"}

    handler, failure_key = OPERATIONS[name]
    try:
        return handler(sanitize_object(payload))
    except RecordsError as e:
        logger.info(f"{name} failed: {e.code} {e.message}")
        return _failure(failure_key, e.message, e)
    except Exception as e:
        logger.error(f"Unhandled error in {name}: {e}", exc_info=True)
        return _failure(failure_key, f"Operation {name} failed: {e}")


@ipc_bp.route("/<string:operation_name>", methods=["POST"])
def invoke(operation_name):
    """
    Invoke a named operation.

    Body: the operation's argument as JSON (object, string or empty).
    The HTTP status is 200 for every known operation; success or failure
    is carried in the result itself.
    """
    if operation_name not in OPERATIONS:
        return jsonify({
            "success": False,
            "message": f"Unknown operation: {operation_name}",
        }), 404

    payload = request.get_json(silent=True)
    return jsonify(dispatch(operation_name, payload)), 200
