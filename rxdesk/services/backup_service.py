"""
Backup Codec
Builds versioned snapshots of the exportable state and decodes them on import.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from rxdesk.exceptions import MalformedBackup
from rxdesk.models.prescription import utc_timestamp
from rxdesk.utils.audit import log_audit

logger = logging.getLogger(__name__)

BACKUP_VERSION = '1.0'
DEFAULT_DESCRIPTION = 'Prescription App Backup'


def strip_password_hashes(users):
    """User entries safe to leave the machine: everything but the hash."""
    return [
        {key: value for key, value in user.items() if key not in ('passwordHash', 'password')}
        for user in users
    ]


def export_snapshot(prescription_store, credential_store,
                    description: Optional[str] = None) -> Dict[str, Any]:
    """Snapshot of every prescription and every (de-hashed) user account."""
    snapshot = {
        'metadata': {
            'version': BACKUP_VERSION,
            'timestamp': utc_timestamp(),
            'description': description or DEFAULT_DESCRIPTION,
        },
        'prescriptions': prescription_store.list_prescriptions(),
        'users': strip_password_hashes(credential_store.list_users()),
    }
    logger.info(
        f"Exported snapshot with {len(snapshot['prescriptions'])} prescriptions "
        f"and {len(snapshot['users'])} users"
    )
    log_audit('backup', 'export', details={'prescriptions': len(snapshot['prescriptions'])})
    return snapshot


def encode_snapshot(snapshot: Dict[str, Any]) -> str:
    return json.dumps(snapshot, indent=2, ensure_ascii=False)


def decode_snapshot(raw: Union[str, bytes, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Parse and structurally check a snapshot.

    Only the envelope is checked: ``metadata`` and ``prescriptions`` must be
    present and ``prescriptions`` must be an array. Individual entries are
    passed through as they are.

    Raises:
        MalformedBackup: payload is not JSON or not a snapshot.
    """
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedBackup(f'Invalid backup data format: {e}') from e
    else:
        data = raw

    if not isinstance(data, dict):
        raise MalformedBackup()
    if not data.get('metadata') or 'prescriptions' not in data:
        raise MalformedBackup()
    if not isinstance(data['prescriptions'], list):
        raise MalformedBackup('Invalid backup data format: prescriptions must be an array')

    users = data.get('users') or []
    return {
        'metadata': data['metadata'],
        'prescriptions': data['prescriptions'],
        'users': users if isinstance(users, list) else [],
    }


def import_snapshot(raw, prescription_store, imported_by: Optional[str] = None) -> int:
    """
    Merge a snapshot's prescriptions into the live collection.

    User entries in the snapshot are decoded but never written back: the
    live accounts are left as they are.

    Returns:
        Number of prescriptions added.
    """
    snapshot = decode_snapshot(raw)
    added = prescription_store.reinstate(snapshot['prescriptions'])

    logger.info(
        f"Imported backup: {len(added)} new of {len(snapshot['prescriptions'])} prescriptions"
    )
    log_audit('backup', 'import', user=imported_by, details={
        'added': len(added),
        'received': len(snapshot['prescriptions']),
        'version': snapshot['metadata'].get('version') if isinstance(snapshot['metadata'], dict) else None,
    })
    return len(added)


def backup_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"prescription-app-backup-{now.strftime('%Y-%m-%d')}.json"
