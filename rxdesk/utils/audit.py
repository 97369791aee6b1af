"""
Audit trail for account changes, prescription intake and backup import.
"""
import json
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger('rxdesk.audit')


def log_audit(
    entity_type: str,
    action: str,
    user: Optional[str] = None,
    entity_id: Optional[Any] = None,
    details: Optional[dict] = None,
) -> None:
    """Append an audit log entry."""
    try:
        entry = {
            'entity_type': entity_type,
            'entity_id': str(entity_id) if entity_id is not None else None,
            'action': action,
            'user': user,
        }
        if details:
            entry['details'] = details
        audit_logger.info(json.dumps(entry, default=str, sort_keys=True))
    except Exception as e:
        logger.warning("Audit log failed: %s", e)
