"""
Merge Reconciler
Folds an imported snapshot's prescriptions into the live set.
"""
import logging
from typing import Any, Dict, List, Tuple

from rxdesk.models.prescription import registration_number_of

logger = logging.getLogger(__name__)


def _identity_key(number):
    # True == 1 in Python; a boolean must not collide with record 1
    if isinstance(number, bool):
        return (bool, number)
    return number


def merge_prescriptions(
    live: List[Dict[str, Any]],
    incoming: List[Any],
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Merge ``incoming`` into ``live`` deduplicating by registration number.

    Incoming records whose number is already live are dropped, so the live
    copy always wins. The result is sorted ascending by number (stable;
    records without a numeric number sort first). Re-merging the same
    incoming set is a no-op.

    Returns:
        (merged, added): the full merged list and the incoming records kept.
    """
    existing = set()
    for record in live:
        number = record.get('registrationNumber')
        try:
            existing.add(_identity_key(number))
        except TypeError:
            # unhashable value, cannot collide with a real number
            continue

    added = []
    for record in incoming or []:
        if not isinstance(record, dict):
            logger.warning(f"Skipping non-object backup entry: {record!r:.80}")
            continue
        number = record.get('registrationNumber')
        try:
            duplicate = _identity_key(number) in existing
        except TypeError:
            duplicate = False
        if not duplicate:
            added.append(record)

    merged = sorted(list(live) + added, key=registration_number_of)
    return merged, added
