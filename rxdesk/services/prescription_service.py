"""
Prescription Store
Owns the prescription collection and allocates registration numbers.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from rxdesk.exceptions import ValidationError
from rxdesk.models import Prescription
from rxdesk.models.prescription import registration_number_of
from rxdesk.services.merge_service import merge_prescriptions
from rxdesk.storage import JsonCollection
from rxdesk.utils.audit import log_audit
from rxdesk.utils.validation import (
    is_blank,
    parse_positive_int,
    validate_aadhar,
    validate_mobile,
)

logger = logging.getLogger(__name__)


def next_registration_number(records: Iterable[Dict[str, Any]]) -> int:
    """``max(existing numbers, default 0) + 1``, derived from the records themselves."""
    return max((registration_number_of(r) for r in records), default=0) + 1


def _text(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if is_blank(value):
        return None
    return str(value).strip()


def build_prescription(data: Dict[str, Any]) -> Prescription:
    """
    Validate intake data and build the record (without a registration number).

    Raises:
        ValidationError: carrying a field -> message map; the message is the
            first failing field's message.
    """
    if not isinstance(data, dict):
        raise ValidationError('Invalid prescription data')

    errors = {}

    patient_name = _text(data, 'patientName')
    if not patient_name:
        errors['patientName'] = 'Patient name is required'

    age = None
    if is_blank(data.get('age')):
        errors['age'] = 'Age is required'
    else:
        age = parse_positive_int(data.get('age'))
        if age is None:
            errors['age'] = 'Age must be a positive number'

    gender = _text(data, 'gender')
    if not gender:
        errors['gender'] = 'Gender is required'
    department = _text(data, 'department')
    if not department:
        errors['department'] = 'Department is required'
    type_ = _text(data, 'type')
    if not type_:
        errors['type'] = 'Type is required'

    room_number = None
    if not is_blank(data.get('roomNumber')):
        room_number = parse_positive_int(data.get('roomNumber'))
        if room_number is None:
            errors['roomNumber'] = 'Room number must be a positive number'

    aadhar_error = validate_aadhar(data.get('aadharNumber'))
    if aadhar_error:
        errors['aadharNumber'] = aadhar_error
    mobile_error = validate_mobile(data.get('mobileNumber'))
    if mobile_error:
        errors['mobileNumber'] = mobile_error

    if errors:
        raise ValidationError(next(iter(errors.values())), errors)

    return Prescription(
        patient_name=patient_name,
        age=age,
        gender=gender,
        department=department,
        type=type_,
        room_number=room_number,
        address=_text(data, 'address'),
        aadhar_number=_text(data, 'aadharNumber'),
        mobile_number=_text(data, 'mobileNumber'),
        payment_method=_text(data, 'paymentMethod'),
        date_time=_text(data, 'dateTime'),
    )


class PrescriptionStore:
    def __init__(self, collection: JsonCollection):
        self.collection = collection

    def list_prescriptions(self, gender: Optional[str] = None,
                           department: Optional[str] = None,
                           type: Optional[str] = None) -> List[Dict[str, Any]]:
        """All records in stored order, optionally narrowed by exact-match filters."""
        records = self.collection.load()
        filters = {'gender': gender, 'department': department, 'type': type}
        for key, wanted in filters.items():
            if wanted:
                records = [r for r in records if isinstance(r, dict) and r.get(key) == wanted]
        return records

    def intake(self, data: Dict[str, Any], created_by: Optional[str] = None) -> Dict[str, Any]:
        """
        Store a new prescription and return it with its registration number.

        Any client-supplied ``registrationNumber`` is ignored; the number is
        computed from the collection inside the same transaction as the append.
        """
        prescription = build_prescription(data)

        with self.collection.transaction() as records:
            prescription.registration_number = next_registration_number(records)
            record = prescription.to_dict()
            records.append(record)
            self.collection.save(records)

        logger.info(f"Prescription {prescription.registration_number} stored")
        log_audit('prescription', 'create', user=created_by,
                  entity_id=prescription.registration_number,
                  details={'department': prescription.department, 'type': prescription.type})
        return record

    def reinstate(self, incoming: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Merge backup records into the collection, keeping their original numbers.

        Returns the records that were actually added.
        """
        with self.collection.transaction() as records:
            merged, added = merge_prescriptions(records, incoming)
            self.collection.save(merged)
        return added
