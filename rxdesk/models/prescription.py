import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_DIGITS = re.compile(r'[0-9]+')


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class Prescription:
    """
    One outpatient prescription record.

    Records are created by intake (which assigns ``registration_number``)
    or reinstated verbatim from a backup, and are never changed afterwards.
    """

    def __init__(self, patient_name: str, age: int, gender: str, department: str,
                 type: str, registration_number: Optional[int] = None,
                 room_number: Optional[int] = None, address: Optional[str] = None,
                 aadhar_number: Optional[str] = None, mobile_number: Optional[str] = None,
                 payment_method: Optional[str] = None, date_time: Optional[str] = None):
        self.registration_number = registration_number
        self.patient_name = patient_name
        self.age = age
        self.gender = gender
        self.department = department
        self.type = type
        self.room_number = room_number
        self.address = address
        self.aadhar_number = aadhar_number
        self.mobile_number = mobile_number
        self.payment_method = payment_method
        self.date_time = date_time or utc_timestamp()

    def __repr__(self):
        return f"<Prescription {self.registration_number} - Patient: {self.patient_name}>"

    def to_dict(self) -> Dict[str, Any]:
        """Stored/wire shape; optional fields that were not given are omitted."""
        data = {
            'registrationNumber': self.registration_number,
            'patientName': self.patient_name,
            'age': self.age,
            'gender': self.gender,
            'department': self.department,
            'type': self.type,
        }
        optional = {
            'roomNumber': self.room_number,
            'address': self.address,
            'aadharNumber': self.aadhar_number,
            'mobileNumber': self.mobile_number,
            'paymentMethod': self.payment_method,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        data['dateTime'] = self.date_time
        return data


def registration_number_of(record: Dict[str, Any]) -> int:
    """
    Numeric registration number of a stored record, 0 if it has none.

    Imported backups may carry the number as a string of digits ("3");
    those count as the number they spell.
    """
    number = record.get('registrationNumber') if isinstance(record, dict) else None
    if isinstance(number, str) and _DIGITS.fullmatch(number.strip()):
        return int(number.strip())
    if isinstance(number, bool) or not isinstance(number, (int, float)):
        return 0
    if isinstance(number, float) and not math.isfinite(number):
        return 0
    return int(number)
