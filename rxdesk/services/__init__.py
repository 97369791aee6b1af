from .credential_service import CredentialStore

from .prescription_service import (
    PrescriptionStore,
    build_prescription,
    next_registration_number,
)

from .merge_service import merge_prescriptions

from .backup_service import (
    export_snapshot,
    encode_snapshot,
    decode_snapshot,
    import_snapshot,
    backup_filename,
)

__all__ = [
    # Stores
    "CredentialStore",
    "PrescriptionStore",
    "build_prescription",
    "next_registration_number",
    # Reconciler
    "merge_prescriptions",
    # Backup Codec
    "export_snapshot",
    "encode_snapshot",
    "decode_snapshot",
    "import_snapshot",
    "backup_filename",
]
